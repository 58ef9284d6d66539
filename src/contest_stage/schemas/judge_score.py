"""Judge score schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from contest_stage.models.judge_score import JUDGE_SCORE_MAX, JUDGE_SCORE_MIN


class JudgeScoreCreate(BaseModel):
    """Schema for submitting or revising a judge score."""

    creativity_score: int = Field(..., ge=JUDGE_SCORE_MIN, le=JUDGE_SCORE_MAX)
    quality_score: int = Field(..., ge=JUDGE_SCORE_MIN, le=JUDGE_SCORE_MAX)
    comments: str | None = Field(None, max_length=2000)


class JudgeScoreResponse(BaseModel):
    """A stored judge score."""

    id: int
    video_id: int
    judge_id: int
    creativity_score: int
    quality_score: int
    comments: str | None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ScoreSummaryResponse(BaseModel):
    """All judge scores for a video with totals."""

    scores: list[JudgeScoreResponse]
    count: int
    total: int
    average: float

    model_config = ConfigDict(from_attributes=True)
