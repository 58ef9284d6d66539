"""Leaderboard response schemas."""

from pydantic import BaseModel, ConfigDict, Field


class LeaderboardEntryResponse(BaseModel):
    """One ranked video on the leaderboard."""

    rank: int = Field(..., ge=1)
    video_id: int
    title: str
    owner_id: int
    category_id: int
    phase_id: int | None
    vote_count: int = Field(..., description="Free votes plus purchased votes")
    free_vote_count: int
    paid_vote_count: int
    judge_count: int
    judge_total: int = Field(..., description="Sum over judges of creativity + quality")
    avg_creativity: float
    avg_quality: float
    overall_score: float = Field(..., ge=0, le=100)

    model_config = ConfigDict(from_attributes=True)
