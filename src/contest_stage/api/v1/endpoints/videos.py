"""Video, moderation and judge scoring endpoints."""

from fastapi import APIRouter, HTTPException, Response, status

from contest_stage.api.v1.dependencies import (
    AdminDep,
    JudgeDep,
    SessionDep,
    to_http_exception,
)
from contest_stage.models import JudgeScore, Video
from contest_stage.schemas.catalog import VideoResponse, VideoStatusUpdate
from contest_stage.schemas.judge_score import (
    JudgeScoreCreate,
    JudgeScoreResponse,
    ScoreSummaryResponse,
)
from contest_stage.services.catalog import get_video, set_video_status
from contest_stage.services.errors import ContestError
from contest_stage.services.judging import score_summary, upsert_judge_score

router = APIRouter(prefix="/videos", tags=["videos"])


@router.get("/{video_id}", response_model=VideoResponse)
async def get_public_video(video_id: int, db: SessionDep) -> Video:
    """Return an approved video."""
    try:
        video = get_video(db, video_id)
    except ContestError as exc:
        raise to_http_exception(exc) from exc

    if not video.is_approved:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Video not available")
    return video


@router.patch("/{video_id}/status", response_model=VideoResponse)
async def update_video_status(
    video_id: int,
    update: VideoStatusUpdate,
    _admin: AdminDep,
    db: SessionDep,
) -> Video:
    """Approve, reject or re-queue a video."""
    try:
        return set_video_status(db, video_id, update.status)
    except ContestError as exc:
        raise to_http_exception(exc) from exc


@router.post("/{video_id}/score", response_model=JudgeScoreResponse)
async def score_video(
    video_id: int,
    score_data: JudgeScoreCreate,
    judge: JudgeDep,
    db: SessionDep,
    response: Response,
) -> JudgeScore:
    """Submit or revise the calling judge's score for a video."""
    try:
        score, created = upsert_judge_score(
            db,
            video_id=video_id,
            judge_id=judge.id,
            creativity=score_data.creativity_score,
            quality=score_data.quality_score,
            comments=score_data.comments,
        )
    except ContestError as exc:
        raise to_http_exception(exc) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    response.status_code = status.HTTP_201_CREATED if created else status.HTTP_200_OK
    return score


@router.get("/{video_id}/scores", response_model=ScoreSummaryResponse)
async def get_video_scores(video_id: int, db: SessionDep) -> ScoreSummaryResponse:
    """Return all judge scores for a video with totals."""
    try:
        summary = score_summary(db, video_id)
    except ContestError as exc:
        raise to_http_exception(exc) from exc

    return ScoreSummaryResponse(
        scores=[JudgeScoreResponse.model_validate(score) for score in summary.scores],
        count=summary.count,
        total=summary.total,
        average=summary.average,
    )
