"""Judge score ledger operations."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from contest_stage.db.integrity import violates_unique
from contest_stage.models import JudgeScore
from contest_stage.models.judge_score import JUDGE_SCORE_MAX, JUDGE_SCORE_MIN
from contest_stage.services.catalog import get_eligible_video, get_video
from contest_stage.services.errors import DuplicateSignal

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScoreSummary:
    """All judge scores for one video with their combined totals."""

    scores: list[JudgeScore]
    count: int
    total: int
    average: float


def _check_range(name: str, value: int) -> None:
    if not JUDGE_SCORE_MIN <= value <= JUDGE_SCORE_MAX:
        raise ValueError(f"{name} must be between {JUDGE_SCORE_MIN} and {JUDGE_SCORE_MAX}")


def _existing_score(db: Session, video_id: int, judge_id: int) -> JudgeScore | None:
    return db.scalars(
        select(JudgeScore).where(
            JudgeScore.video_id == video_id,
            JudgeScore.judge_id == judge_id,
        )
    ).first()


def upsert_judge_score(
    db: Session,
    *,
    video_id: int,
    judge_id: int,
    creativity: int,
    quality: int,
    comments: str | None = None,
) -> tuple[JudgeScore, bool]:
    """Create or replace a judge's score for an approved video.

    Returns:
        The stored score and whether a new row was created.

    Raises:
        ValueError: If either sub-score is out of range.
        NotFoundError: If the video does not exist.
        IneligibleVideo: If the video is not approved.
        DuplicateSignal: If a concurrent request inserted the pair first.
    """
    _check_range("creativity", creativity)
    _check_range("quality", quality)
    get_eligible_video(db, video_id)

    score = _existing_score(db, video_id, judge_id)

    if score is not None:
        score.creativity_score = creativity
        score.quality_score = quality
        score.comments = comments
        db.commit()
        db.refresh(score)
        logger.info("Judge %s revised score for video %s", judge_id, video_id)
        return score, False

    score = JudgeScore(
        video_id=video_id,
        judge_id=judge_id,
        creativity_score=creativity,
        quality_score=quality,
        comments=comments,
    )
    try:
        with db.begin_nested():
            db.add(score)
    except IntegrityError as exc:
        if not violates_unique(
            exc, "uq_judge_score_video_judge", "judge_score", ("video_id", "judge_id")
        ):
            raise
        logger.warning("Concurrent judge score rejected for video %s", video_id)
        raise DuplicateSignal("This judge has already scored the video") from exc

    db.commit()
    db.refresh(score)
    logger.info("Judge %s scored video %s", judge_id, video_id)
    return score, True


def score_summary(db: Session, video_id: int) -> ScoreSummary:
    """Return every judge score for a video and the mean per-judge total.

    Raises:
        NotFoundError: If the video does not exist.
    """
    get_video(db, video_id)
    scores = list(
        db.scalars(
            select(JudgeScore)
            .where(JudgeScore.video_id == video_id)
            .order_by(JudgeScore.created_at, JudgeScore.id)
        )
    )
    total = sum(score.total for score in scores)
    average = total / len(scores) if scores else 0.0
    return ScoreSummary(scores=scores, count=len(scores), total=total, average=average)
