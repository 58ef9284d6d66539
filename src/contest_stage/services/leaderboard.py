"""Leaderboard aggregation over the vote, paid-vote and judge ledgers."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy import Select, func, select
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from contest_stage.core.settings import settings
from contest_stage.models import JudgeScore, PaidVote, Video, Vote
from contest_stage.models.video import VIDEO_STATUS_APPROVED
from contest_stage.services.errors import InvalidScope, UnavailableError
from contest_stage.services.scoring import LeaderboardEntry, VideoSignals, rank_entries

logger = logging.getLogger(__name__)

__all__ = ["LeaderboardScope", "build_leaderboard", "load_signals"]


def _check_identifier(name: str, value: object) -> None:
    if value is None:
        return
    # bool is an int subclass but never a valid identifier.
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise InvalidScope(f"{name} must be a positive integer, got {value!r}")


@dataclass(frozen=True)
class LeaderboardScope:
    """Filter for a leaderboard query; ``None`` means no filter on that axis."""

    category_id: int | None = None
    phase_id: int | None = None

    def __post_init__(self) -> None:
        _check_identifier("category_id", self.category_id)
        _check_identifier("phase_id", self.phase_id)


def _signals_statement(scope: LeaderboardScope) -> Select:
    free_votes = (
        select(Vote.video_id, func.count(Vote.id).label("free_votes"))
        .group_by(Vote.video_id)
        .subquery()
    )
    paid_votes = (
        select(PaidVote.video_id, func.sum(PaidVote.quantity).label("paid_votes"))
        .group_by(PaidVote.video_id)
        .subquery()
    )
    judge_scores = (
        select(
            JudgeScore.video_id,
            func.count(JudgeScore.id).label("judge_count"),
            func.sum(JudgeScore.creativity_score).label("creativity_sum"),
            func.sum(JudgeScore.quality_score).label("quality_sum"),
        )
        .group_by(JudgeScore.video_id)
        .subquery()
    )

    stmt = (
        select(
            Video.id,
            Video.title,
            Video.owner_id,
            Video.category_id,
            Video.phase_id,
            Video.created_at,
            func.coalesce(free_votes.c.free_votes, 0),
            func.coalesce(paid_votes.c.paid_votes, 0),
            func.coalesce(judge_scores.c.judge_count, 0),
            func.coalesce(judge_scores.c.creativity_sum, 0),
            func.coalesce(judge_scores.c.quality_sum, 0),
        )
        .outerjoin(free_votes, free_votes.c.video_id == Video.id)
        .outerjoin(paid_votes, paid_votes.c.video_id == Video.id)
        .outerjoin(judge_scores, judge_scores.c.video_id == Video.id)
        .where(Video.status == VIDEO_STATUS_APPROVED)
    )
    if scope.category_id is not None:
        stmt = stmt.where(Video.category_id == scope.category_id)
    if scope.phase_id is not None:
        stmt = stmt.where(Video.phase_id == scope.phase_id)
    return stmt.order_by(Video.id)


def load_signals(db: Session, scope: LeaderboardScope) -> list[VideoSignals]:
    """Read per-video ledger aggregates for every approved video in scope.

    Raises:
        UnavailableError: If the store could not be queried.
    """
    try:
        rows = db.execute(_signals_statement(scope)).all()
    except OperationalError as exc:
        logger.error("Leaderboard read failed for %s: %s", scope, exc, exc_info=True)
        raise UnavailableError("Leaderboard data is temporarily unavailable") from exc

    return [
        VideoSignals(
            video_id=row[0],
            title=row[1],
            owner_id=row[2],
            category_id=row[3],
            phase_id=row[4],
            created_at=row[5],
            free_votes=int(row[6]),
            paid_votes=int(row[7]),
            judge_count=int(row[8]),
            creativity_sum=int(row[9]),
            quality_sum=int(row[10]),
        )
        for row in rows
    ]


def build_leaderboard(
    db: Session,
    scope: LeaderboardScope,
    limit: int | None = None,
) -> list[LeaderboardEntry]:
    """Return the ranked leaderboard for ``scope``.

    Ranks and vote normalization are computed over the full scope before
    ``limit`` truncates the result. A scope that matches no approved video,
    including one naming an unknown category or phase, yields an empty list.

    Raises:
        InvalidScope: If ``limit`` is outside the configured bounds.
        UnavailableError: If the ledgers could not be read.
    """
    if limit is not None and not 1 <= limit <= settings.leaderboard_max_limit:
        raise InvalidScope(
            f"limit must be between 1 and {settings.leaderboard_max_limit}, got {limit}"
        )

    entries = rank_entries(load_signals(db, scope))
    logger.debug("Ranked %d videos for %s", len(entries), scope)
    if limit is not None:
        return entries[:limit]
    return entries
