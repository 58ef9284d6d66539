"""Free-vote ledger operations."""

from __future__ import annotations

import logging

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from contest_stage.db.integrity import violates_unique
from contest_stage.models import PaidVote, Vote
from contest_stage.services.catalog import get_eligible_video
from contest_stage.services.errors import DuplicateSignal

logger = logging.getLogger(__name__)

__all__ = [
    "record_vote",
    "free_vote_count",
    "paid_vote_count",
    "voted_video_ids",
]


def _existing_vote(db: Session, video_id: int, user_id: int | None, ip_address: str | None) -> Vote | None:
    if user_id is not None:
        identity = Vote.user_id == user_id
    else:
        identity = Vote.ip_address == ip_address
    return db.scalars(select(Vote).where(Vote.video_id == video_id, identity)).first()


def _is_duplicate_vote(exc: IntegrityError) -> bool:
    return violates_unique(
        exc, "uq_vote_video_user", "vote", ("video_id", "user_id")
    ) or violates_unique(exc, "uq_vote_video_ip", "vote", ("video_id", "ip_address"))


def record_vote(
    db: Session,
    video_id: int,
    *,
    user_id: int | None = None,
    ip_address: str | None = None,
) -> Vote:
    """Record one free vote for an approved video.

    Authenticated voters are keyed by account only and the IP address is
    dropped; anonymous voters are keyed by IP address.

    Raises:
        ValueError: If neither identity is supplied.
        NotFoundError: If the video does not exist.
        IneligibleVideo: If the video is not approved.
        DuplicateSignal: If this identity already voted for the video.
    """
    if user_id is None and not ip_address:
        raise ValueError("A vote requires a user id or an IP address")
    if user_id is not None:
        ip_address = None

    get_eligible_video(db, video_id)

    if _existing_vote(db, video_id, user_id, ip_address) is not None:
        logger.warning("Duplicate vote rejected for video %s", video_id)
        raise DuplicateSignal("You have already voted for this video")

    vote = Vote(video_id=video_id, user_id=user_id, ip_address=ip_address)
    try:
        # The unique constraints settle races the lookup above cannot see.
        with db.begin_nested():
            db.add(vote)
    except IntegrityError as exc:
        if not _is_duplicate_vote(exc):
            raise
        logger.warning("Concurrent duplicate vote rejected for video %s", video_id)
        raise DuplicateSignal("You have already voted for this video") from exc

    db.commit()
    logger.info("Vote recorded for video %s", video_id)
    return vote


def free_vote_count(db: Session, video_id: int) -> int:
    """Return the number of free votes cast for a video."""
    return db.scalar(select(func.count(Vote.id)).where(Vote.video_id == video_id)) or 0


def paid_vote_count(db: Session, video_id: int) -> int:
    """Return the total quantity of purchased votes credited to a video."""
    return db.scalar(
        select(func.coalesce(func.sum(PaidVote.quantity), 0)).where(PaidVote.video_id == video_id)
    ) or 0


def voted_video_ids(db: Session, user_id: int) -> list[int]:
    """Return ids of the videos an account has voted for, oldest vote first."""
    stmt = select(Vote.video_id).where(Vote.user_id == user_id).order_by(Vote.created_at, Vote.id)
    return list(db.scalars(stmt))
