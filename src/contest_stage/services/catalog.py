"""Video catalog lookups and moderation status changes."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session

from contest_stage.models import Category, Video
from contest_stage.models.video import VIDEO_STATUSES
from contest_stage.services.errors import IneligibleVideo, NotFoundError

logger = logging.getLogger(__name__)


def list_categories(db: Session) -> Sequence[Category]:
    """Return all categories ordered by name."""
    return db.scalars(select(Category).order_by(Category.name)).all()


def get_video(db: Session, video_id: int) -> Video:
    """Return a video by id or raise ``NotFoundError``."""
    video = db.get(Video, video_id)
    if video is None:
        raise NotFoundError("Video not found")
    return video


def get_eligible_video(db: Session, video_id: int) -> Video:
    """Return a video that may receive votes and judge scores.

    Raises:
        NotFoundError: If the video does not exist.
        IneligibleVideo: If the video has not been approved.
    """
    video = get_video(db, video_id)
    if not video.is_approved:
        raise IneligibleVideo("Only approved videos can receive votes or scores")
    return video


def set_video_status(db: Session, video_id: int, new_status: str) -> Video:
    """Apply a moderation decision to a video.

    Raises:
        ValueError: If ``new_status`` is not a known video status.
        NotFoundError: If the video does not exist.
    """
    if new_status not in VIDEO_STATUSES:
        raise ValueError(f"Invalid status {new_status!r}")

    video = get_video(db, video_id)
    previous = video.status
    video.status = new_status
    db.commit()
    db.refresh(video)
    logger.info("Video %s moved from %s to %s", video_id, previous, new_status)
    return video
