"""SQLAlchemy model for contest video entries."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from contest_stage.db.session import Base
from contest_stage.db.time import utcnow

VIDEO_STATUS_PENDING = "pending"
VIDEO_STATUS_APPROVED = "approved"
VIDEO_STATUS_REJECTED = "rejected"
VIDEO_STATUSES = (VIDEO_STATUS_PENDING, VIDEO_STATUS_APPROVED, VIDEO_STATUS_REJECTED)


class Video(Base):
    """A contestant's submission.

    Only approved videos collect votes and judge scores and appear on the
    leaderboard.
    """

    __tablename__ = "video"
    __table_args__ = (
        CheckConstraint(
            "status IN ('pending', 'approved', 'rejected')",
            name="ck_video_status",
        ),
        Index("ix_video_scope", "status", "category_id", "phase_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    owner_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("user_account.id"),
        nullable=False,
    )
    category_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("category.id"),
        nullable=False,
    )
    # Unassigned videos have no phase and only show up in phase-less scopes.
    phase_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("phase.id"),
        nullable=True,
    )
    title: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    video_url: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[str] = mapped_column(Text, nullable=False, default=VIDEO_STATUS_PENDING)
    views: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
    )

    @property
    def is_approved(self) -> bool:
        """Return True when the video is eligible for votes and scores."""
        return self.status == VIDEO_STATUS_APPROVED
