"""Model for per-judge ratings of a video."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from contest_stage.db.session import Base
from contest_stage.db.time import utcnow

# Inclusive bounds for both sub-scores.
JUDGE_SCORE_MIN = 0
JUDGE_SCORE_MAX = 10


class JudgeScore(Base):
    """Creativity and quality rating one judge gave one video.

    A judge revises a score by updating this row; the unique constraint
    rejects a second row for the same pair.
    """

    __tablename__ = "judge_score"
    __table_args__ = (
        CheckConstraint(
            f"creativity_score BETWEEN {JUDGE_SCORE_MIN} AND {JUDGE_SCORE_MAX}",
            name="ck_judge_score_creativity",
        ),
        CheckConstraint(
            f"quality_score BETWEEN {JUDGE_SCORE_MIN} AND {JUDGE_SCORE_MAX}",
            name="ck_judge_score_quality",
        ),
        UniqueConstraint("video_id", "judge_id", name="uq_judge_score_video_judge"),
        Index("ix_judge_score_video_id", "video_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    video_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("video.id", ondelete="CASCADE"),
        nullable=False,
    )
    judge_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("user_account.id"),
        nullable=False,
    )
    creativity_score: Mapped[int] = mapped_column(Integer, nullable=False)
    quality_score: Mapped[int] = mapped_column(Integer, nullable=False)
    comments: Mapped[str | None] = mapped_column(Text, nullable=True)
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
    def total(self) -> int:
        """Return the combined creativity and quality score."""
        return self.creativity_score + self.quality_score
