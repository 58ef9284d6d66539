"""SQLAlchemy models for competition categories and phases."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from contest_stage.db.session import Base
from contest_stage.db.time import utcnow

PHASE_STATUS_UPCOMING = "upcoming"
PHASE_STATUS_ACTIVE = "active"
PHASE_STATUS_COMPLETED = "completed"
PHASE_STATUSES = (PHASE_STATUS_UPCOMING, PHASE_STATUS_ACTIVE, PHASE_STATUS_COMPLETED)


class Category(Base):
    """Competition category a video is entered under."""

    __tablename__ = "category"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, unique=True, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )


class Phase(Base):
    """Competition stage such as "TOP 100" or "Grand Finale".

    At most one phase is expected to be active; the phase service enforces
    this when an administrator activates a phase.
    """

    __tablename__ = "phase"
    __table_args__ = (
        CheckConstraint(
            "status IN ('upcoming', 'active', 'completed')",
            name="ck_phase_status",
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, unique=True, nullable=False)
    # Position in the competition; lower numbers run first.
    number: Mapped[int] = mapped_column(Integer, unique=True, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(Text, nullable=False, default=PHASE_STATUS_UPCOMING)
    start_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    end_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
