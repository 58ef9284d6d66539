"""Models capturing free and purchased votes on videos."""

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


class Vote(Base):
    """A single free vote.

    The voter is either an authenticated account or, for anonymous visitors,
    the request IP address. Exactly one of the two identity columns is set.
    """

    __tablename__ = "vote"
    __table_args__ = (
        CheckConstraint(
            "(user_id IS NULL) <> (ip_address IS NULL)",
            name="ck_vote_single_identity",
        ),
        # NULLs never collide, so each constraint only binds its own identity kind.
        UniqueConstraint("video_id", "user_id", name="uq_vote_video_user"),
        UniqueConstraint("video_id", "ip_address", name="uq_vote_video_ip"),
        Index("ix_vote_video_id", "video_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    video_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("video.id", ondelete="CASCADE"),
        nullable=False,
    )
    user_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("user_account.id"),
        nullable=True,
    )
    ip_address: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )


class PaidVote(Base):
    """Bulk votes credited after a completed payment.

    One row per gateway transaction; quantity is fixed at creation. Refunds
    are recorded elsewhere and never rewrite this row.
    """

    __tablename__ = "paid_vote"
    __table_args__ = (
        CheckConstraint("quantity > 0", name="ck_paid_vote_quantity"),
        Index("ix_paid_vote_video_id", "video_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    video_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("video.id", ondelete="CASCADE"),
        nullable=False,
    )
    transaction_id: Mapped[str] = mapped_column(Text, unique=True, nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    amount: Mapped[int] = mapped_column(Integer, nullable=False)
    currency: Mapped[str] = mapped_column(Text, nullable=False)
    payer_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("user_account.id"),
        nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
