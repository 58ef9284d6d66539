"""SQLAlchemy model for platform accounts."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import Boolean, DateTime, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from contest_stage.db.session import Base
from contest_stage.db.time import utcnow


class User(Base):
    """Account that may own videos, vote, judge or administer the contest.

    Credentials live with the external identity provider; this row only keeps
    what the scoring and moderation paths need to authorize a request.
    """

    __tablename__ = "user_account"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    email: Mapped[str] = mapped_column(Text, unique=True, nullable=False)
    display_name: Mapped[str] = mapped_column(Text, nullable=False)
    is_admin: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_judge: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    @property
    def can_judge(self) -> bool:
        """Return True when the account may submit judge scores."""
        return self.is_judge or self.is_admin
