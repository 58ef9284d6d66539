"""Engine, session factory and declarative base for the contest ledgers."""

from __future__ import annotations

from collections.abc import Generator
from typing import Any

from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from contest_stage.core.settings import settings


class Base(DeclarativeBase):
    """Declarative base shared by all ORM models."""


# Register every model on Base.metadata before create_all or Alembic reads it.
import contest_stage.models  # noqa: E402,F401


def _engine_options(url: str) -> dict[str, Any]:
    options: dict[str, Any] = {"echo": settings.sql_debug}
    if url.startswith("sqlite"):
        # Sessions opened in the threadpool are used on the event loop thread.
        options["connect_args"] = {"check_same_thread": False}
    else:
        options["pool_pre_ping"] = True
    return options


engine = create_engine(
    settings.effective_database_url,
    **_engine_options(settings.effective_database_url),
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """Yield a request-scoped session that is always closed afterwards."""
    with SessionLocal() as db:
        yield db


def create_tables() -> None:
    """Create missing tables on the configured database (development use)."""
    Base.metadata.create_all(bind=engine)
