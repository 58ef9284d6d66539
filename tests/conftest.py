# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator
from datetime import UTC, datetime, timedelta
from itertools import count

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from contest_stage.core.security import create_access_token
from contest_stage.db.session import Base
from contest_stage.db.session import get_db as app_get_session
from contest_stage.main import app as fastapi_app
from contest_stage.models import Category, JudgeScore, PaidVote, Phase, User, Video, Vote
from contest_stage.models.video import VIDEO_STATUS_APPROVED

TEST_DB_URL = "sqlite://"
BASE_TIME = datetime(2026, 1, 1, 12, 0, tzinfo=UTC)

_SEQUENCE = count(1)


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # pysqlite defers BEGIN on its own, which breaks SAVEPOINT; take over.
    @event.listens_for(engine, "connect")
    def _disable_pysqlite_transactions(dbapi_connection, _record) -> None:  # pragma: no cover
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _emit_begin(conn) -> None:  # pragma: no cover
        conn.exec_driver_sql("BEGIN")

    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    connection = engine.connect()
    transaction = connection.begin()
    # Commits inside services release savepoints; the outer transaction is rolled back.
    session = Session(
        bind=connection,
        autoflush=False,
        expire_on_commit=False,
        join_transaction_mode="create_savepoint",
    )

    try:
        yield session
    finally:
        session.close()
        if transaction.is_active:
            transaction.rollback()
        connection.close()


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def make_user(db_session: Session) -> Callable[..., User]:
    """Return a factory that persists accounts."""

    def _make(*, is_admin: bool = False, is_judge: bool = False, name: str | None = None) -> User:
        n = next(_SEQUENCE)
        user = User(
            email=f"user{n}@example.com",
            display_name=name or f"User {n}",
            is_admin=is_admin,
            is_judge=is_judge,
        )
        db_session.add(user)
        db_session.flush()
        return user

    return _make


@pytest.fixture()
def creator(make_user: Callable[..., User]) -> User:
    return make_user(name="Creator")


@pytest.fixture()
def voter(make_user: Callable[..., User]) -> User:
    return make_user(name="Voter")


@pytest.fixture()
def judge(make_user: Callable[..., User]) -> User:
    return make_user(is_judge=True, name="Judge")


@pytest.fixture()
def admin(make_user: Callable[..., User]) -> User:
    return make_user(is_admin=True, name="Admin")


def auth_headers(user: User) -> dict[str, str]:
    """Return bearer headers for ``user``."""
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}


@pytest.fixture()
def headers_for() -> Callable[[User], dict[str, str]]:
    return auth_headers


@pytest.fixture()
def voter_headers(voter: User) -> dict[str, str]:
    return auth_headers(voter)


@pytest.fixture()
def judge_headers(judge: User) -> dict[str, str]:
    return auth_headers(judge)


@pytest.fixture()
def admin_headers(admin: User) -> dict[str, str]:
    return auth_headers(admin)


@pytest.fixture()
def category(db_session: Session) -> Category:
    category = Category(name="Music & Dance", description="Songs and choreography")
    db_session.add(category)
    db_session.flush()
    return category


@pytest.fixture()
def other_category(db_session: Session) -> Category:
    category = Category(name="Comedy", description="Skits and stand-up")
    db_session.add(category)
    db_session.flush()
    return category


@pytest.fixture()
def make_phase(db_session: Session) -> Callable[..., Phase]:
    def _make(name: str, number: int, status: str = "upcoming") -> Phase:
        phase = Phase(name=name, number=number, status=status)
        db_session.add(phase)
        db_session.flush()
        return phase

    return _make


@pytest.fixture()
def phase(make_phase: Callable[..., Phase]) -> Phase:
    return make_phase("TOP 100", 1, "active")


@pytest.fixture()
def make_video(db_session: Session, creator: User, category: Category) -> Callable[..., Video]:
    """Return a factory for videos; approved by default, created a minute apart."""

    def _make(
        title: str | None = None,
        *,
        status: str = VIDEO_STATUS_APPROVED,
        category_id: int | None = None,
        phase_id: int | None = None,
        created_at: datetime | None = None,
        owner: User | None = None,
    ) -> Video:
        n = next(_SEQUENCE)
        video = Video(
            owner_id=(owner or creator).id,
            category_id=category_id or category.id,
            phase_id=phase_id,
            title=title or f"Video {n}",
            video_url=f"https://cdn.example.com/videos/{n}.mp4",
            status=status,
            created_at=created_at or BASE_TIME + timedelta(minutes=n),
        )
        db_session.add(video)
        db_session.flush()
        return video

    return _make


@pytest.fixture()
def add_free_votes(db_session: Session) -> Callable[[Video, int], None]:
    """Return a helper that inserts ``n`` anonymous votes from distinct IPs."""

    def _add(video: Video, n: int) -> None:
        for _ in range(n):
            db_session.add(Vote(video_id=video.id, ip_address=f"10.0.0.{next(_SEQUENCE)}"))
        db_session.flush()

    return _add


@pytest.fixture()
def add_paid_votes(db_session: Session) -> Callable[[Video, int], PaidVote]:
    def _add(video: Video, quantity: int) -> PaidVote:
        paid = PaidVote(
            video_id=video.id,
            transaction_id=f"tx-{next(_SEQUENCE)}",
            quantity=quantity,
            amount=quantity * 100,
            currency="XAF",
        )
        db_session.add(paid)
        db_session.flush()
        return paid

    return _add


@pytest.fixture()
def add_judge_score(db_session: Session, make_user: Callable[..., User]) -> Callable[..., JudgeScore]:
    """Return a helper that scores a video as a fresh judge."""

    def _add(video: Video, creativity: int, quality: int, judge: User | None = None) -> JudgeScore:
        judge = judge or make_user(is_judge=True)
        score = JudgeScore(
            video_id=video.id,
            judge_id=judge.id,
            creativity_score=creativity,
            quality_score=quality,
        )
        db_session.add(score)
        db_session.flush()
        return score

    return _add
