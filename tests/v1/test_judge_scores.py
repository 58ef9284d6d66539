# mypy: ignore-errors
"""Tests for judge scoring endpoints."""

import pytest
from fastapi import status
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError

from contest_stage.models import JudgeScore
from contest_stage.models.judge_score import JUDGE_SCORE_MAX, JUDGE_SCORE_MIN
from contest_stage.models.video import VIDEO_STATUS_PENDING
from contest_stage.schemas.judge_score import JudgeScoreCreate
from contest_stage.services import judging
from contest_stage.services.errors import DuplicateSignal
from contest_stage.services.judging import score_summary, upsert_judge_score


def _score_url(video) -> str:
    return f"/api/v1/videos/{video.id}/score"


def test_judge_scores_video(client, judge, judge_headers, make_video) -> None:
    video = make_video()
    response = client.post(
        _score_url(video),
        json={"creativity_score": 8, "quality_score": 6, "comments": "Great energy"},
        headers=judge_headers,
    )
    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["judge_id"] == judge.id
    assert data["creativity_score"] == 8
    assert data["quality_score"] == 6


def test_judge_revises_score(client, judge_headers, make_video, db_session) -> None:
    """Scoring the same video again replaces the earlier score."""
    video = make_video()
    first = client.post(
        _score_url(video), json={"creativity_score": 3, "quality_score": 3}, headers=judge_headers
    )
    second = client.post(
        _score_url(video), json={"creativity_score": 9, "quality_score": 7}, headers=judge_headers
    )
    assert first.status_code == status.HTTP_201_CREATED
    assert second.status_code == status.HTTP_200_OK
    assert second.json()["id"] == first.json()["id"]

    rows = db_session.scalar(
        select(func.count(JudgeScore.id)).where(JudgeScore.video_id == video.id)
    )
    assert rows == 1

    [entry] = client.get("/api/v1/leaderboard/").json()
    assert entry["avg_creativity"] == pytest.approx(9.0)
    assert entry["avg_quality"] == pytest.approx(7.0)


def test_non_judge_forbidden(client, voter_headers, make_video) -> None:
    video = make_video()
    response = client.post(
        _score_url(video), json={"creativity_score": 5, "quality_score": 5}, headers=voter_headers
    )
    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_admin_may_judge(client, admin_headers, make_video) -> None:
    video = make_video()
    response = client.post(
        _score_url(video), json={"creativity_score": 5, "quality_score": 5}, headers=admin_headers
    )
    assert response.status_code == status.HTTP_201_CREATED


def test_anonymous_scoring_unauthorized(client, make_video) -> None:
    video = make_video()
    response = client.post(_score_url(video), json={"creativity_score": 5, "quality_score": 5})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.parametrize(
    "payload",
    [
        {"creativity_score": 11, "quality_score": 5},
        {"creativity_score": 5, "quality_score": -1},
        {"creativity_score": 5},
    ],
)
def test_score_validation(client, judge_headers, make_video, payload) -> None:
    video = make_video()
    response = client.post(_score_url(video), json=payload, headers=judge_headers)
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


def test_scoring_pending_video(client, judge_headers, make_video) -> None:
    video = make_video(status=VIDEO_STATUS_PENDING)
    response = client.post(
        _score_url(video), json={"creativity_score": 5, "quality_score": 5}, headers=judge_headers
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_scoring_missing_video(client, judge_headers) -> None:
    response = client.post(
        "/api/v1/videos/55555/score",
        json={"creativity_score": 5, "quality_score": 5},
        headers=judge_headers,
    )
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_score_summary_endpoint(client, make_video, add_judge_score) -> None:
    video = make_video()
    add_judge_score(video, 8, 6)
    add_judge_score(video, 4, 10)

    response = client.get(f"/api/v1/videos/{video.id}/scores")
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["count"] == 2
    assert data["total"] == 28
    assert data["average"] == pytest.approx(14.0)
    assert len(data["scores"]) == 2


def test_score_summary_without_scores(db_session, make_video) -> None:
    video = make_video()
    summary = score_summary(db_session, video.id)
    assert summary.count == 0
    assert summary.average == 0.0


def test_service_rejects_out_of_range(db_session, judge, make_video) -> None:
    video = make_video()
    with pytest.raises(ValueError):
        upsert_judge_score(db_session, video_id=video.id, judge_id=judge.id, creativity=12, quality=1)


def _stored_scores(db_session, video) -> int:
    return db_session.scalar(
        select(func.count(JudgeScore.id)).where(JudgeScore.video_id == video.id)
    )


def test_score_range_shared_by_schema_and_store() -> None:
    """Request validation accepts exactly the range the CHECK constraints allow."""
    bounds = {
        name: {type(m).__name__: m for m in field.metadata}
        for name, field in JudgeScoreCreate.model_fields.items()
        if name.endswith("_score")
    }
    for constraints in bounds.values():
        assert constraints["Ge"].ge == JUDGE_SCORE_MIN
        assert constraints["Le"].le == JUDGE_SCORE_MAX
    for column in ("creativity_score", "quality_score"):
        sql = {str(c.sqltext) for c in JudgeScore.__table__.constraints if hasattr(c, "sqltext")}
        assert f"{column} BETWEEN {JUDGE_SCORE_MIN} AND {JUDGE_SCORE_MAX}" in sql


def test_concurrent_first_score_is_duplicate(db_session, judge, make_video, monkeypatch) -> None:
    """A second insert for the same judge and video that slips past the lookup conflicts."""
    video = make_video()
    upsert_judge_score(db_session, video_id=video.id, judge_id=judge.id, creativity=4, quality=4)

    monkeypatch.setattr(judging, "_existing_score", lambda *args: None)
    with pytest.raises(DuplicateSignal):
        upsert_judge_score(db_session, video_id=video.id, judge_id=judge.id, creativity=9, quality=9)
    assert _stored_scores(db_session, video) == 1


def test_other_integrity_errors_are_not_duplicates(db_session, judge, make_video, monkeypatch) -> None:
    """A CHECK violation surfaces as-is rather than as a duplicate score."""
    video = make_video()
    monkeypatch.setattr(judging, "JUDGE_SCORE_MAX", 50)
    with pytest.raises(IntegrityError):
        upsert_judge_score(db_session, video_id=video.id, judge_id=judge.id, creativity=40, quality=40)
    assert _stored_scores(db_session, video) == 0
