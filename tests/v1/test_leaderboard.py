# mypy: ignore-errors
"""Tests for the leaderboard service and endpoint."""

import pytest
from fastapi import status
from sqlalchemy.exc import OperationalError

from contest_stage.models.video import VIDEO_STATUS_PENDING, VIDEO_STATUS_REJECTED
from contest_stage.services.errors import InvalidScope, UnavailableError
from contest_stage.services.leaderboard import LeaderboardScope, build_leaderboard

URL = "/api/v1/leaderboard/"


def test_empty_scope_returns_empty_list(client, category) -> None:
    """A category without approved videos has an empty leaderboard."""
    response = client.get(URL, params={"category_id": category.id})
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == []


def test_unknown_category_returns_empty_list(client) -> None:
    response = client.get(URL, params={"category_id": 999_999})
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == []


@pytest.mark.parametrize("params", [{"category_id": 0}, {"phase_id": -3}, {"limit": 0}])
def test_invalid_scope_rejected(client, params) -> None:
    response = client.get(URL, params=params)
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_non_integer_scope_rejected(client) -> None:
    response = client.get(URL, params={"category_id": "music"})
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


def test_limit_above_maximum_rejected(client) -> None:
    response = client.get(URL, params={"limit": 10_000})
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_scope_validation_in_service() -> None:
    with pytest.raises(InvalidScope):
        LeaderboardScope(category_id=0)
    with pytest.raises(InvalidScope):
        LeaderboardScope(phase_id=True)
    assert LeaderboardScope(category_id=3).phase_id is None


def test_only_approved_videos_rank(client, make_video, add_free_votes) -> None:
    """Pending and rejected videos never appear, however many votes they hold."""
    approved = make_video("Approved")
    pending = make_video("Pending", status=VIDEO_STATUS_PENDING)
    rejected = make_video("Rejected", status=VIDEO_STATUS_REJECTED)
    add_free_votes(pending, 5)
    add_free_votes(rejected, 5)
    add_free_votes(approved, 1)

    data = client.get(URL).json()
    assert [entry["video_id"] for entry in data] == [approved.id]
    assert data[0]["overall_score"] == pytest.approx(60.0)


def test_entry_combines_all_signals(
    client, make_video, add_free_votes, add_paid_votes, add_judge_score
) -> None:
    """Free, paid and judge signals are folded into one entry."""
    video = make_video("Combined")
    add_free_votes(video, 3)
    add_paid_votes(video, 5)
    add_paid_votes(video, 10)
    add_judge_score(video, 8, 6)
    add_judge_score(video, 4, 10)

    [entry] = client.get(URL).json()
    assert entry["rank"] == 1
    assert entry["free_vote_count"] == 3
    assert entry["paid_vote_count"] == 15
    assert entry["vote_count"] == 18
    assert entry["judge_count"] == 2
    assert entry["judge_total"] == 28
    assert entry["avg_creativity"] == pytest.approx(6.0)
    assert entry["avg_quality"] == pytest.approx(8.0)
    # 60 * 1.0 + 30 * 0.6 + 10 * 0.8
    assert entry["overall_score"] == pytest.approx(86.0)


def test_ranking_order_and_contiguous_ranks(client, make_video, add_free_votes, add_judge_score) -> None:
    first = make_video("First")
    second = make_video("Second")
    third = make_video("Third")
    add_free_votes(first, 10)
    add_free_votes(second, 6)
    add_judge_score(third, 2, 2)

    data = client.get(URL).json()
    assert [entry["video_id"] for entry in data] == [first.id, second.id, third.id]
    assert [entry["rank"] for entry in data] == [1, 2, 3]


def test_tie_prefers_earlier_video(client, make_video, add_free_votes) -> None:
    older = make_video("Older")
    newer = make_video("Newer")
    add_free_votes(newer, 2)
    add_free_votes(older, 2)

    data = client.get(URL).json()
    assert [entry["video_id"] for entry in data] == [older.id, newer.id]


def test_category_filter(client, make_video, add_free_votes, other_category) -> None:
    mine = make_video("Music")
    other = make_video("Sketch", category_id=other_category.id)
    add_free_votes(mine, 1)
    add_free_votes(other, 4)

    data = client.get(URL, params={"category_id": other_category.id}).json()
    assert [entry["video_id"] for entry in data] == [other.id]
    assert data[0]["category_id"] == other_category.id


def test_phase_filter(client, make_video, make_phase) -> None:
    top_100 = make_phase("TOP 100", 2, "active")
    top_50 = make_phase("TOP 50", 3)
    in_100 = make_video(phase_id=top_100.id)
    make_video(phase_id=top_50.id)
    make_video()

    data = client.get(URL, params={"phase_id": top_100.id}).json()
    assert [entry["video_id"] for entry in data] == [in_100.id]


def test_limit_truncates_after_ranking(client, make_video, add_free_votes) -> None:
    """Limiting keeps the top ranks and their scores unchanged."""
    videos = [make_video() for _ in range(4)]
    for votes, video in zip((1, 8, 4, 2), videos):
        add_free_votes(video, votes)

    full = client.get(URL).json()
    top = client.get(URL, params={"limit": 2}).json()
    assert top == full[:2]
    assert [entry["video_id"] for entry in top] == [videos[1].id, videos[2].id]


def test_default_limit_applied(client, make_video, monkeypatch) -> None:
    from contest_stage.core.settings import settings

    monkeypatch.setattr(settings, "leaderboard_default_limit", 2)
    for _ in range(3):
        make_video()

    assert len(client.get(URL).json()) == 2


def test_leaderboard_is_deterministic(client, make_video, add_free_votes, add_judge_score) -> None:
    for index in range(5):
        video = make_video()
        add_free_votes(video, index % 2)
        add_judge_score(video, 5, 5)

    first = client.get(URL)
    second = client.get(URL)
    assert first.json() == second.json()


def test_paid_votes_move_a_video_up(db_session, make_video, add_free_votes, add_paid_votes) -> None:
    leader = make_video()
    challenger = make_video()
    add_free_votes(leader, 3)
    add_free_votes(challenger, 1)

    before = build_leaderboard(db_session, LeaderboardScope())
    assert before[0].video_id == leader.id

    add_paid_votes(challenger, 5)
    after = build_leaderboard(db_session, LeaderboardScope())
    assert after[0].video_id == challenger.id
    assert after[0].vote_count == 6
    assert after[0].overall_score == pytest.approx(60.0)


def test_service_rejects_bad_limit(db_session) -> None:
    with pytest.raises(InvalidScope):
        build_leaderboard(db_session, LeaderboardScope(), limit=0)


@pytest.fixture()
def broken_store(db_session, monkeypatch):
    """Make every statement on the test session fail as a locked database would."""

    def _execute(*args, **kwargs):
        raise OperationalError("SELECT video.id FROM video", {}, Exception("database is locked"))

    monkeypatch.setattr(db_session, "execute", _execute)
    return db_session


def test_store_failure_raises_unavailable(broken_store) -> None:
    with pytest.raises(UnavailableError) as excinfo:
        build_leaderboard(broken_store, LeaderboardScope())
    assert isinstance(excinfo.value.__cause__, OperationalError)


def test_store_failure_returns_503(client, broken_store) -> None:
    response = client.get(URL)
    assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE
