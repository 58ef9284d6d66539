"""Pure leaderboard scoring and ranking.

Nothing here touches the database: callers fold ledger aggregates into
``VideoSignals`` and ``rank_entries`` turns them into ranked
``LeaderboardEntry`` records. Given the same signals in any order the output
is identical.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime

from contest_stage.db.time import as_utc
from contest_stage.models.judge_score import JUDGE_SCORE_MAX

VOTE_WEIGHT = 0.60
CREATIVITY_WEIGHT = 0.30
QUALITY_WEIGHT = 0.10

# Judge sub-scores are rated out of this value.
JUDGE_SCALE = JUDGE_SCORE_MAX
SCORE_PRECISION = 4


@dataclass(frozen=True)
class VideoSignals:
    """Raw per-video aggregates read from the ledgers."""

    video_id: int
    title: str
    owner_id: int
    category_id: int
    phase_id: int | None
    created_at: datetime
    free_votes: int = 0
    paid_votes: int = 0
    judge_count: int = 0
    creativity_sum: int = 0
    quality_sum: int = 0

    @property
    def vote_count(self) -> int:
        return self.free_votes + self.paid_votes

    @property
    def avg_creativity(self) -> float:
        if not self.judge_count:
            return 0.0
        return self.creativity_sum / self.judge_count

    @property
    def avg_quality(self) -> float:
        if not self.judge_count:
            return 0.0
        return self.quality_sum / self.judge_count

    @property
    def judge_total(self) -> int:
        return self.creativity_sum + self.quality_sum


@dataclass(frozen=True)
class LeaderboardEntry:
    """A ranked video with its derived scores."""

    video_id: int
    title: str
    owner_id: int
    category_id: int
    phase_id: int | None
    created_at: datetime
    free_vote_count: int
    paid_vote_count: int
    vote_count: int
    judge_count: int
    judge_total: int
    avg_creativity: float
    avg_quality: float
    normalized_votes: float
    overall_score: float
    rank: int


def overall_score(normalized_votes: float, avg_creativity: float, avg_quality: float) -> float:
    """Blend the three signals into a 0-100 composite.

    Each signal is first put on a 0-100 sub-scale, then weighted 60/30/10.
    """
    score = (
        VOTE_WEIGHT * normalized_votes * 100
        + CREATIVITY_WEIGHT * (avg_creativity / JUDGE_SCALE) * 100
        + QUALITY_WEIGHT * (avg_quality / JUDGE_SCALE) * 100
    )
    return round(score, SCORE_PRECISION)


def normalize_votes(vote_count: int, max_vote_count: int) -> float:
    """Return ``vote_count`` relative to the scope maximum, 0 when nobody has votes."""
    if max_vote_count <= 0:
        return 0.0
    return vote_count / max_vote_count


def _sort_key(item: tuple[VideoSignals, float]) -> tuple[float, int, datetime, int]:
    signals, score = item
    # Older submissions win a full tie; the id settles identical timestamps.
    return (-score, -signals.vote_count, as_utc(signals.created_at), signals.video_id)


def rank_entries(signals: Iterable[VideoSignals]) -> list[LeaderboardEntry]:
    """Score every video in scope and return them in rank order.

    Args:
        signals: Aggregates for every approved video in the scope. Votes are
            normalized against the maximum within this collection, so pass
            the whole scope even when only the top entries are wanted.

    Returns:
        Entries sorted by overall score, then raw vote count, then creation
        time, with contiguous ranks starting at 1.
    """
    videos = list(signals)
    if not videos:
        return []

    max_votes = max(video.vote_count for video in videos)
    scored = [
        (
            video,
            overall_score(
                normalize_votes(video.vote_count, max_votes),
                video.avg_creativity,
                video.avg_quality,
            ),
        )
        for video in videos
    ]
    scored.sort(key=_sort_key)

    return [
        LeaderboardEntry(
            video_id=video.video_id,
            title=video.title,
            owner_id=video.owner_id,
            category_id=video.category_id,
            phase_id=video.phase_id,
            created_at=video.created_at,
            free_vote_count=video.free_votes,
            paid_vote_count=video.paid_votes,
            vote_count=video.vote_count,
            judge_count=video.judge_count,
            judge_total=video.judge_total,
            avg_creativity=round(video.avg_creativity, SCORE_PRECISION),
            avg_quality=round(video.avg_quality, SCORE_PRECISION),
            normalized_votes=round(normalize_votes(video.vote_count, max_votes), SCORE_PRECISION),
            overall_score=score,
            rank=position,
        )
        for position, (video, score) in enumerate(scored, start=1)
    ]
