"""Business logic services for the Contest Stage application."""

from .errors import (
    ContestError,
    DuplicateSignal,
    IneligibleVideo,
    InvalidScope,
    NotFoundError,
    UnavailableError,
)
from .leaderboard import LeaderboardScope, build_leaderboard
from .phases import PhaseService
from .scoring import LeaderboardEntry, VideoSignals, rank_entries

__all__ = [
    "ContestError",
    "DuplicateSignal",
    "IneligibleVideo",
    "InvalidScope",
    "NotFoundError",
    "UnavailableError",
    "LeaderboardScope",
    "build_leaderboard",
    "PhaseService",
    "LeaderboardEntry",
    "VideoSignals",
    "rank_entries",
]
