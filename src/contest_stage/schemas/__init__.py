"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .catalog import (
    CategoryResponse,
    PhaseResponse,
    PhaseUpdate,
    VideoResponse,
    VideoStatusUpdate,
)
from .judge_score import JudgeScoreCreate, JudgeScoreResponse, ScoreSummaryResponse
from .leaderboard import LeaderboardEntryResponse
from .vote import PaymentWebhook, VoteCreate, VoteResponse, VoteTally

__all__ = [
    "CategoryResponse", "PhaseResponse", "PhaseUpdate", "VideoResponse", "VideoStatusUpdate",
    "JudgeScoreCreate", "JudgeScoreResponse", "ScoreSummaryResponse",
    "LeaderboardEntryResponse",
    "PaymentWebhook", "VoteCreate", "VoteResponse", "VoteTally",
]
