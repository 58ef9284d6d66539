# src/contest_stage/models/__init__.py
"""SQLAlchemy models for the Contest Stage application."""

from .catalog import Category, Phase
from .judge_score import JudgeScore
from .user import User
from .video import Video
from .vote import PaidVote, Vote

__all__ = [
    "Category", "Phase",
    "JudgeScore",
    "User",
    "Video",
    "PaidVote", "Vote",
]
