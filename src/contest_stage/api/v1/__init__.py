# src/contest_stage/api/v1/__init__.py
"""Version 1 API endpoints."""

from .endpoints import (
    categories_router,
    leaderboard_router,
    payments_router,
    phases_router,
    videos_router,
    votes_router,
)

__all__ = [
    "categories_router",
    "leaderboard_router",
    "payments_router",
    "phases_router",
    "videos_router",
    "votes_router",
]
