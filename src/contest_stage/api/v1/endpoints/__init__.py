# src/contest_stage/api/v1/endpoints/__init__.py
"""API endpoint modules for version 1."""

from .catalog import categories_router, phases_router
from .leaderboard import router as leaderboard_router
from .payments import router as payments_router
from .videos import router as videos_router
from .votes import router as votes_router

__all__ = [
    "categories_router",
    "leaderboard_router",
    "payments_router",
    "phases_router",
    "videos_router",
    "votes_router",
]
