"""Leaderboard endpoint for the Contest Stage API."""

from fastapi import APIRouter, Query

from contest_stage.api.v1.dependencies import SessionDep, to_http_exception
from contest_stage.core.settings import settings
from contest_stage.schemas.leaderboard import LeaderboardEntryResponse
from contest_stage.services.errors import ContestError
from contest_stage.services.leaderboard import LeaderboardScope, build_leaderboard
from contest_stage.services.scoring import LeaderboardEntry

router = APIRouter(prefix="/leaderboard", tags=["leaderboard"])


@router.get("/", response_model=list[LeaderboardEntryResponse])
async def get_leaderboard(
    db: SessionDep,
    category_id: int | None = Query(None, description="Restrict to one category"),
    phase_id: int | None = Query(None, description="Restrict to one competition phase"),
    limit: int | None = Query(None, description="Maximum number of entries to return"),
) -> list[LeaderboardEntry]:
    """Rank approved videos by the 60/30/10 blend of votes, creativity and quality."""
    try:
        scope = LeaderboardScope(category_id=category_id, phase_id=phase_id)
        return build_leaderboard(
            db,
            scope,
            limit=settings.leaderboard_default_limit if limit is None else limit,
        )
    except ContestError as exc:
        raise to_http_exception(exc) from exc
