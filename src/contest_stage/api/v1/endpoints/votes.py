"""Vote-related endpoints for the Contest Stage API."""

from fastapi import APIRouter, HTTPException, Request, status

from contest_stage.api.v1.dependencies import (
    CurrentUserDep,
    OptionalUserDep,
    SessionDep,
    to_http_exception,
)
from contest_stage.schemas.vote import VoteCreate, VoteResponse, VoteTally
from contest_stage.services.catalog import get_video
from contest_stage.services.errors import ContestError
from contest_stage.services.votes import (
    free_vote_count,
    paid_vote_count,
    record_vote,
    voted_video_ids,
)

router = APIRouter(prefix="/votes", tags=["votes"])


def _client_ip(request: Request) -> str | None:
    if request.client is None:
        return None
    return request.client.host


@router.post("/", response_model=VoteResponse, status_code=status.HTTP_201_CREATED)
async def cast_vote(
    vote_data: VoteCreate,
    request: Request,
    current_user: OptionalUserDep,
    db: SessionDep,
) -> VoteResponse:
    """Cast a free vote as the signed-in user, or by IP address when anonymous."""
    user_id = current_user.id if current_user is not None else None
    ip_address = _client_ip(request)
    if user_id is None and ip_address is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Could not determine voter identity",
        )

    try:
        vote = record_vote(db, vote_data.video_id, user_id=user_id, ip_address=ip_address)
    except ContestError as exc:
        raise to_http_exception(exc) from exc

    return VoteResponse(
        id=vote.id,
        video_id=vote.video_id,
        created_at=vote.created_at,
        vote_count=free_vote_count(db, vote.video_id) + paid_vote_count(db, vote.video_id),
    )


@router.get("/video/{video_id}", response_model=VoteTally)
async def get_video_votes(video_id: int, db: SessionDep) -> VoteTally:
    """Return free, paid and combined vote totals for a video."""
    try:
        get_video(db, video_id)
    except ContestError as exc:
        raise to_http_exception(exc) from exc

    free = free_vote_count(db, video_id)
    paid = paid_vote_count(db, video_id)
    return VoteTally(
        video_id=video_id,
        free_vote_count=free,
        paid_vote_count=paid,
        vote_count=free + paid,
    )


@router.get("/mine", response_model=list[int])
async def get_my_votes(current_user: CurrentUserDep, db: SessionDep) -> list[int]:
    """Return ids of the videos the current user has voted for."""
    return voted_video_ids(db, current_user.id)
