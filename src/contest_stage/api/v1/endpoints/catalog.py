"""Category and competition phase endpoints."""

from fastapi import APIRouter, HTTPException, status

from contest_stage.api.v1.dependencies import AdminDep, SessionDep, to_http_exception
from contest_stage.models import Category, Phase
from contest_stage.schemas.catalog import CategoryResponse, PhaseResponse, PhaseUpdate
from contest_stage.services.catalog import list_categories
from contest_stage.services.errors import ContestError
from contest_stage.services.phases import PhaseService

categories_router = APIRouter(prefix="/categories", tags=["categories"])
phases_router = APIRouter(prefix="/phases", tags=["phases"])
phase_service = PhaseService()


@categories_router.get("/", response_model=list[CategoryResponse])
async def get_categories(db: SessionDep) -> list[Category]:
    """List all categories."""
    return list(list_categories(db))


@phases_router.get("/", response_model=list[PhaseResponse])
async def get_phases(db: SessionDep) -> list[Phase]:
    """List phases in competition order."""
    return list(phase_service.list_phases(db))


@phases_router.get("/active", response_model=PhaseResponse | None)
async def get_active_phase(db: SessionDep) -> Phase | None:
    """Return the active phase, or null between phases."""
    return phase_service.get_active_phase(db)


@phases_router.put("/{phase_id}", response_model=PhaseResponse)
async def update_phase(
    phase_id: int,
    update: PhaseUpdate,
    _admin: AdminDep,
    db: SessionDep,
) -> Phase:
    """Rename or re-describe a phase."""
    try:
        return phase_service.update_phase(
            db,
            phase_id,
            name=update.name,
            description=update.description,
        )
    except ContestError as exc:
        raise to_http_exception(exc) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


@phases_router.post("/{phase_id}/activate", response_model=PhaseResponse)
async def activate_phase(phase_id: int, _admin: AdminDep, db: SessionDep) -> Phase:
    """Activate a phase, completing whichever phase was active."""
    try:
        return phase_service.activate_phase(db, phase_id)
    except ContestError as exc:
        raise to_http_exception(exc) from exc


@phases_router.post("/{phase_id}/complete", response_model=PhaseResponse)
async def complete_phase(phase_id: int, _admin: AdminDep, db: SessionDep) -> Phase:
    """Mark a phase completed."""
    try:
        return phase_service.complete_phase(db, phase_id)
    except ContestError as exc:
        raise to_http_exception(exc) from exc
