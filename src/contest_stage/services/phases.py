"""Competition phase progression."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session

from contest_stage.db.time import utcnow
from contest_stage.models import Phase
from contest_stage.models.catalog import (
    PHASE_STATUS_ACTIVE,
    PHASE_STATUS_COMPLETED,
    PHASE_STATUS_UPCOMING,
)
from contest_stage.services.errors import NotFoundError

logger = logging.getLogger(__name__)


class PhaseService:
    """Service handling phase listing and admin-driven transitions."""

    @staticmethod
    def list_phases(db: Session) -> Sequence[Phase]:
        """Return all phases in competition order."""
        return db.scalars(select(Phase).order_by(Phase.number)).all()

    @staticmethod
    def get_active_phase(db: Session) -> Phase | None:
        """Return the currently active phase, if any."""
        return db.scalars(
            select(Phase).where(Phase.status == PHASE_STATUS_ACTIVE).order_by(Phase.number)
        ).first()

    @staticmethod
    def get_phase(db: Session, phase_id: int) -> Phase:
        """Return a phase by id or raise ``NotFoundError``."""
        phase = db.get(Phase, phase_id)
        if phase is None:
            raise NotFoundError("Phase not found")
        return phase

    @staticmethod
    def update_phase(
        db: Session,
        phase_id: int,
        *,
        name: str | None = None,
        description: str | None = None,
    ) -> Phase:
        """Rename or re-describe a phase. Status only moves via activate/complete.

        Raises:
            ValueError: If no field was supplied.
            NotFoundError: If the phase does not exist.
        """
        if name is None and description is None:
            raise ValueError("No valid fields to update")

        phase = PhaseService.get_phase(db, phase_id)
        if name is not None:
            phase.name = name
        if description is not None:
            phase.description = description
        db.commit()
        db.refresh(phase)
        return phase

    @staticmethod
    def activate_phase(db: Session, phase_id: int) -> Phase:
        """Make ``phase_id`` the single active phase.

        The previously active phase is completed; every other phase that has
        not finished returns to upcoming.

        Raises:
            NotFoundError: If the phase does not exist.
        """
        target = PhaseService.get_phase(db, phase_id)

        for phase in PhaseService.list_phases(db):
            if phase.id == target.id:
                continue
            if phase.status == PHASE_STATUS_ACTIVE:
                phase.status = PHASE_STATUS_COMPLETED
                phase.end_date = utcnow()
                logger.info("Phase %s completed by activation of %s", phase.name, target.name)
            elif phase.status != PHASE_STATUS_COMPLETED:
                phase.status = PHASE_STATUS_UPCOMING

        target.status = PHASE_STATUS_ACTIVE
        target.start_date = utcnow()
        target.end_date = None
        db.commit()
        db.refresh(target)
        logger.info("Phase %s activated", target.name)
        return target

    @staticmethod
    def complete_phase(db: Session, phase_id: int) -> Phase:
        """Mark a phase completed.

        Raises:
            NotFoundError: If the phase does not exist.
        """
        phase = PhaseService.get_phase(db, phase_id)
        phase.status = PHASE_STATUS_COMPLETED
        phase.end_date = utcnow()
        db.commit()
        db.refresh(phase)
        logger.info("Phase %s completed", phase.name)
        return phase
