"""Paid-vote ledger operations driven by completed payments."""

from __future__ import annotations

import logging
import re

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from contest_stage.core.settings import settings
from contest_stage.models import PaidVote
from contest_stage.services.catalog import get_video

logger = logging.getLogger(__name__)

# Checkout references look like VOTE-<video id>-<client timestamp>.
TX_REF_PATTERN = re.compile(r"^VOTE-(\d+)-\d+$")

__all__ = [
    "TX_REF_PATTERN",
    "credit_paid_votes",
    "parse_tx_ref",
    "quantity_for_amount",
]


def parse_tx_ref(tx_ref: str | None) -> int | None:
    """Return the video id encoded in a checkout reference, if well formed."""
    if not tx_ref:
        return None
    match = TX_REF_PATTERN.match(tx_ref)
    if match is None:
        return None
    return int(match.group(1))


def quantity_for_amount(amount: int) -> int:
    """Return how many votes ``amount`` buys at the configured unit price."""
    if amount <= 0:
        return 0
    return amount // settings.paid_vote_unit_price


def _find_by_transaction(db: Session, transaction_id: str) -> PaidVote | None:
    return db.scalars(select(PaidVote).where(PaidVote.transaction_id == transaction_id)).first()


def credit_paid_votes(
    db: Session,
    *,
    video_id: int,
    transaction_id: str,
    quantity: int,
    amount: int,
    currency: str,
    payer_id: int | None = None,
) -> tuple[PaidVote, bool]:
    """Credit purchased votes for a completed payment exactly once.

    Returns:
        The ledger row for the transaction and whether this call created it.
        Replayed transactions return the original row untouched.

    Raises:
        ValueError: If ``quantity`` is not positive.
        NotFoundError: If the video does not exist.
    """
    if quantity <= 0:
        raise ValueError("Paid vote quantity must be positive")

    existing = _find_by_transaction(db, transaction_id)
    if existing is not None:
        logger.info("Transaction %s already credited", transaction_id)
        return existing, False

    get_video(db, video_id)

    paid_vote = PaidVote(
        video_id=video_id,
        transaction_id=transaction_id,
        quantity=quantity,
        amount=amount,
        currency=currency,
        payer_id=payer_id,
    )
    try:
        with db.begin_nested():
            db.add(paid_vote)
    except IntegrityError:
        existing = _find_by_transaction(db, transaction_id)
        if existing is None:
            raise
        logger.info("Transaction %s credited concurrently", transaction_id)
        return existing, False

    db.commit()
    logger.info("Credited %d paid votes to video %s (tx %s)", quantity, video_id, transaction_id)
    return paid_vote, True
