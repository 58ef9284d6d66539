"""Payment gateway callbacks that credit purchased votes."""

import hmac
import logging
from typing import Annotated

from fastapi import APIRouter, Header, HTTPException, status

from contest_stage.api.v1.dependencies import SessionDep, to_http_exception
from contest_stage.core.settings import settings
from contest_stage.schemas.vote import PaymentWebhook
from contest_stage.services.errors import ContestError, NotFoundError
from contest_stage.services.paid_votes import (
    credit_paid_votes,
    parse_tx_ref,
    quantity_for_amount,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/payments", tags=["payments"])

CHARGE_COMPLETED = "charge.completed"
CHARGE_SUCCESSFUL = "successful"


def _verify_signature(signature: str | None) -> None:
    secret = settings.payment_webhook_secret
    if not secret or not signature:
        logger.error("Missing webhook signature or secret hash")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing signature")
    if not hmac.compare_digest(signature.encode(), secret.encode()):
        logger.error("Invalid webhook signature")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid signature")


@router.post("/webhook")
async def payment_webhook(
    payload: PaymentWebhook,
    db: SessionDep,
    verif_hash: Annotated[str | None, Header(alias="verif-hash")] = None,
) -> dict[str, str]:
    """Credit paid votes for a successful charge.

    The gateway retries until it sees a 2xx, so payloads that will never be
    credited are acknowledged with a descriptive status instead of an error.
    """
    _verify_signature(verif_hash)

    data = payload.data
    if payload.event != CHARGE_COMPLETED or data.status != CHARGE_SUCCESSFUL:
        return {"status": "received"}

    video_id = parse_tx_ref(data.tx_ref)
    if video_id is None:
        logger.warning("Invalid tx_ref format: %s", data.tx_ref)
        return {"status": "ignored"}

    if data.currency != settings.payment_currency:
        logger.warning("Invalid currency %s for tx %s", data.currency, data.id)
        return {"status": "invalid_currency"}

    quantity = quantity_for_amount(data.amount)
    if quantity < 1:
        logger.warning("Amount %s buys no votes (tx %s)", data.amount, data.id)
        return {"status": "amount_too_low"}

    try:
        _, created = credit_paid_votes(
            db,
            video_id=video_id,
            transaction_id=str(data.id),
            quantity=quantity,
            amount=data.amount,
            currency=data.currency,
        )
    except NotFoundError:
        logger.warning("Video %s from tx %s not found", video_id, data.id)
        return {"status": "ignored"}
    except ContestError as exc:
        raise to_http_exception(exc) from exc

    if not created:
        return {"status": "already_processed"}
    return {"status": "received"}
