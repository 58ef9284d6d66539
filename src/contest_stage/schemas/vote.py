"""Vote-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class VoteCreate(BaseModel):
    """Schema for casting a free vote."""

    video_id: int = Field(..., ge=1)


class VoteResponse(BaseModel):
    """A recorded vote together with the video's refreshed tally."""

    id: int
    video_id: int
    created_at: datetime
    vote_count: int

    model_config = ConfigDict(from_attributes=True)


class VoteTally(BaseModel):
    """Vote totals for a single video."""

    video_id: int
    free_vote_count: int
    paid_vote_count: int
    vote_count: int


class PaymentData(BaseModel):
    """Charge details carried by a payment webhook."""

    id: int | str
    tx_ref: str | None = None
    status: str
    amount: int = Field(..., ge=0)
    currency: str

    model_config = ConfigDict(extra="ignore")


class PaymentWebhook(BaseModel):
    """Payment gateway callback envelope."""

    event: str
    data: PaymentData

    model_config = ConfigDict(extra="ignore")
