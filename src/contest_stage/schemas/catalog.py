"""Category, phase and video schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict


class CategoryResponse(BaseModel):
    """Schema for category information returned by the API."""

    id: int
    name: str
    description: str | None

    model_config = ConfigDict(from_attributes=True)


class PhaseResponse(BaseModel):
    """Schema for phase information returned by the API."""

    id: int
    name: str
    number: int
    description: str | None
    status: Literal["upcoming", "active", "completed"]
    start_date: datetime | None
    end_date: datetime | None

    model_config = ConfigDict(from_attributes=True)


class PhaseUpdate(BaseModel):
    """Editable phase fields; status changes go through activate/complete."""

    name: str | None = None
    description: str | None = None


class VideoResponse(BaseModel):
    """Schema for video information returned by the API."""

    id: int
    owner_id: int
    category_id: int
    phase_id: int | None
    title: str
    description: str | None
    video_url: str
    status: Literal["pending", "approved", "rejected"]
    views: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class VideoStatusUpdate(BaseModel):
    """Moderation decision for a video."""

    status: Literal["pending", "approved", "rejected"]
