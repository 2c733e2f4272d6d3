"""
Pydantic schemas for booking payloads.
"""

from datetime import date
from typing import Literal

from pydantic import BaseModel, EmailStr, Field


class BookingCreateRequest(BaseModel):
    """Request body for POST /api/contact/booking."""

    name: str = Field(..., min_length=1, max_length=200)
    email: EmailStr
    phone: str = Field(default="", max_length=20)
    preferred_date: date | None = None
    party_size: int | None = Field(default=None, ge=1, le=500)
    event_type: Literal[
        "general", "birthday", "corporate", "wedding", "private", "other"
    ] = "general"
    message: str = Field(..., min_length=1, max_length=5000)


class BookingCreateResponse(BaseModel):
    """Response for POST /api/contact/booking."""

    booking_id: int
    status: str
    message: str
