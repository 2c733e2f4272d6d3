"""
Pydantic schemas for kitchen dashboard payloads.
"""

from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, Field

from apps.web.restaurant.serializers import OrderDetailResponse

KitchenStatus = Literal["confirmed", "preparing", "ready", "completed", "cancelled"]


class KitchenOrdersResponse(BaseModel):
    """Response for GET /api/kitchen/orders."""

    orders: list[OrderDetailResponse]


class StatusUpdateRequest(BaseModel):
    """Request body for POST /api/kitchen/orders/{id}/status."""

    status: KitchenStatus
    estimated_minutes: int | None = Field(default=None, ge=1, le=240)


class KitchenSummary(BaseModel):
    """Response for GET /api/kitchen/summary."""

    confirmed: int
    preparing: int
    ready: int
    completed_today: int
    revenue_today: Decimal
