"""
Pydantic schemas for menu, order and closure API payloads.

These schemas define the public API contract.
"""

from datetime import datetime
from decimal import Decimal
from typing import Any, Literal

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field, model_validator

# =============================================================================
# Menu Structure
# =============================================================================


class MenuItemSchema(BaseModel):
    """A menu item with full details."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str
    price: Decimal
    image_url: str
    is_available: bool
    is_featured: bool
    allergens: list[str]
    preparation_time: int


class MenuCategorySchema(BaseModel):
    """A category with its items and nested subcategories."""

    id: int
    name: str
    description: str
    image_url: str
    items: list[MenuItemSchema] = Field(default_factory=list)
    subcategories: list["MenuCategorySchema"] = Field(default_factory=list)


MenuCategorySchema.model_rebuild()


class MenuResponse(BaseModel):
    """Response for GET /api/menu."""

    sections: list[MenuCategorySchema]


class AvailabilityResponse(BaseModel):
    """Response for GET /api/menu/availability."""

    items: dict[str, bool]  # item_id -> is_available
    as_of: datetime


# =============================================================================
# Order Schemas
# =============================================================================


class CartItemSchema(BaseModel):
    """A single cart line in an order creation request."""

    menu_item_id: int
    quantity: int = Field(..., ge=1, le=99)
    customizations: dict[str, Any] = Field(default_factory=dict)
    special_requests: str = Field(default="", max_length=500)


class OrderCreateRequest(BaseModel):
    """Request body for POST /api/orders."""

    items: list[CartItemSchema] = Field(..., min_length=1, max_length=50)
    order_type: Literal["pickup", "delivery"] = "pickup"
    delivery_address: str = Field(default="", max_length=500)
    delivery_zone: Literal["roberts_estate", "middleburg"] | None = None
    # Geocoded address; when present the zone is worked out from these
    delivery_latitude: float | None = Field(default=None, ge=-90, le=90)
    delivery_longitude: float | None = Field(default=None, ge=-180, le=180)
    special_instructions: str = Field(default="", max_length=1000)
    customer_phone: str = Field(default="", max_length=20)

    @model_validator(mode="after")
    def _check_coordinates(self) -> "OrderCreateRequest":
        if (self.delivery_latitude is None) != (self.delivery_longitude is None):
            raise ValueError("delivery_latitude and delivery_longitude go together")
        return self


class OrderItemResponseSchema(BaseModel):
    """A line item in an order response."""

    id: int
    menu_item_id: int
    item_name: str
    quantity: int
    unit_price: Decimal
    total_price: Decimal
    customizations: dict[str, Any]
    special_requests: str


class OrderDetailResponse(BaseModel):
    """Full order, as returned to its owner and the kitchen."""

    order_id: int
    order_number: str | None
    status: str
    payment_status: str
    payment_method: str
    customer_name: str
    customer_email: str
    customer_phone: str
    order_type: str
    delivery_address: str
    delivery_zone: str
    special_instructions: str
    items: list[OrderItemResponseSchema]
    subtotal: Decimal
    delivery_fee: Decimal
    total_amount: Decimal
    created_at: datetime
    confirmed_at: datetime | None
    estimated_ready_time: datetime | None


class OrderListResponse(BaseModel):
    """Response for GET /api/orders."""

    orders: list[OrderDetailResponse]


class OrderStatusResponse(BaseModel):
    """Response for GET /api/orders/{order_id}/status."""

    order_id: int
    order_number: str | None
    status: str
    payment_status: str
    updated_at: datetime
    estimated_ready_time: datetime | None


# =============================================================================
# Closure Schemas
# =============================================================================


class ClosureStatus(BaseModel):
    """Whether the restaurant is accepting orders right now."""

    is_closed: bool
    reason: Literal["manual", "scheduled", "none"]
    message: str | None = None
    scheduled_end: datetime | None = None


class ClosureSettingsSchema(BaseModel):
    """Admin view of the closure settings row."""

    is_manually_closed: bool
    closure_message: str
    scheduled_closure_start: datetime | None
    scheduled_closure_end: datetime | None
    updated_at: datetime | None


class ClosureUpdateRequest(BaseModel):
    """Request body for POST /api/admin/closure. Omitted fields are unchanged."""

    is_manually_closed: bool | None = None
    closure_message: str | None = Field(default=None, max_length=500)
    # Offsets are required; comparing against a naive time would fail later
    scheduled_closure_start: AwareDatetime | None = None
    scheduled_closure_end: AwareDatetime | None = None
    clear_schedule: bool = False

    @model_validator(mode="after")
    def _check_schedule(self) -> "ClosureUpdateRequest":
        start = self.scheduled_closure_start
        end = self.scheduled_closure_end
        if self.clear_schedule and (start or end):
            raise ValueError("clear_schedule cannot be combined with schedule times")
        if (start is None) != (end is None):
            raise ValueError("Both scheduled_closure_start and end are required")
        if start and end and end < start:
            raise ValueError("scheduled_closure_end cannot be before the start")
        return self
