"""
Pydantic schemas for payment API request bodies.
"""

from decimal import Decimal

from lattelane_schemas import PayFastUserDetails
from pydantic import BaseModel, Field


class YocoCheckoutBody(BaseModel):
    """Request body for POST /api/yoco/checkout."""

    order_id: int
    amount: Decimal = Field(..., gt=0, description="Amount in rands")


class PayFastCreatePaymentBody(BaseModel):
    """Request body for POST /api/payfast/create-payment."""

    order_id: int
    amount: Decimal = Field(..., gt=0, description="Amount in rands")
    item_name: str = Field(..., min_length=1, max_length=100)
    item_description: str = Field(default="", max_length=255)
    user_details: PayFastUserDetails | None = None
