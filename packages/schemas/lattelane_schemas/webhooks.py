"""Webhook payload schemas for the payment gateways."""

from datetime import datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# =============================================================================
# Yoco Webhooks
# =============================================================================


class YocoWebhookPayload(BaseModel):
    """The `payload` object of a Yoco webhook event (payment or checkout)."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: str
    type: str | None = None
    status: str | None = None
    amount: int | None = Field(default=None, description="Amount in cents")
    currency: str | None = None
    payment_id: str | None = Field(default=None, alias="paymentId")
    mode: str | None = Field(default=None, alias="processingMode")
    metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def order_id(self) -> str | None:
        """Order id we attached at checkout (camelCase or snake_case key)."""
        value = self.metadata.get("orderId") or self.metadata.get("order_id")
        return str(value) if value else None

    @property
    def checkout_id(self) -> str:
        """Checkout id, from metadata for payment events or the payload id."""
        value = self.metadata.get("checkoutId")
        return str(value) if value else self.id


class YocoWebhookEvent(BaseModel):
    """Yoco webhook event envelope."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: str
    type: str = Field(
        description="payment.succeeded, payment.failed, checkout.cancelled, etc."
    )
    created_date: datetime | None = Field(default=None, alias="createdDate")
    payload: YocoWebhookPayload


# =============================================================================
# PayFast ITN (Instant Transaction Notification)
# =============================================================================


class PayFastNotification(BaseModel):
    """PayFast ITN form fields we act on. Unknown fields are kept."""

    model_config = ConfigDict(extra="allow")

    m_payment_id: str = ""
    pf_payment_id: str = ""
    payment_status: str
    item_name: str = ""
    amount_gross: Decimal | None = None
    amount_fee: Decimal | None = None
    amount_net: Decimal | None = None
    custom_str1: str = Field(default="", description="Our order id")
    custom_str2: str = Field(default="", description="Our user id")
    merchant_id: str = ""
    signature: str = ""

    @property
    def order_id(self) -> str | None:
        return self.custom_str1.strip() or None

    @property
    def is_complete(self) -> bool:
        return self.payment_status == "COMPLETE"
