"""Payment gateway schemas - data contracts for Yoco and PayFast."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# =============================================================================
# Enums
# =============================================================================


class PaymentProvider(str, Enum):
    """Supported payment gateways."""

    YOCO = "yoco"
    PAYFAST = "payfast"


class YocoEventType(str, Enum):
    """Yoco webhook event types we understand."""

    PAYMENT_SUCCEEDED = "payment.succeeded"
    PAYMENT_FAILED = "payment.failed"
    CHECKOUT_PAYMENT_RECEIVED = "checkout.payment_received"
    CHECKOUT_CANCELLED = "checkout.cancelled"
    CHECKOUT_EXPIRED = "checkout.expired"


# =============================================================================
# Yoco Checkout API
# =============================================================================


class YocoCheckoutRequest(BaseModel):
    """Body for POST https://payments.yoco.com/api/checkouts."""

    model_config = ConfigDict(populate_by_name=True)

    amount: int = Field(..., gt=0, description="Amount in cents (R10.00 = 1000)")
    currency: str = "ZAR"
    success_url: str = Field(alias="successUrl")
    cancel_url: str = Field(alias="cancelUrl")
    failure_url: str = Field(alias="failureUrl")
    metadata: dict[str, Any] = Field(default_factory=dict)


class YocoCheckout(BaseModel):
    """Checkout session returned by Yoco."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str
    redirect_url: str = Field(default="", alias="redirectUrl")
    status: str = "created"
    amount: int
    currency: str
    metadata: dict[str, Any] | None = None


# =============================================================================
# PayFast Checkout Form
# =============================================================================


class PayFastUserDetails(BaseModel):
    """Optional customer details sent to PayFast."""

    model_config = ConfigDict(populate_by_name=True)

    email: str = ""
    first_name: str = Field(default="", alias="firstName")
    last_name: str = Field(default="", alias="lastName")
    phone: str = ""
