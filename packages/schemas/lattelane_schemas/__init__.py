"""Little Latte Lane Schemas - Pydantic models for payment data contracts."""

from lattelane_schemas.payments import (
    PaymentProvider,
    PayFastUserDetails,
    YocoCheckout,
    YocoCheckoutRequest,
    YocoEventType,
)
from lattelane_schemas.webhooks import (
    PayFastNotification,
    YocoWebhookEvent,
    YocoWebhookPayload,
)

__all__ = [
    # Payments
    "PaymentProvider",
    "PayFastUserDetails",
    "YocoCheckout",
    "YocoCheckoutRequest",
    "YocoEventType",
    # Webhooks
    "PayFastNotification",
    "YocoWebhookEvent",
    "YocoWebhookPayload",
]
