"""
Payment services - Yoco Checkout integration.

Provides the Yoco API client, rand/cent conversion, callback URL building
and webhook signature verification.
"""

import base64
import binascii
import hashlib
import hmac
import logging
import time
from collections.abc import Mapping
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from django.conf import settings
from django.http import HttpRequest

import httpx
from lattelane_schemas import YocoCheckout, YocoCheckoutRequest

from apps.web.restaurant.models import Order

logger = logging.getLogger(__name__)

# Yoco signs webhooks with the Standard Webhooks scheme
WEBHOOK_TOLERANCE_SECONDS = 300


class PaymentError(Exception):
    """Error during payment processing."""

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code


class WebhookVerificationError(Exception):
    """Webhook signature headers missing, stale or not matching."""


# =============================================================================
# Amounts and URLs
# =============================================================================


def rands_to_cents(amount: Decimal) -> int:
    """Convert a rand amount to integer cents (R10.50 -> 1050)."""
    return int((Decimal(amount) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def cents_to_rands(cents: int) -> Decimal:
    """Convert integer cents to a two-decimal rand amount."""
    return (Decimal(cents) / 100).quantize(Decimal("0.01"))


def site_base_url(request: HttpRequest) -> str:
    """SITE_URL setting, or the origin of the current request."""
    base = settings.SITE_URL or request.build_absolute_uri("/")
    return base.rstrip("/")


def build_callback_urls(order: Order, request: HttpRequest) -> dict[str, str]:
    """
    Browser redirect targets after the hosted payment page.

    Returns:
        Dict with success_url, cancel_url and failure_url
    """
    base = site_base_url(request)
    return {
        f"{outcome}_url": f"{base}/account?payment={outcome}&orderId={order.pk}"
        for outcome in ("success", "cancel", "failure")
    }


# =============================================================================
# Yoco API Client
# =============================================================================


class YocoClient:
    """
    Minimal client for the Yoco Checkout API.

    API Reference: https://developer.yoco.com/online/checkout/
    """

    BASE_URL = "https://payments.yoco.com/api"
    CHECKOUTS_URL = f"{BASE_URL}/checkouts"

    def __init__(
        self,
        secret_key: str | None = None,
        http_client: httpx.Client | None = None,
    ) -> None:
        """
        Initialize the Yoco client.

        Args:
            secret_key: Yoco secret key (defaults to YOCO_SECRET_KEY setting)
            http_client: Optional HTTP client for dependency injection (testing).
        """
        self.secret_key = settings.YOCO_SECRET_KEY if secret_key is None else secret_key
        self._client = http_client or httpx.Client(timeout=30.0)
        self._owns_client = http_client is None

    def __enter__(self) -> "YocoClient":
        return self

    def __exit__(self, *_exc: object) -> None:
        self.close()

    def close(self) -> None:
        """Close the HTTP client if we own it."""
        if self._owns_client:
            self._client.close()

    def _headers(self) -> dict[str, str]:
        if not self.secret_key:
            raise PaymentError("Yoco secret key is not configured", code="not_configured")
        return {
            "Authorization": f"Bearer {self.secret_key}",
            "Content-Type": "application/json",
        }

    def _request(self, method: str, url: str, **kwargs: Any) -> dict[str, Any]:
        headers = self._headers()
        try:
            response = self._client.request(method, url, headers=headers, **kwargs)
        except httpx.HTTPError as e:
            raise PaymentError(f"Yoco request failed: {e}", code="network_error") from e

        if not response.is_success:
            logger.error(
                "Yoco API error: %s %s -> %s %s",
                method,
                url,
                response.status_code,
                response.text[:500],
            )
            raise PaymentError(
                f"Yoco API error: {response.status_code} {response.text[:200]}",
                code=f"http_{response.status_code}",
            )

        data: dict[str, Any] = response.json()
        return data

    def create_checkout(
        self,
        amount_cents: int,
        success_url: str,
        cancel_url: str,
        failure_url: str,
        metadata: dict[str, Any] | None = None,
        currency: str = "ZAR",
    ) -> YocoCheckout:
        """
        Create a hosted checkout session.

        Args:
            amount_cents: Amount in cents (R10.00 = 1000)
            success_url: Redirect after successful payment
            cancel_url: Redirect when the customer cancels
            failure_url: Redirect after a failed payment
            metadata: Attached to the checkout and echoed in webhooks

        Returns:
            YocoCheckout with the redirect URL for the browser

        Raises:
            PaymentError: If the key is missing or the API call fails
        """
        body = YocoCheckoutRequest(
            amount=amount_cents,
            currency=currency,
            success_url=success_url,
            cancel_url=cancel_url,
            failure_url=failure_url,
            metadata=metadata or {},
        )
        data = self._request(
            "POST", self.CHECKOUTS_URL, json=body.model_dump(by_alias=True)
        )
        return YocoCheckout.model_validate(data)

    def get_checkout(self, checkout_id: str) -> YocoCheckout:
        """
        Retrieve a checkout session.

        Raises:
            PaymentError: If not found or the API call fails
        """
        data = self._request("GET", f"{self.CHECKOUTS_URL}/{checkout_id}")
        return YocoCheckout.model_validate(data)


# =============================================================================
# Webhook Signatures
# =============================================================================


def _secret_bytes(secret: str) -> bytes:
    try:
        return base64.b64decode(secret.removeprefix("whsec_"))
    except (binascii.Error, ValueError) as e:
        raise WebhookVerificationError("Webhook secret is not valid base64") from e


def sign_webhook(secret: str, webhook_id: str, timestamp: str, body: bytes) -> str:
    """Base64 HMAC-SHA256 of "{id}.{timestamp}.{body}"."""
    content = f"{webhook_id}.{timestamp}.".encode() + body
    digest = hmac.new(_secret_bytes(secret), content, hashlib.sha256).digest()
    return base64.b64encode(digest).decode()


def verify_webhook_signature(
    body: bytes,
    headers: Mapping[str, str],
    secret: str,
    tolerance: int = WEBHOOK_TOLERANCE_SECONDS,
    now: float | None = None,
) -> None:
    """
    Verify a Yoco webhook.

    Args:
        body: Raw request body
        headers: Request headers (webhook-id, webhook-timestamp, webhook-signature)
        secret: The whsec_ signing secret
        tolerance: Maximum clock skew in seconds

    Raises:
        WebhookVerificationError: If headers are missing, the timestamp is
            outside the tolerance, or no signature matches
    """
    webhook_id = headers.get("webhook-id", "")
    timestamp = headers.get("webhook-timestamp", "")
    signature_header = headers.get("webhook-signature", "")

    if not (webhook_id and timestamp and signature_header):
        raise WebhookVerificationError("Missing webhook signature headers")

    try:
        sent_at = int(timestamp)
    except ValueError as e:
        raise WebhookVerificationError("Invalid webhook timestamp") from e

    current = time.time() if now is None else now
    if abs(current - sent_at) > tolerance:
        raise WebhookVerificationError("Webhook timestamp outside tolerance")

    expected = sign_webhook(secret, webhook_id, timestamp, body)

    # Space-separated "v1,<base64>" entries; any match is enough
    for entry in signature_header.split():
        version, _, signature = entry.partition(",")
        if version == "v1" and hmac.compare_digest(signature, expected):
            return

    raise WebhookVerificationError("No matching webhook signature")
