"""
PayFast integration - payment form signing and ITN verification.

API Reference: https://developers.payfast.co.za/docs
"""

import hashlib
import hmac
import ipaddress
import logging
import time
from collections.abc import Mapping
from decimal import Decimal
from typing import Any
from urllib.parse import quote_plus

from django.conf import settings

import httpx
from lattelane_schemas import PayFastUserDetails

from apps.web.payments.services import PaymentError
from apps.web.restaurant.models import Order

logger = logging.getLogger(__name__)

SANDBOX_PROCESS_URL = "https://sandbox.payfast.co.za/eng/process"
LIVE_PROCESS_URL = "https://www.payfast.co.za/eng/process"
SANDBOX_VALIDATE_URL = "https://sandbox.payfast.co.za/eng/query/validate"
LIVE_VALIDATE_URL = "https://www.payfast.co.za/eng/query/validate"

# Order PayFast expects when signing the checkout form
PAYFAST_FIELD_ORDER = (
    "merchant_id",
    "merchant_key",
    "return_url",
    "cancel_url",
    "notify_url",
    "name_first",
    "name_last",
    "email_address",
    "cell_number",
    "m_payment_id",
    "amount",
    "item_name",
    "item_description",
    "email_confirmation",
    "confirmation_address",
    "payment_method",
    "custom_int1",
    "custom_int2",
    "custom_int3",
    "custom_int4",
    "custom_int5",
    "custom_str1",
    "custom_str2",
    "custom_str3",
    "custom_str4",
    "custom_str5",
)

# Published ITN source ranges
PAYFAST_NETWORKS = tuple(
    ipaddress.ip_network(cidr)
    for cidr in (
        "197.97.145.144/28",
        "41.74.179.192/27",
        "102.216.36.0/28",
        "102.216.36.128/28",
        "144.126.193.139/32",
    )
)

MIN_LIVE_AMOUNT = Decimal("0.01")
MAX_LIVE_AMOUNT = Decimal("999999.99")


def php_urlencode(value: str) -> str:
    """Encode like PHP urlencode(): space -> '+', upper-case hex, '~' encoded."""
    return quote_plus(value, safe="").replace("~", "%7E")


def is_valid_payfast_ip(ip: str) -> bool:
    """Whether `ip` falls inside PayFast's published ranges."""
    try:
        address = ipaddress.ip_address(ip.strip())
    except ValueError:
        return False
    return any(address in network for network in PAYFAST_NETWORKS)


def _clean_phone(phone: str) -> str:
    return "".join(c for c in phone if c not in " -()\t")


class PayFastService:
    """Builds signed PayFast checkout forms and verifies ITN callbacks."""

    def __init__(
        self,
        merchant_id: str,
        merchant_key: str,
        passphrase: str = "",
        sandbox: bool = True,
    ) -> None:
        self.merchant_id = merchant_id
        self.merchant_key = merchant_key
        self.passphrase = passphrase
        self.sandbox = sandbox

    @classmethod
    def from_settings(cls) -> "PayFastService":
        return cls(
            merchant_id=settings.PAYFAST_MERCHANT_ID,
            merchant_key=settings.PAYFAST_MERCHANT_KEY,
            passphrase=settings.PAYFAST_PASSPHRASE,
            sandbox=settings.PAYFAST_SANDBOX,
        )

    @property
    def payment_url(self) -> str:
        return SANDBOX_PROCESS_URL if self.sandbox else LIVE_PROCESS_URL

    def _with_passphrase(self, param_string: str) -> str:
        passphrase = self.passphrase.strip()
        if passphrase:
            return f"{param_string}&passphrase={php_urlencode(passphrase)}"
        return param_string

    def generate_signature(self, data: Mapping[str, Any]) -> str:
        """
        MD5 signature for a checkout form.

        Fields are taken in PayFast's documented order; empty values are
        skipped and the passphrase is appended when configured.
        """
        pairs = []
        for field in PAYFAST_FIELD_ORDER:
            value = data.get(field)
            if value is None or str(value).strip() == "":
                continue
            pairs.append(f"{field}={php_urlencode(str(value).strip())}")

        param_string = self._with_passphrase("&".join(pairs))
        return hashlib.md5(param_string.encode()).hexdigest()

    def create_payment_data(
        self,
        order: Order,
        item_name: str,
        item_description: str = "",
        user_details: PayFastUserDetails | None = None,
        return_url: str = "",
        cancel_url: str = "",
        notify_url: str = "",
    ) -> dict[str, str]:
        """
        Signed form fields for the PayFast hosted payment page.

        The amount is always the order total.

        Raises:
            PaymentError: If the amount is outside PayFast's live limits
        """
        amount = Decimal(order.total_amount).quantize(Decimal("0.01"))
        if not self.sandbox and not MIN_LIVE_AMOUNT <= amount <= MAX_LIVE_AMOUNT:
            raise PaymentError(
                f"Invalid amount for live PayFast: {amount}. "
                f"Must be between {MIN_LIVE_AMOUNT} and {MAX_LIVE_AMOUNT}",
                code="invalid_amount",
            )

        timestamp_ms = int(time.time() * 1000)
        data: dict[str, str] = {
            "merchant_id": self.merchant_id,
            "merchant_key": self.merchant_key,
            "amount": f"{amount:.2f}",
            "item_name": item_name.strip(),
        }

        if return_url:
            data["return_url"] = return_url.strip()
        if cancel_url:
            data["cancel_url"] = cancel_url.strip()
        if notify_url:
            data["notify_url"] = notify_url.strip()

        data["m_payment_id"] = f"LLL-{order.pk}-{timestamp_ms}"

        if user_details:
            if "@" in user_details.email:
                data["email_address"] = user_details.email.strip()
            if user_details.first_name.strip():
                data["name_first"] = user_details.first_name.strip()
            if user_details.last_name.strip():
                data["name_last"] = user_details.last_name.strip()
            phone = _clean_phone(user_details.phone)
            if len(phone) >= 10:
                data["cell_number"] = phone

        if item_description.strip():
            data["item_description"] = item_description.strip()

        # custom_int1 must be numeric; the order id travels in custom_str1
        data["custom_int1"] = str(timestamp_ms)
        data["custom_str1"] = str(order.pk)
        data["custom_str2"] = str(order.user_id or "")

        data["signature"] = self.generate_signature(data)
        return data

    @property
    def validate_url(self) -> str:
        return SANDBOX_VALIDATE_URL if self.sandbox else LIVE_VALIDATE_URL

    @staticmethod
    def _notification_param_string(data: Mapping[str, str]) -> str:
        # Posted order, empty values included, signature excluded
        return "&".join(
            f"{field}={php_urlencode(str(value).strip())}"
            for field, value in data.items()
            if field != "signature"
        )

    def verify_notification(self, data: Mapping[str, str]) -> bool:
        """
        Verify an ITN signature.

        The signature covers every posted field except `signature`, in the
        order PayFast posted them. When a passphrase is configured it must
        be part of the signed string; an unsalted MD5 is rejected because
        anyone can compute it.
        """
        received = data.get("signature", "")
        if not received:
            return False

        param_string = self._with_passphrase(self._notification_param_string(data))
        expected = hashlib.md5(param_string.encode()).hexdigest()
        return hmac.compare_digest(received, expected)

    def validate_with_payfast(
        self,
        data: Mapping[str, str],
        http_client: httpx.Client | None = None,
    ) -> bool:
        """
        Confirm an ITN with PayFast's server-side validation endpoint.

        PayFast answers "VALID" only for notifications it actually sent.

        Raises:
            PaymentError: If PayFast cannot be reached or returns an error
        """
        client = http_client or httpx.Client(timeout=15.0)
        try:
            response = client.post(
                self.validate_url,
                content=self._notification_param_string(data),
                headers={"Content-Type": "application/x-www-form-urlencoded"},
            )
        except httpx.HTTPError as e:
            raise PaymentError(
                f"PayFast validation request failed: {e}", code="network_error"
            ) from e
        finally:
            if http_client is None:
                client.close()

        if not response.is_success:
            logger.error(
                "PayFast validation error: %s %s",
                response.status_code,
                response.text[:500],
            )
            raise PaymentError(
                f"PayFast validation error: {response.status_code}",
                code=f"http_{response.status_code}",
            )

        return response.text.strip() == "VALID"
