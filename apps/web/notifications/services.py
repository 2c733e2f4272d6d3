"""
Notification services - order status email/SMS via external providers.
"""

import logging
from typing import Any

from django.conf import settings

import resend
from twilio.rest import Client as TwilioClient  # type: ignore[import-untyped]

from apps.web.notifications.models import NotificationPreference
from apps.web.restaurant.models import Order, OrderStatus

logger = logging.getLogger(__name__)


class NotificationError(Exception):
    """Raised when a notification cannot be delivered."""

    pass


# Subject and body per status; {number} is the order number
STATUS_MESSAGES: dict[str, tuple[str, str]] = {
    OrderStatus.CONFIRMED.value: (
        "Order {number} confirmed",
        "Thanks for your order! Order {number} is confirmed and will be "
        "ready in about {minutes} minutes.",
    ),
    OrderStatus.PREPARING.value: (
        "Order {number} is being prepared",
        "Our kitchen has started on order {number}. "
        "Estimated ready in about {minutes} minutes.",
    ),
    OrderStatus.READY.value: (
        "Order {number} is ready",
        "Your order {number} is ready! Please come and collect it.",
    ),
    OrderStatus.COMPLETED.value: (
        "Order {number} completed",
        "Order {number} is complete. Enjoy, and thanks for visiting Little Latte Lane!",
    ),
    OrderStatus.CANCELLED.value: (
        "Order {number} cancelled",
        "Order {number} has been cancelled. Please contact us if you have questions.",
    ),
}


def send_sms(to_phone: str, body: str) -> str:
    """
    Send SMS via Twilio.

    Args:
        to_phone: Recipient phone number
        body: Message text

    Returns:
        Twilio message SID

    Raises:
        NotificationError: If sending fails or Twilio is not configured
    """
    if not to_phone:
        raise NotificationError("Recipient phone number is required")

    if not body:
        raise NotificationError("Message body is required")

    account_sid = settings.TWILIO_ACCOUNT_SID
    auth_token = settings.TWILIO_AUTH_TOKEN
    from_number = settings.TWILIO_FROM_NUMBER

    if not account_sid or not auth_token or not from_number:
        raise NotificationError("Twilio credentials not configured")

    try:
        twilio = TwilioClient(account_sid, auth_token)

        message = twilio.messages.create(
            body=body,
            from_=from_number,
            to=to_phone,
        )

        logger.info("Sent SMS to %s (SID: %s)", to_phone, message.sid)

        return str(message.sid)

    except Exception as e:
        logger.exception("Failed to send SMS to %s: %s", to_phone, e)
        raise NotificationError(f"Failed to send SMS: {e}") from e


def send_email(
    to_email: str, subject: str, body: str, reply_to: str | None = None
) -> str:
    """
    Send email via Resend.

    reply_to lets the recipient answer the person the email is about
    rather than the no-reply sender.

    Returns:
        Resend email ID

    Raises:
        NotificationError: If sending fails or Resend is not configured
    """
    if not to_email:
        raise NotificationError("Recipient email address is required")

    if not subject or not body:
        raise NotificationError("Email subject and body are required")

    api_key = settings.RESEND_API_KEY
    if not api_key:
        raise NotificationError("Resend API key not configured")

    resend.api_key = api_key

    params: dict[str, Any] = {
        "from": settings.EMAIL_FROM,
        "to": to_email,
        "subject": subject,
        "text": body,
    }
    if reply_to:
        params["reply_to"] = reply_to

    try:
        response = resend.Emails.send(params)

        email_id = response.get("id", "") if isinstance(response, dict) else ""

        logger.info("Sent email to %s (ID: %s)", to_email, email_id)

        return str(email_id)

    except Exception as e:
        logger.exception("Failed to send email to %s: %s", to_email, e)
        raise NotificationError(f"Failed to send email: {e}") from e


def _minutes_until_ready(order: Order) -> int:
    if not order.estimated_ready_time:
        return 15
    delta = order.estimated_ready_time - (order.confirmed_at or order.updated_at)
    return max(1, round(delta.total_seconds() / 60))


def send_order_status_notification(order: Order, status: str) -> list[str]:
    """
    Tell the customer their order moved to `status`.

    Honours the user's preferences. Delivery failures are logged and never
    raised: an order status change must not fail because email is down.

    Returns:
        Channels that were delivered ("email", "sms")
    """
    status = str(status)
    if status not in STATUS_MESSAGES:
        return []

    prefs = NotificationPreference.for_user(order.user) if order.user_id else None
    if prefs is not None and not prefs.order_updates_enabled:
        logger.debug("Order updates disabled for user_id=%s", order.user_id)
        return []

    subject_template, body_template = STATUS_MESSAGES[status]
    context = {
        "number": order.order_number or order.pk,
        "minutes": _minutes_until_ready(order),
    }
    subject = subject_template.format(**context)
    body = body_template.format(**context)

    delivered: list[str] = []

    email_enabled = prefs.email_enabled if prefs is not None else True
    if email_enabled and order.customer_email:
        try:
            send_email(order.customer_email, subject, body)
            delivered.append("email")
        except NotificationError as e:
            logger.warning("Order %s email not sent: %s", order.pk, e)

    sms_enabled = prefs.sms_enabled if prefs is not None else False
    if status == OrderStatus.READY and sms_enabled and order.customer_phone:
        try:
            send_sms(order.customer_phone, body)
            delivered.append("sms")
        except NotificationError as e:
            logger.warning("Order %s SMS not sent: %s", order.pk, e)

    return delivered
