"""
Booking services - forward new booking requests to the restaurant inbox.
"""

import logging

from django.conf import settings
from django.utils import timezone

from apps.web.bookings.models import BookingRequest
from apps.web.notifications.services import NotificationError, send_email

logger = logging.getLogger(__name__)


def format_booking_email(booking: BookingRequest) -> tuple[str, str]:
    """Subject and plain-text body for the restaurant's copy of a booking."""
    subject = f"New Booking Request: {booking.get_event_type_display()} - {booking.name}"
    lines = [
        f"Name: {booking.name}",
        f"Email: {booking.email}",
        f"Phone: {booking.phone or 'Not provided'}",
        f"Event type: {booking.get_event_type_display()}",
        f"Preferred date: {booking.preferred_date or 'Not specified'}",
        f"Party size: {booking.party_size or 'Not specified'}",
        "",
        "Message:",
        booking.message,
        "",
        "Reply to this email to respond to the customer directly.",
    ]
    return subject, "\n".join(lines)


def notify_restaurant(booking: BookingRequest) -> bool:
    """
    Email a booking request to BOOKINGS_EMAIL with reply-to set to the guest.

    Failures are recorded on the booking instead of raised; the request is
    already saved and staff can see it in the admin.

    Returns:
        True if the email was sent
    """
    subject, body = format_booking_email(booking)
    try:
        send_email(settings.BOOKINGS_EMAIL, subject, body, reply_to=booking.email)
    except NotificationError as e:
        logger.warning("Booking email not sent: booking_id=%s error=%s", booking.pk, e)
        booking.notification_error = str(e)
        booking.save(update_fields=["notification_error", "updated_at"])
        return False

    booking.notified_at = timezone.now()
    booking.notification_error = ""
    booking.save(update_fields=["notified_at", "notification_error", "updated_at"])
    return True
