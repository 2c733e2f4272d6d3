"""
Booking API views.
"""

import logging

from django.http import HttpRequest, JsonResponse
from django.views.decorators.http import require_POST

from apps.web.bookings.models import BookingRequest
from apps.web.bookings.serializers import BookingCreateRequest, BookingCreateResponse
from apps.web.bookings.services import notify_restaurant
from apps.web.core.decorators import rate_limited
from apps.web.core.http import InvalidRequestBody, json_response, parse_json_body

logger = logging.getLogger(__name__)


@require_POST
@rate_limited("booking", limit=5, window=600)
def create_booking(request: HttpRequest) -> JsonResponse:
    """
    POST /api/contact/booking

    Public booking enquiry. Saved, then emailed to the restaurant.

    Request body: BookingCreateRequest schema
    Response: BookingCreateResponse schema, 201
    """
    try:
        payload = parse_json_body(request, BookingCreateRequest)
    except InvalidRequestBody as e:
        return e.response

    booking = BookingRequest.objects.create(
        name=payload.name.strip(),
        email=payload.email,
        phone=payload.phone.strip(),
        preferred_date=payload.preferred_date,
        party_size=payload.party_size,
        event_type=payload.event_type,
        message=payload.message.strip(),
    )
    logger.info(
        "Booking request received: booking_id=%s type=%s",
        booking.pk,
        booking.event_type,
    )

    notify_restaurant(booking)

    response = BookingCreateResponse(
        booking_id=booking.pk,
        status=booking.status,
        message="Thanks! We'll be in touch within 24 hours to confirm your booking.",
    )
    return json_response(response.model_dump(), status=201)
