"""
Delivery zones and fees.

Two rings around the restaurant: Roberts Estate residents pay the small
fee, the rest of Middleburg the larger one. Anything further out is not
delivered to.
"""

import logging
import math
from decimal import Decimal

from django.conf import settings

from apps.web.restaurant.models import DeliveryZone

logger = logging.getLogger(__name__)

EARTH_RADIUS_KM = 6371.0

# Roberts Estate, Middleburg
RESTAURANT_LOCATION = (-25.775, 29.464)

# Checked in order; the first ring containing the point wins
ZONE_RADII_KM = (
    (DeliveryZone.ROBERTS_ESTATE, 2.5),
    (DeliveryZone.MIDDLEBURG, 15.0),
)

# Used when the customer gives neither a zone nor coordinates
DEFAULT_ZONE = DeliveryZone.MIDDLEBURG


class DeliveryZoneError(ValueError):
    """Coordinates are invalid or fall outside every delivery zone."""


def distance_km(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Great-circle distance between two points (haversine)."""
    d_lat = math.radians(lat2 - lat1)
    d_lng = math.radians(lng2 - lng1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1))
        * math.cos(math.radians(lat2))
        * math.sin(d_lng / 2) ** 2
    )
    return EARTH_RADIUS_KM * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def detect_zone(latitude: float, longitude: float) -> DeliveryZone | None:
    """
    Zone containing the given point, or None when it is out of range.

    Raises:
        DeliveryZoneError: If the coordinates are not a valid position
    """
    if not (-90 <= latitude <= 90 and -180 <= longitude <= 180):
        raise DeliveryZoneError(f"Invalid coordinates: {latitude}, {longitude}")

    distance = distance_km(*RESTAURANT_LOCATION, latitude, longitude)
    for zone, radius in ZONE_RADII_KM:
        if distance <= radius:
            return zone

    logger.info("Delivery address out of range: %.1f km", distance)
    return None


def resolve_zone(
    zone: str | None = None,
    latitude: float | None = None,
    longitude: float | None = None,
) -> DeliveryZone:
    """
    Zone to charge for a delivery order.

    Coordinates take precedence over a zone picked by the customer.

    Raises:
        DeliveryZoneError: If the coordinates are invalid or out of range
    """
    if latitude is not None and longitude is not None:
        detected = detect_zone(latitude, longitude)
        if detected is None:
            raise DeliveryZoneError("We don't deliver to this address yet")
        return detected
    if zone:
        return DeliveryZone(zone)
    return DEFAULT_ZONE


def delivery_fee_for(zone: DeliveryZone) -> Decimal:
    """Configured fee for a zone, in rands."""
    fees = {
        DeliveryZone.ROBERTS_ESTATE: settings.DELIVERY_FEE_ROBERTS_ESTATE,
        DeliveryZone.MIDDLEBURG: settings.DELIVERY_FEE_MIDDLEBURG,
    }
    return Decimal(fees[zone])
