"""
Kitchen services - order status transitions.
"""

import logging
from datetime import timedelta

from django.db import transaction
from django.utils import timezone

from apps.web.notifications.services import send_order_status_notification
from apps.web.restaurant.models import Order, OrderStatus

logger = logging.getLogger(__name__)

# Allowed moves on the kitchen board
KITCHEN_TRANSITIONS: dict[str, frozenset[str]] = {
    OrderStatus.CONFIRMED.value: frozenset(
        {OrderStatus.PREPARING.value, OrderStatus.CANCELLED.value}
    ),
    OrderStatus.PREPARING.value: frozenset(
        {OrderStatus.READY.value, OrderStatus.CANCELLED.value}
    ),
    OrderStatus.READY.value: frozenset({OrderStatus.COMPLETED.value}),
}


class TransitionError(Exception):
    """Requested status change is not allowed from the current status."""

    def __init__(self, current: str, requested: str) -> None:
        self.current = current
        self.requested = requested
        super().__init__(f"Cannot move order from {current} to {requested}")


def can_transition(current: str, requested: str) -> bool:
    return requested in KITCHEN_TRANSITIONS.get(str(current), frozenset())


def update_order_status(
    order: Order, status: str, estimated_minutes: int | None = None
) -> Order:
    """
    Move an order along the kitchen board.

    Args:
        order: Order to update
        status: Requested status
        estimated_minutes: Minutes from now until ready, if the kitchen
            wants to revise the estimate

    Raises:
        TransitionError: If the move is not allowed
    """
    with transaction.atomic():
        locked = Order.objects.select_for_update().get(pk=order.pk)
        if not can_transition(locked.status, status):
            raise TransitionError(locked.status, status)

        now = timezone.now()
        locked.status = status
        update_fields = ["status", "updated_at"]

        if status == OrderStatus.COMPLETED:
            locked.completed_at = now
            update_fields.append("completed_at")

        if estimated_minutes is not None:
            locked.estimated_ready_time = now + timedelta(minutes=estimated_minutes)
            update_fields.append("estimated_ready_time")

        locked.save(update_fields=update_fields)

    logger.info(
        "Kitchen status change: order_id=%s %s -> %s",
        locked.pk,
        order.status,
        status,
    )

    send_order_status_notification(locked, status)
    return locked
