"""
Apply payment gateway outcomes to orders.

Both the Yoco webhook and the PayFast ITN land here, so duplicate or
crossing notifications for the same order are serialized on the order row.
"""

import logging
from collections import defaultdict
from datetime import timedelta

from django.db import transaction
from django.db.models import Max
from django.utils import timezone

from apps.web.notifications.services import send_order_status_notification
from apps.web.restaurant.models import (
    MenuItem,
    Order,
    OrderStatus,
    PaymentMethod,
    PaymentStatus,
)

logger = logging.getLogger(__name__)

DEFAULT_PREPARATION_MINUTES = 15


def _decrement_stock(order: Order) -> None:
    """Take ordered quantities out of tracked stock."""
    quantities: dict[int, int] = defaultdict(int)
    for menu_item_id, quantity in order.items.values_list("menu_item_id", "quantity"):
        quantities[menu_item_id] += quantity

    tracked = MenuItem.objects.select_for_update().filter(
        pk__in=quantities, stock_quantity__isnull=False
    )
    for item in tracked:
        item.stock_quantity = max(0, item.stock_quantity - quantities[item.pk])
        if item.stock_quantity == 0:
            item.is_available = False
            logger.info("Menu item sold out: item_id=%s name=%s", item.pk, item.name)
        item.save(update_fields=["stock_quantity", "is_available", "updated_at"])


def mark_order_paid(order: Order, payment_id: str, method: PaymentMethod) -> bool:
    """
    Confirm an order after a successful payment.

    Idempotent: an order that is already paid is left untouched.

    Args:
        order: The order to confirm
        payment_id: Gateway payment or checkout reference
        method: Gateway that took the payment

    Returns:
        True if the order changed, False if it was already paid
    """
    with transaction.atomic():
        locked = Order.objects.select_for_update().get(pk=order.pk)

        # Skip if already processed (idempotency)
        if locked.is_paid:
            logger.info(
                "Order already paid, skipping: order_id=%s payment_id=%s",
                locked.pk,
                payment_id,
            )
            return False

        prep_minutes = (
            locked.items.aggregate(longest=Max("menu_item__preparation_time"))["longest"]
            or DEFAULT_PREPARATION_MINUTES
        )
        now = timezone.now()

        locked.status = OrderStatus.CONFIRMED
        locked.payment_status = PaymentStatus.PAID
        locked.payment_method = method
        locked.payment_id = payment_id or locked.payment_id
        locked.confirmed_at = now
        locked.estimated_ready_time = now + timedelta(minutes=prep_minutes)
        locked.save(
            update_fields=[
                "status",
                "payment_status",
                "payment_method",
                "payment_id",
                "confirmed_at",
                "estimated_ready_time",
                "updated_at",
            ]
        )

        _decrement_stock(locked)

    logger.info(
        "Order confirmed: order_id=%s order_number=%s method=%s payment_id=%s",
        locked.pk,
        locked.order_number,
        method,
        payment_id,
    )

    send_order_status_notification(locked, OrderStatus.CONFIRMED)
    _refresh(order, locked)
    return True


def mark_order_failed(order: Order, payment_status: PaymentStatus) -> bool:
    """
    Cancel an order after a failed, cancelled or expired payment.

    A paid order is never downgraded by a late failure notification. The
    customer is told once, when the order first moves to cancelled.

    Returns:
        True if the order changed
    """
    with transaction.atomic():
        locked = Order.objects.select_for_update().get(pk=order.pk)

        if locked.is_paid:
            logger.warning(
                "Ignoring %s notification for paid order: order_id=%s",
                payment_status,
                locked.pk,
            )
            return False

        if (
            locked.status == OrderStatus.CANCELLED
            and locked.payment_status == payment_status
        ):
            return False

        newly_cancelled = locked.status != OrderStatus.CANCELLED
        locked.status = OrderStatus.CANCELLED
        locked.payment_status = payment_status
        locked.save(update_fields=["status", "payment_status", "updated_at"])

    logger.info(
        "Order cancelled after payment %s: order_id=%s",
        payment_status,
        locked.pk,
    )

    # One notice per order, even if the gateway reports several failure events
    if newly_cancelled:
        send_order_status_notification(locked, OrderStatus.CANCELLED)
    _refresh(order, locked)
    return True


def _refresh(order: Order, locked: Order) -> None:
    """Copy the saved state back onto the caller's instance."""
    for field in (
        "status",
        "payment_status",
        "payment_method",
        "payment_id",
        "confirmed_at",
        "estimated_ready_time",
        "updated_at",
    ):
        setattr(order, field, getattr(locked, field))
