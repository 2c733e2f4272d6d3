"""
Order services - cart validation, pricing and draft order creation.

Prices always come from the database; whatever the browser believes an
item costs is ignored.
"""

import logging
from collections import defaultdict
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from django.db import transaction

from apps.web.core.http import ValidationErrorDetail
from apps.web.restaurant.delivery import (
    DEFAULT_ZONE,
    DeliveryZoneError,
    delivery_fee_for,
    resolve_zone,
)
from apps.web.restaurant.models import (
    DeliveryZone,
    MenuItem,
    Order,
    OrderItem,
    OrderStatus,
    OrderType,
    PaymentStatus,
)
from apps.web.restaurant.serializers import (
    CartItemSchema,
    OrderCreateRequest,
    OrderDetailResponse,
    OrderItemResponseSchema,
)

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")


class CartValidationError(Exception):
    """One or more cart lines cannot be ordered."""

    def __init__(self, details: list[ValidationErrorDetail]) -> None:
        super().__init__("Cart validation failed")
        self.details = details


class OrderStateError(Exception):
    """Operation not allowed in the order's current state."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


@dataclass(frozen=True)
class CartTotals:
    """Server-side totals for a cart."""

    subtotal: Decimal
    delivery_fee: Decimal
    total: Decimal


def _is_on_menu(item: MenuItem) -> bool:
    """Item's category and its parent section are both active."""
    category = item.category
    if not category.is_active:
        return False
    return category.parent is None or category.parent.is_active


def validate_cart(
    lines: list[CartItemSchema],
) -> list[tuple[MenuItem, CartItemSchema]]:
    """
    Validate all cart lines exist, are on the menu, and are in stock.

    Returns:
        List of (MenuItem, line) tuples in request order

    Raises:
        CartValidationError: With one detail per failing line
    """
    errors: list[ValidationErrorDetail] = []
    validated: list[tuple[MenuItem, CartItemSchema]] = []

    menu_items = MenuItem.objects.select_related("category", "category__parent").in_bulk(
        [line.menu_item_id for line in lines]
    )

    requested: dict[int, int] = defaultdict(int)
    for line in lines:
        requested[line.menu_item_id] += line.quantity

    for i, line in enumerate(lines):
        field = f"items[{i}].menu_item_id"
        item = menu_items.get(line.menu_item_id)

        if item is None:
            errors.append(ValidationErrorDetail(field=field, message="Item not found"))
            continue

        if not _is_on_menu(item):
            errors.append(
                ValidationErrorDetail(
                    field=field,
                    message=f"'{item.name}' is not currently on the menu",
                )
            )
            continue

        # Check item is available
        if not item.is_available:
            errors.append(
                ValidationErrorDetail(
                    field=field,
                    message=f"'{item.name}' is currently unavailable",
                )
            )
            continue

        if item.tracks_stock and requested[item.pk] > (item.stock_quantity or 0):
            errors.append(
                ValidationErrorDetail(
                    field=f"items[{i}].quantity",
                    message=f"Only {item.stock_quantity} '{item.name}' left in stock",
                )
            )
            continue

        validated.append((item, line))

    if errors:
        raise CartValidationError(errors)

    return validated


def calculate_totals(
    lines: list[tuple[MenuItem, CartItemSchema]],
    order_type: str,
    delivery_zone: DeliveryZone | None = None,
) -> CartTotals:
    """
    Calculate order totals.

    Args:
        lines: Validated (menu_item, line) tuples
        order_type: 'pickup' or 'delivery'
        delivery_zone: Zone priced for delivery orders (default Middleburg)

    Returns:
        CartTotals with subtotal, delivery fee and total
    """
    subtotal = sum(
        (item.price * line.quantity for item, line in lines),
        Decimal("0"),
    ).quantize(CENTS)

    delivery_fee = Decimal("0.00")
    if order_type == OrderType.DELIVERY:
        delivery_fee = delivery_fee_for(delivery_zone or DEFAULT_ZONE).quantize(CENTS)

    return CartTotals(
        subtotal=subtotal,
        delivery_fee=delivery_fee,
        total=subtotal + delivery_fee,
    )


def create_draft_order(user: Any, payload: OrderCreateRequest) -> Order:
    """
    Create a draft order and its items from a validated checkout request.

    Raises:
        CartValidationError: If any line cannot be ordered
    """
    zone: DeliveryZone | None = None
    if payload.order_type == OrderType.DELIVERY:
        if not payload.delivery_address.strip():
            raise CartValidationError(
                [
                    ValidationErrorDetail(
                        field="delivery_address",
                        message="Delivery address is required for delivery orders",
                    )
                ]
            )
        try:
            zone = resolve_zone(
                payload.delivery_zone,
                payload.delivery_latitude,
                payload.delivery_longitude,
            )
        except DeliveryZoneError as e:
            raise CartValidationError(
                [ValidationErrorDetail(field="delivery_address", message=str(e))]
            ) from e

    lines = validate_cart(payload.items)
    totals = calculate_totals(lines, payload.order_type, zone)

    with transaction.atomic():
        order = Order.objects.create(
            user=user,
            customer_name=user.display_name,
            customer_email=user.email,
            customer_phone=payload.customer_phone.strip() or user.phone_number,
            status=OrderStatus.DRAFT,
            payment_status=PaymentStatus.PENDING,
            order_type=payload.order_type,
            delivery_address=payload.delivery_address.strip(),
            delivery_zone=zone or "",
            special_instructions=payload.special_instructions.strip(),
            subtotal=totals.subtotal,
            delivery_fee=totals.delivery_fee,
            total_amount=totals.total,
        )
        order.assign_order_number()
        order.save(update_fields=["order_number"])

        OrderItem.objects.bulk_create(
            [
                OrderItem(
                    order=order,
                    menu_item=item,
                    item_name=item.name,
                    quantity=line.quantity,
                    unit_price=item.price,
                    total_price=(item.price * line.quantity).quantize(CENTS),
                    customizations=line.customizations,
                    special_requests=line.special_requests.strip(),
                )
                for item, line in lines
            ]
        )

    logger.info(
        "Draft order created: order_id=%s order_number=%s total=%s",
        order.pk,
        order.order_number,
        order.total_amount,
    )
    return order


def cancel_order(order: Order) -> Order:
    """
    Cancel an unpaid draft or pending order on the customer's request.

    Raises:
        OrderStateError: If the order is paid or already in progress
    """
    if order.is_paid or order.status not in (OrderStatus.DRAFT, OrderStatus.PENDING):
        raise OrderStateError(f"Order cannot be cancelled while {order.status}")

    order.status = OrderStatus.CANCELLED
    order.payment_status = PaymentStatus.CANCELLED
    order.save(update_fields=["status", "payment_status", "updated_at"])

    logger.info("Order cancelled by customer: order_id=%s", order.pk)
    return order


def serialize_order(order: Order) -> OrderDetailResponse:
    """Serialize an Order with its items."""
    items = [
        OrderItemResponseSchema(
            id=item.pk,
            menu_item_id=item.menu_item_id,
            item_name=item.item_name,
            quantity=item.quantity,
            unit_price=item.unit_price,
            total_price=item.total_price,
            customizations=item.customizations or {},
            special_requests=item.special_requests,
        )
        for item in order.items.all()
    ]

    return OrderDetailResponse(
        order_id=order.pk,
        order_number=order.order_number,
        status=order.status,
        payment_status=order.payment_status,
        payment_method=order.payment_method,
        customer_name=order.customer_name,
        customer_email=order.customer_email,
        customer_phone=order.customer_phone,
        order_type=order.order_type,
        delivery_address=order.delivery_address,
        delivery_zone=order.delivery_zone,
        special_instructions=order.special_instructions,
        items=items,
        subtotal=order.subtotal,
        delivery_fee=order.delivery_fee,
        total_amount=order.total_amount,
        created_at=order.created_at,
        confirmed_at=order.confirmed_at,
        estimated_ready_time=order.estimated_ready_time,
    )
