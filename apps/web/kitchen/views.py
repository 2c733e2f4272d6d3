"""
Kitchen dashboard API views.

Staff-only endpoints behind the kitchen board:
- Active order queue (confirmed, preparing, ready)
- Status transitions
- Today's summary
"""

import logging
from decimal import Decimal

from django.db.models import Count, Sum
from django.http import Http404, HttpRequest, JsonResponse
from django.utils import timezone
from django.views.decorators.http import require_GET, require_POST

from apps.web.core.decorators import staff_required
from apps.web.core.http import (
    InvalidRequestBody,
    error_response,
    json_response,
    parse_json_body,
)
from apps.web.kitchen.serializers import (
    KitchenOrdersResponse,
    KitchenSummary,
    StatusUpdateRequest,
)
from apps.web.kitchen.services import TransitionError, update_order_status
from apps.web.restaurant.models import (
    ACTIVE_KITCHEN_STATUSES,
    Order,
    OrderStatus,
    PaymentStatus,
)
from apps.web.restaurant.services import serialize_order

logger = logging.getLogger(__name__)


@require_GET
@staff_required
def orders(request: HttpRequest) -> JsonResponse:
    """
    GET /api/kitchen/orders

    Active orders, oldest first. Optional ?status= narrows to one of
    confirmed, preparing or ready.
    """
    statuses = [str(s) for s in ACTIVE_KITCHEN_STATUSES]
    requested = request.GET.get("status")
    if requested:
        if requested not in statuses:
            return error_response(
                f"status must be one of: {', '.join(statuses)}", status=400
            )
        statuses = [requested]

    queryset = (
        Order.objects.filter(status__in=statuses)
        .prefetch_related("items")
        .order_by("created_at", "pk")
    )

    response = KitchenOrdersResponse(orders=[serialize_order(o) for o in queryset])
    return json_response(response.model_dump(mode="json"))


@require_POST
@staff_required
def order_status(request: HttpRequest, order_id: int) -> JsonResponse:
    """
    POST /api/kitchen/orders/{order_id}/status

    Request body: StatusUpdateRequest schema
    Response: OrderDetailResponse schema, 400 for a disallowed move
    """
    try:
        payload = parse_json_body(request, StatusUpdateRequest)
    except InvalidRequestBody as e:
        return e.response

    try:
        order = Order.objects.get(pk=order_id)
    except Order.DoesNotExist as exc:
        raise Http404(f"Order {order_id} not found") from exc

    try:
        order = update_order_status(order, payload.status, payload.estimated_minutes)
    except TransitionError as e:
        return error_response(str(e), status=400)

    order = Order.objects.prefetch_related("items").get(pk=order.pk)
    return json_response(serialize_order(order).model_dump(mode="json"))


@require_GET
@staff_required
def summary(_request: HttpRequest) -> JsonResponse:
    """
    GET /api/kitchen/summary

    Counts per active status, plus today's completed orders and revenue.
    """
    counts = dict(
        Order.objects.filter(status__in=ACTIVE_KITCHEN_STATUSES)
        .order_by()
        .values_list("status")
        .annotate(n=Count("pk"))
    )

    today = timezone.localdate()
    completed_today = Order.objects.filter(
        status=OrderStatus.COMPLETED, completed_at__date=today
    ).count()
    revenue = Order.objects.filter(
        payment_status=PaymentStatus.PAID, confirmed_at__date=today
    ).aggregate(total=Sum("total_amount"))["total"]

    response = KitchenSummary(
        confirmed=counts.get(OrderStatus.CONFIRMED.value, 0),
        preparing=counts.get(OrderStatus.PREPARING.value, 0),
        ready=counts.get(OrderStatus.READY.value, 0),
        completed_today=completed_today,
        revenue_today=revenue or Decimal("0.00"),
    )
    return json_response(response.model_dump(mode="json"))
