"""
Menu, order and closure API views.

These endpoints are used by the ordering site:
- Menu browsing (public, cached)
- Checkout: draft order creation from the cart
- Order tracking for the signed-in customer
- Closure status banner, and the admin closure manager
"""

import logging
from datetime import UTC, datetime

from django.db.models import Prefetch, QuerySet
from django.http import Http404, HttpRequest, JsonResponse
from django.views.decorators.cache import cache_control
from django.views.decorators.http import require_GET, require_http_methods, require_POST

from apps.web.core.decorators import (
    admin_required,
    api_login_required,
    idempotency_key_required,
    rate_limited,
)
from apps.web.core.http import (
    InvalidRequestBody,
    error_response,
    json_response,
    parse_json_body,
    validation_error_response,
)
from apps.web.restaurant.closures import get_closure_status
from apps.web.restaurant.models import (
    MenuCategory,
    MenuItem,
    Order,
    OrderStatus,
    RestaurantClosure,
)
from apps.web.restaurant.serializers import (
    AvailabilityResponse,
    ClosureSettingsSchema,
    ClosureUpdateRequest,
    MenuCategorySchema,
    MenuItemSchema,
    MenuResponse,
    OrderCreateRequest,
    OrderListResponse,
    OrderStatusResponse,
)
from apps.web.restaurant.services import (
    CartValidationError,
    OrderStateError,
    cancel_order,
    create_draft_order,
    serialize_order,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Menu API Endpoints
# =============================================================================


def _available_items() -> QuerySet[MenuItem]:
    return MenuItem.objects.filter(is_available=True)


def _serialize_category(
    category: MenuCategory, with_subcategories: bool = True
) -> MenuCategorySchema:
    """
    Serialize a category with its prefetched items and subcategories.

    Only one level of subcategories is prefetched by _menu_queryset, so
    children are serialized without their own subcategories.
    """
    items = [MenuItemSchema.model_validate(item) for item in category.items.all()]
    subcategories = []
    if with_subcategories:
        subcategories = [
            _serialize_category(sub, with_subcategories=False)
            for sub in category.subcategories.all()
            if sub.is_active
        ]
    return MenuCategorySchema(
        id=category.pk,
        name=category.name,
        description=category.description,
        image_url=category.image_url,
        items=items,
        subcategories=subcategories,
    )


def _menu_queryset() -> QuerySet[MenuCategory]:
    return MenuCategory.objects.filter(is_active=True).prefetch_related(
        Prefetch("items", queryset=_available_items()),
        Prefetch(
            "subcategories",
            queryset=MenuCategory.objects.prefetch_related(
                Prefetch("items", queryset=_available_items())
            ),
        ),
    )


@require_GET
@cache_control(max_age=300, public=True)  # 5 minutes
def menu(_request: HttpRequest) -> JsonResponse:
    """
    GET /api/menu

    Returns the full three-tier menu: sections > categories > items.
    Only active categories and available items are listed.
    """
    sections = _menu_queryset().filter(parent__isnull=True)

    response = MenuResponse(sections=[_serialize_category(s) for s in sections])
    return json_response(response.model_dump(mode="json"))


@require_GET
@cache_control(max_age=300, public=True)  # 5 minutes
def category_detail(_request: HttpRequest, category_id: int) -> JsonResponse:
    """
    GET /api/menu/categories/{category_id}

    Returns one active category with its items.
    """
    try:
        category = _menu_queryset().get(pk=category_id)
    except MenuCategory.DoesNotExist as exc:
        raise Http404(f"Category {category_id} not found") from exc

    return json_response(_serialize_category(category).model_dump(mode="json"))


@require_GET
@cache_control(max_age=30, public=True)  # 30 seconds
def availability(_request: HttpRequest) -> JsonResponse:
    """
    GET /api/menu/availability

    Returns current availability for all menu items.
    Used to grey out sold-out items without refetching the menu.
    """
    items_qs = MenuItem.objects.filter(category__is_active=True).values_list(
        "pk", "is_available"
    )
    response = AvailabilityResponse(
        items={str(pk): is_avail for pk, is_avail in items_qs},
        as_of=datetime.now(UTC),
    )
    return json_response(response.model_dump(mode="json"))


# =============================================================================
# Order API Endpoints
# =============================================================================


def _get_own_order_or_404(request: HttpRequest, order_id: int) -> Order:
    """Orders are visible to their owner and to kitchen staff."""
    queryset = Order.objects.prefetch_related("items")
    if not getattr(request.user, "is_kitchen_staff", False):
        queryset = Order.objects.for_user(request).prefetch_related("items")

    try:
        return queryset.get(pk=order_id)
    except Order.DoesNotExist as exc:
        raise Http404(f"Order {order_id} not found") from exc


@require_http_methods(["GET", "POST"])
def orders(request: HttpRequest) -> JsonResponse:
    """
    GET/POST /api/orders

    GET lists the customer's orders, POST creates a draft order.
    """
    if request.method == "POST":
        return create_order(request)
    return list_orders(request)


@api_login_required
@rate_limited("create_order", limit=10, window=60)
@idempotency_key_required
def create_order(request: HttpRequest) -> JsonResponse:
    """
    POST /api/orders

    Create a draft order from the cart. Payment is started separately
    via the Yoco or PayFast endpoints.

    Request body: OrderCreateRequest schema
    Response: OrderDetailResponse schema (201) or validation error (400)
    """
    closure = get_closure_status()
    if closure.is_closed:
        return error_response(
            closure.message or "The restaurant is currently closed",
            status=403,
            reason=closure.reason,
        )

    try:
        payload = parse_json_body(request, OrderCreateRequest)
    except InvalidRequestBody as e:
        return e.response

    try:
        order = create_draft_order(request.user, payload)
    except CartValidationError as e:
        return validation_error_response(e.details)

    order = Order.objects.prefetch_related("items").get(pk=order.pk)
    return json_response(serialize_order(order).model_dump(mode="json"), status=201)


@api_login_required
def list_orders(request: HttpRequest) -> JsonResponse:
    """
    GET /api/orders

    The customer's orders, newest first. Drafts are hidden unless
    ?include_drafts=1.
    """
    queryset = Order.objects.for_user(request).prefetch_related("items")
    if request.GET.get("include_drafts") != "1":
        queryset = queryset.exclude(status=OrderStatus.DRAFT)

    response = OrderListResponse(orders=[serialize_order(o) for o in queryset[:50]])
    return json_response(response.model_dump(mode="json"))


@require_GET
@api_login_required
def order_detail(request: HttpRequest, order_id: int) -> JsonResponse:
    """
    GET /api/orders/{order_id}

    Response: OrderDetailResponse schema (200) or 404
    """
    order = _get_own_order_or_404(request, order_id)
    return json_response(serialize_order(order).model_dump(mode="json"))


@require_GET
@api_login_required
@cache_control(max_age=5, private=True)  # 5 seconds
def order_status(request: HttpRequest, order_id: int) -> JsonResponse:
    """
    GET /api/orders/{order_id}/status

    Current order status for tracking page polling.
    """
    order = _get_own_order_or_404(request, order_id)

    response = OrderStatusResponse(
        order_id=order.pk,
        order_number=order.order_number,
        status=order.status,
        payment_status=order.payment_status,
        updated_at=order.updated_at,
        estimated_ready_time=order.estimated_ready_time,
    )
    return json_response(response.model_dump(mode="json"))


@require_POST
@api_login_required
def order_cancel(request: HttpRequest, order_id: int) -> JsonResponse:
    """
    POST /api/orders/{order_id}/cancel

    Customers may cancel their own unpaid draft or pending orders.
    """
    try:
        order = Order.objects.for_user(request).prefetch_related("items").get(pk=order_id)
    except Order.DoesNotExist as exc:
        raise Http404(f"Order {order_id} not found") from exc

    try:
        cancel_order(order)
    except OrderStateError as e:
        return error_response(e.message, status=400)

    return json_response(serialize_order(order).model_dump(mode="json"))


# =============================================================================
# Closure API Endpoints
# =============================================================================


@require_GET
@cache_control(max_age=30, public=True)  # 30 seconds
def closure_status(_request: HttpRequest) -> JsonResponse:
    """
    GET /api/closure/status

    Whether the restaurant is closed right now, and why.
    """
    return json_response(get_closure_status().model_dump(mode="json"))


def _serialize_closure(closure: RestaurantClosure) -> ClosureSettingsSchema:
    return ClosureSettingsSchema(
        is_manually_closed=closure.is_manually_closed,
        closure_message=closure.closure_message,
        scheduled_closure_start=closure.scheduled_closure_start,
        scheduled_closure_end=closure.scheduled_closure_end,
        updated_at=closure.updated_at,
    )


@require_http_methods(["GET", "POST"])
@admin_required
def admin_closure(request: HttpRequest) -> JsonResponse:
    """
    GET/POST /api/admin/closure

    Read or update the manual toggle, message and scheduled window.
    """
    closure = RestaurantClosure.load()

    if request.method == "GET":
        return json_response(
            {
                "settings": _serialize_closure(closure).model_dump(mode="json"),
                "status": get_closure_status().model_dump(mode="json"),
            }
        )

    try:
        payload = parse_json_body(request, ClosureUpdateRequest)
    except InvalidRequestBody as e:
        return e.response

    if payload.is_manually_closed is not None:
        closure.is_manually_closed = payload.is_manually_closed
    if payload.closure_message is not None:
        closure.closure_message = payload.closure_message.strip()
    if payload.clear_schedule:
        closure.scheduled_closure_start = None
        closure.scheduled_closure_end = None
    elif payload.scheduled_closure_start and payload.scheduled_closure_end:
        closure.scheduled_closure_start = payload.scheduled_closure_start
        closure.scheduled_closure_end = payload.scheduled_closure_end

    closure.updated_by = request.user
    closure.save()

    logger.info(
        "Closure settings updated by user_id=%s: manual=%s window=%s..%s",
        request.user.pk,
        closure.is_manually_closed,
        closure.scheduled_closure_start,
        closure.scheduled_closure_end,
    )

    return json_response(
        {
            "settings": _serialize_closure(closure).model_dump(mode="json"),
            "status": get_closure_status().model_dump(mode="json"),
        }
    )
