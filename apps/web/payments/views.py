"""
Payment session views.

The browser calls these after checkout to start a hosted payment:
- Yoco: creates a checkout session and returns its redirect URL
- PayFast: returns the signed form the browser posts to PayFast
"""

import logging
from decimal import Decimal

from django.http import Http404, HttpRequest, JsonResponse
from django.urls import reverse
from django.views.decorators.http import require_POST

from apps.web.core.decorators import api_login_required, rate_limited
from apps.web.core.http import (
    InvalidRequestBody,
    error_response,
    json_response,
    parse_json_body,
)
from apps.web.payments.payfast import PayFastService
from apps.web.payments.serializers import PayFastCreatePaymentBody, YocoCheckoutBody
from apps.web.payments.services import (
    PaymentError,
    YocoClient,
    build_callback_urls,
    rands_to_cents,
    site_base_url,
)
from apps.web.restaurant.models import Order, OrderStatus, PaymentMethod

logger = logging.getLogger(__name__)

AMOUNT_TOLERANCE = Decimal("0.01")


def _get_payable_order(
    request: HttpRequest, order_id: int, amount: Decimal
) -> Order | JsonResponse:
    """The user's order, or the error response explaining why it can't be paid."""
    try:
        order = Order.objects.for_user(request).get(pk=order_id)
    except Order.DoesNotExist as exc:
        raise Http404("Order not found or unauthorized") from exc

    if abs(order.total_amount - amount) > AMOUNT_TOLERANCE:
        logger.warning(
            "Payment amount mismatch: order_id=%s requested=%s total=%s",
            order.pk,
            amount,
            order.total_amount,
        )
        return error_response("Amount mismatch between request and order", status=400)

    if not order.can_be_paid:
        return error_response(
            f"Order status is {order.status}, cannot process payment", status=400
        )

    return order


def _attach_payment(order: Order, method: PaymentMethod, payment_id: str) -> None:
    """Record the payment session and move a draft to pending."""
    order.payment_method = method
    order.payment_id = payment_id
    if order.status == OrderStatus.DRAFT:
        order.status = OrderStatus.PENDING
    order.save(update_fields=["payment_method", "payment_id", "status", "updated_at"])


@require_POST
@api_login_required
@rate_limited("yoco_checkout", limit=10, window=60)
def yoco_checkout(request: HttpRequest) -> JsonResponse:
    """
    POST /api/yoco/checkout

    Create a Yoco checkout session for one of the user's orders.

    Request body: YocoCheckoutBody schema
    Response: {success, checkoutId, redirectUrl, amount (cents), currency}
    """
    try:
        payload = parse_json_body(request, YocoCheckoutBody)
    except InvalidRequestBody as e:
        return e.response

    order = _get_payable_order(request, payload.order_id, payload.amount)
    if isinstance(order, JsonResponse):
        return order

    amount_cents = rands_to_cents(order.total_amount)
    callbacks = build_callback_urls(order, request)

    try:
        with YocoClient() as client:
            checkout = client.create_checkout(
                amount_cents=amount_cents,
                metadata={
                    "orderId": str(order.pk),
                    "orderNumber": order.order_number,
                    "userId": str(request.user.pk),
                    "customerEmail": order.customer_email,
                },
                **callbacks,
            )
    except PaymentError as e:
        logger.error(
            "Yoco checkout creation failed: order_id=%s code=%s error=%s",
            order.pk,
            e.code,
            e.message,
        )
        return error_response(
            "Failed to create payment session", status=500, details=e.message
        )

    _attach_payment(order, PaymentMethod.YOCO, checkout.id)

    logger.info(
        "Yoco checkout created: order_id=%s checkout_id=%s amount=%s",
        order.pk,
        checkout.id,
        amount_cents,
    )

    return json_response(
        {
            "success": True,
            "checkoutId": checkout.id,
            "redirectUrl": checkout.redirect_url,
            "amount": amount_cents,
            "currency": "ZAR",
        }
    )


@require_POST
@api_login_required
@rate_limited("payfast_create_payment", limit=10, window=60)
def payfast_create_payment(request: HttpRequest) -> JsonResponse:
    """
    POST /api/payfast/create-payment

    Build the signed PayFast form for one of the user's orders.

    Request body: PayFastCreatePaymentBody schema
    Response: {paymentUrl, paymentData}
    """
    try:
        payload = parse_json_body(request, PayFastCreatePaymentBody)
    except InvalidRequestBody as e:
        return e.response

    order = _get_payable_order(request, payload.order_id, payload.amount)
    if isinstance(order, JsonResponse):
        return order

    callbacks = build_callback_urls(order, request)
    notify_url = site_base_url(request) + reverse("payments:payfast_notify")
    service = PayFastService.from_settings()

    try:
        payment_data = service.create_payment_data(
            order,
            item_name=payload.item_name,
            item_description=payload.item_description,
            user_details=payload.user_details,
            return_url=callbacks["success_url"],
            cancel_url=callbacks["cancel_url"],
            notify_url=notify_url,
        )
    except PaymentError as e:
        return error_response("Failed to create payment", status=400, details=e.message)

    _attach_payment(order, PaymentMethod.PAYFAST, payment_data["m_payment_id"])

    logger.info(
        "PayFast payment created: order_id=%s m_payment_id=%s sandbox=%s",
        order.pk,
        payment_data["m_payment_id"],
        service.sandbox,
    )

    return json_response({"paymentUrl": service.payment_url, "paymentData": payment_data})
