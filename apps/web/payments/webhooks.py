"""
Payment gateway webhook handlers.

Handles asynchronous payment outcomes:
- Yoco webhook: payment.succeeded, payment.failed, checkout.* events
- PayFast ITN: form-encoded notification with payment_status
"""

import logging
from decimal import Decimal

from django.conf import settings
from django.http import HttpRequest, HttpResponse, JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_POST

from lattelane_schemas import PayFastNotification, YocoEventType, YocoWebhookEvent
from pydantic import ValidationError

from apps.web.core.http import client_ip, error_response, json_response
from apps.web.payments.outcomes import mark_order_failed, mark_order_paid
from apps.web.payments.payfast import PayFastService, is_valid_payfast_ip
from apps.web.payments.services import (
    PaymentError,
    WebhookVerificationError,
    rands_to_cents,
    verify_webhook_signature,
)
from apps.web.restaurant.models import Order, PaymentMethod, PaymentStatus

logger = logging.getLogger(__name__)

YOCO_HANDLED_EVENTS = {event.value for event in YocoEventType}


def _find_order(order_id: str | None) -> Order | None:
    try:
        return Order.objects.get(pk=int(order_id or ""))
    except (Order.DoesNotExist, ValueError):
        return None


# =============================================================================
# Yoco
# =============================================================================


@csrf_exempt
@require_POST
def yoco_webhook(request: HttpRequest) -> JsonResponse:
    """
    Handle Yoco webhook events.

    POST /api/yoco/webhook

    Events handled:
    - payment.succeeded, checkout.payment_received: Order confirmed
    - payment.failed: Order cancelled, payment failed
    - checkout.cancelled, checkout.expired: Order cancelled
    """
    secret = settings.YOCO_WEBHOOK_SECRET
    if not secret:
        logger.error("YOCO_WEBHOOK_SECRET is not configured; rejecting webhook")
        return error_response("Webhook secret not configured", status=500)

    # Verify webhook signature
    try:
        verify_webhook_signature(request.body, request.headers, secret)
    except WebhookVerificationError as e:
        logger.warning("Invalid Yoco webhook signature: %s", e)
        return error_response("Invalid signature", status=401)

    try:
        event = YocoWebhookEvent.model_validate_json(request.body)
    except ValidationError as e:
        logger.warning("Invalid Yoco webhook payload: %s", e)
        return error_response("Invalid payload", status=400)

    logger.info("Received Yoco event: %s id=%s", event.type, event.id)

    if event.type not in YOCO_HANDLED_EVENTS:
        logger.debug("Ignoring unhandled Yoco event: %s", event.type)
        return json_response({"received": True})

    payload = event.payload
    if not payload.order_id:
        logger.warning("Yoco event has no orderId in metadata: %s", event.id)
        return error_response("Missing orderId in metadata", status=400)

    order = _find_order(payload.order_id)
    if order is None:
        logger.error("Order not found for Yoco event: order_id=%s", payload.order_id)
        return error_response("Order not found", status=404)

    # Route to handler
    match event.type:
        case YocoEventType.PAYMENT_SUCCEEDED | YocoEventType.CHECKOUT_PAYMENT_RECEIVED:
            expected = rands_to_cents(order.total_amount)
            if payload.amount is not None and payload.amount != expected:
                logger.warning(
                    "Yoco amount mismatch: order_id=%s received=%s expected=%s",
                    order.pk,
                    payload.amount,
                    expected,
                )
                return error_response("Amount mismatch", status=400)
            mark_order_paid(
                order,
                payment_id=payload.payment_id or payload.id,
                method=PaymentMethod.YOCO,
            )
        case YocoEventType.PAYMENT_FAILED:
            mark_order_failed(order, PaymentStatus.FAILED)
        case YocoEventType.CHECKOUT_CANCELLED | YocoEventType.CHECKOUT_EXPIRED:
            mark_order_failed(order, PaymentStatus.CANCELLED)

    return json_response({"received": True})


# =============================================================================
# PayFast
# =============================================================================


@csrf_exempt
@require_POST
def payfast_notify(request: HttpRequest) -> HttpResponse:
    """
    Handle a PayFast ITN (Instant Transaction Notification).

    POST /api/payfast/notify (application/x-www-form-urlencoded)

    PayFast expects a plain 200 once the notification is processed.
    """
    ip = client_ip(request)
    if not is_valid_payfast_ip(ip):
        if settings.PAYFAST_ENFORCE_IP_CHECK:
            logger.warning("Rejected PayFast ITN from unknown IP: %s", ip)
            return HttpResponse("Forbidden", status=403)
        logger.warning("PayFast ITN from unknown IP (not enforced): %s", ip)

    # QueryDict keeps the posted field order, which the signature covers
    data = dict(request.POST.items())
    service = PayFastService.from_settings()

    if not service.verify_notification(data):
        logger.warning(
            "Invalid PayFast ITN signature: m_payment_id=%s", data.get("m_payment_id")
        )
        return HttpResponse("Invalid signature", status=400)

    received_merchant = data.get("merchant_id", "")
    if not received_merchant or received_merchant != service.merchant_id:
        logger.warning("PayFast ITN merchant mismatch: %s", received_merchant)
        return HttpResponse("Invalid merchant", status=400)

    if settings.PAYFAST_VALIDATE_ITN:
        try:
            confirmed = service.validate_with_payfast(data)
        except PaymentError as e:
            # Non-200 makes PayFast retry the ITN later
            logger.error("PayFast ITN validation unavailable: %s", e)
            return HttpResponse("Validation unavailable", status=503)
        if not confirmed:
            logger.warning(
                "PayFast rejected ITN on validation: m_payment_id=%s",
                data.get("m_payment_id"),
            )
            return HttpResponse("Invalid notification", status=400)

    try:
        notification = PayFastNotification.model_validate(data)
    except ValidationError as e:
        logger.warning("Invalid PayFast ITN payload: %s", e)
        return HttpResponse("Invalid payload", status=400)

    logger.info(
        "Received PayFast ITN: m_payment_id=%s status=%s",
        notification.m_payment_id,
        notification.payment_status,
    )

    if not notification.order_id:
        return HttpResponse("Missing order id", status=400)

    order = _find_order(notification.order_id)
    if order is None:
        logger.error("Order not found for PayFast ITN: order_id=%s", notification.order_id)
        return HttpResponse("Order not found", status=404)

    if notification.is_complete:
        gross = notification.amount_gross
        if gross is None:
            logger.warning("PayFast ITN missing amount_gross: order_id=%s", order.pk)
            return HttpResponse("Missing amount", status=400)
        if abs(gross - order.total_amount) > Decimal("0.01"):
            logger.warning(
                "PayFast amount mismatch: order_id=%s received=%s expected=%s",
                order.pk,
                gross,
                order.total_amount,
            )
            return HttpResponse("Amount mismatch", status=400)
        mark_order_paid(
            order,
            payment_id=notification.pf_payment_id or notification.m_payment_id,
            method=PaymentMethod.PAYFAST,
        )
    else:
        mark_order_failed(order, PaymentStatus.FAILED)

    return HttpResponse("OK", status=200)
