"""Tests for Yoco webhook and PayFast ITN handlers."""

import base64
import hashlib
import json
import time
from unittest.mock import patch
from urllib.parse import urlencode

from django.test import Client, TestCase, override_settings

import httpx
import respx

from apps.web.payments.payfast import SANDBOX_VALIDATE_URL, php_urlencode
from apps.web.payments.services import sign_webhook
from apps.web.restaurant.models import OrderStatus, PaymentMethod, PaymentStatus
from apps.web.restaurant.tests.factories import OrderFactory

YOCO_SECRET = "whsec_" + base64.b64encode(b"yoco-test-secret").decode()
PAYFAST_IP = "197.97.145.150"


@override_settings(YOCO_WEBHOOK_SECRET=YOCO_SECRET)
@patch("apps.web.payments.outcomes.send_order_status_notification")
class TestYocoWebhook(TestCase):
    """Tests for the Yoco webhook endpoint."""

    def setUp(self):
        self.http_client = Client()
        self.url = "/api/yoco/webhook"

    def _event(self, event_type: str, order_id=None, amount: int | None = 9000) -> dict:
        metadata = {"checkoutId": "ch_test_123"}
        if order_id is not None:
            metadata["orderId"] = str(order_id)
        return {
            "id": "evt_test_1",
            "type": event_type,
            "createdDate": "2026-01-01T10:00:00Z",
            "payload": {
                "id": "p_test_1",
                "status": "succeeded",
                "amount": amount,
                "currency": "ZAR",
                "metadata": metadata,
            },
        }

    def _post(self, event: dict, secret: str = YOCO_SECRET, timestamp: int | None = None):
        body = json.dumps(event).encode()
        ts = str(int(time.time()) if timestamp is None else timestamp)
        signature = sign_webhook(secret, "msg_test_1", ts, body)
        return self.http_client.post(
            self.url,
            data=body,
            content_type="application/json",
            HTTP_WEBHOOK_ID="msg_test_1",
            HTTP_WEBHOOK_TIMESTAMP=ts,
            HTTP_WEBHOOK_SIGNATURE=f"v1,{signature}",
        )

    def test_payment_succeeded_confirms_order(self, mock_notify):
        order = OrderFactory()

        response = self._post(self._event("payment.succeeded", order.pk))

        assert response.status_code == 200
        assert response.json() == {"received": True}
        order.refresh_from_db()
        assert order.status == OrderStatus.CONFIRMED
        assert order.payment_status == PaymentStatus.PAID
        assert order.payment_method == PaymentMethod.YOCO
        assert order.payment_id == "p_test_1"
        assert order.estimated_ready_time is not None
        mock_notify.assert_called_once()

    def test_checkout_payment_received_confirms_order(self, mock_notify):
        order = OrderFactory()

        response = self._post(self._event("checkout.payment_received", order.pk))

        assert response.status_code == 200
        order.refresh_from_db()
        assert order.payment_status == PaymentStatus.PAID

    def test_duplicate_event_is_idempotent(self, mock_notify):
        order = OrderFactory()
        event = self._event("payment.succeeded", order.pk)

        self._post(event)
        response = self._post(event)

        assert response.status_code == 200
        mock_notify.assert_called_once()

    def test_amount_mismatch_rejected(self, mock_notify):
        order = OrderFactory()

        response = self._post(self._event("payment.succeeded", order.pk, amount=100))

        assert response.status_code == 400
        order.refresh_from_db()
        assert order.payment_status == PaymentStatus.PENDING

    def test_payment_failed_cancels_order(self, mock_notify):
        order = OrderFactory()

        response = self._post(self._event("payment.failed", order.pk))

        assert response.status_code == 200
        order.refresh_from_db()
        assert order.status == OrderStatus.CANCELLED
        assert order.payment_status == PaymentStatus.FAILED

    def test_checkout_expired_cancels_order(self, mock_notify):
        order = OrderFactory()

        self._post(self._event("checkout.expired", order.pk))

        order.refresh_from_db()
        assert order.status == OrderStatus.CANCELLED
        assert order.payment_status == PaymentStatus.CANCELLED

    def test_late_failure_does_not_downgrade_paid_order(self, mock_notify):
        order = OrderFactory(
            status=OrderStatus.CONFIRMED, payment_status=PaymentStatus.PAID
        )

        response = self._post(self._event("checkout.cancelled", order.pk))

        assert response.status_code == 200
        order.refresh_from_db()
        assert order.status == OrderStatus.CONFIRMED

    def test_unhandled_event_acknowledged(self, mock_notify):
        response = self._post(self._event("refund.succeeded"))

        assert response.status_code == 200
        assert response.json() == {"received": True}

    def test_missing_order_id(self, mock_notify):
        response = self._post(self._event("payment.succeeded"))

        assert response.status_code == 400

    def test_unknown_order(self, mock_notify):
        response = self._post(self._event("payment.succeeded", 999999))

        assert response.status_code == 404

    def test_invalid_signature(self, mock_notify):
        order = OrderFactory()
        other = "whsec_" + base64.b64encode(b"wrong").decode()

        response = self._post(self._event("payment.succeeded", order.pk), secret=other)

        assert response.status_code == 401
        order.refresh_from_db()
        assert order.payment_status == PaymentStatus.PENDING

    def test_stale_timestamp_rejected(self, mock_notify):
        order = OrderFactory()

        response = self._post(
            self._event("payment.succeeded", order.pk),
            timestamp=int(time.time()) - 3600,
        )

        assert response.status_code == 401

    def test_invalid_payload(self, mock_notify):
        response = self._post({"hello": "world"})

        assert response.status_code == 400

    @override_settings(YOCO_WEBHOOK_SECRET="")
    def test_missing_secret(self, mock_notify):
        response = self._post(self._event("payment.succeeded", 1))

        assert response.status_code == 500


@override_settings(
    PAYFAST_MERCHANT_ID="10000100",
    PAYFAST_MERCHANT_KEY="46f0cd694581a",
    PAYFAST_PASSPHRASE="jt7NOE43FZPn",
    PAYFAST_SANDBOX=True,
    PAYFAST_ENFORCE_IP_CHECK=True,
    PAYFAST_VALIDATE_ITN=True,
    TRUSTED_PROXY_COUNT=0,
)
@patch("apps.web.payments.outcomes.send_order_status_notification")
class TestPayFastNotify(TestCase):
    """Tests for the PayFast ITN endpoint."""

    def setUp(self):
        self.http_client = Client()
        self.url = "/api/payfast/notify"

        router = respx.mock(assert_all_called=False)
        router.start()
        self.addCleanup(router.stop)
        self.validate_route = router.post(SANDBOX_VALIDATE_URL).mock(
            return_value=httpx.Response(200, text="VALID")
        )

    def _itn(self, order, payment_status: str = "COMPLETE", **overrides) -> dict:
        data = {
            "m_payment_id": f"LLL-{order.pk}-1700000000000",
            "pf_payment_id": "1089250",
            "payment_status": payment_status,
            "item_name": "Little Latte Lane Order",
            "amount_gross": "90.00",
            "amount_fee": "-2.07",
            "amount_net": "87.93",
            "custom_str1": str(order.pk),
            "merchant_id": "10000100",
        }
        data.update(overrides)
        # None drops a field entirely
        data = {k: v for k, v in data.items() if v is not None}
        param_string = "&".join(f"{k}={php_urlencode(v)}" for k, v in data.items())
        param_string += "&passphrase=jt7NOE43FZPn"
        data["signature"] = hashlib.md5(param_string.encode()).hexdigest()
        return data

    def _post(self, data: dict, ip: str = PAYFAST_IP):
        return self.http_client.post(
            self.url,
            data=urlencode(data),
            content_type="application/x-www-form-urlencoded",
            REMOTE_ADDR=ip,
        )

    def test_complete_confirms_order(self, mock_notify):
        order = OrderFactory()

        response = self._post(self._itn(order))

        assert response.status_code == 200
        assert response.content == b"OK"
        order.refresh_from_db()
        assert order.status == OrderStatus.CONFIRMED
        assert order.payment_status == PaymentStatus.PAID
        assert order.payment_method == PaymentMethod.PAYFAST
        assert order.payment_id == "1089250"

    def test_cancelled_cancels_order(self, mock_notify):
        order = OrderFactory()

        response = self._post(self._itn(order, payment_status="CANCELLED"))

        assert response.status_code == 200
        order.refresh_from_db()
        assert order.status == OrderStatus.CANCELLED
        assert order.payment_status == PaymentStatus.FAILED
        mock_notify.assert_called_once_with(order, OrderStatus.CANCELLED)

    def test_unknown_ip_rejected(self, mock_notify):
        order = OrderFactory()

        response = self._post(self._itn(order), ip="203.0.113.9")

        assert response.status_code == 403
        order.refresh_from_db()
        assert order.payment_status == PaymentStatus.PENDING

    @override_settings(PAYFAST_ENFORCE_IP_CHECK=False)
    def test_unknown_ip_allowed_when_not_enforced(self, mock_notify):
        order = OrderFactory()

        response = self._post(self._itn(order), ip="203.0.113.9")

        assert response.status_code == 200

    def test_bad_signature(self, mock_notify):
        order = OrderFactory()
        data = self._itn(order)
        data["amount_gross"] = "1.00"

        response = self._post(data)

        assert response.status_code == 400
        order.refresh_from_db()
        assert order.payment_status == PaymentStatus.PENDING

    def test_merchant_mismatch(self, mock_notify):
        order = OrderFactory()

        response = self._post(self._itn(order, merchant_id="99999"))

        assert response.status_code == 400

    def test_amount_mismatch(self, mock_notify):
        order = OrderFactory()

        response = self._post(self._itn(order, amount_gross="9.00"))

        assert response.status_code == 400
        order.refresh_from_db()
        assert order.payment_status == PaymentStatus.PENDING

    def test_unknown_order(self, mock_notify):
        order = OrderFactory()

        response = self._post(self._itn(order, custom_str1="999999"))

        assert response.status_code == 404

    def test_missing_order_id(self, mock_notify):
        order = OrderFactory()

        response = self._post(self._itn(order, custom_str1=""))

        assert response.status_code == 400

    def test_duplicate_itn_is_idempotent(self, mock_notify):
        order = OrderFactory()
        data = self._itn(order)

        self._post(data)
        response = self._post(data)

        assert response.status_code == 200
        mock_notify.assert_called_once()

    def test_forwarded_header_cannot_spoof_payfast_ip(self, mock_notify):
        order = OrderFactory()

        response = self.http_client.post(
            self.url,
            data=urlencode(self._itn(order)),
            content_type="application/x-www-form-urlencoded",
            REMOTE_ADDR="203.0.113.9",
            HTTP_X_FORWARDED_FOR=PAYFAST_IP,
        )

        assert response.status_code == 403
        order.refresh_from_db()
        assert order.payment_status == PaymentStatus.PENDING

    def test_unsalted_signature_rejected(self, mock_notify):
        order = OrderFactory()
        data = self._itn(order)
        del data["signature"]
        param_string = "&".join(f"{k}={php_urlencode(v)}" for k, v in data.items())
        data["signature"] = hashlib.md5(param_string.encode()).hexdigest()

        response = self._post(data)

        assert response.status_code == 400
        order.refresh_from_db()
        assert order.payment_status == PaymentStatus.PENDING

    def test_missing_merchant_id_rejected(self, mock_notify):
        order = OrderFactory()

        response = self._post(self._itn(order, merchant_id=None))

        assert response.status_code == 400
        order.refresh_from_db()
        assert order.payment_status == PaymentStatus.PENDING

    def test_complete_without_amount_rejected(self, mock_notify):
        order = OrderFactory()

        response = self._post(self._itn(order, amount_gross=None))

        assert response.status_code == 400
        order.refresh_from_db()
        assert order.payment_status == PaymentStatus.PENDING

    def test_posts_back_to_payfast_for_validation(self, mock_notify):
        order = OrderFactory()

        self._post(self._itn(order))

        assert self.validate_route.call_count == 1
        body = self.validate_route.calls.last.request.content.decode()
        assert f"m_payment_id=LLL-{order.pk}-1700000000000" in body
        assert "signature=" not in body

    def test_rejected_by_payfast_validation(self, mock_notify):
        order = OrderFactory()
        self.validate_route.mock(return_value=httpx.Response(200, text="INVALID"))

        response = self._post(self._itn(order))

        assert response.status_code == 400
        order.refresh_from_db()
        assert order.payment_status == PaymentStatus.PENDING

    def test_validation_unavailable_asks_for_retry(self, mock_notify):
        order = OrderFactory()
        self.validate_route.mock(side_effect=httpx.ConnectError("connection refused"))

        response = self._post(self._itn(order))

        assert response.status_code == 503
        order.refresh_from_db()
        assert order.payment_status == PaymentStatus.PENDING
