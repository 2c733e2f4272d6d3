"""Tests for kitchen status transitions."""

from unittest.mock import patch

import pytest

from apps.web.kitchen.services import (
    TransitionError,
    can_transition,
    update_order_status,
)
from apps.web.restaurant.models import OrderStatus, PaymentStatus
from apps.web.restaurant.tests.factories import OrderFactory


class TestCanTransition:
    """Transition table."""

    def test_forward_moves(self):
        assert can_transition("confirmed", "preparing")
        assert can_transition("preparing", "ready")
        assert can_transition("ready", "completed")

    def test_no_skipping_or_going_back(self):
        assert not can_transition("confirmed", "ready")
        assert not can_transition("ready", "preparing")

    def test_terminal_statuses_are_final(self):
        assert not can_transition("completed", "cancelled")
        assert not can_transition("cancelled", "confirmed")

    def test_unpaid_orders_not_on_the_board(self):
        assert not can_transition("draft", "preparing")
        assert not can_transition("pending", "confirmed")


@pytest.mark.django_db
class TestUpdateOrderStatus:
    """Tests for update_order_status."""

    def test_notifies_customer(self):
        order = OrderFactory(
            status=OrderStatus.PREPARING, payment_status=PaymentStatus.PAID
        )

        with patch(
            "apps.web.kitchen.services.send_order_status_notification"
        ) as mock_notify:
            updated = update_order_status(order, "ready")

        assert updated.status == "ready"
        mock_notify.assert_called_once_with(updated, "ready")

    def test_raises_on_bad_move(self):
        order = OrderFactory(status=OrderStatus.CANCELLED)

        with pytest.raises(TransitionError) as exc_info:
            update_order_status(order, "preparing")

        assert exc_info.value.current == "cancelled"
