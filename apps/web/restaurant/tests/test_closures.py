"""Tests for closure evaluation."""

from datetime import datetime, timedelta

from django.utils import timezone

import pytest

from apps.web.restaurant.closures import (
    MANUAL_CLOSURE_MESSAGE,
    SCHEDULED_CLOSURE_MESSAGE,
    evaluate_closure,
    get_closure_status,
)
from apps.web.restaurant.models import RestaurantClosure

NOW = datetime(2025, 6, 16, 12, 0, tzinfo=timezone.get_fixed_timezone(120))


def _closure(**kwargs) -> RestaurantClosure:
    return RestaurantClosure(pk=1, **kwargs)


class TestEvaluateClosure:
    """Manual toggle first, then the scheduled window, otherwise open."""

    def test_no_settings_row_is_open(self):
        status = evaluate_closure(None, NOW)

        assert status.is_closed is False
        assert status.reason == "none"

    def test_manual_closure_uses_custom_message(self):
        status = evaluate_closure(
            _closure(is_manually_closed=True, closure_message="Back at 5pm"), NOW
        )

        assert status.is_closed is True
        assert status.reason == "manual"
        assert status.message == "Back at 5pm"

    def test_manual_closure_default_message(self):
        status = evaluate_closure(_closure(is_manually_closed=True), NOW)

        assert status.message == MANUAL_CLOSURE_MESSAGE

    def test_manual_wins_over_schedule(self):
        closure = _closure(
            is_manually_closed=True,
            scheduled_closure_start=NOW - timedelta(hours=1),
            scheduled_closure_end=NOW + timedelta(hours=1),
        )

        assert evaluate_closure(closure, NOW).reason == "manual"

    def test_inside_scheduled_window(self):
        end = NOW + timedelta(hours=2)
        closure = _closure(
            scheduled_closure_start=NOW - timedelta(hours=1),
            scheduled_closure_end=end,
        )

        status = evaluate_closure(closure, NOW)

        assert status.is_closed is True
        assert status.reason == "scheduled"
        assert status.message == SCHEDULED_CLOSURE_MESSAGE
        assert status.scheduled_end == end

    @pytest.mark.parametrize("offset", [timedelta(0), timedelta(hours=2)])
    def test_window_bounds_are_inclusive(self, offset):
        start = NOW - offset
        closure = _closure(
            scheduled_closure_start=start,
            scheduled_closure_end=start + timedelta(hours=2),
        )

        assert evaluate_closure(closure, NOW).is_closed is True

    def test_outside_scheduled_window(self):
        closure = _closure(
            scheduled_closure_start=NOW + timedelta(hours=1),
            scheduled_closure_end=NOW + timedelta(hours=3),
        )

        assert evaluate_closure(closure, NOW).is_closed is False

    def test_half_configured_window_is_open(self):
        closure = _closure(scheduled_closure_start=NOW - timedelta(hours=1))

        assert evaluate_closure(closure, NOW).is_closed is False


@pytest.mark.django_db
class TestGetClosureStatus:
    """Reads the settings row."""

    def test_open_when_row_missing(self):
        assert get_closure_status().is_closed is False

    def test_reads_saved_row(self):
        closure = RestaurantClosure.load()
        closure.is_manually_closed = True
        closure.save()

        assert get_closure_status().reason == "manual"
