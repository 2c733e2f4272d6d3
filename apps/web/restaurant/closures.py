"""
Restaurant closure checks.

Manual closure has the highest priority, then the scheduled window.
"""

from datetime import datetime

from django.utils import timezone

from apps.web.restaurant.models import RestaurantClosure
from apps.web.restaurant.serializers import ClosureStatus

MANUAL_CLOSURE_MESSAGE = "We are temporarily closed. Please check back later."
SCHEDULED_CLOSURE_MESSAGE = "We are closed as scheduled. We will reopen soon."


def evaluate_closure(
    closure: RestaurantClosure | None, now: datetime
) -> ClosureStatus:
    """
    Decide whether the restaurant is closed at `now`.

    Args:
        closure: The settings row, or None if it was never created
        now: Aware datetime to evaluate against

    Returns:
        ClosureStatus with reason "manual", "scheduled" or "none"
    """
    if closure is None:
        return ClosureStatus(is_closed=False, reason="none")

    if closure.is_manually_closed:
        return ClosureStatus(
            is_closed=True,
            reason="manual",
            message=closure.closure_message or MANUAL_CLOSURE_MESSAGE,
        )

    start = closure.scheduled_closure_start
    end = closure.scheduled_closure_end
    if start and end and start <= now <= end:
        return ClosureStatus(
            is_closed=True,
            reason="scheduled",
            message=SCHEDULED_CLOSURE_MESSAGE,
            scheduled_end=end,
        )

    return ClosureStatus(is_closed=False, reason="none")


def get_closure_status(now: datetime | None = None) -> ClosureStatus:
    """Current closure status from the settings row."""
    closure = RestaurantClosure.objects.filter(pk=1).first()
    return evaluate_closure(closure, now or timezone.now())
