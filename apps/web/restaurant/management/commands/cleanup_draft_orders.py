"""
Delete abandoned draft orders.

Drafts are created at checkout and become pending once a payment session
exists. Drafts that never got that far are removed after an hour.

Usage:
    uv run python apps/web/manage.py cleanup_draft_orders
    uv run python apps/web/manage.py cleanup_draft_orders --dry-run
    uv run python apps/web/manage.py cleanup_draft_orders --max-age-minutes 120
"""

import logging
from datetime import timedelta
from typing import Any

from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils import timezone

from apps.web.restaurant.models import Order, OrderStatus, PaymentStatus

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = "Delete draft orders older than --max-age-minutes (default: 60)"

    def add_arguments(self, parser: Any) -> None:
        parser.add_argument(
            "--max-age-minutes",
            type=int,
            default=60,
            help="Delete drafts created more than this many minutes ago (default: 60)",
        )
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Report what would be deleted without deleting",
        )

    def handle(self, *_args: Any, **options: Any) -> None:
        max_age = options["max_age_minutes"]
        dry_run = options["dry_run"]

        deleted = self.cleanup(max_age_minutes=max_age, dry_run=dry_run)

        if dry_run:
            self.stdout.write(f"Would delete {deleted} draft orders")
        else:
            self.stdout.write(f"Deleted {deleted} draft orders")

    def cleanup(self, max_age_minutes: int, dry_run: bool = False) -> int:
        """Delete stale drafts. Returns the number of orders (to be) deleted."""
        cutoff = timezone.now() - timedelta(minutes=max_age_minutes)
        stale = Order.objects.filter(
            status=OrderStatus.DRAFT,
            payment_status=PaymentStatus.PENDING,
            created_at__lt=cutoff,
        )

        count = stale.count()
        if dry_run or not count:
            return count

        with transaction.atomic():
            # Order items cascade
            stale.delete()

        logger.info(
            "Deleted %s draft orders older than %s minutes",
            count,
            max_age_minutes,
        )
        return count
