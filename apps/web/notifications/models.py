"""
Notification preferences - one row per user.
"""

from django.conf import settings
from django.db import models

from apps.web.core.models import TimestampedModel


class NotificationPreference(TimestampedModel):
    """
    Which channels and topics a user wants notifications for.

    Users without a row get the field defaults.
    """

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="notification_preference",
    )
    push_enabled = models.BooleanField(default=True)
    email_enabled = models.BooleanField(default=True)
    sms_enabled = models.BooleanField(default=False)
    order_updates_enabled = models.BooleanField(default=True)
    promotional_enabled = models.BooleanField(default=True)
    event_announcements_enabled = models.BooleanField(default=True)

    def __str__(self) -> str:
        return f"Notification preferences for {self.user}"

    @classmethod
    def for_user(cls, user: object) -> "NotificationPreference":
        """Stored preferences, or an unsaved row holding the defaults."""
        try:
            return cls.objects.get(user=user)
        except cls.DoesNotExist:
            return cls(user=user)
