"""
Pydantic schemas for notification preference payloads.
"""

from pydantic import BaseModel, ConfigDict, StrictBool

PREFERENCE_FIELDS = (
    "push_enabled",
    "email_enabled",
    "sms_enabled",
    "order_updates_enabled",
    "promotional_enabled",
    "event_announcements_enabled",
)


class NotificationPreferencesSchema(BaseModel):
    """Full preference set, as returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    push_enabled: bool
    email_enabled: bool
    sms_enabled: bool
    order_updates_enabled: bool
    promotional_enabled: bool
    event_announcements_enabled: bool


class NotificationPreferencesUpdate(BaseModel):
    """Request body for POST /api/notifications/preferences. Omitted fields are unchanged."""

    model_config = ConfigDict(extra="forbid")

    push_enabled: StrictBool | None = None
    email_enabled: StrictBool | None = None
    sms_enabled: StrictBool | None = None
    order_updates_enabled: StrictBool | None = None
    promotional_enabled: StrictBool | None = None
    event_announcements_enabled: StrictBool | None = None
