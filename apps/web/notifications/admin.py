"""Admin registration for notification models."""

from django.contrib import admin

from apps.web.notifications.models import NotificationPreference


@admin.register(NotificationPreference)
class NotificationPreferenceAdmin(admin.ModelAdmin):
    """Admin for notification preferences."""

    list_display = [
        "user",
        "email_enabled",
        "sms_enabled",
        "push_enabled",
        "order_updates_enabled",
    ]
    list_filter = ["email_enabled", "sms_enabled", "order_updates_enabled"]
    search_fields = ["user__email", "user__full_name"]
    readonly_fields = ["created_at", "updated_at"]
