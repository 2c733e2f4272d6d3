"""Admin registration for booking requests."""

from django.contrib import admin

from apps.web.bookings.models import BookingRequest


@admin.register(BookingRequest)
class BookingRequestAdmin(admin.ModelAdmin):
    """Admin for booking enquiries."""

    list_display = [
        "name",
        "event_type",
        "preferred_date",
        "party_size",
        "status",
        "notified_at",
        "created_at",
    ]
    list_filter = ["status", "event_type"]
    list_editable = ["status"]
    search_fields = ["name", "email", "phone", "message"]
    readonly_fields = ["created_at", "updated_at", "notified_at", "notification_error"]
