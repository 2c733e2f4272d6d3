"""Admin registration for visual editor content."""

from django.contrib import admin

from apps.web.content.models import Event, ThemeSetting


@admin.register(ThemeSetting)
class ThemeSettingAdmin(admin.ModelAdmin):
    """Admin for page settings."""

    list_display = ["setting_key", "page_scope", "category", "updated_by", "updated_at"]
    list_filter = ["page_scope", "category"]
    search_fields = ["setting_key", "setting_value"]
    readonly_fields = ["created_at", "updated_at", "updated_by"]


@admin.register(Event)
class EventAdmin(admin.ModelAdmin):
    """Admin for homepage events and specials."""

    list_display = [
        "title",
        "event_type",
        "start_date",
        "end_date",
        "is_active",
        "display_order",
    ]
    list_filter = ["event_type", "is_active"]
    list_editable = ["is_active", "display_order"]
    search_fields = ["title", "description"]
    date_hierarchy = "start_date"
    readonly_fields = ["created_at", "updated_at"]
