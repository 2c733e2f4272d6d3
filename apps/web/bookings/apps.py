"""Django app configuration for bookings module."""

from django.apps import AppConfig


class BookingsConfig(AppConfig):
    """Bookings app configuration."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.web.bookings"
    verbose_name = "Bookings"
