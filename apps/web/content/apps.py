"""Django app configuration for content module."""

from django.apps import AppConfig


class ContentConfig(AppConfig):
    """Visual editor content app configuration."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.web.content"
    verbose_name = "Content"
