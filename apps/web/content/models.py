"""
Site content - visual editor settings per page, and events and specials.
"""

from django.conf import settings
from django.db import models

from apps.web.core.models import TimestampedModel


class ThemeSetting(TimestampedModel):
    """
    One editable value on one page (e.g. homepage / hero.title).

    Keys are unique per page scope.
    """

    setting_key = models.CharField(max_length=100)
    setting_value = models.TextField(blank=True)
    page_scope = models.SlugField(max_length=100, default="global")
    category = models.CharField(max_length=50, default="page_editor")
    updated_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="+",
    )

    class Meta:
        ordering = ["page_scope", "setting_key"]
        constraints = [
            models.UniqueConstraint(
                fields=["setting_key", "page_scope"],
                name="unique_setting_per_page",
            )
        ]
        indexes = [models.Index(fields=["page_scope", "category"])]

    def __str__(self) -> str:
        return f"{self.page_scope}:{self.setting_key}"


class EventType(models.TextChoices):
    """Kind of homepage announcement."""

    EVENT = "event", "Event"
    SPECIAL = "special", "Special"
    NEWS = "news", "News"


class Event(TimestampedModel):
    """
    An event, special or news item shown on the homepage.

    Listed publicly while active and until its end date has passed.
    """

    title = models.CharField(max_length=200)
    description = models.TextField()
    event_type = models.CharField(
        max_length=20,
        choices=EventType.choices,
        default=EventType.EVENT,
    )
    start_date = models.DateField()
    end_date = models.DateField(null=True, blank=True)
    image_url = models.URLField(blank=True)

    # Card styling
    background_color = models.CharField(max_length=9, default="#1a1a1a")
    text_color = models.CharField(max_length=9, default="#ffffff")
    button_text = models.CharField(max_length=50, blank=True)
    button_link = models.CharField(max_length=500, blank=True)

    priority = models.PositiveSmallIntegerField(default=0)
    is_active = models.BooleanField(default=True)
    display_order = models.IntegerField(default=0)

    class Meta:
        ordering = ["display_order", "-priority", "start_date"]
        indexes = [models.Index(fields=["is_active", "end_date"])]

    def __str__(self) -> str:
        return f"{self.get_event_type_display()}: {self.title}"

    def save(self, *args, **kwargs) -> None:
        # One-day events only give a start date
        if self.end_date is None:
            self.end_date = self.start_date
        super().save(*args, **kwargs)
