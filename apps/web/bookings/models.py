"""
Booking requests - table and private event enquiries from the contact form.

Requests are stored first and then emailed to the restaurant, so nothing
is lost when the email provider is down.
"""

from django.db import models

from apps.web.core.models import TimestampedModel


class BookingRequest(TimestampedModel):
    """An enquiry to book a table or host an event."""

    class EventType(models.TextChoices):
        GENERAL = "general", "General Booking"
        BIRTHDAY = "birthday", "Birthday Party"
        CORPORATE = "corporate", "Corporate Event"
        WEDDING = "wedding", "Wedding"
        PRIVATE = "private", "Private Function"
        OTHER = "other", "Other"

    class Status(models.TextChoices):
        NEW = "new", "New"
        CONTACTED = "contacted", "Contacted"
        CONFIRMED = "confirmed", "Confirmed"
        DECLINED = "declined", "Declined"

    name = models.CharField(max_length=200)
    email = models.EmailField()
    phone = models.CharField(max_length=20, blank=True)
    preferred_date = models.DateField(null=True, blank=True)
    party_size = models.PositiveSmallIntegerField(null=True, blank=True)
    event_type = models.CharField(
        max_length=20,
        choices=EventType.choices,
        default=EventType.GENERAL,
    )
    message = models.TextField()
    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.NEW,
        db_index=True,
    )

    # Delivery of the email to the restaurant
    notified_at = models.DateTimeField(null=True, blank=True)
    notification_error = models.TextField(blank=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return f"{self.get_event_type_display()} - {self.name}"
