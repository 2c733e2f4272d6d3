"""
Core models - users and the shared timestamp base.

Staff and admin access is driven by User.role; customers sign up
through the public auth endpoints.
"""

from django.contrib.auth.models import AbstractUser
from django.db import models


class User(AbstractUser):
    """
    Custom user model carrying the restaurant profile.

    Customers place orders, staff work the kitchen dashboard,
    admins also manage closures and page content.
    """

    class Role(models.TextChoices):
        CUSTOMER = "customer", "Customer"
        STAFF = "staff", "Staff"
        ADMIN = "admin", "Admin"

    email = models.EmailField(unique=True)
    full_name = models.CharField(max_length=200, blank=True)
    phone_number = models.CharField(max_length=20, blank=True)
    role = models.CharField(
        max_length=20,
        choices=Role.choices,
        default=Role.CUSTOMER,
    )

    class Meta:
        ordering = ["username"]

    def __str__(self) -> str:
        return self.email or self.username

    @property
    def is_kitchen_staff(self) -> bool:
        """Staff, admins and superusers can work the kitchen dashboard."""
        return self.is_superuser or self.role in (self.Role.STAFF, self.Role.ADMIN)

    @property
    def is_restaurant_admin(self) -> bool:
        """Admins and superusers can manage closures and content."""
        return self.is_superuser or self.role == self.Role.ADMIN

    @property
    def display_name(self) -> str:
        return self.full_name or self.get_full_name() or self.email


class TimestampedModel(models.Model):
    """
    Abstract base with created/updated timestamps.
    """

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True
