"""
Restaurant models - Menu, orders, and closures.

Menus are three-tier: top-level sections contain categories, categories
contain items. Orders keep a price snapshot of each item at order time.
"""

from django.conf import settings
from django.db import models

from apps.web.core.managers import UserScopedManager
from apps.web.core.models import TimestampedModel


class MenuCategory(TimestampedModel):
    """
    A menu section or category (e.g., Drinks > Hot Drinks).

    Top-level rows (no parent) are sections; children are categories.
    """

    parent = models.ForeignKey(
        "self",
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name="subcategories",
        help_text="Parent section (blank = top-level section)",
    )
    name = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    image_url = models.URLField(blank=True)
    display_order = models.PositiveIntegerField(default=0)
    is_active = models.BooleanField(default=True)

    class Meta:
        ordering = ["display_order", "name"]
        verbose_name_plural = "menu categories"
        indexes = [
            models.Index(fields=["parent", "display_order"]),
            models.Index(fields=["is_active"]),
        ]

    def __str__(self) -> str:
        if self.parent_id:
            return f"{self.parent} > {self.name}"
        return self.name


class MenuItem(TimestampedModel):
    """
    Individual menu item.

    Stock is optional: stock_quantity=None means untracked.
    """

    category = models.ForeignKey(
        MenuCategory,
        on_delete=models.CASCADE,
        related_name="items",
    )
    name = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    price = models.DecimalField(max_digits=10, decimal_places=2)
    image_url = models.URLField(blank=True)

    is_available = models.BooleanField(default=True)
    is_featured = models.BooleanField(default=False)
    allergens = models.JSONField(
        default=list,
        blank=True,
        help_text='List of allergens (e.g., ["nuts", "dairy", "gluten"])',
    )
    preparation_time = models.PositiveIntegerField(
        default=15,
        help_text="Minutes to prepare",
    )
    stock_quantity = models.PositiveIntegerField(
        null=True,
        blank=True,
        help_text="Units in stock (blank = not tracked)",
    )

    display_order = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ["display_order", "name"]
        indexes = [
            models.Index(fields=["category", "is_available"]),
            models.Index(fields=["is_featured"]),
        ]

    def __str__(self) -> str:
        return self.name

    @property
    def tracks_stock(self) -> bool:
        return self.stock_quantity is not None


class OrderStatus(models.TextChoices):
    """Order lifecycle status."""

    DRAFT = "draft", "Draft"
    PENDING = "pending", "Pending Payment"
    CONFIRMED = "confirmed", "Confirmed"
    PREPARING = "preparing", "Preparing"
    READY = "ready", "Ready"
    COMPLETED = "completed", "Completed"
    CANCELLED = "cancelled", "Cancelled"


class OrderType(models.TextChoices):
    """Order fulfillment type."""

    PICKUP = "pickup", "Pickup"
    DELIVERY = "delivery", "Delivery"


class DeliveryZone(models.TextChoices):
    """Delivery area, priced separately."""

    ROBERTS_ESTATE = "roberts_estate", "Roberts Estate"
    MIDDLEBURG = "middleburg", "Middleburg"


class PaymentStatus(models.TextChoices):
    """Payment processing status."""

    PENDING = "pending", "Pending"
    PAID = "paid", "Paid"
    FAILED = "failed", "Failed"
    CANCELLED = "cancelled", "Cancelled"
    REFUNDED = "refunded", "Refunded"


class PaymentMethod(models.TextChoices):
    """Gateway used to pay the order."""

    NONE = "", "None"
    YOCO = "yoco", "Yoco"
    PAYFAST = "payfast", "PayFast"


# Statuses the kitchen works on
ACTIVE_KITCHEN_STATUSES = (
    OrderStatus.CONFIRMED,
    OrderStatus.PREPARING,
    OrderStatus.READY,
)


class Order(TimestampedModel):
    """
    Customer order.

    Created as a draft at checkout, moved to pending when a payment
    session exists, confirmed by the payment webhook.
    """

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="orders",
    )
    order_number = models.CharField(
        max_length=20,
        unique=True,
        null=True,
        blank=True,
        help_text="Customer-facing order number",
    )

    # Customer information
    customer_name = models.CharField(max_length=200, blank=True)
    customer_email = models.EmailField(blank=True)
    customer_phone = models.CharField(max_length=20, blank=True)

    # Order details
    status = models.CharField(
        max_length=20,
        choices=OrderStatus.choices,
        default=OrderStatus.DRAFT,
    )
    order_type = models.CharField(
        max_length=20,
        choices=OrderType.choices,
        default=OrderType.PICKUP,
    )
    delivery_address = models.TextField(blank=True)
    delivery_zone = models.CharField(max_length=20, choices=DeliveryZone.choices, blank=True)
    special_instructions = models.TextField(blank=True)

    # Pricing
    subtotal = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    delivery_fee = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    total_amount = models.DecimalField(max_digits=10, decimal_places=2)

    # Payment
    payment_status = models.CharField(
        max_length=20,
        choices=PaymentStatus.choices,
        default=PaymentStatus.PENDING,
    )
    payment_method = models.CharField(
        max_length=20,
        choices=PaymentMethod.choices,
        default=PaymentMethod.NONE,
        blank=True,
    )
    payment_id = models.CharField(
        max_length=255,
        blank=True,
        help_text="Gateway checkout or payment reference",
    )

    # Timestamps
    confirmed_at = models.DateTimeField(null=True, blank=True)
    completed_at = models.DateTimeField(null=True, blank=True)
    estimated_ready_time = models.DateTimeField(
        null=True,
        blank=True,
        help_text="Estimated time order will be ready",
    )

    objects = UserScopedManager()

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["status", "created_at"]),
            models.Index(fields=["user", "created_at"]),
            models.Index(fields=["payment_id"]),
        ]

    def __str__(self) -> str:
        return f"Order {self.order_number or self.pk} - {self.customer_name}"

    @property
    def is_paid(self) -> bool:
        return self.payment_status == PaymentStatus.PAID

    @property
    def can_be_paid(self) -> bool:
        """Draft and pending orders accept a payment session."""
        return self.status in (OrderStatus.DRAFT, OrderStatus.PENDING) and not self.is_paid

    def assign_order_number(self) -> None:
        """Derive the customer-facing number from the primary key."""
        self.order_number = f"LL{self.pk:04d}"


class OrderItem(models.Model):
    """
    Line item in an order.

    Stores a snapshot of the item at order time.
    """

    order = models.ForeignKey(
        Order,
        on_delete=models.CASCADE,
        related_name="items",
    )
    menu_item = models.ForeignKey(
        MenuItem,
        on_delete=models.PROTECT,
        related_name="order_items",
        help_text="Reference to the menu item (for analytics)",
    )

    # Snapshot of item at order time
    item_name = models.CharField(max_length=200)
    quantity = models.PositiveIntegerField(default=1)
    unit_price = models.DecimalField(max_digits=10, decimal_places=2)
    total_price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        help_text="unit_price * quantity",
    )

    customizations = models.JSONField(
        default=dict,
        blank=True,
        help_text="Customer choices (size, milk, extras) as free-form JSON",
    )
    special_requests = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["pk"]

    def __str__(self) -> str:
        return f"{self.quantity}x {self.item_name}"


class RestaurantClosure(TimestampedModel):
    """
    Closure settings - a single row (pk=1).

    A manual toggle always wins over the scheduled window.
    """

    is_manually_closed = models.BooleanField(default=False)
    closure_message = models.CharField(
        max_length=500,
        blank=True,
        help_text="Shown to customers while manually closed",
    )
    scheduled_closure_start = models.DateTimeField(null=True, blank=True)
    scheduled_closure_end = models.DateTimeField(null=True, blank=True)
    updated_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="+",
    )

    class Meta:
        verbose_name = "restaurant closure"

    def __str__(self) -> str:
        return "Closed" if self.is_manually_closed else "Closure settings"

    @classmethod
    def load(cls) -> "RestaurantClosure":
        """Fetch the settings row, creating it on first use."""
        closure, _ = cls.objects.get_or_create(pk=1)
        return closure
