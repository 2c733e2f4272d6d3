"""Admin registration for restaurant models."""

from django.contrib import admin

from apps.web.restaurant.models import (
    MenuCategory,
    MenuItem,
    Order,
    OrderItem,
    RestaurantClosure,
)


class SubcategoryInline(admin.TabularInline):
    """Inline for categories within a section."""

    model = MenuCategory
    fk_name = "parent"
    extra = 0
    fields = ["name", "is_active", "display_order"]


class MenuItemInline(admin.TabularInline):
    """Inline for items within a category."""

    model = MenuItem
    extra = 0
    fields = ["name", "price", "is_available", "stock_quantity", "display_order"]


class OrderItemInline(admin.TabularInline):
    """Inline for items within an order."""

    model = OrderItem
    extra = 0
    fields = ["item_name", "quantity", "unit_price", "total_price", "special_requests"]
    readonly_fields = ["item_name", "quantity", "unit_price", "total_price"]


@admin.register(MenuCategory)
class MenuCategoryAdmin(admin.ModelAdmin):
    """Admin for menu sections and categories."""

    list_display = ["name", "parent", "is_active", "display_order"]
    list_filter = ["is_active", "parent"]
    search_fields = ["name", "description"]
    inlines = [SubcategoryInline, MenuItemInline]
    readonly_fields = ["created_at", "updated_at"]


@admin.register(MenuItem)
class MenuItemAdmin(admin.ModelAdmin):
    """Admin for menu items."""

    list_display = [
        "name",
        "category",
        "price",
        "is_available",
        "is_featured",
        "stock_quantity",
    ]
    list_filter = ["is_available", "is_featured", "category"]
    list_editable = ["is_available"]
    search_fields = ["name", "description"]
    readonly_fields = ["created_at", "updated_at"]

    fieldsets = [
        (None, {"fields": ["category", "name", "description", "price"]}),
        ("Media", {"fields": ["image_url"]}),
        (
            "Availability",
            {
                "fields": [
                    "is_available",
                    "is_featured",
                    "stock_quantity",
                    "display_order",
                ]
            },
        ),
        ("Kitchen", {"fields": ["preparation_time", "allergens"]}),
        ("Timestamps", {"fields": ["created_at", "updated_at"]}),
    ]


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    """Admin for orders."""

    list_display = [
        "order_number",
        "customer_name",
        "status",
        "order_type",
        "total_amount",
        "payment_status",
        "payment_method",
        "created_at",
    ]
    list_filter = ["status", "order_type", "payment_status", "payment_method"]
    search_fields = [
        "order_number",
        "customer_name",
        "customer_email",
        "customer_phone",
        "payment_id",
    ]
    inlines = [OrderItemInline]
    readonly_fields = ["created_at", "updated_at", "confirmed_at", "completed_at"]
    date_hierarchy = "created_at"

    fieldsets = [
        (None, {"fields": ["user", "order_number"]}),
        (
            "Customer",
            {"fields": ["customer_name", "customer_email", "customer_phone"]},
        ),
        (
            "Order Details",
            {
                "fields": [
                    "status",
                    "order_type",
                    "special_instructions",
                    "delivery_address",
                    "delivery_zone",
                ]
            },
        ),
        ("Pricing", {"fields": ["subtotal", "delivery_fee", "total_amount"]}),
        (
            "Payment",
            {"fields": ["payment_method", "payment_id", "payment_status"]},
        ),
        ("Timing", {"fields": ["estimated_ready_time"]}),
        (
            "Timestamps",
            {"fields": ["created_at", "updated_at", "confirmed_at", "completed_at"]},
        ),
    ]


@admin.register(RestaurantClosure)
class RestaurantClosureAdmin(admin.ModelAdmin):
    """Admin for the closure settings row."""

    list_display = [
        "is_manually_closed",
        "scheduled_closure_start",
        "scheduled_closure_end",
        "updated_by",
        "updated_at",
    ]
    readonly_fields = ["created_at", "updated_at", "updated_by"]
