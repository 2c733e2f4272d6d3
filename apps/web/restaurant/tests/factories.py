"""Factory classes for restaurant models."""

from decimal import Decimal

import factory

from apps.web.core.tests.factories import UserFactory
from apps.web.restaurant.models import (
    MenuCategory,
    MenuItem,
    Order,
    OrderItem,
    OrderStatus,
    OrderType,
    PaymentStatus,
    RestaurantClosure,
)


class MenuSectionFactory(factory.django.DjangoModelFactory):
    """Factory for top-level menu sections."""

    class Meta:
        model = MenuCategory

    parent = None
    name = factory.Sequence(lambda n: f"Section {n}")
    description = factory.Faker("sentence")
    display_order = factory.Sequence(lambda n: n)
    is_active = True


class MenuCategoryFactory(MenuSectionFactory):
    """Factory for categories inside a section."""

    parent = factory.SubFactory(MenuSectionFactory)
    name = factory.Sequence(lambda n: f"Category {n}")


class MenuItemFactory(factory.django.DjangoModelFactory):
    """Factory for MenuItem model."""

    class Meta:
        model = MenuItem

    category = factory.SubFactory(MenuCategoryFactory)
    name = factory.Sequence(lambda n: f"Item {n}")
    description = factory.Faker("sentence")
    price = factory.LazyFunction(lambda: Decimal("45.00"))
    is_available = True
    preparation_time = 15
    stock_quantity = None
    display_order = factory.Sequence(lambda n: n)


class OrderFactory(factory.django.DjangoModelFactory):
    """Factory for Order model."""

    class Meta:
        model = Order

    user = factory.SubFactory(UserFactory)
    customer_name = factory.LazyAttribute(lambda obj: obj.user.full_name)
    customer_email = factory.LazyAttribute(lambda obj: obj.user.email)
    customer_phone = "+27821234567"
    status = OrderStatus.PENDING
    order_type = OrderType.PICKUP
    subtotal = factory.LazyFunction(lambda: Decimal("90.00"))
    delivery_fee = factory.LazyFunction(lambda: Decimal("0.00"))
    total_amount = factory.LazyFunction(lambda: Decimal("90.00"))
    payment_status = PaymentStatus.PENDING
    order_number = factory.Sequence(lambda n: f"LL{n + 9000:04d}")


class OrderItemFactory(factory.django.DjangoModelFactory):
    """Factory for OrderItem model."""

    class Meta:
        model = OrderItem

    order = factory.SubFactory(OrderFactory)
    menu_item = factory.SubFactory(MenuItemFactory)
    item_name = factory.LazyAttribute(lambda obj: obj.menu_item.name)
    quantity = 2
    unit_price = factory.LazyAttribute(lambda obj: obj.menu_item.price)
    total_price = factory.LazyAttribute(lambda obj: obj.unit_price * obj.quantity)


class RestaurantClosureFactory(factory.django.DjangoModelFactory):
    """Factory for the closure settings row."""

    class Meta:
        model = RestaurantClosure
        django_get_or_create = ("id",)

    id = 1
    is_manually_closed = False
    closure_message = ""
