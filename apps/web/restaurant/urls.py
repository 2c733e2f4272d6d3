"""
URL routing for menu, order and closure API endpoints.

Menu and closure status are public; orders require a signed-in customer.
"""

from django.urls import path

from apps.web.restaurant import views

app_name = "restaurant"

urlpatterns = [
    # Menu endpoints
    path("menu", views.menu, name="menu"),
    path(
        "menu/categories/<int:category_id>",
        views.category_detail,
        name="category_detail",
    ),
    # Availability endpoint (for sold-out polling)
    path("menu/availability", views.availability, name="availability"),
    # Closure endpoints
    path("closure/status", views.closure_status, name="closure_status"),
    path("admin/closure", views.admin_closure, name="admin_closure"),
    # Order endpoints
    path("orders", views.orders, name="orders"),
    path("orders/<int:order_id>", views.order_detail, name="order_detail"),
    path("orders/<int:order_id>/status", views.order_status, name="order_status"),
    path("orders/<int:order_id>/cancel", views.order_cancel, name="order_cancel"),
]
