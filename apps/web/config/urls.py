"""
URL configuration for Little Latte Lane.
"""

from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path("admin/", admin.site.urls),
    path("api/", include("apps.web.core.urls")),
    path("api/", include("apps.web.restaurant.urls")),
    path("api/", include("apps.web.payments.urls")),
    path("api/kitchen/", include("apps.web.kitchen.urls")),
    path("api/notifications/", include("apps.web.notifications.urls")),
    path("api/", include("apps.web.content.urls")),
    path("api/", include("apps.web.bookings.urls")),
]
