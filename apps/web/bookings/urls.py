"""
URL routing for booking endpoints.
"""

from django.urls import path

from apps.web.bookings import views

app_name = "bookings"

urlpatterns = [
    path("contact/booking", views.create_booking, name="create_booking"),
]
