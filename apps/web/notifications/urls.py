"""
URL routing for notification endpoints.
"""

from django.urls import path

from apps.web.notifications import views

app_name = "notifications"

urlpatterns = [
    path("preferences", views.preferences, name="preferences"),
]
