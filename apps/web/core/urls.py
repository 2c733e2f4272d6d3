"""
Auth and health URL routes.
"""

from django.urls import path

from . import views

app_name = "core"

urlpatterns = [
    path("auth/csrf", views.csrf, name="csrf"),
    path("auth/signup", views.signup, name="signup"),
    path("auth/login", views.login_view, name="login"),
    path("auth/logout", views.logout_view, name="logout"),
    path("auth/me", views.me, name="me"),
    path("health", views.health, name="health"),
]
