"""
Kitchen dashboard URL routes.
"""

from django.urls import path

from . import views

app_name = "kitchen"

urlpatterns = [
    path("orders", views.orders, name="orders"),
    path("orders/<int:order_id>/status", views.order_status, name="order_status"),
    path("summary", views.summary, name="summary"),
]
