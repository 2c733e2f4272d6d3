"""
URL routing for payment endpoints.
"""

from django.urls import path

from apps.web.payments import views, webhooks

app_name = "payments"

urlpatterns = [
    # Yoco
    path("yoco/checkout", views.yoco_checkout, name="yoco_checkout"),
    path("yoco/webhook", webhooks.yoco_webhook, name="yoco_webhook"),
    # PayFast
    path(
        "payfast/create-payment",
        views.payfast_create_payment,
        name="payfast_create_payment",
    ),
    path("payfast/notify", webhooks.payfast_notify, name="payfast_notify"),
]
