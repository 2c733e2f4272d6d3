"""
Integration tests for notification preference views.
"""

from django.test import Client as DjangoClient

import pytest

from apps.web.notifications.models import NotificationPreference
from apps.web.notifications.tests.factories import NotificationPreferenceFactory

DEFAULTS = {
    "push_enabled": True,
    "email_enabled": True,
    "sms_enabled": False,
    "order_updates_enabled": True,
    "promotional_enabled": True,
    "event_announcements_enabled": True,
}


@pytest.mark.django_db
class TestPreferencesView:
    """Tests for GET/POST /api/notifications/preferences."""

    url = "/api/notifications/preferences"

    def test_get_returns_defaults_without_row(self, customer_client: DjangoClient):
        response = customer_client.get(self.url)

        assert response.status_code == 200
        assert response.json() == DEFAULTS
        assert NotificationPreference.objects.count() == 0

    def test_get_returns_stored_row(self, customer_client: DjangoClient, user):
        NotificationPreferenceFactory(user=user, sms_enabled=True, push_enabled=False)

        data = customer_client.get(self.url).json()

        assert data["sms_enabled"] is True
        assert data["push_enabled"] is False

    def test_post_creates_row_with_partial_update(
        self, customer_client: DjangoClient, user
    ):
        response = customer_client.post(
            self.url,
            data={"sms_enabled": True},
            content_type="application/json",
        )

        assert response.status_code == 200
        assert response.json() == {**DEFAULTS, "sms_enabled": True}
        assert NotificationPreference.objects.get(user=user).sms_enabled is True

    def test_post_updates_existing_row(self, customer_client: DjangoClient, user):
        NotificationPreferenceFactory(user=user, email_enabled=False)

        response = customer_client.post(
            self.url,
            data={"promotional_enabled": False},
            content_type="application/json",
        )

        data = response.json()
        assert data["email_enabled"] is False
        assert data["promotional_enabled"] is False
        assert NotificationPreference.objects.filter(user=user).count() == 1

    def test_post_rejects_non_boolean(self, customer_client: DjangoClient):
        response = customer_client.post(
            self.url,
            data={"sms_enabled": "yes"},
            content_type="application/json",
        )

        assert response.status_code == 400
        data = response.json()
        assert data["error"] == "validation_error"
        assert data["details"][0]["field"] == "sms_enabled"

    def test_post_rejects_unknown_field(self, customer_client: DjangoClient):
        response = customer_client.post(
            self.url,
            data={"carrier_pigeon_enabled": True},
            content_type="application/json",
        )

        assert response.status_code == 400

    def test_requires_login(self, api_client: DjangoClient):
        response = api_client.get(self.url)

        assert response.status_code == 401
