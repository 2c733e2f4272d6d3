"""
Tests for the events and specials endpoints.
"""

from datetime import timedelta

from django.test import Client as DjangoClient
from django.utils import timezone

import pytest

from apps.web.content.models import Event, EventType
from apps.web.content.tests.factories import EventFactory


@pytest.mark.django_db
class TestPublicEvents:
    """Tests for GET /api/events."""

    def test_lists_active_current_events_in_display_order(
        self, api_client: DjangoClient
    ):
        today = timezone.localdate()
        second = EventFactory(title="Quiz Night", display_order=2)
        first = EventFactory(
            title="Two for one cappuccinos",
            event_type=EventType.SPECIAL,
            display_order=1,
        )
        EventFactory(title="Hidden", is_active=False)
        EventFactory(
            title="Last month",
            start_date=today - timedelta(days=40),
            end_date=today - timedelta(days=30),
        )

        response = api_client.get("/api/events")

        assert response.status_code == 200
        events = response.json()["events"]
        assert [e["id"] for e in events] == [first.pk, second.pk]
        assert events[0]["event_type"] == "special"
        assert "max-age=60" in response["Cache-Control"]

    def test_event_ending_today_still_listed(self, api_client: DjangoClient):
        today = timezone.localdate()
        EventFactory(start_date=today - timedelta(days=3), end_date=today)

        events = api_client.get("/api/events").json()["events"]

        assert len(events) == 1

    def test_end_date_defaults_to_start_date(self):
        start = timezone.localdate() + timedelta(days=5)

        event = EventFactory(start_date=start, end_date=None)

        assert event.end_date == start


@pytest.mark.django_db
class TestAdminEvents:
    """Tests for the admin events manager."""

    url = "/api/admin/events"

    def _create(self, client: DjangoClient, **overrides):
        data = {
            "title": "Jazz Sunday",
            "description": "Live trio on the patio",
            "event_type": "event",
            "start_date": (timezone.localdate() + timedelta(days=3)).isoformat(),
            **overrides,
        }
        return client.post(self.url, data=data, content_type="application/json")

    def test_create_applies_defaults(self, admin_client: DjangoClient):
        response = self._create(admin_client)

        assert response.status_code == 201
        data = response.json()
        assert data["end_date"] == data["start_date"]
        assert data["background_color"] == "#1a1a1a"
        assert data["text_color"] == "#ffffff"
        assert data["priority"] == 0
        assert data["is_active"] is True
        assert Event.objects.count() == 1

    def test_create_requires_core_fields(self, admin_client: DjangoClient):
        response = admin_client.post(
            self.url, data={"title": "No date"}, content_type="application/json"
        )

        assert response.status_code == 400
        fields = {d["field"] for d in response.json()["details"]}
        assert {"description", "event_type", "start_date"} <= fields

    def test_create_rejects_bad_color(self, admin_client: DjangoClient):
        response = self._create(admin_client, background_color="blue")

        assert response.status_code == 400
        assert response.json()["details"][0]["field"] == "background_color"

    def test_create_rejects_end_before_start(self, admin_client: DjangoClient):
        start = timezone.localdate() + timedelta(days=3)

        response = self._create(
            admin_client,
            start_date=start.isoformat(),
            end_date=(start - timedelta(days=1)).isoformat(),
        )

        assert response.status_code == 400

    def test_create_rejects_script_link(self, admin_client: DjangoClient):
        response = self._create(admin_client, button_link="javascript:alert(1)")

        assert response.status_code == 400

    def test_list_includes_inactive_and_past(self, admin_client: DjangoClient):
        today = timezone.localdate()
        EventFactory(is_active=False)
        EventFactory(start_date=today - timedelta(days=9), end_date=today - timedelta(days=8))

        response = admin_client.get(self.url)

        assert response.status_code == 200
        assert len(response.json()["events"]) == 2

    def test_update_changes_only_given_fields(self, admin_client: DjangoClient):
        event = EventFactory(title="Quiz Night", priority=1)

        response = admin_client.put(
            f"{self.url}/{event.pk}",
            data={"priority": 5, "is_active": False},
            content_type="application/json",
        )

        assert response.status_code == 200
        event.refresh_from_db()
        assert event.priority == 5
        assert event.is_active is False
        assert event.title == "Quiz Night"

    def test_update_rejects_end_before_start(self, admin_client: DjangoClient):
        event = EventFactory()

        response = admin_client.put(
            f"{self.url}/{event.pk}",
            data={"end_date": (event.start_date - timedelta(days=1)).isoformat()},
            content_type="application/json",
        )

        assert response.status_code == 400
        assert response.json()["details"][0]["field"] == "end_date"

    def test_delete(self, admin_client: DjangoClient):
        event = EventFactory()

        response = admin_client.delete(f"{self.url}/{event.pk}")

        assert response.status_code == 204
        assert not Event.objects.filter(pk=event.pk).exists()

    def test_unknown_event(self, admin_client: DjangoClient):
        response = admin_client.delete(f"{self.url}/999999")

        assert response.status_code == 404

    def test_staff_forbidden(self, staff_client: DjangoClient):
        response = self._create(staff_client)

        assert response.status_code == 403
        assert Event.objects.count() == 0
