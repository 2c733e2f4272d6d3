"""
Tests for visual editor content views.
"""

from django.test import Client as DjangoClient

import pytest

from apps.web.content.models import ThemeSetting
from apps.web.content.tests.factories import ThemeSettingFactory


@pytest.mark.django_db
class TestPageContentView:
    """Tests for GET /api/content/{page_scope}."""

    def test_returns_settings_for_page(self, api_client: DjangoClient):
        ThemeSettingFactory(setting_key="hero.title", setting_value="Fresh coffee")
        ThemeSettingFactory(setting_key="hero.subtitle", setting_value="Daily")
        ThemeSettingFactory(page_scope="menu", setting_key="hero.title")

        response = api_client.get("/api/content/homepage")

        assert response.status_code == 200
        assert response.json() == {
            "page_scope": "homepage",
            "settings": {"hero.subtitle": "Daily", "hero.title": "Fresh coffee"},
        }
        assert "max-age=60" in response["Cache-Control"]

    def test_filters_by_category(self, api_client: DjangoClient):
        ThemeSettingFactory(setting_key="hero.title", setting_value="Hello")
        ThemeSettingFactory(
            setting_key="accent_color", setting_value="#ff0000", category="theme"
        )

        data = api_client.get("/api/content/homepage?category=theme").json()

        assert data["settings"] == {"accent_color": "#ff0000"}

    def test_unknown_page_returns_empty_settings(self, api_client: DjangoClient):
        response = api_client.get("/api/content/nowhere")

        assert response.status_code == 200
        assert response.json()["settings"] == {}


@pytest.mark.django_db
class TestSavePageContentView:
    """Tests for POST /api/admin/content/{page_scope}."""

    url = "/api/admin/content/homepage"

    def _post(self, client: DjangoClient, data: dict):
        return client.post(self.url, data=data, content_type="application/json")

    def test_creates_and_updates_settings(self, admin_client: DjangoClient, admin_user):
        ThemeSettingFactory(setting_key="hero.title", setting_value="Old")

        response = self._post(
            admin_client,
            {"settings": {"hero.title": "New", "hero.bg_color": "#1a1a1a"}},
        )

        assert response.status_code == 200
        assert response.json()["settings"] == {
            "hero.bg_color": "#1a1a1a",
            "hero.title": "New",
        }
        title = ThemeSetting.objects.get(page_scope="homepage", setting_key="hero.title")
        assert title.setting_value == "New"
        assert title.updated_by == admin_user
        assert ThemeSetting.objects.count() == 2

    def test_stores_category(self, admin_client: DjangoClient):
        self._post(admin_client, {"settings": {"font": "serif"}, "category": "theme"})

        assert ThemeSetting.objects.get(setting_key="font").category == "theme"

    def test_rejects_invalid_key(self, admin_client: DjangoClient):
        response = self._post(admin_client, {"settings": {"Bad Key": "x"}})

        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"
        assert ThemeSetting.objects.count() == 0

    def test_rejects_invalid_color(self, admin_client: DjangoClient):
        response = self._post(
            admin_client,
            {"settings": {"hero.title": "ok", "hero.text_color": "red"}},
        )

        assert response.status_code == 400
        # Nothing saved when any entry is invalid
        assert ThemeSetting.objects.count() == 0

    def test_rejects_oversized_value(self, admin_client: DjangoClient):
        response = self._post(admin_client, {"settings": {"body": "x" * 10_001}})

        assert response.status_code == 400

    def test_rejects_empty_settings(self, admin_client: DjangoClient):
        response = self._post(admin_client, {"settings": {}})

        assert response.status_code == 400

    def test_staff_forbidden(self, staff_client: DjangoClient):
        response = self._post(staff_client, {"settings": {"hero.title": "x"}})

        assert response.status_code == 403

    def test_anonymous_unauthorized(self, api_client: DjangoClient):
        response = self._post(api_client, {"settings": {"hero.title": "x"}})

        assert response.status_code == 401


@pytest.mark.django_db
class TestDeletePageSettingView:
    """Tests for DELETE /api/admin/content/{page_scope}/{setting_key}."""

    def test_deletes_setting(self, admin_client: DjangoClient):
        ThemeSettingFactory(setting_key="hero.title")
        other = ThemeSettingFactory(page_scope="menu", setting_key="hero.title")

        response = admin_client.delete("/api/admin/content/homepage/hero.title")

        assert response.status_code == 204
        assert list(ThemeSetting.objects.all()) == [other]

    def test_missing_setting_returns_404(self, admin_client: DjangoClient):
        response = admin_client.delete("/api/admin/content/homepage/hero.title")

        assert response.status_code == 404

    def test_customer_forbidden(self, customer_client: DjangoClient):
        ThemeSettingFactory(setting_key="hero.title")

        response = customer_client.delete("/api/admin/content/homepage/hero.title")

        assert response.status_code == 403
        assert ThemeSetting.objects.count() == 1
