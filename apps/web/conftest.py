"""
Pytest configuration for Django app tests.
"""

from django.core.cache import cache
from django.test import Client as DjangoClient

import pytest

from apps.web.core.models import User
from apps.web.core.tests.factories import (
    AdminUserFactory,
    StaffUserFactory,
    UserFactory,
)


@pytest.fixture(autouse=True)
def _clear_cache():
    """Rate-limit counters and idempotency keys live in the cache."""
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def api_client() -> DjangoClient:
    """Django test client for API requests."""
    return DjangoClient()


@pytest.fixture
def user(db) -> User:
    """A customer account."""
    return UserFactory(
        username="customer@example.com",
        full_name="Thandi Mokoena",
    )


@pytest.fixture
def staff_user(db) -> User:
    """A kitchen staff account."""
    return StaffUserFactory()


@pytest.fixture
def admin_user(db) -> User:
    """A restaurant admin account."""
    return AdminUserFactory()


@pytest.fixture
def customer_client(user: User) -> DjangoClient:
    """Test client signed in as the customer."""
    client = DjangoClient()
    client.force_login(user)
    return client


@pytest.fixture
def staff_client(staff_user: User) -> DjangoClient:
    """Test client signed in as kitchen staff."""
    client = DjangoClient()
    client.force_login(staff_user)
    return client


@pytest.fixture
def admin_client(admin_user: User) -> DjangoClient:
    """Test client signed in as a restaurant admin."""
    client = DjangoClient()
    client.force_login(admin_user)
    return client
