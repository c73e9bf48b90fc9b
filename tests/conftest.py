import pytest

from django.contrib.auth import get_user_model
from django.core.cache import cache

from rest_framework.test import APIClient

from modules.clients.models import Client, PartyType


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


@pytest.fixture(autouse=True)
def _clear_cache():
    """Throttle counters and cached addresses must not leak between tests."""
    cache.clear()


@pytest.fixture()
def api_client():
    """DRF APIClient for testing API endpoints."""
    return APIClient()


@pytest.fixture()
def api_client_with_correlation(api_client):
    """APIClient pre-configured with a known correlation ID header."""
    cid = "test-correlation-id-fixture"
    api_client.defaults["HTTP_X_REQUEST_ID"] = cid
    return api_client, cid


@pytest.fixture()
def auth_client():
    """APIClient with a force-authenticated Django user."""
    client = APIClient()
    user = get_user_model().objects.create_user(
        username="testuser", password="testpass123"
    )
    client.force_authenticate(user=user)
    return client


@pytest.fixture()
def make_client():
    """Factory persisting a Client straight through the ORM."""

    def _make(**overrides) -> Client:
        defaults = {
            "party_type": PartyType.INDIVIDUAL,
            "legal_name": "Ana Souza",
            "document": "11144477735",
            "email": "ana@example.com",
        }
        defaults.update(overrides)
        client = Client(**defaults)
        client.save()
        return client

    return _make
