"""Integration tests for standardized pagination."""

from __future__ import annotations

import pytest

from modules.clients.models import Client, PartyType

pytestmark = pytest.mark.integration


@pytest.fixture()
def client_batch():
    """Create a batch of clients for pagination tests.

    ``bulk_create`` skips model validation; only uniqueness matters here.
    """
    clients = [
        Client(
            party_type=PartyType.INDIVIDUAL,
            legal_name=f"Cliente {idx:03d}",
            document=f"{idx:011d}",
        )
        for idx in range(1, 121)
    ]
    Client.objects.bulk_create(clients)
    return clients


class TestPagination:
    def test_default_page_size(self, auth_client, client_batch):
        response = auth_client.get("/api/v1/clients/")
        assert response.status_code == 200
        assert response.data["count"] == 120
        assert len(response.data["results"]) == 20
        assert response.data["next"] is not None
        assert response.data["previous"] is None

    def test_custom_page_size(self, auth_client, client_batch):
        response = auth_client.get("/api/v1/clients/?page_size=50")
        assert response.status_code == 200
        assert len(response.data["results"]) == 50
        assert response.data["next"] is not None

    def test_max_page_size(self, auth_client, client_batch):
        response = auth_client.get("/api/v1/clients/?page_size=1000")
        assert response.status_code == 200
        assert len(response.data["results"]) == 100
        assert response.data["next"] is not None

    def test_pages_follow_legal_name_order(self, auth_client, client_batch):
        first = auth_client.get("/api/v1/clients/?page_size=10")
        second = auth_client.get("/api/v1/clients/?page_size=10&page=2")
        names = [item["legal_name"] for item in first.data["results"]]
        names += [item["legal_name"] for item in second.data["results"]]
        assert names == [f"Cliente {idx:03d}" for idx in range(1, 21)]
