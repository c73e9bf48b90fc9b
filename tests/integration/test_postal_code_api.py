"""Integration tests for /api/v1/postal-codes/{postal_code}/.

The upstream ViaCEP call is patched at the ``httpx.get`` seam.
"""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import httpx
import pytest

pytestmark = pytest.mark.integration

HTTPX_GET = "modules.clients.address_lookup.httpx.get"


def _ok(payload: dict):
    response = MagicMock()
    response.status_code = 200
    response.json.return_value = payload
    return response


class TestPostalCodeLookupAPI:
    def test_requires_authentication(self, api_client):
        response = api_client.get("/api/v1/postal-codes/01001000/")
        assert response.status_code == 401

    def test_found(self, auth_client):
        payload = {
            "logradouro": "Praça da Sé",
            "complemento": "lado ímpar",
            "bairro": "Sé",
            "localidade": "São Paulo",
            "uf": "SP",
        }
        with patch(HTTPX_GET, return_value=_ok(payload)) as mock_get:
            response = auth_client.get("/api/v1/postal-codes/01001-000/")

        assert response.status_code == 200
        assert response.data["postal_code"] == "01001000"
        assert response.data["city"] == "São Paulo"
        assert response.data["state"] == "SP"
        mock_get.assert_called_once()

    def test_second_lookup_is_cached(self, auth_client):
        with patch(HTTPX_GET, return_value=_ok({"localidade": "Recife", "uf": "PE"})) as mock_get:
            auth_client.get("/api/v1/postal-codes/50010000/")
            response = auth_client.get("/api/v1/postal-codes/50010000/")

        assert response.status_code == 200
        assert response.data["city"] == "Recife"
        assert mock_get.call_count == 1

    def test_invalid_postal_code_returns_400(self, auth_client):
        with patch(HTTPX_GET) as mock_get:
            response = auth_client.get("/api/v1/postal-codes/0100/")

        assert response.status_code == 400
        assert response.data["errors"][0]["attr"] == "postal_code"
        mock_get.assert_not_called()

    def test_unknown_postal_code_returns_404(self, auth_client):
        with patch(HTTPX_GET, return_value=_ok({"erro": True})):
            response = auth_client.get("/api/v1/postal-codes/99999999/")

        assert response.status_code == 404
        assert response.data["errors"][0]["code"] == "not_found"

    def test_upstream_failure_returns_503(self, auth_client):
        with patch(HTTPX_GET, side_effect=httpx.ConnectError("connection refused")):
            response = auth_client.get("/api/v1/postal-codes/01001000/")

        assert response.status_code == 503
        assert response.data["type"] == "server_error"
