"""E2E fixtures: a running registry server driven through Playwright.

Start the server first, then:
    pytest -m e2e --base-url http://localhost:8000

Users are created and removed through ``manage.py shell`` so the suite
needs no pre-seeded credentials.  Clients created through
``clients_api`` are deleted again at teardown.
"""

from __future__ import annotations

import subprocess
from typing import Generator
from uuid import uuid4

import pytest
from playwright.sync_api import APIRequestContext, Playwright
from validate_docbr import CPF

CLIENTS_URL = "/api/v1/clients/"
TOKEN_URL = "/api/v1/auth/token/"


@pytest.fixture(scope="session")
def base_url(request) -> str:
    return request.config.getoption("base_url") or "http://localhost:8000"


@pytest.fixture(autouse=True)
def _use_db() -> None:
    """Replace the root autouse ``db`` fixture: requests go over HTTP to
    the running server, and pytest-django's ``db`` clashes with
    Playwright's event loop."""


def _manage_shell(code: str) -> None:
    subprocess.run(
        ["python", "src/manage.py", "shell", "-c", code],
        check=True,
        capture_output=True,
        text=True,
    )


@pytest.fixture()
def registry_user() -> Generator[tuple[str, str], None, None]:
    """A throwaway user that exists only for the duration of the test."""
    username = f"e2e_{uuid4().hex[:8]}"
    password = "testpass123"
    users = "from django.contrib.auth import get_user_model; U = get_user_model(); "
    _manage_shell(
        users + f"U.objects.create_user(username={username!r}, password={password!r})"
    )
    try:
        yield username, password
    finally:
        _manage_shell(users + f"U.objects.filter(username={username!r}).delete()")


@pytest.fixture(scope="session")
def anonymous_api(
    playwright: Playwright, base_url: str
) -> Generator[APIRequestContext, None, None]:
    context = playwright.request.new_context(base_url=base_url)
    yield context
    context.dispose()


@pytest.fixture()
def access_token(anonymous_api, registry_user) -> str:
    username, password = registry_user
    response = anonymous_api.post(
        TOKEN_URL, data={"username": username, "password": password}
    )
    assert response.status == 200
    return response.json()["access"]


class ClientsApi:
    """Bearer-authenticated calls to ``/api/v1/clients/``; remembers what it created."""

    def __init__(self, context: APIRequestContext) -> None:
        self.context = context
        self.created_ids: list[str] = []

    def create(self, payload: dict, **headers):
        response = self.context.post(CLIENTS_URL, data=payload, headers=headers)
        if response.status == 201:
            self.created_ids.append(response.json()["id"])
        return response

    def get(self, client_id: str):
        return self.context.get(f"{CLIENTS_URL}{client_id}/")

    def patch(self, client_id: str, payload: dict):
        return self.context.patch(f"{CLIENTS_URL}{client_id}/", data=payload)

    def delete(self, client_id: str):
        return self.context.delete(f"{CLIENTS_URL}{client_id}/")

    def list(self, **params):
        return self.context.get(CLIENTS_URL, params=params)


@pytest.fixture()
def clients_api(
    playwright: Playwright, base_url: str, access_token: str
) -> Generator[ClientsApi, None, None]:
    context = playwright.request.new_context(
        base_url=base_url,
        extra_http_headers={"Authorization": f"Bearer {access_token}"},
    )
    api = ClientsApi(context)
    yield api
    for client_id in api.created_ids:
        api.delete(client_id)
    context.dispose()


@pytest.fixture()
def fresh_cpf() -> str:
    """A checksum-valid CPF, punctuated, unlikely to be registered yet."""
    return CPF().generate(mask=True)
