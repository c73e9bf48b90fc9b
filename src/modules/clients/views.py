"""Client API views.

Exposes the ``ClientService`` via HTTP using DRF ViewSets.
Domain exceptions are caught and translated into appropriate
HTTP status codes. Generic exceptions are never swallowed here:

- Pydantic / ``ClientValidationFailed`` → 400
- ``ClientNotFound`` → 404
- ``DocumentAlreadyRegistered`` → 409
"""

from __future__ import annotations

from typing import Any, Dict

from django_filters.rest_framework import DjangoFilterBackend
from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.exceptions import ParseError
from rest_framework.filters import OrderingFilter, SearchFilter
from rest_framework.mixins import ListModelMixin
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.throttling import BaseThrottle
from rest_framework.views import APIView
from rest_framework.viewsets import GenericViewSet

from modules.clients.address_lookup import (
    AddressLookupUnavailable,
    AddressNotFound,
    get_address_lookup,
    normalize_postal_code,
)
from modules.clients.dtos import CreateClientDTO, UpdateClientDTO
from modules.clients.exceptions import (
    ClientNotFound,
    ClientValidationFailed,
    DocumentAlreadyRegistered,
)
from modules.clients.filters import ClientFilter
from modules.clients.models import Client
from modules.clients.repositories.django_repository import ClientDjangoRepository
from modules.clients.serializers import AddressSerializer, ClientSerializer
from modules.clients.services import ClientService
from modules.core.errors import error_item, error_response, pydantic_errors

WRITE_ACTIONS = frozenset({"create", "update", "partial_update", "destroy"})


def _not_found() -> Response:
    return error_response(
        status.HTTP_404_NOT_FOUND,
        [error_item("not_found", "Client not found.")],
    )


def _conflict(exc: DocumentAlreadyRegistered) -> Response:
    return error_response(
        status.HTTP_409_CONFLICT,
        [error_item("document_already_registered", str(exc), "document")],
    )


def _payload(request: Request) -> Dict[str, Any]:
    if not hasattr(request.data, "items"):
        raise ParseError("Expected a JSON object.")
    # QueryDict.items() yields the last value per key, like .get().
    return dict(request.data.items())


class ClientViewSet(ListModelMixin, GenericViewSet):
    """ViewSet for Client CRUD operations.

    Uses ``ClientService`` with ``ClientDjangoRepository`` (DIP).
    Does **not** extend ``ModelViewSet``: all ORM writes go through
    the service/repository layer.
    """

    filterset_class = ClientFilter
    search_fields = ["legal_name", "trade_name", "email", "document"]
    ordering_fields = ["legal_name", "created_at", "id"]
    ordering = ["legal_name", "id"]
    filter_backends = [DjangoFilterBackend, SearchFilter, OrderingFilter]
    queryset = Client.objects.all()
    serializer_class = ClientSerializer

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = ClientService(repository=ClientDjangoRepository())

    def get_throttles(self) -> list[BaseThrottle]:
        """Writes share the ``client_write`` budget; reads only the user rate."""
        self.throttle_scope = "client_write" if self.action in WRITE_ACTIONS else None
        return super().get_throttles()

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/clients/{pk}/"""
        if pk is None:
            return _not_found()
        try:
            client = self._service.get_client(pk)
        except ClientNotFound:
            return _not_found()
        return Response(ClientSerializer(client).data)

    # ------------------------------------------------------------------
    # Create / Update / Destroy
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /api/v1/clients/"""
        try:
            dto = CreateClientDTO.model_validate(_payload(request))
        except PydanticValidationError as exc:
            return error_response(status.HTTP_400_BAD_REQUEST, pydantic_errors(exc))

        try:
            client = self._service.create_client(dto)
        except DocumentAlreadyRegistered as exc:
            return _conflict(exc)

        out = ClientSerializer(client)
        return Response(out.data, status=status.HTTP_201_CREATED)

    def update(self, request: Request, pk: str | None = None) -> Response:
        """PUT/PATCH /api/v1/clients/{pk}/ (merge patch, see ``UpdateClientDTO``)."""
        if pk is None:
            return _not_found()

        try:
            dto = UpdateClientDTO.model_validate(_payload(request))
        except PydanticValidationError as exc:
            return error_response(status.HTTP_400_BAD_REQUEST, pydantic_errors(exc))

        try:
            client = self._service.update_client(pk, dto)
        except ClientNotFound:
            return _not_found()
        except ClientValidationFailed as exc:
            return error_response(
                status.HTTP_400_BAD_REQUEST,
                [error_item("invalid", exc.reason, exc.field)],
            )
        except DocumentAlreadyRegistered as exc:
            return _conflict(exc)

        return Response(ClientSerializer(client).data)

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/v1/clients/{pk}/"""
        return self.update(request, pk)

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /api/v1/clients/{pk}/"""
        if pk is None:
            return _not_found()
        try:
            self._service.delete_client(pk)
        except ClientNotFound:
            return _not_found()
        return Response(status=status.HTTP_204_NO_CONTENT)


class PostalCodeLookupView(APIView):
    """GET /api/v1/postal-codes/{postal_code}/: address pre-fill for forms."""

    throttle_scope = "postal_code_lookup"

    def get(self, request: Request, postal_code: str) -> Response:
        try:
            digits = normalize_postal_code(postal_code)
        except ValueError as exc:
            return error_response(
                status.HTTP_400_BAD_REQUEST,
                [error_item("invalid", str(exc), "postal_code")],
            )

        try:
            address = get_address_lookup().lookup(digits)
        except AddressNotFound:
            return error_response(
                status.HTTP_404_NOT_FOUND,
                [error_item("not_found", "Postal code not found.", "postal_code")],
            )
        except AddressLookupUnavailable:
            return error_response(
                status.HTTP_503_SERVICE_UNAVAILABLE,
                [error_item("unavailable", "Address lookup is unavailable.")],
            )

        return Response(AddressSerializer(address).data)
