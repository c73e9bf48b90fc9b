"""Client service layer (Use Cases).

Orchestrates business logic for the Client aggregate, delegating
persistence to the injected ``IClientRepository``.

Business rules enforced here:
- RN-CLI-001: CPF/CNPJ must be unique.  The service never pre-checks
  with a read: it writes optimistically and the store's unique
  constraint decides, so two concurrent writers cannot both win.
- RN-CLI-002: after a merge patch the document is re-validated against
  the resulting party type.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Optional

import structlog
from django.db import transaction

from modules.clients import documents
from modules.clients.exceptions import (
    ClientNotFound,
    ClientValidationFailed,
    DocumentAlreadyRegistered,
)
from modules.clients.models import Client, PartyType
from modules.core.repositories.interfaces import (
    RecordNotFound,
    UniqueConstraintViolation,
)

if TYPE_CHECKING:
    from modules.clients.dtos import CreateClientDTO, UpdateClientDTO
    from modules.clients.repositories.interfaces import IClientRepository

logger = structlog.get_logger(__name__)


class ClientService:
    """Application service for Client use-cases.

    Receives an ``IClientRepository`` via constructor injection (DIP).
    """

    def __init__(self, repository: IClientRepository) -> None:
        self._repo = repository

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create_client(self, dto: CreateClientDTO) -> Client:
        """Register a new client.

        Raises:
            DocumentAlreadyRegistered: if the store reports the document
                as taken (RN-CLI-001).  No retry, no merge.
        """
        log = logger.bind(
            party_type=dto.party_type, document=documents.mask_document(dto.document)
        )
        client = Client(
            party_type=dto.party_type,
            legal_name=dto.legal_name,
            trade_name=dto.trade_name,
            document=dto.document,
            email=dto.email or "",
            phone=dto.phone,
            postal_code=dto.postal_code,
            street=dto.street,
            number=dto.number,
            complement=dto.complement,
            neighborhood=dto.neighborhood,
            city=dto.city,
            state=dto.state,
        )
        client = self._persist(client, log)
        log.info("client.created", client_id=str(client.id))
        return client

    @transaction.atomic
    def update_client(self, id: str, dto: UpdateClientDTO) -> Client:
        """Apply a merge patch to an existing client.

        Raises:
            ClientNotFound: if the client does not exist, including when
                it is deleted between the read and the write.
            ClientValidationFailed: if the merged document is not valid
                for the merged party type.
            DocumentAlreadyRegistered: if the new document belongs to
                another client; the stored record stays untouched.
        """
        client = self._repo.get_by_id(id)
        if not client:
            raise ClientNotFound(f"Client {id} not found.")

        log = logger.bind(client_id=str(id))
        changes = dto.changes()

        for field, value in changes.items():
            setattr(client, field, value)
        if client.party_type == PartyType.INDIVIDUAL:
            client.trade_name = ""

        if not documents.validate(client.document, client.party_type):
            log.warning(
                "client.invalid_document",
                party_type=client.party_type,
                document=documents.mask_document(client.document),
            )
            raise ClientValidationFailed(
                "document",
                f"Invalid {documents.label(client.party_type)} number.",
            )

        client = self._persist(client, log)
        log.info("client.updated", fields=sorted(changes))
        return client

    @transaction.atomic
    def delete_client(self, id: str) -> None:
        """Physically delete a client, releasing its document.

        Raises:
            ClientNotFound: if the client does not exist.
        """
        if not self._repo.delete(id):
            raise ClientNotFound(f"Client {id} not found.")
        logger.info("client.deleted", client_id=str(id))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_clients(self, filters: Optional[Dict[str, Any]] = None) -> List[Client]:
        """Return clients ordered by legal name, optionally filtered."""
        return self._repo.list(filters)

    def find_client(self, id: str) -> Optional[Client]:
        return self._repo.get_by_id(id)

    def get_client(self, id: str) -> Client:
        """Retrieve a single client by ID.

        Raises:
            ClientNotFound: if the client does not exist.
        """
        client = self._repo.get_by_id(id)
        if not client:
            raise ClientNotFound(f"Client {id} not found.")
        return client

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _persist(self, client: Client, log: Any) -> Client:
        try:
            return self._repo.save(client)
        except RecordNotFound as exc:
            raise ClientNotFound(f"Client {client.id} not found.") from exc
        except UniqueConstraintViolation as exc:
            if exc.field != "document":
                raise
            log.warning("client.document_conflict")
            raise DocumentAlreadyRegistered(client.document) from exc
