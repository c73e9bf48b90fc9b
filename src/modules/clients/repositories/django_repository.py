"""Django ORM implementation of the Client repository.

Satisfies ``IClientRepository`` using Django's QuerySet API.
Error handling follows the Null Object pattern: look-ups return ``None``
instead of raising HTTP-level exceptions; the Service Layer decides
how to translate a missing entity into an API response.

Every write runs inside its own ``transaction.atomic()`` block.  Inside
an outer transaction that block is a savepoint, so a rejected write is
rolled back on its own and the caller can keep using the connection.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import structlog
from django.core.exceptions import ValidationError
from django.db import DatabaseError, IntegrityError, transaction

from modules.clients.documents import mask_document
from modules.clients.models import DOCUMENT_UNIQUE_CONSTRAINT, Client
from modules.clients.repositories.interfaces import IClientRepository
from modules.core.repositories.interfaces import (
    RecordNotFound,
    UniqueConstraintViolation,
)

logger = structlog.get_logger(__name__)

# sqlite reports "table.column", PostgreSQL and MySQL report the constraint name.
_DOCUMENT_CONFLICT_MARKERS = (
    DOCUMENT_UNIQUE_CONSTRAINT,
    f"{Client._meta.db_table}.document",
)


def _is_document_conflict(exc: IntegrityError) -> bool:
    message = str(exc)
    return any(marker in message for marker in _DOCUMENT_CONFLICT_MARKERS)


class ClientDjangoRepository(IClientRepository):
    """Concrete Client repository backed by Django ORM."""

    def get_by_id(self, id: str) -> Optional[Client]:
        """Retrieve a client by primary key.

        Returns ``None`` for non-existent or invalid IDs (e.g. malformed UUID).
        """
        try:
            return Client.objects.filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[Client]:
        """List clients with optional Django ORM look-ups.

        Examples of valid filters::

            {"party_type": "ORGANIZATION"}
            {"legal_name__icontains": "acme"}
        """
        queryset = Client.objects.all()
        if filters:
            queryset = queryset.filter(**filters)
        return list(queryset)

    def save(self, entity: Client) -> Client:
        """Insert a new client or update an existing one.

        New entities are force-inserted and existing ones force-updated,
        so a row deleted concurrently is never silently re-created.

        Raises:
            UniqueConstraintViolation: if the document is already taken.
            RecordNotFound: if the row was deleted after it was read.
        """
        is_new = entity._state.adding
        try:
            with transaction.atomic():
                entity.save(force_insert=is_new, force_update=not is_new)
        except IntegrityError as exc:
            if not _is_document_conflict(exc):
                raise
            raise UniqueConstraintViolation("document", entity.document) from exc
        except DatabaseError as exc:
            # A forced update that matched no row.
            if is_new or Client.objects.filter(id=entity.id).exists():
                raise
            logger.warning("client.update_vanished", client_id=str(entity.id))
            raise RecordNotFound(entity.id) from exc

        logger.info(
            "client.saved",
            client_id=str(entity.id),
            is_new=is_new,
            document=mask_document(entity.document),
        )
        return entity

    def delete(self, id: str) -> bool:
        """Physically delete a client by ID.

        Returns ``True`` if the client was found and deleted,
        ``False`` if no client exists with the given ID.
        """
        client = self.get_by_id(id)
        if not client:
            return False
        with transaction.atomic():
            deleted, _ = Client.objects.filter(id=client.id).delete()
        return deleted > 0

    def get_by_document(self, document: str) -> Optional[Client]:
        """Retrieve a client by CPF/CNPJ (digits only)."""
        return Client.objects.filter(document=document).first()
