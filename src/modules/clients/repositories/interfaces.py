"""Client repository interface.

Extends ``IRepository[Client]`` with the look-up required by
RN-CLI-001 (unique CPF/CNPJ).
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.clients.models import Client


class IClientRepository(IRepository["Client"]):
    """Repository contract for the Client aggregate.

    ``save`` must rely on an atomic store constraint for document
    uniqueness and report collisions as ``UniqueConstraintViolation``.
    """

    @abstractmethod
    def get_by_document(self, document: str) -> Optional[Client]:
        """Retrieve a client by CPF/CNPJ (digits only)."""
