"""Generic repository interface (Dependency Inversion Principle).

Provides ``IRepository[T]``, the base abstract class that all
domain-specific repository interfaces extend.  Service-layer code
depends on this abstraction, never on Django ORM directly.

Storage-level uniqueness failures cross this boundary as
``UniqueConstraintViolation`` and updates of vanished rows as
``RecordNotFound``, so services never inspect driver errors.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Generic, List, Optional, TypeVar

T = TypeVar("T")


class UniqueConstraintViolation(Exception):
    """The store rejected a write because a unique column already holds ``value``."""

    def __init__(self, field: str, value: Any) -> None:
        super().__init__(f"Unique constraint violated on {field!r}.")
        self.field = field
        self.value = value


class RecordNotFound(Exception):
    """An update found no row for ``id``; it was removed in the meantime."""

    def __init__(self, id: Any) -> None:
        super().__init__(f"No record with id {id!r}.")
        self.id = id


class IRepository(ABC, Generic[T]):
    """Base generic repository contract.

    Type parameter ``T`` represents the domain entity managed by the
    repository (e.g. ``Client``).
    """

    @abstractmethod
    def get_by_id(self, id: str) -> Optional[T]:
        """Retrieve an entity by its primary key."""

    @abstractmethod
    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[T]:
        """List entities with optional filters."""

    @abstractmethod
    def save(self, entity: T) -> T:
        """Persist (create or update) an entity.

        Raises:
            UniqueConstraintViolation: if a unique column collides.
            RecordNotFound: if an existing entity was deleted meanwhile.
        """

    @abstractmethod
    def delete(self, id: str) -> bool:
        """Remove an entity by ID; ``False`` when it does not exist."""
