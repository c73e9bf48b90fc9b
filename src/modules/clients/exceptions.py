"""Client domain exceptions.

Raised by the Service Layer when business rules are violated.
The API layer (Views) catches these and translates them into
appropriate HTTP responses.
"""

from __future__ import annotations

from modules.clients.documents import mask_document


class ClientNotFound(Exception):
    """The requested client does not exist."""


class ClientValidationFailed(Exception):
    """A field failed a business rule that only the service can check.

    Carries the offending ``field`` so the caller can report it next to
    the right input.
    """

    def __init__(self, field: str, reason: str) -> None:
        super().__init__(reason)
        self.field = field
        self.reason = reason


class DocumentAlreadyRegistered(Exception):
    """Another client already holds this CPF/CNPJ (RN-CLI-001)."""

    def __init__(self, document: str) -> None:
        super().__init__(
            f"Document {mask_document(document)} is already registered."
        )
        self.document = document
