"""Client model with CPF/CNPJ validation.

Business rules implemented:
- RN-CLI-001: the canonical document (digits only) is unique, backed by
  the ``clients_document_unique`` database constraint.
- RN-CLI-002: organisations carry a CNPJ, individuals a CPF; the declared
  ``party_type`` decides which checksum applies.
- RN-CLI-003: ``trade_name`` only applies to organisations.
- RN-CLI-005: sensitive data (CPF/CNPJ) masked in ``__str__`` and logs.
"""

from __future__ import annotations

import structlog
from django.core.exceptions import ValidationError
from django.db import models

from modules.clients import documents
from modules.core.models import BaseModel

logger = structlog.get_logger(__name__)

DOCUMENT_UNIQUE_CONSTRAINT = "clients_document_unique"


class PartyType(models.TextChoices):
    INDIVIDUAL = documents.DocumentKind.INDIVIDUAL.value, "Pessoa física"
    ORGANIZATION = documents.DocumentKind.ORGANIZATION.value, "Pessoa jurídica"


class Client(BaseModel):
    """Client aggregate root.

    ``document`` stores only digits (sanitised on save).  Deletion is
    physical: once removed, the document can be registered again.
    """

    party_type = models.CharField(max_length=12, choices=PartyType.choices)
    legal_name = models.CharField(max_length=255)
    trade_name = models.CharField(max_length=255, blank=True, default="")
    document = models.CharField(max_length=14)
    email = models.EmailField(max_length=254, blank=True, default="")
    phone = models.CharField(max_length=20, blank=True, default="")

    postal_code = models.CharField(max_length=8, blank=True, default="")
    street = models.CharField(max_length=255, blank=True, default="")
    number = models.CharField(max_length=20, blank=True, default="")
    complement = models.CharField(max_length=255, blank=True, default="")
    neighborhood = models.CharField(max_length=255, blank=True, default="")
    city = models.CharField(max_length=255, blank=True, default="")
    state = models.CharField(max_length=2, blank=True, default="")

    class Meta:
        db_table = "clients"
        ordering = ["legal_name", "id"]
        constraints = [
            models.UniqueConstraint(
                fields=["document"], name=DOCUMENT_UNIQUE_CONSTRAINT
            ),
        ]
        indexes = [
            models.Index(fields=["legal_name"], name="clients_legal_name_idx"),
            models.Index(fields=["party_type"], name="clients_party_type_idx"),
        ]

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def clean(self) -> None:
        super().clean()
        self.document = documents.normalize(self.document)
        self.postal_code = documents.normalize(self.postal_code)
        if self.party_type == PartyType.INDIVIDUAL:
            self.trade_name = ""
        self._validate_document()

    def _validate_document(self) -> None:
        """Validate CPF or CNPJ according to ``party_type``."""
        if self.party_type not in PartyType.values:
            raise ValidationError({"party_type": "Invalid party type."})

        if not self.document:
            raise ValidationError({"document": "Document is required."})

        if not documents.validate(self.document, self.party_type):
            logger.warning(
                "client.invalid_document",
                party_type=self.party_type,
                document=documents.mask_document(self.document),
            )
            raise ValidationError(
                {"document": f"Invalid {documents.label(self.party_type)} number."}
            )

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def save(self, *args, **kwargs) -> None:
        if self.document:
            self.document = documents.normalize(self.document)
        super().save(*args, **kwargs)

    # ------------------------------------------------------------------
    # Display (RN-CLI-005: mask sensitive data)
    # ------------------------------------------------------------------

    @property
    def document_display(self) -> str:
        return documents.format_document(self.document, self.party_type)

    def __str__(self) -> str:
        kind = documents.label(self.party_type) if self.party_type else "DOC"
        return f"{self.legal_name} ({kind}: {documents.mask_document(self.document)})"
