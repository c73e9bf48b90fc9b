"""Client DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the contracts between the API layer (DRF views) and the
Service layer.  DTOs are immutable (``frozen=True``).

- ``CreateClientDTO``: input for client creation; the document is
  normalised and checksum-validated for the declared party type.
- ``UpdateClientDTO``: merge patch.  Only the fields the caller actually
  sent (``model_fields_set``) are applied; an omitted field is left
  unchanged, an explicit ``null`` clears an optional field.
"""

from __future__ import annotations

from typing import Any, Dict

from pydantic import (
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    ValidationInfo,
    field_validator,
    model_validator,
)

from modules.clients import documents
from modules.clients.address_lookup import POSTAL_CODE_LENGTH
from modules.clients.documents import DocumentKind


def _digits_only(value: Any) -> Any:
    if not isinstance(value, str):
        return value
    return documents.normalize(value)


def _check_postal_code(value: str | None) -> str | None:
    if value and len(value) != POSTAL_CODE_LENGTH:
        raise ValueError(f"Postal code must have {POSTAL_CODE_LENGTH} digits.")
    return value


# ---------------------------------------------------------------------------
# Input DTO
# ---------------------------------------------------------------------------


class CreateClientDTO(BaseModel):
    """Immutable DTO for client creation requests.

    Validates:
    - ``document`` is sanitised (non-digits stripped), required for both
      party types, and checked against the CPF/CNPJ checksum.
    - ``email`` is empty or a well-formed address (Pydantic ``EmailStr``).
    - ``trade_name`` is dropped for individuals.
    """

    model_config = ConfigDict(frozen=True)

    # ``party_type`` comes first: the document validator reads it.
    party_type: DocumentKind
    legal_name: str = Field(min_length=1, max_length=255)
    trade_name: str = Field(default="", max_length=255)
    document: str
    email: EmailStr | None = None
    phone: str = Field(default="", max_length=20)
    postal_code: str = ""
    street: str = ""
    number: str = Field(default="", max_length=20)
    complement: str = ""
    neighborhood: str = ""
    city: str = ""
    state: str = Field(default="", max_length=2)

    @model_validator(mode="before")
    @classmethod
    def drop_trade_name_for_individuals(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("party_type") == DocumentKind.INDIVIDUAL:
            data = {**data, "trade_name": ""}
        return data

    @field_validator("document", "postal_code", mode="before")
    @classmethod
    def sanitize_digits(cls, v: Any) -> Any:
        """Strip non-digit characters (accept formatted or raw input)."""
        return _digits_only(v)

    @field_validator("email", mode="before")
    @classmethod
    def blank_email_is_none(cls, v: Any) -> Any:
        return v or None

    @field_validator("state", mode="before")
    @classmethod
    def uppercase_state(cls, v: Any) -> Any:
        return v.upper() if isinstance(v, str) else v

    @field_validator("legal_name")
    @classmethod
    def legal_name_must_not_be_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Legal name must not be blank.")
        return v.strip()

    @field_validator("document")
    @classmethod
    def validate_document(cls, v: str, info: ValidationInfo) -> str:
        """Check CPF/CNPJ against the declared party type."""
        if not v:
            raise ValueError("Document is required.")
        party_type = info.data.get("party_type")
        if party_type is None:
            # party_type itself failed validation and is reported on its own.
            return v
        if not documents.validate(v, party_type):
            raise ValueError(f"Invalid {documents.label(party_type)} number.")
        return v

    @field_validator("postal_code")
    @classmethod
    def validate_postal_code(cls, v: str) -> str:
        return _check_postal_code(v)


# ---------------------------------------------------------------------------
# Patch DTO
# ---------------------------------------------------------------------------


class UpdateClientDTO(BaseModel):
    """Immutable DTO for client update requests.

    All fields are optional.  The checksum is not checked here because
    the party type may come from the stored record; the service
    re-validates the merged result.
    """

    model_config = ConfigDict(frozen=True)

    party_type: DocumentKind | None = None
    legal_name: str | None = Field(default=None, min_length=1, max_length=255)
    trade_name: str | None = Field(default=None, max_length=255)
    document: str | None = None
    email: EmailStr | None = None
    phone: str | None = Field(default=None, max_length=20)
    postal_code: str | None = None
    street: str | None = None
    number: str | None = Field(default=None, max_length=20)
    complement: str | None = None
    neighborhood: str | None = None
    city: str | None = None
    state: str | None = Field(default=None, max_length=2)

    @field_validator("document", "postal_code", mode="before")
    @classmethod
    def sanitize_digits(cls, v: Any) -> Any:
        return _digits_only(v)

    @field_validator("email", mode="before")
    @classmethod
    def blank_email_is_none(cls, v: Any) -> Any:
        return v or None

    @field_validator("state", mode="before")
    @classmethod
    def uppercase_state(cls, v: Any) -> Any:
        return v.upper() if isinstance(v, str) else v

    @field_validator("party_type", "legal_name", "document")
    @classmethod
    def reject_explicit_null(cls, v: Any, info: ValidationInfo) -> Any:
        # Defaults are not validated, so ``None`` here was sent explicitly.
        if v is None or v == "":
            raise ValueError(f"{info.field_name} cannot be cleared.")
        return v

    @field_validator("legal_name")
    @classmethod
    def legal_name_must_not_be_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Legal name must not be blank.")
        return v.strip()

    @field_validator("postal_code")
    @classmethod
    def validate_postal_code(cls, v: str | None) -> str | None:
        return _check_postal_code(v)

    def changes(self) -> Dict[str, Any]:
        """Fields explicitly sent by the caller; cleared optionals become ``""``."""
        data = self.model_dump(include=self.model_fields_set)
        return {name: "" if value is None else value for name, value in data.items()}
