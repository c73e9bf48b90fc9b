"""CPF/CNPJ normalisation, checksum validation and display formatting.

Pure functions with no Django imports, so the same rules run on the
submission path (DTOs), in the service after a merge patch, in the
model ``clean()`` used by the admin, and in tests with literal strings.

- ``normalize``: keep ASCII digits only (canonical storage form).
- ``validate``: length and repeated-digit guards, then the mod-11
  check digits through ``validate-docbr``.
- ``format_document``: punctuated display form, progressive for
  partial input.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import StrEnum

from validate_docbr import CNPJ, CPF


class DocumentKind(StrEnum):
    """Which national identifier a party carries."""

    INDIVIDUAL = "INDIVIDUAL"  # CPF
    ORGANIZATION = "ORGANIZATION"  # CNPJ


_NON_DIGITS = re.compile(r"[^0-9]")

_LENGTHS = {
    DocumentKind.INDIVIDUAL: 11,
    DocumentKind.ORGANIZATION: 14,
}

# (group size, separator emitted after the group)
_GROUPS: dict[DocumentKind, tuple[tuple[int, str], ...]] = {
    DocumentKind.INDIVIDUAL: ((3, "."), (3, "."), (3, "-"), (2, "")),
    DocumentKind.ORGANIZATION: ((2, "."), (3, "."), (3, "/"), (4, "-"), (2, "")),
}

_LABELS = {
    DocumentKind.INDIVIDUAL: "CPF",
    DocumentKind.ORGANIZATION: "CNPJ",
}


# ---------------------------------------------------------------------------
# Normalisation
# ---------------------------------------------------------------------------


def normalize(raw_input: str | None) -> str:
    """Strip every character that is not an ASCII digit.

    ``None`` and ``""`` yield ``""``.  No length clamping happens here.
    """
    if not raw_input:
        return ""
    return _NON_DIGITS.sub("", raw_input)


def expected_length(kind: DocumentKind | str) -> int:
    return _LENGTHS[DocumentKind(kind)]


def label(kind: DocumentKind | str) -> str:
    """Human label for error messages (``CPF`` / ``CNPJ``)."""
    return _LABELS[DocumentKind(kind)]


# ---------------------------------------------------------------------------
# Checksum (validate-docbr)
# ---------------------------------------------------------------------------

_VALIDATORS = {
    DocumentKind.INDIVIDUAL: CPF(),
    DocumentKind.ORGANIZATION: CNPJ(),
}


def check_digits(base: str, kind: DocumentKind | str) -> str:
    """Return the two check digits that complete ``base``.

    ``base`` must be the first 9 (CPF) or 12 (CNPJ) digits.  The suffix
    is the one ``validate-docbr`` accepts, so the result always agrees
    with ``validate``.

    Raises:
        ValueError: if ``base`` has the wrong length or non-digits, or
            only completes to a rejected repeated-digit number.
    """
    kind = DocumentKind(kind)
    size = expected_length(kind) - 2
    if len(base) != size or _NON_DIGITS.search(base):
        raise ValueError(f"{label(kind)} base must have exactly {size} digits.")
    validator = _VALIDATORS[kind]
    for suffix in (f"{n:02d}" for n in range(100)):
        if validator.validate(base + suffix):
            return suffix
    raise ValueError(f"{label(kind)} base {base!r} has no valid completion.")


def validate(digits: str, kind: DocumentKind | str) -> bool:
    """Return ``True`` when ``digits`` is a checksum-valid CPF/CNPJ.

    Only canonical input is accepted: exactly 11 or 14 ASCII digits.
    A wrong length is an ordinary ``False``, not an error.  Strings made
    of a single repeated digit satisfy the arithmetic but are rejected.
    """
    kind = DocumentKind(kind)
    length = expected_length(kind)
    if not isinstance(digits, str) or len(digits) != length:
        return False
    if _NON_DIGITS.search(digits):
        return False
    if digits == digits[0] * length:
        return False
    return _VALIDATORS[kind].validate(digits)


# ---------------------------------------------------------------------------
# Presentation
# ---------------------------------------------------------------------------


def format_document(value: str | None, kind: DocumentKind | str) -> str:
    """Format digits as ``000.000.000-00`` or ``00.000.000/0000-00``.

    Input is normalised and clamped to the kind's length.  With partial
    input only the separators whose preceding group is complete and
    followed by at least one more digit are emitted, so the function can
    run on every keystroke.
    """
    kind = DocumentKind(kind)
    digits = normalize(value)[: expected_length(kind)]
    parts: list[str] = []
    position = 0
    for size, separator in _GROUPS[kind]:
        chunk = digits[position : position + size]
        if not chunk:
            break
        parts.append(chunk)
        position += size
        if len(chunk) == size and position < len(digits):
            parts.append(separator)
    return "".join(parts)


def mask_document(digits: str | None) -> str:
    """Mask a document, showing only the last 4 digits."""
    suffix = digits[-4:] if digits else "????"
    return f"***{suffix}"


# ---------------------------------------------------------------------------
# Value object
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class DocumentValue:
    """A document as entered, with its canonical digits and validity."""

    raw_input: str
    kind: DocumentKind
    digits: str = field(init=False)
    is_valid: bool = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "kind", DocumentKind(self.kind))
        digits = normalize(self.raw_input)
        object.__setattr__(self, "digits", digits)
        object.__setattr__(self, "is_valid", validate(digits, self.kind))

    @classmethod
    def parse(cls, raw_input: str | None, kind: DocumentKind | str) -> DocumentValue:
        return cls(raw_input=raw_input or "", kind=DocumentKind(kind))

    @property
    def formatted(self) -> str:
        return format_document(self.digits, self.kind)

    def __str__(self) -> str:
        return f"{label(self.kind)} {mask_document(self.digits)}"
