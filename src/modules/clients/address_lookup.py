"""Postal code (CEP) to address lookup.

Used only to pre-fill address fields while a client is being typed in;
nothing on the create/update path calls it, so a slow or broken upstream
never affects registration.

- ``ViaCepAddressLookup`` calls the ViaCEP JSON API with ``httpx`` and a
  hard timeout.
- ``CachedAddressLookup`` keeps successful answers in the Django cache
  (Redis in production).
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Optional, Protocol

import httpx
import structlog
from django.conf import settings
from django.core.cache import cache as default_cache

from modules.clients.documents import normalize

logger = structlog.get_logger(__name__)

POSTAL_CODE_LENGTH = 8


class AddressNotFound(Exception):
    """The upstream service does not know this postal code."""


class AddressLookupUnavailable(Exception):
    """The upstream service could not be reached or answered garbage."""


@dataclass(frozen=True)
class Address:
    postal_code: str
    street: str = ""
    complement: str = ""
    neighborhood: str = ""
    city: str = ""
    state: str = ""


class IAddressLookup(Protocol):
    def lookup(self, postal_code: str) -> Address: ...


def normalize_postal_code(raw: Optional[str]) -> str:
    """Return the 8-digit postal code.

    Raises:
        ValueError: if the input does not contain exactly 8 digits.
    """
    digits = normalize(raw)
    if len(digits) != POSTAL_CODE_LENGTH:
        raise ValueError(f"Postal code must have {POSTAL_CODE_LENGTH} digits.")
    return digits


class ViaCepAddressLookup:
    """``IAddressLookup`` backed by https://viacep.com.br."""

    def __init__(self, url_template: str, timeout: float) -> None:
        self._url_template = url_template
        self._timeout = timeout

    def lookup(self, postal_code: str) -> Address:
        log = logger.bind(postal_code=postal_code)
        url = self._url_template.format(postal_code=postal_code)
        try:
            response = httpx.get(url, timeout=self._timeout)
            if response.status_code in (400, 404):
                raise AddressNotFound(postal_code)
            response.raise_for_status()
            payload: dict[str, Any] = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            log.warning("address_lookup.unavailable", error=str(exc))
            raise AddressLookupUnavailable(str(exc)) from exc

        # ViaCEP answers 200 with {"erro": true} for unknown codes.
        if payload.get("erro"):
            log.info("address_lookup.not_found")
            raise AddressNotFound(postal_code)

        log.info("address_lookup.found")
        return Address(
            postal_code=postal_code,
            street=payload.get("logradouro") or "",
            complement=payload.get("complemento") or "",
            neighborhood=payload.get("bairro") or "",
            city=payload.get("localidade") or "",
            state=payload.get("uf") or "",
        )


class CachedAddressLookup:
    """Decorator that caches successful lookups; misses are not cached."""

    key_prefix = "address_lookup"

    def __init__(self, inner: IAddressLookup, ttl: int, cache: Any = None) -> None:
        self._inner = inner
        self._ttl = ttl
        self._cache = cache if cache is not None else default_cache

    def lookup(self, postal_code: str) -> Address:
        key = f"{self.key_prefix}:{postal_code}"
        cached = self._cache.get(key)
        if cached is not None:
            return Address(**cached)
        address = self._inner.lookup(postal_code)
        self._cache.set(key, asdict(address), self._ttl)
        return address


def get_address_lookup() -> IAddressLookup:
    """Build the configured lookup (ViaCEP behind the cache)."""
    return CachedAddressLookup(
        ViaCepAddressLookup(
            url_template=settings.ADDRESS_LOOKUP_URL,
            timeout=settings.ADDRESS_LOOKUP_TIMEOUT,
        ),
        ttl=settings.ADDRESS_LOOKUP_CACHE_TTL,
    )
