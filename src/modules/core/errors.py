"""Standardised error responses.

Every error body has the same shape::

    {"type": "validation_error" | "client_error" | "server_error",
     "errors": [{"code": "...", "detail": "...", "attr": "field" | None}]}

Views build it with ``error_response``; ``standardized_exception_handler``
is installed as DRF's ``EXCEPTION_HANDLER`` so authentication, parse and
throttling errors raised by DRF itself look the same.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

ErrorItem = Dict[str, Optional[str]]


def _error_type(status_code: int) -> str:
    if status_code == status.HTTP_400_BAD_REQUEST:
        return "validation_error"
    if status_code >= 500:
        return "server_error"
    return "client_error"


def error_response(
    status_code: int, errors: List[ErrorItem], headers: Optional[Dict[str, str]] = None
) -> Response:
    return Response(
        {"type": _error_type(status_code), "errors": errors},
        status=status_code,
        headers=headers,
    )


def error_item(code: str, detail: str, attr: Optional[str] = None) -> ErrorItem:
    return {"code": code, "detail": detail, "attr": attr}


def pydantic_errors(exc: PydanticValidationError) -> List[ErrorItem]:
    """One item per Pydantic error, ``attr`` is the dotted field location."""
    items = []
    for err in exc.errors():
        attr = ".".join(str(part) for part in err["loc"]) or None
        items.append(error_item(err["type"], err["msg"], attr))
    return items


def _flatten(data: Any, attr: Optional[str] = None) -> List[ErrorItem]:
    if isinstance(data, dict):
        items: List[ErrorItem] = []
        for key, value in data.items():
            if key in ("detail", "non_field_errors"):
                items.extend(_flatten(value, attr))
            else:
                items.extend(_flatten(value, key if attr is None else f"{attr}.{key}"))
        return items
    if isinstance(data, list):
        return [item for value in data for item in _flatten(value, attr)]
    return [error_item(getattr(data, "code", "error"), str(data), attr)]


def standardized_exception_handler(exc: Exception, context: Dict[str, Any]) -> Optional[Response]:
    """Wrap DRF's default handler; unhandled exceptions still propagate."""
    response = exception_handler(exc, context)
    if response is None:
        return None
    response.data = {
        "type": _error_type(response.status_code),
        "errors": _flatten(response.data),
    }
    return response
