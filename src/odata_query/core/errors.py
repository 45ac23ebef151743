# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Structured exceptions raised by the OData query client.

Only failures the query layer itself classifies are represented here. Errors
raised while building or sending a request (network failures from
:mod:`requests`, credential failures, provider failures) propagate to the
caller unchanged.
"""

from __future__ import annotations

import datetime as _dt
from typing import Any, Dict, Optional

from ._error_codes import (
    PAGINATION_MAX_PAGES_EXCEEDED,
    _http_subcode,
    _is_transient_status,
)


class ODataError(Exception):
    """Base structured error for the OData query client."""

    def __init__(
        self,
        message: str,
        *,
        code: str,
        subcode: Optional[str] = None,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
        source: Optional[str] = None,
        is_transient: bool = False,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.subcode = subcode
        self.status_code = status_code
        self.details = details or {}
        self.source = source or "client"
        self.is_transient = is_transient
        self.timestamp = _dt.datetime.now(_dt.timezone.utc).isoformat().replace("+00:00", "Z")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "message": self.message,
            "code": self.code,
            "subcode": self.subcode,
            "status_code": self.status_code,
            "details": self.details,
            "source": self.source,
            "is_transient": self.is_transient,
            "timestamp": self.timestamp,
        }

    def __repr__(self) -> str:  # pragma: no cover
        return f"{self.__class__.__name__}(code={self.code!r}, subcode={self.subcode!r}, message={self.message!r})"


class RequestError(ODataError):
    """
    The HTTP exchange completed but the response was classified as an error.

    :param status: Numeric HTTP status code.
    :type status: :class:`int`
    :param status_text: Status line text, e.g. ``"404 Not Found"``.
    :type status_text: :class:`str`
    :param body: Raw response body.
    :type body: :class:`str`
    """

    def __init__(self, status: int, status_text: str, body: str) -> None:
        self.status = status
        self.status_text = status_text
        self.body = body
        super().__init__(
            f"request failed with status {status} - {status_text}: {body!r}",
            code="http_error",
            subcode=_http_subcode(status),
            status_code=status,
            details={"status_text": status_text, "body": body},
            source="server",
            is_transient=_is_transient_status(status),
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RequestError):
            return NotImplemented
        return (self.status, self.status_text, self.body) == (other.status, other.status_text, other.body)

    def __hash__(self) -> int:
        return hash((self.status, self.status_text, self.body))


class DeserializationError(ODataError):
    def __init__(self, message: str, *, subcode: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="deserialization_error", subcode=subcode, details=details, source="client")


class PaginationLimitError(ODataError):
    """Raised when a collection needs more pages than ``max_pages`` allows."""

    def __init__(self, max_pages: int, next_link: str) -> None:
        super().__init__(
            f"pagination stopped after {max_pages} pages; next link was {next_link!r}",
            code="pagination_error",
            subcode=PAGINATION_MAX_PAGES_EXCEEDED,
            details={"max_pages": max_pages, "next_link": next_link},
            source="client",
        )
        self.max_pages = max_pages
        self.next_link = next_link


class ValidationError(ODataError):
    def __init__(self, message: str, *, subcode: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="validation_error", subcode=subcode, details=details, source="client")


__all__ = [
    "ODataError",
    "RequestError",
    "DeserializationError",
    "PaginationLimitError",
    "ValidationError",
]
