# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Request provider protocol consumed by queries and the page collector."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from .request import ODataRequest


@runtime_checkable
class RequestProvider(Protocol):
    """
    Produces ready-to-send requests for an OData service.

    Implementations return a new request scoped to the service base URL and
    carrying current authentication on every call. The query layer calls
    :meth:`new_request` once per HTTP exchange, including once per page while
    following next links, and never reuses a returned request.

    Any exception raised by :meth:`new_request` propagates unchanged to the
    caller of the terminal query operation.

    Example:
        A provider for an unauthenticated test service::

            class AnonymousProvider:
                def __init__(self, base_url):
                    self._http = _HttpClient()
                    self._base_url = base_url

                def new_request(self) -> ODataRequest:
                    return ODataRequest(self._base_url, self._http)
    """

    def new_request(self) -> "ODataRequest":
        """Return a new authenticated, base-URL-scoped request."""
        ...


__all__ = ["RequestProvider"]
