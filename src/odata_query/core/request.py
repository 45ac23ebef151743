# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Request objects handed out by a :class:`~odata_query.core.provider.RequestProvider`.

An :class:`ODataRequest` already carries the service base URL, authentication
headers and the HTTP client; the query layer only attaches query options and
path parameters before issuing a GET.
"""

from __future__ import annotations

import uuid
from typing import Any, Dict, Mapping, Optional, Union
from urllib.parse import quote, urlencode

import requests

from ..common.constants import OPERATION_GET
from ._error_codes import DESERIALIZATION_NOT_JSON
from ._http import _HttpClient
from .errors import DeserializationError
from .telemetry import NoOpTelemetryManager, TelemetryManager


class ODataHttpResponse:
    """
    Thin view over a :class:`requests.Response` exposing what the query layer classifies on.

    :param response: The underlying HTTP response.
    :type response: :class:`requests.Response`
    """

    def __init__(self, response: requests.Response) -> None:
        self._response = response

    @property
    def status_code(self) -> int:
        return self._response.status_code

    @property
    def status(self) -> str:
        """Status line text, e.g. ``"404 Not Found"``."""
        reason = getattr(self._response, "reason", None) or ""
        return f"{self._response.status_code} {reason}".strip()

    @property
    def text(self) -> str:
        return self._response.text or ""

    @property
    def headers(self) -> Mapping[str, str]:
        return self._response.headers

    @property
    def is_error(self) -> bool:
        return self._response.status_code >= 400

    def json(self) -> Any:
        """
        Decode the response body as JSON.

        :raises ~odata_query.core.errors.DeserializationError: If the body is not valid JSON.
        """
        try:
            return self._response.json()
        except ValueError as e:
            raise DeserializationError(
                f"response body is not valid JSON: {e}",
                subcode=DESERIALIZATION_NOT_JSON,
                details={"body_excerpt": self.text[:200]},
            ) from e


class ODataRequest:
    """
    A single, ready-to-send OData GET request.

    Instances are produced fresh by a request provider for every HTTP exchange
    and are not meant to be reused once :meth:`get` has been called.

    :param base_url: Service root that relative URLs are resolved against.
    :type base_url: :class:`str`
    :param http: HTTP client used to send the request.
    :type http: ~odata_query.core._http._HttpClient
    :param headers: Headers sent with the request (authentication included).
    :type headers: :class:`dict` | None
    :param telemetry: Telemetry manager wrapping the exchange.
    """

    def __init__(
        self,
        base_url: str,
        http: _HttpClient,
        headers: Optional[Dict[str, str]] = None,
        telemetry: Optional[Union[TelemetryManager, NoOpTelemetryManager]] = None,
    ) -> None:
        self.base_url = (base_url or "").rstrip("/")
        self.headers: Dict[str, str] = dict(headers or {})
        self.query_params: Dict[str, str] = {}
        self.path_params: Dict[str, str] = {}
        self._http = http
        self._telemetry = telemetry or NoOpTelemetryManager()

    def set_query_param(self, name: str, value: str) -> "ODataRequest":
        self.query_params[name] = value
        return self

    def set_query_params(self, params: Mapping[str, str]) -> "ODataRequest":
        self.query_params.update(params)
        return self

    def set_path_params(self, params: Mapping[str, str]) -> "ODataRequest":
        self.path_params.update(params)
        return self

    def resolve_url(self, url: str) -> str:
        """
        Resolve ``url`` against the base URL and substitute path parameters.

        Absolute URLs (such as next links) are used as-is apart from path
        parameter substitution. ``{name}`` placeholders are replaced with the
        percent-encoded value.

        :param url: Relative path or absolute URL.
        :type url: :class:`str`
        :return: Absolute URL.
        :rtype: :class:`str`
        """
        for name, value in self.path_params.items():
            url = url.replace("{" + name + "}", quote(str(value), safe=""))
        if url.lower().startswith(("http://", "https://")):
            return url
        if not url:
            return self.base_url
        return f"{self.base_url}/{url.lstrip('/')}"

    def _encoded_query(self) -> Optional[str]:
        if not self.query_params:
            return None
        # Spaces are sent as %20 rather than '+'
        return urlencode(self.query_params, quote_via=quote, safe="$")

    def get(self, url: str, *, operation: str = OPERATION_GET) -> ODataHttpResponse:
        """
        Issue the GET request.

        :param url: Relative path or absolute URL to fetch.
        :type url: :class:`str`
        :param operation: Operation name reported to telemetry.
        :type operation: :class:`str`
        :return: The HTTP response, whatever its status.
        :rtype: ~odata_query.core.request.ODataHttpResponse
        :raises requests.exceptions.RequestException: If the request cannot be sent.
        """
        target = self.resolve_url(url)
        headers = dict(self.headers)
        headers.update(self._telemetry.get_additional_headers())
        with self._telemetry.trace_request(operation, "GET", target, str(uuid.uuid4())) as ctx:
            response = self._http._request("get", target, headers=headers, params=self._encoded_query())
            content = getattr(response, "content", None)
            size = len(content) if isinstance(content, (bytes, bytearray)) else None
            self._telemetry.record_response(ctx, response.status_code, size)
        return ODataHttpResponse(response)


__all__ = ["ODataRequest", "ODataHttpResponse"]
