# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

from __future__ import annotations

from typing import Dict, Optional

import requests

from azure.core.credentials import TokenCredential

from .core._auth import _AuthManager
from .core._http import _HttpClient
from .core.config import ODataConfig
from .core.request import ODataRequest
from .core.telemetry import create_telemetry_manager
from .operations.query import QueryOperations


class ODataClient:
    """
    Client for querying an OData service.

    The client is the default :class:`~odata_query.core.provider.RequestProvider`:
    every call to :meth:`new_request` acquires a bearer token from the Azure
    Identity credential and returns a request scoped to the service root. Queries
    are built through the ``client.query`` namespace.

    **Context Manager Support (Recommended)**:
        Using the client as a context manager enables connection pooling and
        releases the pooled session on exit::

            with ODataClient(base_url, credential) as client:
                people = client.query.builder("People").filter("Age gt 30").get_all()

    :param base_url: Service URL, for example ``"https://services.example.com/odata"``.
        Trailing slash is automatically removed.
    :type base_url: :class:`str`
    :param credential: Azure Identity credential for authentication.
    :type credential: ~azure.core.credentials.TokenCredential
    :param config: Optional configuration for timeouts, paging and telemetry.
        If not provided, defaults are loaded from :meth:`~odata_query.core.config.ODataConfig.from_env`.
    :type config: ~odata_query.core.config.ODataConfig or None

    :raises ValueError: If ``base_url`` is missing or empty after trimming.

    Example:
        Without context manager::

            from azure.identity import DefaultAzureCredential
            from odata_query import ODataClient, Direction

            client = ODataClient("https://services.example.com/odata", DefaultAzureCredential())
            try:
                rows = (client.query.builder("Orders")
                        .order_by("OrderDate", Direction.DESCENDING)
                        .get_all())
            finally:
                client.close()
    """

    def __init__(
        self,
        base_url: str,
        credential: TokenCredential,
        config: Optional[ODataConfig] = None,
    ) -> None:
        self.auth = _AuthManager(credential)
        self._base_url = (base_url or "").rstrip("/")
        if not self._base_url:
            raise ValueError("base_url is required.")
        self._config = config or ODataConfig.from_env()
        self._telemetry = create_telemetry_manager(self._config.telemetry)
        self._http: Optional[_HttpClient] = None
        self._session: Optional[requests.Session] = None

        # Initialize operation namespaces
        self.query = QueryOperations(self)

    @property
    def config(self) -> ODataConfig:
        return self._config

    @property
    def service_root(self) -> str:
        """Base URL with the configured API path appended."""
        api_path = (self._config.api_path or "").strip("/")
        return f"{self._base_url}/{api_path}" if api_path else self._base_url

    def __enter__(self) -> "ODataClient":
        """
        Enter the context manager.

        Creates an HTTP session for connection pooling. All requests within
        the context reuse this session.

        :return: The client instance.
        :rtype: ODataClient
        """
        if self._session is None:
            self._session = requests.Session()
            # Rebuild the HTTP client so it picks up the session
            self._http = None
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """
        Exit the context manager with cleanup.

        Closes the HTTP session. Exceptions are not suppressed.
        """
        self.close()

    def close(self) -> None:
        """
        Explicitly close the client and release resources.

        Safe to call multiple times.
        """
        if self._http is not None:
            # Closes the pooled session, if any
            self._http.close()
            self._http = None
        elif self._session is not None:
            self._session.close()
        self._session = None

    def _get_http(self) -> _HttpClient:
        """Get or create the HTTP client, sharing the pooled session when one is open."""
        if self._http is None:
            self._http = _HttpClient(timeout=self._config.http_timeout, session=self._session)
        return self._http

    def _headers(self) -> Dict[str, str]:
        """Build standard OData headers with bearer auth."""
        scope = f"{self._base_url}/.default"
        token = self.auth._acquire_token(scope).access_token
        headers = {
            "Authorization": f"Bearer {token}",
            "Accept": "application/json",
            "OData-MaxVersion": "4.0",
            "OData-Version": "4.0",
        }
        if self._config.page_size is not None and self._config.page_size > 0:
            headers["Prefer"] = f"odata.maxpagesize={int(self._config.page_size)}"
        return headers

    def new_request(self) -> ODataRequest:
        """
        Return a new request scoped to the service root with current authentication.

        A token is acquired on every call; caching is left to the credential.

        :return: A ready-to-send request.
        :rtype: ~odata_query.core.request.ODataRequest
        :raises azure.core.exceptions.ClientAuthenticationError: If the credential cannot provide a token.
        """
        return ODataRequest(
            self.service_root,
            self._get_http(),
            headers=self._headers(),
            telemetry=self._telemetry,
        )


__all__ = ["ODataClient"]
