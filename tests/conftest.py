# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Shared pytest fixtures and test doubles for the OData query client tests.

The doubles replace the HTTP layer only: requests are built by the real
:class:`~odata_query.core.request.ODataRequest` and responses are real
:class:`requests.Response` objects, so query encoding, URL resolution and
status classification run exactly as in production.
"""

import json
from http import HTTPStatus

import pytest
import requests

from odata_query.core.request import ODataRequest

BASE_URL = "https://svc.example.com/odata"


def _make_response(status=200, body=None, reason=None):
    """Build a :class:`requests.Response` with the given status and JSON or text body."""
    r = requests.Response()
    r.status_code = status
    r.reason = reason if reason is not None else HTTPStatus(status).phrase
    if body is None:
        r._content = b""
    elif isinstance(body, (dict, list)):
        r._content = json.dumps(body).encode("utf-8")
    else:
        r._content = str(body).encode("utf-8")
    r.encoding = "utf-8"
    return r


def _page(items, next_link="", count=None, context=BASE_URL + "/$metadata#People"):
    """Collection response body for one page."""
    body = {"@odata.context": context, "value": items}
    if next_link:
        body["@odata.nextLink"] = next_link
    if count is not None:
        body["@odata.count"] = count
    return body


class RecordingHTTP:
    """Stands in for ``_HttpClient``: returns queued responses and records every call.

    Queued exceptions are raised instead of returned.
    """

    def __init__(self, responses):
        self._responses = list(responses)
        self.calls = []

    def _request(self, method, url, **kwargs):
        self.calls.append({"method": method, "url": url, **kwargs})
        if not self._responses:
            raise AssertionError("No more responses")
        item = self._responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item


class StubProvider:
    """Request provider counting ``new_request`` calls and sharing one ``RecordingHTTP``."""

    def __init__(self, responses, base_url=BASE_URL):
        self.http = RecordingHTTP(responses)
        self.base_url = base_url
        self.calls = 0

    def new_request(self):
        self.calls += 1
        return ODataRequest(self.base_url, self.http, headers={"Authorization": "Bearer test-token"})


@pytest.fixture
def stub_provider():
    """Factory fixture: ``stub_provider([make_response(...), ...])``."""

    def _factory(responses, base_url=BASE_URL):
        return StubProvider(responses, base_url=base_url)

    return _factory


@pytest.fixture
def three_page_responses():
    """Three pages: 2 items + link A, 1 item + link B, 1 item + no link."""
    return [
        _make_response(200, _page([{"id": 1}, {"id": 2}], next_link=BASE_URL + "/People?$skiptoken=A")),
        _make_response(200, _page([{"id": 3}], next_link=BASE_URL + "/People?$skiptoken=B")),
        _make_response(200, _page([{"id": 4}])),
    ]


@pytest.fixture
def make_response():
    """``make_response(status, body, reason=None)`` -> :class:`requests.Response`."""
    return _make_response


@pytest.fixture
def page():
    """``page(items, next_link="", count=None)`` -> collection response body."""
    return _page
