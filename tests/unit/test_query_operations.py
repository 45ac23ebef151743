# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Tests for the client.query namespace."""

from unittest.mock import MagicMock
from urllib.parse import parse_qs

import pytest
from azure.core.credentials import TokenCredential

from odata_query.client import ODataClient
from odata_query.core.config import ODataConfig
from odata_query.models.order import Direction
from odata_query.models.query_builder import Query
from odata_query.operations.query import QueryOperations

BASE_URL = "https://svc.example.com/odata"


class RecordingHTTP:
    def __init__(self, responses):
        self._responses = list(responses)
        self.calls = []

    def _request(self, method, url, **kwargs):
        self.calls.append({"method": method, "url": url, **kwargs})
        return self._responses.pop(0)


@pytest.fixture
def client():
    credential = MagicMock(spec=TokenCredential)
    credential.get_token.return_value = MagicMock(token="tok")
    return ODataClient(BASE_URL, credential, ODataConfig(max_pages=10))


def install_http(client, responses):
    http = RecordingHTTP(responses)
    client._http = http
    return http


class TestQueryOperations:
    def test_namespace_exists(self, client):
        assert isinstance(client.query, QueryOperations)

    def test_builder_is_bound_to_client(self, client):
        query = client.query.builder("People")
        assert isinstance(query, Query)
        assert query.provider is client
        assert query.url == "People"
        assert query.config.max_pages == 10

    def test_builder_get_all_end_to_end(self, client, make_response, page):
        http = install_http(
            client,
            [
                make_response(200, page([{"id": 1}, {"id": 2}], next_link=BASE_URL + "/People?$skiptoken=2")),
                make_response(200, page([{"id": 3}])),
            ],
        )

        items = client.query.builder("People").filter("Age gt 30").get_all()

        assert items == [{"id": 1}, {"id": 2}, {"id": 3}]
        assert [c["url"] for c in http.calls] == [BASE_URL + "/People", BASE_URL + "/People?$skiptoken=2"]
        assert all(c["headers"]["Authorization"] == "Bearer tok" for c in http.calls)
        assert client.auth.credential.get_token.call_count == 2

    def test_get_all_keywords(self, client, make_response, page):
        http = install_http(client, [make_response(200, page([]))])

        client.query.get_all(
            "People",
            select=["FirstName", "LastName"],
            filter="Age gt 30",
            orderby=["LastName", ("Age", Direction.DESCENDING)],
            search="bike",
            expand=["Trips"],
            count=True,
            skip=5,
            top=10,
        )

        assert parse_qs(http.calls[0]["params"]) == {
            "$count": ["true"],
            "$expand": ["Trips"],
            "$filter": ["Age gt 30"],
            "$orderby": ["LastName,Age desc"],
            "$search": ["bike"],
            "$select": ["FirstName,LastName"],
            "$skip": ["5"],
            "$top": ["10"],
        }

    def test_get_single_with_path_params(self, client, make_response):
        http = install_http(client, [make_response(200, {"Name": "American Airlines"})])

        result = client.query.get(
            "Airlines('{code}')",
            lambda d: d["Name"],
            select=["Name"],
            path_params={"code": "AA"},
        )

        assert result == "American Airlines"
        assert http.calls[0]["url"] == BASE_URL + "/Airlines('AA')"
        assert parse_qs(http.calls[0]["params"]) == {"$select": ["Name"]}
