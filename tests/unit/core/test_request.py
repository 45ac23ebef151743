# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Tests for ODataRequest and ODataHttpResponse."""

from unittest.mock import MagicMock
from urllib.parse import parse_qs

import pytest

from odata_query.core.errors import DeserializationError
from odata_query.core.request import ODataHttpResponse, ODataRequest
from odata_query.core.telemetry import TelemetryConfig, TelemetryManager

BASE_URL = "https://svc.example.com/odata"


class TestResolveUrl:
    """URL resolution and path parameter substitution."""

    def test_relative_path_joined(self):
        req = ODataRequest(BASE_URL + "/", MagicMock())
        assert req.resolve_url("People") == BASE_URL + "/People"
        assert req.resolve_url("/People") == BASE_URL + "/People"

    def test_empty_path_is_base(self):
        assert ODataRequest(BASE_URL, MagicMock()).resolve_url("") == BASE_URL

    def test_absolute_url_kept(self):
        req = ODataRequest(BASE_URL, MagicMock())
        assert req.resolve_url("https://other.example.com/x?$skiptoken=1") == "https://other.example.com/x?$skiptoken=1"

    def test_path_params_escaped(self):
        req = ODataRequest(BASE_URL, MagicMock()).set_path_params({"id": "a/b c", "n": 5})
        assert req.resolve_url("People('{id}')/Trips({n})") == BASE_URL + "/People('a%2Fb%20c')/Trips(5)"

    def test_unknown_placeholder_left_alone(self):
        req = ODataRequest(BASE_URL, MagicMock()).set_path_params({"id": "1"})
        assert req.resolve_url("People({other})") == BASE_URL + "/People({other})"


class TestGet:
    """Sending the request."""

    def test_sends_headers_and_encoded_params(self, make_response):
        http = MagicMock()
        http._request.return_value = make_response(200, {"value": []})
        req = ODataRequest(BASE_URL, http, headers={"Authorization": "Bearer t"})
        req.set_query_param("$filter", "a eq 'x y'").set_query_params({"$select": "a,b"})

        resp = req.get("People")

        args, kwargs = http._request.call_args
        assert args == ("get", BASE_URL + "/People")
        assert kwargs["headers"] == {"Authorization": "Bearer t"}
        assert kwargs["params"].startswith("$filter=")
        assert parse_qs(kwargs["params"]) == {"$filter": ["a eq 'x y'"], "$select": ["a,b"]}
        assert resp.status_code == 200

    def test_no_params_sends_none(self, make_response):
        http = MagicMock()
        http._request.return_value = make_response(200, {})
        ODataRequest(BASE_URL, http).get("People")
        assert http._request.call_args.kwargs["params"] is None

    def test_telemetry_wraps_exchange(self, make_response):
        hook = MagicMock()
        hook.get_additional_headers.return_value = {"x-trace": "abc"}
        telemetry = TelemetryManager(TelemetryConfig(hooks=[hook]))
        http = MagicMock()
        http._request.return_value = make_response(404, "missing")

        ODataRequest(BASE_URL, http, telemetry=telemetry).get("People", operation="query.get_all")

        assert http._request.call_args.kwargs["headers"]["x-trace"] == "abc"
        ctx = hook.on_request_start.call_args[0][0]
        assert ctx.operation == "query.get_all"
        assert ctx.url == BASE_URL + "/People"
        response_ctx = hook.on_request_end.call_args[0][1]
        assert response_ctx.status_code == 404
        assert response_ctx.response_size == len(b"missing")

    def test_telemetry_sees_transport_error(self):
        hook = MagicMock()
        telemetry = TelemetryManager(TelemetryConfig(hooks=[hook]))
        http = MagicMock()
        http._request.side_effect = ConnectionError("down")

        with pytest.raises(ConnectionError):
            ODataRequest(BASE_URL, http, telemetry=telemetry).get("People")

        hook.on_request_error.assert_called_once()


class TestODataHttpResponse:
    """Response classification."""

    def test_status_text(self, make_response):
        resp = ODataHttpResponse(make_response(404, "not found"))
        assert resp.status == "404 Not Found"
        assert resp.text == "not found"
        assert resp.is_error is True

    def test_success_is_not_error(self, make_response):
        assert ODataHttpResponse(make_response(204)).is_error is False
        assert ODataHttpResponse(make_response(399, reason="")).is_error is False

    def test_missing_reason(self, make_response):
        assert ODataHttpResponse(make_response(418, "x", reason="")).status == "418"

    def test_json(self, make_response):
        assert ODataHttpResponse(make_response(200, {"a": 1})).json() == {"a": 1}

    def test_invalid_json(self, make_response):
        with pytest.raises(DeserializationError) as ei:
            ODataHttpResponse(make_response(200, "not json")).json()
        assert ei.value.subcode == "deserialization_not_json"
        assert ei.value.details["body_excerpt"] == "not json"
