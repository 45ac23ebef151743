# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

import unittest
from unittest.mock import MagicMock

from azure.core.credentials import TokenCredential

from odata_query.client import ODataClient
from odata_query.core.config import ODataConfig
from odata_query.core.errors import ValidationError
from odata_query.core.provider import RequestProvider
from odata_query.core.request import ODataRequest
from odata_query.core.telemetry import NoOpTelemetryManager, TelemetryConfig, TelemetryManager


class TestODataClient(unittest.TestCase):
    def setUp(self):
        """Set up test fixtures before each test method."""
        self.mock_credential = MagicMock(spec=TokenCredential)
        self.mock_credential.get_token.return_value = MagicMock(token="token-abc")
        self.base_url = "https://svc.example.com/odata/"

    def test_requires_base_url(self):
        with self.assertRaises(ValueError):
            ODataClient("", self.mock_credential)

    def test_requires_token_credential(self):
        with self.assertRaises(TypeError):
            ODataClient(self.base_url, object())

    def test_rejects_invalid_max_pages(self):
        with self.assertRaises(ValidationError):
            ODataClient(self.base_url, self.mock_credential, ODataConfig(max_pages=0))

    def test_is_request_provider(self):
        client = ODataClient(self.base_url, self.mock_credential)
        self.assertIsInstance(client, RequestProvider)

    def test_service_root(self):
        client = ODataClient(self.base_url, self.mock_credential)
        self.assertEqual(client.service_root, "https://svc.example.com/odata")

        client = ODataClient(self.base_url, self.mock_credential, ODataConfig(api_path="/api/v1/"))
        self.assertEqual(client.service_root, "https://svc.example.com/odata/api/v1")

    def test_new_request_carries_auth_and_base_url(self):
        client = ODataClient(self.base_url, self.mock_credential)

        request = client.new_request()

        self.assertIsInstance(request, ODataRequest)
        self.assertEqual(request.base_url, "https://svc.example.com/odata")
        self.assertEqual(request.headers["Authorization"], "Bearer token-abc")
        self.assertEqual(request.headers["OData-Version"], "4.0")
        self.assertEqual(request.headers["OData-MaxVersion"], "4.0")
        self.assertEqual(request.headers["Accept"], "application/json")
        self.assertNotIn("Prefer", request.headers)
        self.mock_credential.get_token.assert_called_once_with("https://svc.example.com/odata/.default")

    def test_new_request_is_fresh_each_time(self):
        client = ODataClient(self.base_url, self.mock_credential)

        first = client.new_request()
        first.set_query_param("$top", "1")
        second = client.new_request()

        self.assertIsNot(first, second)
        self.assertEqual(second.query_params, {})
        self.assertEqual(self.mock_credential.get_token.call_count, 2)

    def test_page_size_prefer_header(self):
        client = ODataClient(self.base_url, self.mock_credential, ODataConfig(page_size=50))
        self.assertEqual(client.new_request().headers["Prefer"], "odata.maxpagesize=50")

    def test_credential_failure_propagates(self):
        self.mock_credential.get_token.side_effect = RuntimeError("auth failed")
        client = ODataClient(self.base_url, self.mock_credential)

        with self.assertRaises(RuntimeError):
            client.query.builder("People").get_all()

    def test_telemetry_manager_from_config(self):
        client = ODataClient(self.base_url, self.mock_credential)
        self.assertIsInstance(client._telemetry, NoOpTelemetryManager)

        config = ODataConfig(telemetry=TelemetryConfig(enable_logging=True))
        client = ODataClient(self.base_url, self.mock_credential, config)
        self.assertIsInstance(client._telemetry, TelemetryManager)

    def test_http_timeout_from_config(self):
        client = ODataClient(self.base_url, self.mock_credential, ODataConfig(http_timeout=7.0))
        self.assertEqual(client._get_http().default_timeout, 7.0)


if __name__ == "__main__":
    unittest.main()
