# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Constants for OData wire names and telemetry attributes.

Query option names and response annotation keys are case-sensitive and must be
sent and read exactly as defined here.
"""

# System query options
QUERY_COUNT = "$count"
QUERY_EXPAND = "$expand"
QUERY_FILTER = "$filter"
QUERY_ORDERBY = "$orderby"
QUERY_SEARCH = "$search"
QUERY_SELECT = "$select"
QUERY_SKIP = "$skip"
QUERY_TOP = "$top"

# Collection response annotations
ODATA_CONTEXT = "@odata.context"
ODATA_COUNT = "@odata.count"
ODATA_NEXT_LINK = "@odata.nextLink"
ODATA_NEXT_LINK_LEGACY = "odata.nextLink"
ODATA_VALUE = "value"

# Telemetry operation names
OPERATION_GET = "query.get"
OPERATION_GET_ALL = "query.get_all"
OPERATION_NEXT_PAGE = "query.next_page"

# OpenTelemetry span attributes
OTEL_ATTR_HTTP_METHOD = "http.request.method"
OTEL_ATTR_HTTP_URL = "url.full"
OTEL_ATTR_HTTP_STATUS_CODE = "http.response.status_code"
OTEL_ATTR_ODATA_OPERATION = "odata.operation"
OTEL_ATTR_ODATA_REQUEST_ID = "odata.client_request_id"
