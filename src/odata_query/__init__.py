# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Client-side query builder for paginated, filterable OData collections.

Example::

    from odata_query import ODataClient, Direction

    with ODataClient("https://services.example.com/odata", credential) as client:
        people = (client.query.builder("People")
                  .filter("Age gt 30")
                  .order_by("LastName", Direction.ASCENDING)
                  .get_all())
"""

from .client import ODataClient
from .core.config import ODataConfig
from .core.errors import (
    ODataError,
    RequestError,
    DeserializationError,
    PaginationLimitError,
    ValidationError,
)
from .core.provider import RequestProvider
from .core.request import ODataRequest, ODataHttpResponse
from .core.results import ODataResponse
from .core.telemetry import TelemetryConfig
from .models.order import Direction, Order
from .models.query_builder import Query

__version__ = "0.1.0"

__all__ = [
    "ODataClient",
    "ODataConfig",
    "ODataError",
    "RequestError",
    "DeserializationError",
    "PaginationLimitError",
    "ValidationError",
    "RequestProvider",
    "ODataRequest",
    "ODataHttpResponse",
    "ODataResponse",
    "TelemetryConfig",
    "Direction",
    "Order",
    "Query",
]
