# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Core infrastructure components for the OData query client.

This module contains the foundational components including authentication,
configuration, HTTP transport, request objects, response envelopes, telemetry,
and error handling.
"""

from .errors import (
    ODataError,
    RequestError,
    DeserializationError,
    PaginationLimitError,
    ValidationError,
)
from .results import ODataResponse

__all__ = [
    "ODataError",
    "RequestError",
    "DeserializationError",
    "PaginationLimitError",
    "ValidationError",
    "ODataResponse",
]
