# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.


def _http_subcode(status: int) -> str:
    """Map an HTTP status code to its ``http_<status>`` subcode."""
    return f"http_{status}"


# Statuses a caller may reasonably retry; the query layer itself never does
TRANSIENT_STATUS = {429, 502, 503, 504}

# Response decoding subcodes
DESERIALIZATION_NOT_JSON = "deserialization_not_json"
DESERIALIZATION_NOT_OBJECT = "deserialization_not_object"
DESERIALIZATION_VALUE_NOT_ARRAY = "deserialization_value_not_array"
DESERIALIZATION_COUNT_INVALID = "deserialization_count_invalid"
DESERIALIZATION_ITEM_FAILED = "deserialization_item_failed"

# Pagination subcodes
PAGINATION_MAX_PAGES_EXCEEDED = "pagination_max_pages_exceeded"

# Validation subcodes
VALIDATION_MAX_PAGES_INVALID = "validation_max_pages_invalid"


def _is_transient_status(status: int) -> bool:
    return status in TRANSIENT_STATUS
