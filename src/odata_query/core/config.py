# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from ._error_codes import VALIDATION_MAX_PAGES_INVALID
from .errors import ValidationError

if TYPE_CHECKING:
    from .telemetry import TelemetryConfig


@dataclass(frozen=True)
class ODataConfig:
    """
    Configuration settings for OData query operations.

    :param api_path: Path appended to the service base URL for every request, e.g. ``"/api/data/v9.2"``.
    :type api_path: str
    :param http_timeout: Request timeout in seconds (default: method-dependent).
    :type http_timeout: float or None
    :param page_size: Preferred page size sent as ``Prefer: odata.maxpagesize``. ``None`` lets the service decide.
    :type page_size: int or None
    :param max_pages: Upper bound on pages followed by a single collection fetch, counting the first page.
        ``None`` (default) follows next links until the service stops returning one.
    :type max_pages: int or None
    :param serialize_paging: Whether ``skip``/``top`` are sent as ``$skip``/``$top`` (default: True).
        ``False`` keeps them on the query object without sending them.
    :type serialize_paging: bool
    :param telemetry: Optional logging/tracing configuration. ``None`` disables telemetry.
    :type telemetry: ~odata_query.core.telemetry.TelemetryConfig or None

    :raises ~odata_query.core.errors.ValidationError: If ``max_pages`` is less than 1.
    """
    api_path: str = ""

    http_timeout: Optional[float] = None
    page_size: Optional[int] = None

    # Pagination behaviour
    max_pages: Optional[int] = None
    serialize_paging: bool = True

    telemetry: Optional["TelemetryConfig"] = None

    def __post_init__(self) -> None:
        _check_max_pages(self.max_pages)

    @classmethod
    def from_env(cls) -> "ODataConfig":
        """
        Create a configuration instance with default settings.

        :return: Configuration instance with default values.
        :rtype: ~odata_query.core.config.ODataConfig
        """
        # Environment-free defaults
        return cls(
            api_path="",
            http_timeout=None,  # Will use method-dependent defaults in _HttpClient
            page_size=None,
            max_pages=None,
            serialize_paging=True,
            telemetry=None,
        )


def _check_max_pages(max_pages: Optional[int]) -> None:
    """Reject a page cap that could never allow the first page."""
    if max_pages is not None and max_pages < 1:
        raise ValidationError(
            f"max_pages must be at least 1, got {max_pages}",
            subcode=VALIDATION_MAX_PAGES_INVALID,
        )
