# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Collection response envelope and next-link page collection.

:class:`ODataResponse` holds one page of an OData collection response::

    {
        "@odata.context": "https://host/svc/$metadata#People",
        "@odata.count": 3,
        "@odata.nextLink": "https://host/svc/People?$skiptoken=2",
        "value": [{...}, {...}]
    }

:meth:`ODataResponse.collect` walks the next-link chain from an already
fetched first page and appends every following page's items to it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Generic, Iterator, List, Optional, TypeVar, TYPE_CHECKING

from ..common.constants import (
    ODATA_CONTEXT,
    ODATA_COUNT,
    ODATA_NEXT_LINK,
    ODATA_NEXT_LINK_LEGACY,
    ODATA_VALUE,
    OPERATION_NEXT_PAGE,
)
from ._error_codes import (
    DESERIALIZATION_COUNT_INVALID,
    DESERIALIZATION_ITEM_FAILED,
    DESERIALIZATION_NOT_OBJECT,
    DESERIALIZATION_VALUE_NOT_ARRAY,
)
from .config import _check_max_pages
from .errors import DeserializationError, PaginationLimitError, RequestError

if TYPE_CHECKING:
    from .provider import RequestProvider
    from .request import ODataRequest

# Type variable for the item type of a query
V = TypeVar("V")

# Converts one decoded JSON item into V; ``None`` keeps the decoded item as-is
ItemType = Optional[Callable[[Any], V]]


def _decode_item(raw: Any, item_type: ItemType) -> Any:
    """Apply ``item_type`` to a decoded JSON item, wrapping converter failures."""
    if item_type is None:
        return raw
    try:
        return item_type(raw)
    except (TypeError, ValueError, KeyError) as e:
        name = getattr(item_type, "__name__", repr(item_type))
        raise DeserializationError(
            f"could not convert item to {name}: {e}",
            subcode=DESERIALIZATION_ITEM_FAILED,
        ) from e


@dataclass
class ODataResponse(Generic[V]):
    """
    One page of an OData collection response.

    :param context: ``@odata.context`` metadata URL.
    :type context: :class:`str`
    :param count: ``@odata.count`` total item count; 0 unless ``$count`` was requested.
    :type count: :class:`int`
    :param next_link: ``@odata.nextLink`` URL of the next page; empty when this is the last page.
    :type next_link: :class:`str`
    :param value: Items of this page in the order the service returned them.
    :type value: :class:`list`
    """

    context: str = ""
    count: int = 0
    next_link: str = ""
    value: List[V] = field(default_factory=list)

    @classmethod
    def from_json(cls, body: Any, item_type: ItemType = None) -> "ODataResponse[V]":
        """
        Build a page from a decoded JSON response body.

        :param body: Decoded JSON object.
        :param item_type: Optional converter applied to every item of ``value``.
        :return: The page envelope.
        :rtype: ~odata_query.core.results.ODataResponse
        :raises ~odata_query.core.errors.DeserializationError: If the body is not a collection
            response or an item cannot be converted.
        """
        if not isinstance(body, dict):
            raise DeserializationError(
                f"collection response must be a JSON object, got {type(body).__name__}",
                subcode=DESERIALIZATION_NOT_OBJECT,
            )
        items = body.get(ODATA_VALUE)
        if items is None:
            items = []
        if not isinstance(items, list):
            raise DeserializationError(
                f"collection response 'value' must be an array, got {type(items).__name__}",
                subcode=DESERIALIZATION_VALUE_NOT_ARRAY,
            )
        next_link = body.get(ODATA_NEXT_LINK)
        if next_link is None:
            next_link = body.get(ODATA_NEXT_LINK_LEGACY)
        raw_count = body.get(ODATA_COUNT)
        try:
            count = int(raw_count or 0)
        except (TypeError, ValueError) as e:
            raise DeserializationError(
                f"collection response '@odata.count' must be an integer, got {raw_count!r}",
                subcode=DESERIALIZATION_COUNT_INVALID,
            ) from e
        return cls(
            context=body.get(ODATA_CONTEXT) or "",
            count=count,
            next_link=next_link or "",
            value=[_decode_item(item, item_type) for item in items],
        )

    def result(self) -> List[V]:
        """Return the items held by this response."""
        return self.value

    @property
    def has_next(self) -> bool:
        """Whether the service reported a next page."""
        return bool(self.next_link)

    def collect(
        self,
        provider: "RequestProvider",
        item_type: ItemType = None,
        *,
        max_pages: Optional[int] = None,
    ) -> None:
        """
        Follow next links until exhausted, appending every page's items to :attr:`value`.

        Each page is fetched with a new request from ``provider``; the original
        query options are not re-sent because a next link is a complete URL.
        Pages are appended in arrival order without re-sorting.

        :param provider: Source of authenticated requests, called once per page.
        :type provider: ~odata_query.core.provider.RequestProvider
        :param item_type: Optional converter applied to every item.
        :param max_pages: Maximum number of pages including this one. ``None`` follows
            next links for as long as the service returns them.
        :type max_pages: :class:`int` | None
        :raises ~odata_query.core.errors.RequestError: If a page request returns an error status.
        :raises ~odata_query.core.errors.PaginationLimitError: If ``max_pages`` would be exceeded.
        :raises ~odata_query.core.errors.ValidationError: If ``max_pages`` is less than 1.
        """
        for page in self.iter_next_pages(provider, item_type, max_pages=max_pages):
            self.value.extend(page.value)

    def iter_next_pages(
        self,
        provider: "RequestProvider",
        item_type: ItemType = None,
        *,
        max_pages: Optional[int] = None,
    ) -> Iterator["ODataResponse[V]"]:
        """
        Lazily fetch and yield the pages that follow this one.

        A page is requested only when the previous one has been consumed, since
        its URL is that page's next link. Arguments are the same as :meth:`collect`.

        :raises ~odata_query.core.errors.ValidationError: If ``max_pages`` is less than 1.
        """
        _check_max_pages(max_pages)
        pages = 1
        last: ODataResponse[V] = self
        while last.next_link:
            if max_pages is not None and pages >= max_pages:
                raise PaginationLimitError(max_pages, last.next_link)
            last = _fetch_page(provider.new_request(), last.next_link, item_type, OPERATION_NEXT_PAGE)
            pages += 1
            yield last


def _raise_for_status(response: Any) -> None:
    if response.is_error:
        raise RequestError(response.status_code, response.status, response.text)


def _fetch_page(
    request: "ODataRequest",
    url: str,
    item_type: ItemType,
    operation: str,
) -> ODataResponse[Any]:
    """GET ``url`` with ``request`` and decode the body into a page envelope."""
    response = request.get(url, operation=operation)
    _raise_for_status(response)
    return ODataResponse.from_json(response.json(), item_type)


__all__ = ["ODataResponse", "ItemType"]
