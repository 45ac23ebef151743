# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Fluent query builder for OData collection and single-resource endpoints.

Provides a chainable interface for setting system query options and two
terminal operations: :meth:`Query.get` for a single resource and
:meth:`Query.get_all` for every page of a collection.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Generic, Iterator, List, Optional, TYPE_CHECKING

from ..common.constants import (
    OPERATION_GET,
    OPERATION_GET_ALL,
    QUERY_COUNT,
    QUERY_EXPAND,
    QUERY_FILTER,
    QUERY_ORDERBY,
    QUERY_SEARCH,
    QUERY_SELECT,
    QUERY_SKIP,
    QUERY_TOP,
)
from ..core.config import ODataConfig
from ..core.results import ItemType, ODataResponse, V, _decode_item, _fetch_page, _raise_for_status
from .order import Direction, Order

if TYPE_CHECKING:
    import pandas as pd

    from ..core.provider import RequestProvider
    from ..core.request import ODataRequest


@dataclass
class Query(Generic[V]):
    """
    Fluent interface for building and running an OData query.

    Setters mutate the query in place and return it for method chaining. A
    query is meant to be configured once and consumed by one terminal
    operation; it must not be configured from several threads at once.

    :param provider: Source of authenticated requests, called once per HTTP exchange.
    :type provider: ~odata_query.core.provider.RequestProvider
    :param url: Endpoint path relative to the service root, may contain ``{name}`` placeholders.
    :type url: str
    :param item_type: Optional converter applied to each decoded item, e.g. a dataclass.
        ``None`` returns the decoded JSON objects.
    :param config: Pagination and serialization settings.
    :type config: ~odata_query.core.config.ODataConfig

    Example:
        Fetch every matching person::

            people = (Query(client, "People", Person.from_json)
                      .filter("Age gt 30")
                      .order_by("LastName")
                      .order_by("Age", Direction.DESCENDING)
                      .select("FirstName", "LastName", "Age")
                      .get_all())

        Fetch a single resource::

            airline = (Query(client, "Airlines('{code}')")
                       .path_param("code", "AA")
                       .get())
    """

    provider: "RequestProvider" = field(repr=False)
    url: str
    item_type: ItemType = None
    config: ODataConfig = field(default_factory=ODataConfig.from_env, repr=False)
    _count: bool = False
    _expand: List[str] = field(default_factory=list)
    _filter: str = ""
    _orderby: Order = field(default_factory=Order)
    _search: str = ""
    _select: List[str] = field(default_factory=list)
    _skip: Optional[int] = None
    _top: Optional[int] = None
    _path_params: Dict[str, str] = field(default_factory=dict)

    def count(self) -> "Query[V]":
        """
        Request the total item count (``$count=true``).

        :return: Self for method chaining.
        :rtype: Query
        """
        self._count = True
        return self

    def expand(self, *keys: str) -> "Query[V]":
        """
        Set the navigation properties to expand, replacing any earlier list.

        Calling without arguments clears the expansion.

        :param keys: Navigation property names.
        :type keys: str
        :return: Self for method chaining.
        :rtype: Query
        """
        self._expand = list(keys)
        return self

    def filter(self, expression: str) -> "Query[V]":
        """
        Set a raw ``$filter`` expression.

        The expression is sent verbatim apart from URL encoding; it is not
        validated or escaped.

        :param expression: OData filter expression.
        :type expression: str
        :return: Self for method chaining.
        :rtype: Query

        Example::

            query.filter("Name eq 'O''Neil' and Age gt 30")
        """
        self._filter = expression
        return self

    def order_by(self, key: str, direction: Direction = Direction.UNSPECIFIED) -> "Query[V]":
        """
        Add or replace the sort direction of ``key``.

        Keys are rendered in the order they were first added. Without a
        direction the key is rendered bare and the service default applies.

        :param key: Property name to sort by.
        :type key: str
        :param direction: Sort direction.
        :type direction: ~odata_query.models.order.Direction
        :return: Self for method chaining.
        :rtype: Query

        Example::

            query.order_by("LastName").order_by("Age", Direction.DESCENDING)
            # $orderby=LastName,Age desc
        """
        self._orderby[key] = direction
        return self

    def search(self, term: str) -> "Query[V]":
        """
        Set a free-text ``$search`` term, independent of :meth:`filter`.

        :param term: Search expression.
        :type term: str
        :return: Self for method chaining.
        :rtype: Query
        """
        self._search = term
        return self

    def select(self, *keys: str) -> "Query[V]":
        """
        Set the properties to return, replacing any earlier selection.

        :param keys: Property names.
        :type keys: str
        :return: Self for method chaining.
        :rtype: Query
        """
        self._select = list(keys)
        return self

    def skip(self, num: int) -> "Query[V]":
        """
        Set how many results the service should skip (``$skip``).

        :param num: Number of results to skip. Not range checked.
        :type num: int
        :return: Self for method chaining.
        :rtype: Query
        """
        self._skip = num
        return self

    def top(self, num: int) -> "Query[V]":
        """
        Limit the number of results (``$top``).

        :param num: Maximum number of results. Not range checked.
        :type num: int
        :return: Self for method chaining.
        :rtype: Query
        """
        self._top = num
        return self

    def path_param(self, name: str, value: str) -> "Query[V]":
        """
        Set the substitution for a ``{name}`` placeholder in the URL.

        :param name: Placeholder name without braces.
        :type name: str
        :param value: Replacement value; percent-encoded when substituted.
        :type value: str
        :return: Self for method chaining.
        :rtype: Query
        """
        self._path_params[name] = value
        return self

    def build(self) -> Dict[str, str]:
        """
        Build the query parameters dictionary.

        Only options that were set appear, each as exactly one parameter.

        :return: Mapping of OData system query option to its string value.
        :rtype: dict

        Example::

            Query(client, "People").select("FirstName").filter("Age gt 30").build()
            # {'$filter': 'Age gt 30', '$select': 'FirstName'}
        """
        params: Dict[str, str] = {}
        if self._count:
            params[QUERY_COUNT] = "true"
        if self._expand:
            params[QUERY_EXPAND] = ",".join(self._expand)
        if self._filter:
            params[QUERY_FILTER] = self._filter
        if self._orderby:
            params[QUERY_ORDERBY] = str(self._orderby)
        if self._search:
            params[QUERY_SEARCH] = self._search
        if self._select:
            params[QUERY_SELECT] = ",".join(self._select)
        if self.config.serialize_paging:
            if self._skip is not None:
                params[QUERY_SKIP] = str(self._skip)
            if self._top is not None:
                params[QUERY_TOP] = str(self._top)
        return params

    def _prepare(self) -> "ODataRequest":
        """Get a new request from the provider with query and path parameters attached."""
        request = self.provider.new_request()
        request.set_query_params(self.build())
        return request.set_path_params(self._path_params)

    def get(self) -> V:
        """
        Fetch a single resource.

        The response body is decoded directly into the item type; no
        collection envelope is expected.

        :return: The decoded resource.
        :raises ~odata_query.core.errors.RequestError: If the service returns an error status.
        :raises ~odata_query.core.errors.DeserializationError: If the body cannot be decoded.

        Example::

            person = Query(client, "People('{id}')", Person.from_json).path_param("id", "russellwhyte").get()
        """
        request = self._prepare()
        response = request.get(self.url, operation=OPERATION_GET)
        _raise_for_status(response)
        return _decode_item(response.json(), self.item_type)

    def _first_page(self) -> ODataResponse[V]:
        return _fetch_page(self._prepare(), self.url, self.item_type, OPERATION_GET_ALL)

    def get_all(self) -> List[V]:
        """
        Fetch every page of a collection and return all items.

        Items are returned in page arrival order, then in-page order. If any
        page fails, the error is raised and no items are returned.

        :return: All items across pages.
        :rtype: list
        :raises ~odata_query.core.errors.RequestError: If any page returns an error status.
        :raises ~odata_query.core.errors.PaginationLimitError: If ``config.max_pages`` is exceeded.

        Example::

            for person in Query(client, "People").filter("Age gt 30").get_all():
                print(person["FirstName"])
        """
        page = self._first_page()
        page.collect(self.provider, self.item_type, max_pages=self.config.max_pages)
        return page.value

    def pages(self) -> Iterator[ODataResponse[V]]:
        """
        Lazily iterate the pages of a collection.

        The first request is sent when iteration starts; each following page
        is requested only after the previous one has been yielded.

        :return: Generator of page envelopes.
        :rtype: Iterator[ODataResponse]

        Example::

            for page in Query(client, "People").count().pages():
                print(f"{len(page.value)} of {page.count}")
        """
        page = self._first_page()
        yield page
        yield from page.iter_next_pages(self.provider, self.item_type, max_pages=self.config.max_pages)

    def get_all_dataframe(self) -> "pd.DataFrame":
        """
        Fetch every page of a collection into a :class:`pandas.DataFrame`.

        OData annotation keys (those containing ``@``) are dropped from each item.

        :return: One row per item.
        :rtype: pandas.DataFrame
        """
        from ..utils._pandas import records_to_dataframe

        return records_to_dataframe(self.get_all())


__all__ = ["Query"]
