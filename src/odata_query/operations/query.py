# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Query operations namespace."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence, Tuple, Union, TYPE_CHECKING

from ..core.results import ItemType
from ..models.order import Direction
from ..models.query_builder import Query

if TYPE_CHECKING:
    from ..client import ODataClient

OrderSpec = Union[str, Tuple[str, Direction]]


class QueryOperations:
    """
    Query operations for retrieving resources.

    Accessed via ``client.query``. Provides the fluent query builder and
    keyword-argument shortcuts for one-off queries.

    Example:
        Fluent query builder (recommended)::

            people = (client.query.builder("People")
                      .select("FirstName", "LastName")
                      .filter("Age gt 30")
                      .order_by("LastName", Direction.ASCENDING)
                      .get_all())

        Keyword shortcut::

            people = client.query.get_all(
                "People",
                filter="Age gt 30",
                orderby=[("LastName", Direction.ASCENDING)],
            )
    """

    def __init__(self, client: "ODataClient") -> None:
        """
        Initialize QueryOperations.

        :param client: Parent ODataClient instance.
        :type client: ODataClient
        """
        self._client = client

    def builder(self, url: str, item_type: ItemType = None) -> Query[Any]:
        """
        Create a fluent query bound to this client.

        :param url: Endpoint path relative to the service root.
        :type url: str
        :param item_type: Optional converter applied to each decoded item.
        :return: Query instance for fluent construction and execution.
        :rtype: ~odata_query.models.query_builder.Query
        """
        return Query(self._client, url, item_type, config=self._client.config)

    def get(
        self,
        url: str,
        item_type: ItemType = None,
        *,
        select: Optional[Sequence[str]] = None,
        expand: Optional[Sequence[str]] = None,
        path_params: Optional[Dict[str, str]] = None,
    ) -> Any:
        """
        Fetch a single resource.

        :param url: Endpoint path relative to the service root.
        :type url: str
        :param item_type: Optional converter applied to the decoded body.
        :param select: Properties to return.
        :type select: list[str] or None
        :param expand: Navigation properties to expand.
        :type expand: list[str] or None
        :param path_params: ``{name}`` placeholder substitutions.
        :type path_params: dict or None
        :return: The decoded resource.

        Example::

            airline = client.query.get("Airlines('{code}')", path_params={"code": "AA"})
        """
        query = self._configure(self.builder(url, item_type), select=select, expand=expand, path_params=path_params)
        return query.get()

    def get_all(
        self,
        url: str,
        item_type: ItemType = None,
        *,
        select: Optional[Sequence[str]] = None,
        filter: Optional[str] = None,
        orderby: Optional[Sequence[OrderSpec]] = None,
        search: Optional[str] = None,
        expand: Optional[Sequence[str]] = None,
        count: bool = False,
        skip: Optional[int] = None,
        top: Optional[int] = None,
        path_params: Optional[Dict[str, str]] = None,
    ) -> List[Any]:
        """
        Fetch every page of a collection.

        :param url: Endpoint path relative to the service root.
        :type url: str
        :param item_type: Optional converter applied to each decoded item.
        :param select: Properties to return.
        :type select: list[str] or None
        :param filter: Raw ``$filter`` expression.
        :type filter: str or None
        :param orderby: Sort keys, either a bare property name or a ``(name, Direction)`` pair.
        :type orderby: list or None
        :param search: Raw ``$search`` term.
        :type search: str or None
        :param expand: Navigation properties to expand.
        :type expand: list[str] or None
        :param count: Request ``$count=true``.
        :type count: bool
        :param skip: ``$skip`` value.
        :type skip: int or None
        :param top: ``$top`` value.
        :type top: int or None
        :param path_params: ``{name}`` placeholder substitutions.
        :type path_params: dict or None
        :return: All items across pages.
        :rtype: list
        """
        query = self._configure(self.builder(url, item_type), select=select, expand=expand, path_params=path_params)
        if filter:
            query.filter(filter)
        for entry in orderby or ():
            if isinstance(entry, str):
                query.order_by(entry)
            else:
                query.order_by(*entry)
        if search:
            query.search(search)
        if count:
            query.count()
        if skip is not None:
            query.skip(skip)
        if top is not None:
            query.top(top)
        return query.get_all()

    @staticmethod
    def _configure(
        query: Query[Any],
        *,
        select: Optional[Sequence[str]],
        expand: Optional[Sequence[str]],
        path_params: Optional[Dict[str, str]],
    ) -> Query[Any]:
        if select:
            query.select(*select)
        if expand:
            query.expand(*expand)
        for name, value in (path_params or {}).items():
            query.path_param(name, value)
        return query


__all__ = ["QueryOperations"]
