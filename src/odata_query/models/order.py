# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Sort directions and the ``$orderby`` specification."""

from __future__ import annotations

from enum import Enum


class Direction(Enum):
    """Sort direction of an ``$orderby`` key."""

    ASCENDING = "asc"
    DESCENDING = "desc"
    UNSPECIFIED = ""

    @property
    def token(self) -> str:
        """Suffix rendered after the key: ``" asc"``, ``" desc"`` or nothing."""
        return f" {self.value}" if self.value else ""


class Order(dict):
    """
    Mapping of field name to :class:`Direction`, rendered as an ``$orderby`` value.

    Keys keep the order in which they were first added. Setting an existing key
    again replaces its direction without moving it.

    Example::

        order = Order()
        order["lastname"] = Direction.ASCENDING
        order["age"] = Direction.UNSPECIFIED
        order["created"] = Direction.DESCENDING
        str(order)  # 'lastname asc,age,created desc'
    """

    def __str__(self) -> str:
        return ",".join(f"{key}{direction.token}" for key, direction in self.items())


__all__ = ["Direction", "Order"]
