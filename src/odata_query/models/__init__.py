# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Query models for the OData query client.

- :class:`~odata_query.models.query_builder.Query`: Fluent query builder.
- :class:`~odata_query.models.order.Order`: ``$orderby`` specification.
- :class:`~odata_query.models.order.Direction`: Sort direction.

Note:
    This ``__init__.py`` does NOT import/export models. Import directly from
    the specific module files, or use the package root ``odata_query``.
"""

__all__ = []
