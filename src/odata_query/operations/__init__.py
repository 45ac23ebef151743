# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Operation namespaces for the OData query client."""

__all__ = []
