# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Internal pandas helpers"""

from __future__ import annotations

from typing import Any, Dict, Iterable

import pandas as pd


def strip_odata_keys(record: Dict[str, Any]) -> Dict[str, Any]:
    """Remove OData annotation keys (keys containing '@') from a record dict."""
    return {k: v for k, v in record.items() if "@" not in k}


def records_to_dataframe(items: Iterable[Any]) -> pd.DataFrame:
    """Build a DataFrame with one row per item.

    Dict items have their OData annotation keys removed; other items (for
    example dataclass instances) are handed to pandas unchanged.
    """
    rows = [strip_odata_keys(i) if isinstance(i, dict) else i for i in items]
    if not rows:
        return pd.DataFrame()
    return pd.DataFrame(rows)
