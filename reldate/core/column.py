from __future__ import annotations

from datetime import datetime
from typing import Any

import pandas as pd

from reldate.core.resolver import RelativeDateFormatter


def format_series(
    series: pd.Series,
    reference: datetime | None = None,
    formatter: RelativeDateFormatter | None = None,
) -> pd.Series:
    """
    Render a column of dates against one shared reference (default: now).

    Values are coerced with pd.to_datetime; missing or unparseable entries
    come back as None. The input index is preserved.
    """
    formatter = formatter or RelativeDateFormatter()

    ts = pd.to_datetime(series, errors="coerce")
    if reference is None and pd.api.types.is_datetime64_any_dtype(ts):
        # one clock read shared by every row
        reference = datetime.now(ts.dt.tz)
    # mixed UTC offsets leave an object column; each row then reads the
    # clock in its own timezone

    def _render(value: Any) -> str | None:
        if pd.isna(value):
            return None
        if isinstance(value, pd.Timestamp):
            value = value.to_pydatetime()
        return formatter.format(value, reference)

    return pd.Series([_render(v) for v in ts], index=ts.index, dtype=object)
