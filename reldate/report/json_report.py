from __future__ import annotations

import json
import math
from datetime import date, datetime
from pathlib import Path
from typing import Any

import pandas as pd


def _json_safe(x: Any) -> Any:
    """
    Convert values into strict JSON-safe Python types.

    Guarantees:
    - No NaN / Infinity (converted to None)
    - pandas NA/NaT -> None
    - datetimes / Timestamps -> ISO strings
    - Recurses through dict/list/tuple
    """
    if isinstance(x, dict):
        return {str(k): _json_safe(v) for k, v in x.items()}

    if isinstance(x, (list, tuple)):
        return [_json_safe(v) for v in x]

    # pandas NA handling
    try:
        if pd.isna(x):
            return None
    except (TypeError, ValueError):
        pass

    if isinstance(x, float):
        if math.isnan(x) or math.isinf(x):
            return None
        return x

    # Timestamps (pd.Timestamp is a datetime subclass)
    if isinstance(x, (datetime, date)):
        return x.isoformat()

    if isinstance(x, (str, int, bool)) or x is None:
        return x

    # numpy scalars -> python primitives
    if hasattr(x, "item") and callable(x.item):
        try:
            return _json_safe(x.item())
        except (TypeError, ValueError):
            pass

    return str(x)


def write_json_report(
    out_path: str | Path,
    *,
    generated_at: str | None,
    reference: datetime | None,
    rows: list[dict[str, Any]],
    notes: list[str] | None,
    run_config: dict[str, str] | None,
) -> Path:
    """
    Writes the rendered dates as a strict JSON document.

    rows: [{"target": datetime, "text": str | None}, ...]
    reference: None when each row was compared against the clock
    """
    p = Path(out_path)
    p.parent.mkdir(parents=True, exist_ok=True)

    payload: dict[str, Any] = {
        "meta": {
            "generated_at": generated_at,
            "reference": reference,
            "version": run_config.get("version") if run_config else None,
            "package_version": run_config.get("package") if run_config else None,
            "schema_version": run_config.get("schema") if run_config else None,
        },
        "rows": rows,
        "notes": notes or [],
    }

    payload = _json_safe(payload)

    # STRICT JSON - no NaN allowed
    p.write_text(
        json.dumps(payload, indent=2, sort_keys=False, allow_nan=False),
        encoding="utf-8",
    )
    return p
