from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import pandas as pd


@dataclass(frozen=True)
class IngestResult:
    df: pd.DataFrame
    issues: list[str]


def load_dates_csv(path: str | Path, column: str = "date") -> IngestResult:
    """
    Load a CSV holding one date/time per row in `column`.

    The column is parsed to datetimes; unparseable rows are dropped and
    reported in `issues` rather than raising.
    """
    path = Path(path)
    issues: list[str] = []

    if not path.exists():
        return IngestResult(df=pd.DataFrame(), issues=[f"File not found: {path}"])

    df = pd.read_csv(path)

    if column not in df.columns:
        issues.append(f"Missing date column '{column}' (found: {list(df.columns)})")
        return IngestResult(df=pd.DataFrame(), issues=issues)

    df[column] = pd.to_datetime(df[column], errors="coerce")
    bad_ts = int(df[column].isna().sum())
    if bad_ts:
        issues.append(f"{bad_ts} rows have invalid {column}")

    df = df.dropna(subset=[column]).reset_index(drop=True)

    return IngestResult(df=df, issues=issues)
