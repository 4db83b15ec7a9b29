from __future__ import annotations

from pathlib import Path

import pandas as pd

from reldate.core.ingest import load_dates_csv


def test_load_dates_csv_parses_and_reports(tmp_path: Path) -> None:
    p = tmp_path / "inbox.csv"
    p.write_text(
        "subject,sent\n"
        "hello,2026-03-18 11:59:00\n"
        "broken,yesterday-ish\n"
        "old,2020-05-01 08:00:00\n",
        encoding="utf-8",
    )

    res = load_dates_csv(p, column="sent")

    assert len(res.df) == 2
    assert res.df["subject"].tolist() == ["hello", "old"]
    assert pd.api.types.is_datetime64_any_dtype(res.df["sent"])
    assert res.issues == ["1 rows have invalid sent"]


def test_load_dates_csv_missing_column(tmp_path: Path) -> None:
    p = tmp_path / "inbox.csv"
    p.write_text("subject\nhello\n", encoding="utf-8")

    res = load_dates_csv(p, column="sent")
    assert res.df.empty
    assert "Missing date column 'sent'" in res.issues[0]


def test_load_dates_csv_missing_file(tmp_path: Path) -> None:
    res = load_dates_csv(tmp_path / "nope.csv")
    assert res.df.empty
    assert res.issues[0].startswith("File not found")
