from __future__ import annotations

import argparse
import logging
from datetime import datetime
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import Any

from reldate.core.column import format_series
from reldate.core.config import load_config, merge_config
from reldate.core.contract import RELDATE_RULES_VERSION
from reldate.core.ingest import load_dates_csv
from reldate.core.resolver import RelativeDateFormatter
from reldate.core.rules import RuleTableError
from reldate.report.json_report import write_json_report
from reldate.schema_constants import SCHEMA_VERSION

try:
    RELDATE_PACKAGE_VERSION = version("reldate")
except PackageNotFoundError:
    RELDATE_PACKAGE_VERSION = "dev"


def _parse_when(value: str, label: str) -> datetime:
    try:
        return datetime.fromisoformat(value.strip())
    except ValueError as e:
        raise ValueError(f"{label} is not an ISO date/time: {value!r}") from e


def _require_existing_file(path: Path, label: str) -> None:
    if not path.exists():
        raise FileNotFoundError(f"{label} not found: {path}")
    if path.is_dir():
        raise IsADirectoryError(f"{label} is a directory, expected a file: {path}")


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="reldate", description="Describe dates relative to now using a rule table")

    p.add_argument("dates", nargs="*", help="ISO dates/times to render (e.g. 2026-01-05T09:30)")
    p.add_argument("--now", default=None, help="Reference time as ISO date/time (default: current time)")
    p.add_argument("--config", default=None, help="Path to config TOML with [[rules]] (optional)")

    p.add_argument("--input", default=None, help="CSV file with a date column to render")
    p.add_argument("--column", default=None, help="Date column name in --input (default from config or 'date')")
    p.add_argument("--fallback-format", default=None, help="strftime format used when no rule matches")

    p.add_argument(
        "--json-out",
        "--json",
        dest="json_out",
        default=None,
        help="Optional JSON report output path",
    )
    p.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    return p


def main(argv: list[str] | None = None) -> int:
    args = build_arg_parser().parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    # Load file config (optional). NOTE: load_config returns defaults if None/missing.
    try:
        file_cfg = load_config(args.config)
    except RuleTableError as e:
        print(f"ERROR: {e}")
        return 1

    # Only keys the user actually provided
    cli_explicit: dict[str, Any] = {}
    for name in ("input", "column", "fallback_format", "json_out", "now"):
        v = getattr(args, name, None)
        if v is not None:
            cli_explicit[name] = v

    cfg = merge_config(file_cfg, cli_explicit)

    try:
        # None: each target is compared against the clock in its own timezone
        reference = _parse_when(cfg.now, "--now") if cfg.now else None
        targets = [_parse_when(d, "Date") for d in args.dates]
    except ValueError as e:
        print(f"ERROR: {e}")
        return 2

    formatter = RelativeDateFormatter(cfg.rules, fallback_format=cfg.fallback_format)

    rows: list[dict[str, Any]] = [{"target": t, "text": formatter.format(t, reference)} for t in targets]
    notes: list[str] = []

    if cfg.input:
        data_path = Path(cfg.input)
        try:
            _require_existing_file(data_path, "Input CSV")
        except (FileNotFoundError, IsADirectoryError) as e:
            print(f"ERROR: {e}")
            return 2

        ingest = load_dates_csv(data_path, column=cfg.column)
        notes.extend(ingest.issues)
        if not ingest.df.empty:
            texts = format_series(ingest.df[cfg.column], reference=reference, formatter=formatter)
            rows.extend(
                {"target": t, "text": s} for t, s in zip(ingest.df[cfg.column].tolist(), texts.tolist())
            )

    if not rows:
        print("ERROR: nothing to render (pass dates or --input)")
        for msg in notes:
            print(f" - {msg}")
        return 1

    # Prints only at main
    for row in rows:
        print(f"{row['target'].isoformat()}\t{row['text']}")

    for msg in notes:
        print(f"NOTE: {msg}")

    if cfg.json_out:
        run_config = {
            "config": str(args.config or ""),
            "schema": SCHEMA_VERSION,
            "version": RELDATE_RULES_VERSION,
            "package": RELDATE_PACKAGE_VERSION,
        }
        out = write_json_report(
            cfg.json_out,
            generated_at=datetime.now().strftime("%Y-%m-%d %H:%M"),
            reference=reference,
            rows=rows,
            notes=notes,
            run_config=run_config,
        )
        print(f"JSON saved: {out.resolve()}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
