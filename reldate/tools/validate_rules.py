from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import importlib.resources as resources

try:
    import jsonschema
except ImportError as e:  # pragma: no cover
    raise ImportError(
        "jsonschema is required for rule table validation. Install with: pip install jsonschema"
    ) from e


from reldate.core.rules import RuleTable, RuleTableError
from reldate.schema_constants import (
    SCHEMA_VERSION,
    SCHEMA_RESOURCE_PACKAGE,
    SCHEMA_RESOURCE_NAME,
)

EXPECTED_SCHEMA_VERSION = SCHEMA_VERSION


class StrictJsonError(ValueError):
    """Raised when JSON is invalid or contains forbidden constants (NaN/Infinity)."""


class SchemaVersionMismatch(ValueError):
    """Raised when schema_version does not match EXPECTED_SCHEMA_VERSION."""


@dataclass(frozen=True)
class ValidationResult:
    ok: bool
    schema_version: str
    rule_count: int
    has_catch_all: bool


def _reject_nonfinite_constants(value: str) -> Any:
    """
    json.loads hook: reject NaN/Infinity/-Infinity.
    Python's stdlib json will otherwise accept them and produce floats.
    """
    raise StrictJsonError(f"Forbidden JSON constant encountered: {value}")


def _load_schema_text() -> str:
    """
    Load the bundled schema from package resources (no filesystem dependency).
    """
    return resources.files(SCHEMA_RESOURCE_PACKAGE).joinpath(SCHEMA_RESOURCE_NAME).read_text(
        encoding="utf-8"
    )


def _parse_strict_json(text: str) -> dict[str, Any]:
    """
    Strict JSON parsing:
      - reject NaN/Infinity
      - reject invalid JSON
    """
    try:
        data = json.loads(text, parse_constant=_reject_nonfinite_constants)
    except StrictJsonError:
        raise
    except json.JSONDecodeError as e:
        raise StrictJsonError(f"Invalid JSON: {e.msg} (line {e.lineno}, col {e.colno})") from e

    if not isinstance(data, dict):
        raise StrictJsonError("Top-level JSON must be an object.")
    return data


def validate_rule_document(data: dict[str, Any]) -> RuleTable:
    """
    Check a {"rules": [...]} document against the bundled schema and build the table.
    Schema violations surface as RuleTableError.
    """
    schema = _parse_strict_json(_load_schema_text())
    try:
        jsonschema.validate(instance=data, schema=schema)
    except jsonschema.ValidationError as e:
        where = "/".join(str(p) for p in e.absolute_path) or "<root>"
        raise RuleTableError(f"Rule table invalid at {where}: {e.message}") from e

    return RuleTable.from_records(data["rules"])


def validate_rules(path: str | Path, *, expected_schema_version: str = EXPECTED_SCHEMA_VERSION) -> ValidationResult:
    """
    Validate a reldate rule table JSON file by:
      1) strict JSON parse (reject NaN/Infinity)
      2) hard-lock schema_version to expected version (when present)
      3) JSON Schema validation (bundled schema) + rule construction
    """
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(str(p))

    data = _parse_strict_json(p.read_text(encoding="utf-8"))

    # ---- Hard-lock schema version FIRST ----
    actual = data.get("schema_version", expected_schema_version)
    if not isinstance(actual, str) or actual.strip() != expected_schema_version:
        raise SchemaVersionMismatch(
            f"Schema version mismatch: expected '{expected_schema_version}', got '{actual}'."
        )

    table = validate_rule_document(data)

    return ValidationResult(
        ok=True,
        schema_version=expected_schema_version,
        rule_count=len(table),
        has_catch_all=table.has_catch_all,
    )


def main(argv: list[str] | None = None) -> None:
    import argparse

    parser = argparse.ArgumentParser(description="Validate a reldate rule table (JSON).")
    parser.add_argument("path", help="Path to rule table JSON file")
    args = parser.parse_args(argv)

    try:
        result = validate_rules(args.path)
    except Exception as e:
        print(f"ERROR: {e}")
        raise SystemExit(1) from e

    print(f"OK: rule table validation passed ({result.rule_count} rules).")
    if not result.has_catch_all:
        print("WARNING: no catch-all rule; unmatched dates use the fallback format.")
    raise SystemExit(0)


if __name__ == "__main__":
    main()
