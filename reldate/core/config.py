from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

try:
    import tomllib  # py3.11+
except ModuleNotFoundError:  # pragma: no cover
    import tomli as tomllib  # type: ignore

from reldate.core.contract import FALLBACK_FORMAT
from reldate.core.rules import DEFAULT_RULE_TABLE, RuleTable
from reldate.tools.validate_rules import validate_rule_document

logger = logging.getLogger(__name__)


# ----------------------------
# Primary config object
# ----------------------------

@dataclass(frozen=True)
class ReldateConfig:
    """
    Single, flattened config object used by the CLI/runtime.

    Supports:
      [reldate]
      fallback_format, input, column, json_out, now

      [[rules]]
      match = 180 | "today" | "always"
      format = "..."

    Also reads [meta].schema_version.
    """
    schema_version: str = "1.0"

    # rendering
    rules: RuleTable = field(default=DEFAULT_RULE_TABLE)
    fallback_format: str = FALLBACK_FORMAT

    # IO
    input: str | None = None
    column: str = "date"
    json_out: str | None = None

    # fixed reference time (ISO string); None = wall clock
    now: str | None = None


# ----------------------------
# Helpers
# ----------------------------

def _as_dict(x: Any) -> dict[str, Any]:
    return x if isinstance(x, dict) else {}


def _get(d: dict[str, Any], key: str, default: Any) -> Any:
    return d.get(key, default) if isinstance(d, dict) else default


def _coerce_str(x: Any, default: str) -> str:
    try:
        s = str(x)
        return s if s.strip() else default
    except Exception:
        return default


def _coerce_opt_str(x: Any) -> str | None:
    if x is None:
        return None
    s = str(x).strip()
    return s or None


def _load_rules(data: dict[str, Any]) -> RuleTable:
    rules = data.get("rules")
    if rules is None:
        return DEFAULT_RULE_TABLE

    return validate_rule_document({"rules": rules})


# ----------------------------
# Load + merge
# ----------------------------

def load_config(path: str | Path | None) -> ReldateConfig:
    """
    Load TOML config. If missing/None, returns safe defaults.
    Never raises for missing file (config is optional).
    Raises RuleTableError when [[rules]] is present but invalid.
    """
    if not path:
        return ReldateConfig()

    p = Path(path)
    if not p.exists():
        logger.debug("Config %s not found; using defaults", p)
        return ReldateConfig()

    data = tomllib.loads(p.read_text(encoding="utf-8"))

    rel = _as_dict(data.get("reldate", {}))
    meta = _as_dict(data.get("meta", {}))

    schema_version = _coerce_str(_get(meta, "schema_version", "1.0"), "1.0")
    rules = _load_rules(data)

    cfg = ReldateConfig(
        schema_version=schema_version,
        rules=rules,
        fallback_format=_coerce_str(_get(rel, "fallback_format", FALLBACK_FORMAT), FALLBACK_FORMAT),
        input=_coerce_opt_str(_get(rel, "input", None)),
        column=_coerce_str(_get(rel, "column", ReldateConfig.column), ReldateConfig.column),
        json_out=_coerce_opt_str(_get(rel, "json_out", None)),
        now=_coerce_opt_str(_get(rel, "now", None)),
    )
    logger.debug("Loaded config %s with %d rules", p, len(cfg.rules))
    return cfg


def merge_config(cfg: ReldateConfig, args: Any) -> ReldateConfig:
    """
    Merge CLI args over file config.
    Accepts a mapping or an object with attributes; only applies fields that
    exist AND are not None/empty. Rules always come from the file config.
    """
    def lookup(name: str) -> Any:
        if isinstance(args, dict):
            return args.get(name)
        return getattr(args, name, None)

    def pick_str(name: str, cur: str) -> str:
        v = lookup(name)
        if v is not None and str(v).strip():
            return str(v).strip()
        return cur

    def pick_opt_str(name: str, cur: str | None) -> str | None:
        v = lookup(name)
        if v is None:
            return cur
        s = str(v).strip()
        return s or cur

    return ReldateConfig(
        schema_version=cfg.schema_version,
        rules=cfg.rules,
        fallback_format=pick_str("fallback_format", cfg.fallback_format),
        input=pick_opt_str("input", cfg.input),
        column=pick_str("column", cfg.column),
        json_out=pick_opt_str("json_out", cfg.json_out),
        now=pick_opt_str("now", cfg.now),
    )
