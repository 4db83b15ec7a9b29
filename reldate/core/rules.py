from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Iterator, Mapping, Union

from reldate.core.calendar import RELATIONSHIPS
from reldate.core.contract import CATCH_ALL


class RuleTableError(ValueError):
    """Raised when a rule table entry cannot be turned into a Rule."""


# ----------------------------
# Criteria
# ----------------------------

@dataclass(frozen=True)
class NumericThreshold:
    """
    seconds >= 0: matches 0 <= delta < seconds (target in the past)
    seconds < 0:  matches seconds < delta <= 0 (target in the future)
    """
    seconds: int | float

    def matches(self, delta: float, predicates: Mapping[str, bool]) -> bool:
        if self.seconds >= 0:
            return 0 <= delta < self.seconds
        return self.seconds < delta <= 0


@dataclass(frozen=True)
class SymbolicRelationship:
    name: str

    def __post_init__(self) -> None:
        if self.name not in RELATIONSHIPS:
            raise RuleTableError(
                f"Unknown calendar relationship '{self.name}'. Expected one of: {', '.join(RELATIONSHIPS)}"
            )

    def matches(self, delta: float, predicates: Mapping[str, bool]) -> bool:
        return bool(predicates.get(self.name, False))


@dataclass(frozen=True)
class CatchAll:
    def matches(self, delta: float, predicates: Mapping[str, bool]) -> bool:
        return True


Criterion = Union[NumericThreshold, SymbolicRelationship, CatchAll]


def criterion_from_value(value: Any) -> Criterion:
    """
    Map a config value onto a criterion:
      int/float         -> NumericThreshold
      relationship name -> SymbolicRelationship
      "always"/True/None -> CatchAll
    """
    if value is None or value is True:
        return CatchAll()
    if isinstance(value, bool):
        raise RuleTableError("'false' is not a valid rule criterion.")
    if isinstance(value, (int, float)):
        return NumericThreshold(seconds=value)
    if isinstance(value, str):
        s = value.strip()
        if s == CATCH_ALL:
            return CatchAll()
        return SymbolicRelationship(name=s)
    raise RuleTableError(f"Unsupported rule criterion: {value!r}")


def criterion_to_value(criterion: Criterion) -> int | float | str:
    if isinstance(criterion, NumericThreshold):
        return criterion.seconds
    if isinstance(criterion, SymbolicRelationship):
        return criterion.name
    return CATCH_ALL


# ----------------------------
# Rules + table
# ----------------------------

@dataclass(frozen=True)
class Rule:
    criterion: Criterion
    template: str


@dataclass(frozen=True)
class RuleTable:
    """
    Ordered, immutable rule sequence. First match wins; ordering is the
    caller's responsibility. A table should end with a CatchAll rule,
    otherwise unmatched dates use the resolver's fallback format.
    """
    rules: tuple[Rule, ...] = ()

    def __iter__(self) -> Iterator[Rule]:
        return iter(self.rules)

    def __len__(self) -> int:
        return len(self.rules)

    @property
    def has_catch_all(self) -> bool:
        return any(isinstance(r.criterion, CatchAll) for r in self.rules)

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[Any, str]]) -> "RuleTable":
        return cls(rules=tuple(Rule(criterion_from_value(v), str(t)) for v, t in pairs))

    @classmethod
    def from_records(cls, records: Iterable[Mapping[str, Any]]) -> "RuleTable":
        """
        Build from [{"match": ..., "format": ...}, ...] (TOML/JSON shape).
        A record without "match" is a catch-all.
        """
        rules: list[Rule] = []
        for i, rec in enumerate(records):
            if not isinstance(rec, Mapping):
                raise RuleTableError(f"Rule #{i} must be a table/object, got {type(rec).__name__}.")
            if "format" not in rec:
                raise RuleTableError(f"Rule #{i} is missing 'format'.")
            try:
                criterion = criterion_from_value(rec.get("match"))
            except RuleTableError as e:
                raise RuleTableError(f"Rule #{i}: {e}") from e
            rules.append(Rule(criterion, str(rec["format"])))
        return cls(rules=tuple(rules))

    def to_records(self) -> list[dict[str, Any]]:
        return [{"match": criterion_to_value(r.criterion), "format": r.template} for r in self.rules]


DEFAULT_RULE_TABLE = RuleTable.from_pairs(
    [
        (180, "now"),
        (-180, "soon"),
        (3600, "%(M) mins. ago"),
        ("today", "Today %H:%M"),
        ("yesterday", "Yesterday %H:%M"),
        ("tomorrow", "Tomorrow %H:%M"),
        ("this-week", "%a %H:%M"),
        ("last-week", "Last %a %H:%M"),
        ("next-week", "Next %a %H:%M"),
        ("this-year", "%d %B"),
        (CATCH_ALL, "%Y-%m-%d"),
    ]
)
