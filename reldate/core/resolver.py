from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Mapping

from reldate.core.calendar import evaluate_all
from reldate.core.contract import FALLBACK_FORMAT, PLACEHOLDER_TOKENS
from reldate.core.delta import Magnitudes, compute_magnitudes, delta_seconds
from reldate.core.rules import DEFAULT_RULE_TABLE, Rule, RuleTable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Resolution:
    """Everything the resolver looked at for one target, plus the result."""
    target: datetime
    reference: datetime
    delta: float
    magnitudes: Magnitudes
    predicates: dict[str, bool]
    rule_index: int | None
    text: str


def substitute_placeholders(template: str, magnitudes: Magnitudes) -> str:
    """
    Replace the reserved tokens with decimal counters.
    Literal replacement only; unknown tokens pass through to strftime.
    """
    out = template
    for token, field in PLACEHOLDER_TOKENS.items():
        out = out.replace(token, str(getattr(magnitudes, field)))
    return out


def select_rule(table: RuleTable, delta: float, predicates: Mapping[str, bool]) -> tuple[int, Rule] | None:
    """First rule whose criterion matches, with its position. None if nothing matches."""
    for i, rule in enumerate(table):
        if rule.criterion.matches(delta, predicates):
            return i, rule
    return None


class RelativeDateFormatter:
    """
    Renders dates relative to a reference using a rule table bound at
    construction. Instances hold no mutable state and can be shared across
    threads.
    """

    def __init__(self, table: RuleTable = DEFAULT_RULE_TABLE, fallback_format: str = FALLBACK_FORMAT) -> None:
        self.table = table
        self.fallback_format = fallback_format

    def explain(self, target: datetime, reference: datetime | None = None) -> Resolution:
        if reference is None:
            reference = datetime.now(target.tzinfo)

        delta = delta_seconds(target, reference)
        magnitudes = compute_magnitudes(target, reference)
        predicates = evaluate_all(target, reference)

        picked = select_rule(self.table, delta, predicates)
        if picked is None:
            logger.debug("No rule matched delta=%.3fs for %s; using fallback format", delta, target)
            return Resolution(
                target=target,
                reference=reference,
                delta=delta,
                magnitudes=magnitudes,
                predicates=predicates,
                rule_index=None,
                text=target.strftime(self.fallback_format),
            )

        index, rule = picked
        text = target.strftime(substitute_placeholders(rule.template, magnitudes))
        return Resolution(
            target=target,
            reference=reference,
            delta=delta,
            magnitudes=magnitudes,
            predicates=predicates,
            rule_index=index,
            text=text,
        )

    def format(self, target: datetime, reference: datetime | None = None) -> str:
        return self.explain(target, reference).text


def format_relative_date(
    target: datetime,
    reference: datetime | None = None,
    table: RuleTable = DEFAULT_RULE_TABLE,
) -> str:
    """
    Describe `target` relative to `reference` (default: now) using the first
    matching rule of `table`. Never raises for valid datetimes.
    """
    return RelativeDateFormatter(table).format(target, reference)
