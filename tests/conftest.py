from datetime import datetime

import pytest

from reldate.core.rules import RuleTable


@pytest.fixture
def reference() -> datetime:
    """
    Fixed "now" for every test: Wednesday 2026-03-18 12:00, ISO week 12.
    """
    return datetime(2026, 3, 18, 12, 0, 0)


@pytest.fixture
def table_factory():
    """Build a RuleTable from (criterion, template) pairs."""
    def _make(*pairs) -> RuleTable:
        return RuleTable.from_pairs(pairs)

    return _make
