import pytest

from reldate.core.rules import (
    DEFAULT_RULE_TABLE,
    CatchAll,
    NumericThreshold,
    Rule,
    RuleTable,
    RuleTableError,
    SymbolicRelationship,
    criterion_from_value,
)


def test_criterion_from_value_variants():
    assert criterion_from_value(180) == NumericThreshold(180)
    assert criterion_from_value(-180) == NumericThreshold(-180)
    assert criterion_from_value("last-month") == SymbolicRelationship("last-month")
    assert criterion_from_value("always") == CatchAll()
    assert criterion_from_value(True) == CatchAll()
    assert criterion_from_value(None) == CatchAll()


@pytest.mark.parametrize("bad", [False, "fortnight", [1], {"x": 1}])
def test_criterion_from_value_rejects_garbage(bad):
    with pytest.raises(RuleTableError):
        criterion_from_value(bad)


def test_positive_threshold_matches_recent_past():
    c = NumericThreshold(180)
    assert c.matches(0, {})
    assert c.matches(179.9, {})
    assert not c.matches(180, {})
    assert not c.matches(-1, {})


def test_negative_threshold_matches_near_future():
    c = NumericThreshold(-180)
    assert c.matches(-120, {})
    assert c.matches(0, {})
    assert not c.matches(-180, {})
    assert not c.matches(5, {})


def test_zero_threshold_never_matches():
    assert not NumericThreshold(0).matches(0, {})


def test_symbolic_and_catch_all_matching():
    assert SymbolicRelationship("today").matches(1e9, {"today": True})
    assert not SymbolicRelationship("today").matches(0, {"today": False})
    assert CatchAll().matches(-1e9, {})


def test_from_records_defaults_to_catch_all():
    table = RuleTable.from_records(
        [
            {"match": 60, "format": "now"},
            {"match": "yesterday", "format": "Yesterday"},
            {"format": "%Y"},
        ]
    )

    assert len(table) == 3
    assert table.rules[0] == Rule(NumericThreshold(60), "now")
    assert isinstance(table.rules[2].criterion, CatchAll)
    assert table.has_catch_all
    assert table.to_records()[2] == {"match": "always", "format": "%Y"}


def test_from_records_requires_format():
    with pytest.raises(RuleTableError, match="missing 'format'"):
        RuleTable.from_records([{"match": 60}])


def test_from_records_reports_rule_position():
    with pytest.raises(RuleTableError, match="Rule #1"):
        RuleTable.from_records([{"match": 60, "format": "a"}, {"match": "someday", "format": "b"}])


def test_default_table_ends_with_catch_all():
    assert DEFAULT_RULE_TABLE.has_catch_all
    assert isinstance(DEFAULT_RULE_TABLE.rules[-1].criterion, CatchAll)
    assert not RuleTable().has_catch_all
