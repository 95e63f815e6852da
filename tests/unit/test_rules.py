"""Unit tests for rule validation and persistence"""

import pytest
from fraud_monitor.domain.exceptions import InvalidRuleError
from fraud_monitor.domain.rules import RULE_TYPES, validate_rule
from fraud_monitor.infrastructure.database.repositories import RuleRepository


def test_numeric_rule_value_converted():
    assert validate_rule("Big spend", "Flag big purchases", "amount_threshold", "10000") == 10000.0


def test_text_rule_value_kept():
    assert validate_rule("Geo", "Blocked regions", "geographic_restriction", "NGA,KEN") == "NGA,KEN"


@pytest.mark.parametrize(
    "name, description, rule_type, value, message",
    [
        ("X", "Long enough", "amount_threshold", "1", "name"),
        ("Name", "Shrt", "amount_threshold", "1", "Description"),
        ("Name", "Long enough", "teleportation", "1", "Unknown rule type"),
        ("Name", "Long enough", "frequency_threshold", "fifty", "must be a number"),
    ],
)
def test_invalid_rules(name, description, rule_type, value, message):
    with pytest.raises(InvalidRuleError, match=message):
        validate_rule(name, description, rule_type, value)


def test_catalogue_numeric_types():
    numeric = {k for k, t in RULE_TYPES.items() if t.numeric}
    assert numeric == {"amount_threshold", "frequency_threshold", "velocity_threshold"}


def test_repository_seeds_defaults(db):
    """Test first read seeds the two default rules"""
    rules = RuleRepository(db).list_rules()

    assert [r.id for r in rules] == ["rule-001", "rule-002"]
    assert rules[0].name == "High Value Transaction"
    assert rules[0].value == 5000
    assert rules[1].value == "IRN,PRK,MMR"


def test_repository_sequential_ids(db):
    repo = RuleRepository(db)
    repo.list_rules()

    rule = repo.create_rule(
        name="Rapid small payments",
        description="Many small payments in a row",
        type="suspicious_pattern",
        value="rapid_small_transactions",
    )
    db.commit()

    assert rule.id == "rule-003"
    assert [r.id for r in repo.list_rules()] == ["rule-001", "rule-002", "rule-003"]
