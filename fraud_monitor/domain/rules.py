"""Fraud rule catalogue and validation"""

from dataclasses import dataclass
from typing import Dict, List, Union

from fraud_monitor.domain.exceptions import InvalidRuleError


@dataclass(frozen=True)
class RuleType:
    """A kind of rule a user can configure"""

    value: str
    label: str
    description: str
    value_label: str
    numeric: bool


RULE_TYPES: Dict[str, RuleType] = {
    t.value: t
    for t in [
        RuleType(
            "amount_threshold",
            "Transaction Amount Threshold",
            "Flag transactions above a certain amount.",
            "Amount ($)",
            numeric=True,
        ),
        RuleType(
            "frequency_threshold",
            "Transaction Frequency Threshold",
            "Flag entities with too many transactions in a period.",
            "Number of Transactions",
            numeric=True,
        ),
        RuleType(
            "velocity_threshold",
            "Velocity Threshold",
            "Flag based on the rate of change of transaction amounts.",
            "Percentage Change (%)",
            numeric=True,
        ),
        RuleType(
            "geographic_restriction",
            "Geographic Restriction",
            "Flag transactions from restricted countries or regions.",
            "Countries/Regions (comma separated)",
            numeric=False,
        ),
        RuleType(
            "suspicious_pattern",
            "Suspicious Pattern",
            "Flag transactions matching specific behavior patterns.",
            "Pattern Name",
            numeric=False,
        ),
    ]
}

# Seeded the first time the rule list is read
DEFAULT_RULES: List[Dict[str, Union[str, float, bool]]] = [
    {
        "name": "High Value Transaction",
        "description": "Flag transactions above $5,000 for review",
        "type": "amount_threshold",
        "value": 5000.0,
        "enabled": True,
    },
    {
        "name": "Suspicious Countries",
        "description": "Flag transactions from high-risk countries",
        "type": "geographic_restriction",
        "value": "IRN,PRK,MMR",
        "enabled": True,
    },
]


def rule_id(sequence: int) -> str:
    return f"rule-{sequence:03d}"


def validate_rule(name: str, description: str, rule_type: str, value: Union[str, float]) -> Union[str, float]:
    """
    Validate a rule definition and coerce its value.

    Returns the value as a float for numeric rule types, as text otherwise.

    Raises:
        InvalidRuleError: On short name/description, unknown type, or non-numeric threshold
    """
    if len(name.strip()) < 2:
        raise InvalidRuleError("Rule name must be at least 2 characters.")
    if len(description.strip()) < 5:
        raise InvalidRuleError("Description must be at least 5 characters.")
    if rule_type not in RULE_TYPES:
        raise InvalidRuleError(f"Unknown rule type: {rule_type}")

    if not RULE_TYPES[rule_type].numeric:
        return str(value)
    try:
        return float(value)
    except (TypeError, ValueError):
        raise InvalidRuleError(f"{RULE_TYPES[rule_type].value_label} must be a number.")
