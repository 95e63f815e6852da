"""Fraud reports submitted to the authorities"""

from fraud_monitor.domain.exceptions import InvalidReportError
from fraud_monitor.domain.models import FraudReport


def build_report(transaction_id: str, description: str) -> FraudReport:
    """Validate and build a report; both fields must be non-blank"""
    if not transaction_id.strip():
        raise InvalidReportError("Transaction ID is required")
    if not description.strip():
        raise InvalidReportError("Please provide details about the suspicious activity")
    return FraudReport(transaction_id=transaction_id.strip(), description=description.strip())
