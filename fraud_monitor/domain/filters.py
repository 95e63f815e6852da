"""Transaction filtering for the dashboard table and charts"""

from datetime import datetime, time
from typing import List

from fraud_monitor.domain.models import Transaction, TransactionFilters
from fraud_monitor.utils.date_utils import ensure_aware

FRAUD_STATUSES = ("all", "predicted", "reported", "mismatch")


def apply_filters(transactions: List[Transaction], filters: TransactionFilters) -> List[Transaction]:
    """
    Apply every active filter (conjunctively), preserving input order.

    Dates are compared in local time; the end date includes the whole day.
    Text filters are case-insensitive substring matches.
    """
    if filters.fraud_status not in FRAUD_STATUSES:
        raise ValueError(f"Unknown fraud status: {filters.fraud_status}")

    filtered = list(transactions)

    if filters.start_date:
        start = datetime.combine(filters.start_date, time.min).astimezone()
        filtered = [t for t in filtered if ensure_aware(t.timestamp) >= start]

    if filters.end_date:
        end = datetime.combine(filters.end_date, time.max).astimezone()
        filtered = [t for t in filtered if ensure_aware(t.timestamp) <= end]

    if filters.payer_id:
        needle = filters.payer_id.lower()
        filtered = [t for t in filtered if needle in t.payer_id.lower()]

    if filters.payee_id:
        needle = filters.payee_id.lower()
        filtered = [t for t in filtered if needle in t.payee_id.lower()]

    if filters.search_query:
        needle = filters.search_query.lower()
        filtered = [t for t in filtered if needle in t.transaction_id.lower()]

    if filters.fraud_status == "predicted":
        filtered = [t for t in filtered if t.is_fraud_predicted]
    elif filters.fraud_status == "reported":
        filtered = [t for t in filtered if t.is_fraud_reported]
    elif filters.fraud_status == "mismatch":
        filtered = [t for t in filtered if t.is_fraud_predicted != t.is_fraud_reported]

    return filtered
