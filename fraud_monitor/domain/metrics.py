"""Metrics derivation - confusion matrix, detection ratios, and chart series"""

from datetime import datetime
from typing import Dict, List, Optional

from fraud_monitor.domain.models import (
    ChartData,
    ConfusionMatrix,
    PerformanceMetrics,
    SummaryMetrics,
    Transaction,
)
from fraud_monitor.utils.date_utils import day_label, ensure_aware, trailing_days

CATEGORICAL_GROUP_KEYS = ("channel", "payment_mode", "payment_gateway")
TIME_GROUP_KEY = "time"
TIME_WINDOW_DAYS = 14


def _ratio(numerator: float, denominator: float) -> float:
    # Zero denominators yield 0 rather than NaN
    return numerator / denominator if denominator else 0.0


def confusion_matrix(transactions: List[Transaction]) -> ConfusionMatrix:
    """Classify each transaction by (predicted, reported) into exactly one quadrant"""
    matrix = ConfusionMatrix()
    for t in transactions:
        if t.is_fraud_predicted and t.is_fraud_reported:
            matrix.true_positives += 1
        elif t.is_fraud_predicted:
            matrix.false_positives += 1
        elif t.is_fraud_reported:
            matrix.false_negatives += 1
        else:
            matrix.true_negatives += 1
    return matrix


def performance_metrics(matrix: ConfusionMatrix, total_count: int) -> PerformanceMetrics:
    """
    Precision, recall, F1 and accuracy from a confusion matrix.

    Any ratio whose denominator is zero is reported as 0.
    """
    precision = _ratio(matrix.true_positives, matrix.true_positives + matrix.false_positives)
    recall = _ratio(matrix.true_positives, matrix.true_positives + matrix.false_negatives)
    f1_score = _ratio(2 * precision * recall, precision + recall)
    accuracy = _ratio(matrix.true_positives + matrix.true_negatives, total_count)

    return PerformanceMetrics(
        precision=precision,
        recall=recall,
        f1_score=f1_score,
        accuracy=accuracy,
    )


def grouped_counts(
    transactions: List[Transaction],
    group_key: str,
    now: Optional[datetime] = None,
) -> ChartData:
    """
    Predicted and reported fraud counts per group, for charting.

    Categorical keys group by field value, labels in order of first
    occurrence. The "time" key buckets the last 14 local calendar days
    ending today, oldest first.
    """
    if group_key == TIME_GROUP_KEY:
        return _daily_counts(transactions, now)
    if group_key not in CATEGORICAL_GROUP_KEYS:
        raise ValueError(f"Unknown group key: {group_key}")

    groups: Dict[str, List[int]] = {}
    for t in transactions:
        value = getattr(t, group_key)
        label = getattr(value, "value", value)
        counts = groups.setdefault(label, [0, 0])
        if t.is_fraud_predicted:
            counts[0] += 1
        if t.is_fraud_reported:
            counts[1] += 1

    return ChartData(
        labels=list(groups),
        predicted=[c[0] for c in groups.values()],
        reported=[c[1] for c in groups.values()],
    )


def _daily_counts(transactions: List[Transaction], now: Optional[datetime]) -> ChartData:
    if now is None:
        now = datetime.now().astimezone()
    elif now.tzinfo is None:
        now = now.astimezone()
    local_tz = now.tzinfo

    days = trailing_days(now.date(), TIME_WINDOW_DAYS)
    index = {day: i for i, day in enumerate(days)}
    predicted = [0] * len(days)
    reported = [0] * len(days)

    for t in transactions:
        i = index.get(ensure_aware(t.timestamp).astimezone(local_tz).date())
        if i is None:
            continue
        if t.is_fraud_predicted:
            predicted[i] += 1
        if t.is_fraud_reported:
            reported[i] += 1

    return ChartData(labels=[day_label(d) for d in days], predicted=predicted, reported=reported)


def summary_metrics(transactions: List[Transaction]) -> SummaryMetrics:
    """Headline counts: totals, fraud ratio and average flagged amount"""
    flagged = [t for t in transactions if t.is_fraud_predicted]
    return SummaryMetrics(
        total_transactions=len(transactions),
        flagged_transactions=len(flagged),
        fraud_ratio=_ratio(len(flagged), len(transactions)),
        avg_fraud_amount=_ratio(sum(t.amount for t in flagged), len(flagged)),
    )
