"""Fallback heuristic and merge logic for fraud predictions"""

import random
from dataclasses import replace
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from fraud_monitor.domain.models import PredictionBatch, PredictionResult, Transaction

FALLBACK_MODEL_VERSION = "fallback-v1.0"
DEFAULT_FALLBACK_FRAUD_COUNT = 11


def expected_fraud_count(transaction_count: int, fallback_fraud_count: int = DEFAULT_FALLBACK_FRAUD_COUNT) -> int:
    """Number of fraud cases the model is expected to flag for a batch of this size"""
    return min(fallback_fraud_count, transaction_count)


def to_scoring_payload(transactions: List[Transaction]) -> Dict[str, Any]:
    """Request body for the prediction endpoint: only the fields the model scores on"""
    return {
        "transactions": [
            {
                "transaction_id": t.transaction_id,
                "amount": t.amount,
                "timestamp": t.timestamp.isoformat(),
                "payer_id": t.payer_id,
                "payee_id": t.payee_id,
                "channel": t.channel.value,
                "payment_mode": t.payment_mode.value,
                "payment_gateway": t.payment_gateway,
            }
            for t in transactions
        ]
    }


def fallback_predictions(
    transactions: List[Transaction],
    fallback_fraud_count: int = DEFAULT_FALLBACK_FRAUD_COUNT,
    rng: Optional[random.Random] = None,
) -> PredictionBatch:
    """
    Deterministic local substitute for the prediction endpoint.

    The highest-amount transactions are flagged as fraud, ties keeping their
    original order. Flagged transactions score in [0.8, 1.0), the rest in
    [0.0, 0.5). Only the scores use randomness; which transactions are
    flagged depends on the amounts alone.
    """
    rng = rng or random.Random()
    fraud_count = expected_fraud_count(len(transactions), fallback_fraud_count)

    # sorted() is stable, so equal amounts keep input order
    ranked = sorted(transactions, key=lambda t: t.amount, reverse=True)
    fraud_ids = {t.transaction_id for t in ranked[:fraud_count]}

    predictions = tuple(
        PredictionResult(
            transaction_id=t.transaction_id,
            is_fraud_predicted=t.transaction_id in fraud_ids,
            fraud_score=(0.8 + rng.random() * 0.2) if t.transaction_id in fraud_ids else rng.random() * 0.5,
        )
        for t in transactions
    )

    return PredictionBatch(
        predictions=predictions,
        total_fraud_count=fraud_count,
        model_version=FALLBACK_MODEL_VERSION,
        timestamp=datetime.now(timezone.utc),
    )


def merge_predictions(transactions: List[Transaction], batch: PredictionBatch) -> List[Transaction]:
    """
    Apply a prediction batch to transactions by id.

    Returns copies; the input list and its transactions are left untouched.
    Transactions without a matching prediction keep their existing flag.
    """
    by_id = {p.transaction_id: p for p in batch.predictions}

    merged = []
    for txn in transactions:
        prediction = by_id.get(txn.transaction_id)
        if prediction is None:
            merged.append(replace(txn))
            continue
        merged.append(
            replace(
                txn,
                is_fraud_predicted=prediction.is_fraud_predicted,
                fraud_score=prediction.fraud_score,
            )
        )
    return merged


def check_prediction_count(
    batch: PredictionBatch,
    transaction_count: int,
    fallback_fraud_count: int = DEFAULT_FALLBACK_FRAUD_COUNT,
) -> Optional[str]:
    """Advisory check of a remote batch: returns a warning message, or None if consistent"""
    expected = expected_fraud_count(transaction_count, fallback_fraud_count)
    flagged = sum(1 for p in batch.predictions if p.is_fraud_predicted)
    if flagged == expected:
        return None
    return f"Model flagged {flagged} fraud cases, expected {expected}"
