"""Prediction API HTTP client for scoring transactions"""

import httpx
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from fraud_monitor.config import settings
from fraud_monitor.domain.exceptions import PredictionAPIError
from fraud_monitor.domain.models import EndpointConfig, PredictionBatch, PredictionResult, Transaction
from fraud_monitor.domain.prediction import to_scoring_payload
from fraud_monitor.infrastructure.observability.metrics import (
    prediction_api_failures_counter,
    prediction_api_latency_histogram,
)


class PredictionClient:
    """Client for the external fraud scoring model"""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = (base_url or settings.prediction_api_base).rstrip("/")
        self.timeout = timeout or settings.prediction_timeout_seconds
        self.transport = transport

    @classmethod
    def from_config(cls, config: EndpointConfig) -> "PredictionClient":
        return cls(base_url=config.base_url, timeout=config.timeout_seconds)

    async def predict(self, transactions: List[Transaction]) -> PredictionBatch:
        """
        Score transactions with a single POST to {base_url}/predict.

        Raises:
            PredictionAPIError: On timeout, network failure, non-2xx status or invalid response
        """
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            try:
                with prediction_api_latency_histogram.time():
                    response = await client.post(
                        f"{self.base_url}/predict",
                        json=to_scoring_payload(transactions),
                    )
                response.raise_for_status()
                return parse_prediction_response(response.json())

            except httpx.TimeoutException as e:
                prediction_api_failures_counter.labels(reason="timeout").inc()
                raise PredictionAPIError(f"Prediction API timeout after {self.timeout}s") from e
            except httpx.HTTPStatusError as e:
                prediction_api_failures_counter.labels(reason="status").inc()
                raise PredictionAPIError(f"Prediction API error: {e.response.status_code}") from e
            except httpx.RequestError as e:
                prediction_api_failures_counter.labels(reason="network").inc()
                raise PredictionAPIError(f"Prediction API unreachable: {e}") from e
            except (KeyError, ValueError, TypeError) as e:
                # json.JSONDecodeError is a ValueError
                prediction_api_failures_counter.labels(reason="invalid_response").inc()
                raise PredictionAPIError(f"Invalid prediction data from model: {e}") from e


def parse_prediction_response(data: Dict[str, Any]) -> PredictionBatch:
    """Build a PredictionBatch from the /predict response body"""
    raw_predictions = data["predictions"]
    if not isinstance(raw_predictions, list):
        raise TypeError("predictions must be a list")

    predictions = tuple(
        PredictionResult(
            transaction_id=str(p["transaction_id"]),
            is_fraud_predicted=bool(p["is_fraud_predicted"]),
            fraud_score=float(p["fraud_score"]),
        )
        for p in raw_predictions
    )

    total_fraud_count = data.get("total_fraud_count")
    if total_fraud_count is None:
        total_fraud_count = sum(1 for p in predictions if p.is_fraud_predicted)

    return PredictionBatch(
        predictions=predictions,
        total_fraud_count=int(total_fraud_count),
        model_version=str(data.get("model_version") or "unknown"),
        timestamp=_parse_timestamp(data.get("timestamp")),
    )


def _parse_timestamp(value: Optional[str]) -> datetime:
    if not value:
        return datetime.now(timezone.utc)
    try:
        parsed = datetime.fromisoformat(value)
    except (TypeError, ValueError):
        return datetime.now(timezone.utc)
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)
