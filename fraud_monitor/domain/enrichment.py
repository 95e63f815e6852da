"""Prediction enrichment - remote scoring with a local fallback, merged into transactions"""

import logging
import random
import time
from typing import Callable, List, Optional, Protocol

from fraud_monitor.domain.exceptions import PredictionAPIError
from fraud_monitor.domain.models import EndpointConfig, EnrichmentResult, PredictionBatch, Transaction
from fraud_monitor.domain.prediction import check_prediction_count, fallback_predictions, merge_predictions
from fraud_monitor.infrastructure.observability.logging import log_enrichment
from fraud_monitor.infrastructure.observability.metrics import record_enrichment, stale_enrichment_counter


class PredictionSource(Protocol):
    async def predict(self, transactions: List[Transaction]) -> PredictionBatch: ...


class PredictionEnricher:
    """
    Attaches fraud predictions to transactions.

    One remote attempt per call; any PredictionAPIError falls back to the
    local heuristic. Every call takes a generation number, and a result only
    replaces `latest` when no newer call has already been committed, so a
    slow response cannot overwrite a fresher one.
    """

    def __init__(
        self,
        client_factory: Callable[[EndpointConfig], PredictionSource],
        rng: Optional[random.Random] = None,
    ):
        self._client_factory = client_factory
        self._rng = rng or random.Random()
        self._generation = 0
        self._committed_generation = 0
        self._latest: Optional[EnrichmentResult] = None

    @property
    def latest(self) -> Optional[EnrichmentResult]:
        return self._latest

    def invalidate(self) -> None:
        """
        Forget the cached result, e.g. after the dataset or endpoint changed.

        Calls still in flight are treated as stale when they complete.
        """
        self._latest = None
        self._committed_generation = self._generation

    async def enrich(self, transactions: List[Transaction], config: EndpointConfig) -> EnrichmentResult:
        """
        Enrich transactions with predictions.

        Empty input is a no-op: nothing is called and the previous result
        (or an empty one) is returned unchanged.
        """
        if not transactions:
            if self._latest is not None:
                return self._latest
            return EnrichmentResult(transactions=[], total_fraud_count=0, model_version="unknown", source="none")

        self._generation += 1
        generation = self._generation
        start_time = time.time()

        warning = None
        error = None
        try:
            batch = await self._client_factory(config).predict(transactions)
            source = "remote"
            warning = check_prediction_count(batch, len(transactions), config.fallback_fraud_count)
            if warning:
                logging.warning(warning, extra={"generation": generation, "model_version": batch.model_version})
        except PredictionAPIError as e:
            logging.warning(f"Prediction API unavailable, using fallback: {e}", extra={"generation": generation})
            error = str(e)
            batch = fallback_predictions(transactions, config.fallback_fraud_count, self._rng)
            source = "fallback"

        enriched = merge_predictions(transactions, batch)
        result = EnrichmentResult(
            transactions=enriched,
            total_fraud_count=batch.total_fraud_count,
            model_version=batch.model_version,
            source=source,
            generation=generation,
            warning=warning,
            error=error,
        )

        duration_ms = (time.time() - start_time) * 1000
        record_enrichment(source, sum(1 for t in enriched if t.is_fraud_predicted), warning is not None)
        log_enrichment(generation, source, batch.model_version, len(enriched), batch.total_fraud_count, duration_ms)

        if generation > self._committed_generation:
            self._committed_generation = generation
            self._latest = result
        else:
            result.stale = True
            stale_enrichment_counter.inc()
            logging.info(
                "Discarding stale enrichment result",
                extra={"generation": generation, "committed_generation": self._committed_generation},
            )

        return result
