"""In-process dashboard state: the working dataset and its enrichment"""

from typing import List

from fraud_monitor.domain.enrichment import PredictionEnricher
from fraud_monitor.domain.models import EndpointConfig, EnrichmentResult, Transaction


class DashboardState:
    """Holds the current transaction dataset and caches its enrichment"""

    def __init__(self, enricher: PredictionEnricher, transactions: List[Transaction] | None = None):
        self.enricher = enricher
        self._transactions = list(transactions or [])

    @property
    def transactions(self) -> List[Transaction]:
        return list(self._transactions)

    def replace_transactions(self, transactions: List[Transaction]) -> None:
        self._transactions = list(transactions)
        self.enricher.invalidate()

    def on_endpoint_changed(self, config: EndpointConfig) -> None:
        self.enricher.invalidate()

    async def enriched(self, config: EndpointConfig) -> EnrichmentResult:
        """Cached enrichment of the dataset, re-enriching after any invalidation"""
        latest = self.enricher.latest
        if latest is not None:
            return latest
        return await self.enricher.enrich(self._transactions, config)
