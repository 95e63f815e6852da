"""Unit tests for prediction enrichment"""

import asyncio
import random
from datetime import datetime, timezone
from typing import List

from fraud_monitor.domain.enrichment import PredictionEnricher
from fraud_monitor.domain.exceptions import PredictionAPIError
from fraud_monitor.domain.models import EndpointConfig, PredictionBatch, PredictionResult, Transaction

CONFIG = EndpointConfig(base_url="http://model.test")


class StaticSource:
    """Prediction source returning fixed flags per transaction id"""

    def __init__(self, flagged_ids, model_version="remote-v2"):
        self.flagged_ids = set(flagged_ids)
        self.model_version = model_version
        self.calls = 0

    async def predict(self, transactions: List[Transaction]) -> PredictionBatch:
        self.calls += 1
        predictions = tuple(
            PredictionResult(t.transaction_id, t.transaction_id in self.flagged_ids, 0.7)
            for t in transactions
        )
        return PredictionBatch(
            predictions=predictions,
            total_fraud_count=len(self.flagged_ids),
            model_version=self.model_version,
            timestamp=datetime.now(timezone.utc),
        )


class FailingSource:
    def __init__(self):
        self.calls = 0

    async def predict(self, transactions):
        self.calls += 1
        raise PredictionAPIError("Prediction API timeout after 10.0s")


class GatedSource(StaticSource):
    """Waits for a gate before answering, to control completion order"""

    def __init__(self, flagged_ids, gate: asyncio.Event):
        super().__init__(flagged_ids)
        self.gate = gate

    async def predict(self, transactions):
        await self.gate.wait()
        return await super().predict(transactions)


async def test_enrich_empty_input_makes_no_call():
    """Test empty input short-circuits to an empty result"""
    source = FailingSource()
    enricher = PredictionEnricher(client_factory=lambda config: source)

    result = await enricher.enrich([], CONFIG)

    assert source.calls == 0
    assert result.transactions == []
    assert result.total_fraud_count == 0
    assert result.model_version == "unknown"


async def test_enrich_empty_input_retains_previous_result(sample_transactions):
    """Test empty input returns the previous result unchanged"""
    source = StaticSource({"TXN-100000"})
    enricher = PredictionEnricher(client_factory=lambda config: source)

    first = await enricher.enrich(sample_transactions, CONFIG)
    second = await enricher.enrich([], CONFIG)

    assert second is first
    assert source.calls == 1


async def test_enrich_remote_result_merged(sample_transactions):
    """Test remote flags are applied and order/ids preserved"""
    flagged = {t.transaction_id for t in sample_transactions[:11]}
    enricher = PredictionEnricher(client_factory=lambda config: StaticSource(flagged))

    result = await enricher.enrich(sample_transactions, CONFIG)

    assert result.source == "remote"
    assert result.model_version == "remote-v2"
    assert result.warning is None
    assert [t.transaction_id for t in result.transactions] == [t.transaction_id for t in sample_transactions]
    assert {t.transaction_id for t in result.transactions if t.is_fraud_predicted} == flagged
    assert all(t.fraud_score == 0.7 for t in result.transactions)
    # Caller's list untouched
    assert not any(t.is_fraud_predicted for t in sample_transactions)


async def test_enrich_falls_back_when_remote_unavailable(sample_transactions):
    """Test fallback marks exactly min(11, n) highest-amount transactions"""
    enricher = PredictionEnricher(client_factory=lambda config: FailingSource(), rng=random.Random(1))

    result = await enricher.enrich(sample_transactions, CONFIG)

    assert result.source == "fallback"
    assert result.model_version == "fallback-v1.0"
    assert result.total_fraud_count == 11
    assert "timeout" in result.error
    flagged = [t for t in result.transactions if t.is_fraud_predicted]
    assert len(flagged) == 11
    assert min(t.amount for t in flagged) > max(t.amount for t in result.transactions if not t.is_fraud_predicted)


async def test_enrich_fallback_uses_configured_count(sample_transactions):
    config = EndpointConfig(base_url="http://model.test", fallback_fraud_count=4)
    enricher = PredictionEnricher(client_factory=lambda config: FailingSource())

    result = await enricher.enrich(sample_transactions, config)

    assert result.total_fraud_count == 4
    assert sum(t.is_fraud_predicted for t in result.transactions) == 4


async def test_enrich_count_mismatch_is_advisory(sample_transactions):
    """Test a remote batch with the wrong fraud count is kept, with a warning"""
    flagged = {t.transaction_id for t in sample_transactions[:3]}
    enricher = PredictionEnricher(client_factory=lambda config: StaticSource(flagged))

    result = await enricher.enrich(sample_transactions, CONFIG)

    assert result.source == "remote"
    assert result.warning is not None
    assert sum(t.is_fraud_predicted for t in result.transactions) == 3


async def test_enrich_passes_config_to_factory(sample_transactions):
    seen = []

    def factory(config):
        seen.append(config)
        return StaticSource(set())

    enricher = PredictionEnricher(client_factory=factory)
    await enricher.enrich(sample_transactions, CONFIG)

    assert seen == [CONFIG]


async def test_stale_result_does_not_replace_newer(sample_transactions):
    """Test a slow older call finishing last is marked stale and not committed"""
    slow_gate = asyncio.Event()
    sources = iter([
        GatedSource({"TXN-100000"}, slow_gate),
        StaticSource({"TXN-100001"}),
    ])
    enricher = PredictionEnricher(client_factory=lambda config: next(sources))

    slow_task = asyncio.create_task(enricher.enrich(sample_transactions, CONFIG))
    await asyncio.sleep(0)  # let the slow call start and take generation 1
    fast = await enricher.enrich(sample_transactions, CONFIG)
    slow_gate.set()
    slow = await slow_task

    assert fast.generation == 2
    assert slow.generation == 1
    assert slow.stale is True
    assert fast.stale is False
    assert enricher.latest is fast


async def test_invalidate_marks_in_flight_call_stale(sample_transactions):
    gate = asyncio.Event()
    enricher = PredictionEnricher(client_factory=lambda config: GatedSource(set(), gate))

    task = asyncio.create_task(enricher.enrich(sample_transactions, CONFIG))
    await asyncio.sleep(0)
    enricher.invalidate()
    gate.set()
    result = await task

    assert result.stale is True
    assert enricher.latest is None
