"""Prometheus metrics for monitoring prediction sources, model health, and request latency"""

from prometheus_client import Counter, Histogram

# Enrichment metrics
enrichment_counter = Counter(
    "fraud_monitor_enrichment_total",
    "Prediction enrichments performed",
    ["source"],  # remote | fallback
)

predicted_fraud_counter = Counter(
    "fraud_monitor_predicted_fraud_total",
    "Transactions flagged as predicted fraud",
    ["source"],
)

prediction_count_mismatch_counter = Counter(
    "fraud_monitor_prediction_count_mismatch_total",
    "Remote batches whose fraud count differs from the expected count",
)

stale_enrichment_counter = Counter(
    "fraud_monitor_stale_enrichment_total",
    "Enrichment results discarded because a newer one had already been committed",
)

# Prediction API metrics
prediction_api_latency_histogram = Histogram(
    "prediction_api_latency_seconds",
    "Prediction API response time",
    buckets=[0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)

prediction_api_failures_counter = Counter(
    "prediction_api_failures_total",
    "Failed prediction API calls",
    ["reason"],  # timeout | status | network | invalid_response
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_enrichment(source: str, predicted_fraud: int, mismatch: bool) -> None:
    """Record which prediction source was used and how many transactions it flagged"""
    enrichment_counter.labels(source=source).inc()
    predicted_fraud_counter.labels(source=source).inc(predicted_fraud)
    if mismatch:
        prediction_count_mismatch_counter.inc()
