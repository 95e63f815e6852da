"""GET /v1/dashboard and /v1/charts - derived metrics for the filtered dataset"""

from typing import Literal
from fastapi import APIRouter, Depends

from fraud_monitor.api.v1.schemas import (
    ChartSchema,
    ConfusionMatrixSchema,
    DashboardCharts,
    DashboardResponse,
    PerformanceSchema,
    SummarySchema,
)
from fraud_monitor.api.dependencies import get_config_store, get_dashboard, get_filters
from fraud_monitor.api.state import DashboardState
from fraud_monitor.domain.filters import apply_filters
from fraud_monitor.domain.metrics import confusion_matrix, grouped_counts, performance_metrics, summary_metrics
from fraud_monitor.domain.models import TransactionFilters
from fraud_monitor.infrastructure.config_store import EndpointConfigStore

router = APIRouter()


@router.get("/dashboard", response_model=DashboardResponse)
async def get_dashboard_view(
    filters: TransactionFilters = Depends(get_filters),
    dashboard: DashboardState = Depends(get_dashboard),
    config_store: EndpointConfigStore = Depends(get_config_store),
):
    """
    Everything the dashboard page renders besides the table.

    Flow:
    1. Enrich the dataset (cached until the dataset or endpoint changes)
    2. Apply filters
    3. Derive summary, confusion matrix, ratios and chart series
    """
    result = await dashboard.enriched(config_store.current())
    transactions = apply_filters(result.transactions, filters)

    matrix = confusion_matrix(transactions)
    metrics = performance_metrics(matrix, len(transactions))

    return DashboardResponse(
        summary=SummarySchema.model_validate(summary_metrics(transactions)),
        confusion_matrix=ConfusionMatrixSchema.model_validate(matrix),
        performance=PerformanceSchema.model_validate(metrics),
        charts=DashboardCharts(
            channel=ChartSchema.model_validate(grouped_counts(transactions, "channel")),
            payment_mode=ChartSchema.model_validate(grouped_counts(transactions, "payment_mode")),
            time=ChartSchema.model_validate(grouped_counts(transactions, "time")),
        ),
        model_version=result.model_version,
        total_fraud_count=result.total_fraud_count,
        prediction_source=result.source,
        warning=result.warning,
    )


@router.get("/charts/{group_by}", response_model=ChartSchema)
async def get_chart(
    group_by: Literal["channel", "payment_mode", "payment_gateway", "time"],
    filters: TransactionFilters = Depends(get_filters),
    dashboard: DashboardState = Depends(get_dashboard),
    config_store: EndpointConfigStore = Depends(get_config_store),
):
    """Predicted vs reported fraud counts for one grouping"""
    result = await dashboard.enriched(config_store.current())
    transactions = apply_filters(result.transactions, filters)
    return ChartSchema.model_validate(grouped_counts(transactions, group_by))
