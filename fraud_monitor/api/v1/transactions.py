"""Dashboard dataset endpoints: list, import, and mock generation"""

import logging
from fastapi import APIRouter, Depends, HTTPException, Query, Request

from fraud_monitor.api.v1.schemas import (
    ImportRequest,
    ImportResponse,
    TransactionListResponse,
    TransactionSchema,
)
from fraud_monitor.api.dependencies import get_config_store, get_dashboard, get_filters, get_request_id
from fraud_monitor.api.state import DashboardState
from fraud_monitor.domain.exceptions import InvalidImportDataError
from fraud_monitor.domain.filters import apply_filters
from fraud_monitor.domain.importer import detect_format, parse_import, transform_to_transactions
from fraud_monitor.domain.mock_data import generate_mock_transactions
from fraud_monitor.domain.models import TransactionFilters
from fraud_monitor.infrastructure.config_store import EndpointConfigStore
from fraud_monitor.config import settings

router = APIRouter()


@router.get("/transactions", response_model=TransactionListResponse)
async def list_transactions(
    filters: TransactionFilters = Depends(get_filters),
    dashboard: DashboardState = Depends(get_dashboard),
    config_store: EndpointConfigStore = Depends(get_config_store),
):
    """Enriched dataset after filters"""
    result = await dashboard.enriched(config_store.current())
    filtered = apply_filters(result.transactions, filters)

    return TransactionListResponse(
        transactions=[TransactionSchema.model_validate(t) for t in filtered],
        total=len(filtered),
        model_version=result.model_version,
        total_fraud_count=result.total_fraud_count,
    )


@router.post("/transactions/import", response_model=ImportResponse)
def import_transactions(
    request_body: ImportRequest,
    request: Request,
    dashboard: DashboardState = Depends(get_dashboard),
):
    """
    Replace the dataset with transactions parsed from JSON or CSV text.

    Malformed data is rejected with 422 and leaves the dataset unchanged.
    """
    request_id = get_request_id(request)
    try:
        fmt = request_body.format or detect_format(request_body.filename or "")
        records = parse_import(request_body.content, fmt)
        transactions = transform_to_transactions(records)
    except InvalidImportDataError as e:
        logging.warning(f"Rejected import: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    dashboard.replace_transactions(transactions)
    logging.info("Transactions imported", extra={"request_id": request_id, "count": len(transactions)})
    return ImportResponse(imported=len(transactions))


@router.post("/transactions/mock", response_model=ImportResponse)
def load_mock_transactions(
    count: int = Query(settings.mock_transaction_count, ge=0, le=10_000),
    dashboard: DashboardState = Depends(get_dashboard),
):
    """Replace the dataset with freshly generated mock transactions"""
    dashboard.replace_transactions(generate_mock_transactions(count))
    return ImportResponse(imported=count)
