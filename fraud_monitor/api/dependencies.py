"""Dependency injection for FastAPI endpoints"""

from datetime import date
from typing import Callable, Generator, Literal, Optional

from fastapi import Query, Request
from sqlalchemy.orm import Session
from fraud_monitor.api.state import DashboardState
from fraud_monitor.domain.enrichment import PredictionEnricher, PredictionSource
from fraud_monitor.domain.models import EndpointConfig, TransactionFilters
from fraud_monitor.infrastructure.config_store import EndpointConfigStore


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_db(request: Request) -> Generator[Session, None, None]:
    """Dependency injection for database sessions from the app's session factory"""
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


def get_config_store(request: Request) -> EndpointConfigStore:
    """Provide the endpoint configuration store"""
    return request.app.state.config_store


def get_dashboard(request: Request) -> DashboardState:
    """Provide the shared dashboard state"""
    return request.app.state.dashboard


def get_client_factory(request: Request) -> Callable[[EndpointConfig], PredictionSource]:
    """Provide the prediction client factory"""
    return request.app.state.client_factory


def get_enricher(request: Request) -> PredictionEnricher:
    """Fresh enricher for one-off requests that must not touch dashboard state"""
    return PredictionEnricher(client_factory=get_client_factory(request))


def get_filters(
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    payer_id: str = Query(""),
    payee_id: str = Query(""),
    search: str = Query("", description="Transaction ID substring"),
    fraud_status: Literal["all", "predicted", "reported", "mismatch"] = Query("all"),
) -> TransactionFilters:
    """Build transaction filters from query parameters"""
    return TransactionFilters(
        start_date=start_date,
        end_date=end_date,
        payer_id=payer_id,
        payee_id=payee_id,
        search_query=search,
        fraud_status=fraud_status,
    )
