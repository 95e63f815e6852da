"""FastAPI application factory"""

from contextlib import asynccontextmanager
from typing import Callable

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from sqlalchemy.orm import Session
from starlette.responses import Response

from fraud_monitor.api.middleware import RequestIDMiddleware, MetricsMiddleware
from fraud_monitor.api.state import DashboardState
from fraud_monitor.api.v1 import dashboard, endpoint_settings, predictions, reports, rules, transactions
from fraud_monitor.domain.enrichment import PredictionEnricher, PredictionSource
from fraud_monitor.domain.mock_data import generate_mock_transactions
from fraud_monitor.domain.models import EndpointConfig
from fraud_monitor.infrastructure.clients.prediction import PredictionClient
from fraud_monitor.infrastructure.config_store import EndpointConfigStore
from fraud_monitor.infrastructure.database.session import SessionLocal, init_db
from fraud_monitor.infrastructure.observability.logging import setup_logging
from fraud_monitor.config import settings

# Setup structured logging
setup_logging(settings.log_level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db(app.state.session_factory)
    yield


def create_app(
    session_factory: Callable[[], Session] = SessionLocal,
    client_factory: Callable[[EndpointConfig], PredictionSource] = PredictionClient.from_config,
) -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Fraud Monitor",
        description="Fraud prediction enrichment and detection metrics service",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # Shared state: endpoint config, dataset, and its enrichment
    config_store = EndpointConfigStore(session_factory)
    dashboard_state = DashboardState(
        enricher=PredictionEnricher(client_factory=client_factory),
        transactions=generate_mock_transactions(settings.mock_transaction_count),
    )
    config_store.subscribe(dashboard_state.on_endpoint_changed)

    app.state.session_factory = session_factory
    app.state.config_store = config_store
    app.state.dashboard = dashboard_state
    app.state.client_factory = client_factory

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(predictions.router, prefix="/v1", tags=["predictions"])
    app.include_router(transactions.router, prefix="/v1", tags=["transactions"])
    app.include_router(dashboard.router, prefix="/v1", tags=["dashboard"])
    app.include_router(endpoint_settings.router, prefix="/v1", tags=["settings"])
    app.include_router(rules.router, prefix="/v1", tags=["rules"])
    app.include_router(reports.router, prefix="/v1", tags=["reports"])

    return app


app = create_app()
