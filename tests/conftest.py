"""Pytest fixtures for testing"""

import json
import pytest
import httpx
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Generator, List, Optional
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool
from fraud_monitor.api.main import create_app
from fraud_monitor.infrastructure.clients.prediction import PredictionClient
from fraud_monitor.infrastructure.database.models import Base
from fraud_monitor.domain.models import Channel, PaymentMode, Transaction


# Test database: one shared in-memory connection
engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class FakeModelServer:
    """httpx.MockTransport handler standing in for the /predict endpoint"""

    def __init__(self):
        self.available = True
        self.status_code = 200
        self.response: Optional[Dict[str, Any]] = None
        self.fraud_cases = 11
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self.available:
            raise httpx.ConnectError("Connection refused", request=request)
        if self.response is not None:
            return httpx.Response(self.status_code, json=self.response)

        transactions = json.loads(request.content)["transactions"]
        ranked = sorted(transactions, key=lambda t: t["amount"], reverse=True)
        fraud_ids = {t["transaction_id"] for t in ranked[: self.fraud_cases]}
        return httpx.Response(
            self.status_code,
            json={
                "predictions": [
                    {
                        "transaction_id": t["transaction_id"],
                        "is_fraud_predicted": t["transaction_id"] in fraud_ids,
                        "fraud_score": 0.9 if t["transaction_id"] in fraud_ids else 0.2,
                    }
                    for t in transactions
                ],
                "total_fraud_count": len(fraud_ids),
                "model_version": "test-model-v1",
                "timestamp": "2024-05-01T12:00:00+00:00",
            },
        )

    def client_factory(self, config) -> PredictionClient:
        return PredictionClient(
            base_url=config.base_url,
            timeout=config.timeout_seconds,
            transport=httpx.MockTransport(self),
        )


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def fake_model() -> FakeModelServer:
    return FakeModelServer()


@pytest.fixture
def client(db: Session, fake_model: FakeModelServer) -> TestClient:
    """Create FastAPI test client with test database and fake model endpoint"""
    app = create_app(session_factory=TestingSessionLocal, client_factory=fake_model.client_factory)
    return TestClient(app)


def make_transaction(
    transaction_id: str,
    amount: float = 100.0,
    predicted: bool = False,
    reported: bool = False,
    channel: Channel = Channel.WEB,
    payment_mode: PaymentMode = PaymentMode.CARD,
    gateway: str = "Stripe",
    timestamp: Optional[datetime] = None,
    payer_id: str = "P-0001",
    payee_id: str = "M-0001",
) -> Transaction:
    return Transaction(
        transaction_id=transaction_id,
        amount=amount,
        timestamp=timestamp or datetime.now(timezone.utc),
        payer_id=payer_id,
        payee_id=payee_id,
        channel=channel,
        payment_mode=payment_mode,
        payment_gateway=gateway,
        is_fraud_predicted=predicted,
        is_fraud_reported=reported,
    )


@pytest.fixture
def sample_transactions() -> list[Transaction]:
    """Twenty transactions with distinct amounts and mixed labels"""
    now = datetime.now(timezone.utc)
    return [
        make_transaction(
            f"TXN-{100000 + i}",
            amount=float(100 * (i + 1)),
            reported=i % 4 == 0,
            channel=list(Channel)[i % 4],
            payment_mode=list(PaymentMode)[i % 4],
            gateway=["PayPal", "Stripe", "Square"][i % 3],
            timestamp=now - timedelta(days=i),
            payer_id=f"P-{i:04d}",
            payee_id=f"M-{i % 5:04d}",
        )
        for i in range(20)
    ]


@pytest.fixture
def txn():
    """Factory for single transactions"""
    return make_transaction


@pytest.fixture
def session_factory(db: Session):
    """Session factory bound to the test database (tables created by `db`)"""
    return TestingSessionLocal
