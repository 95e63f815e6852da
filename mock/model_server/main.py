from datetime import datetime, timezone
from typing import List

from fastapi import FastAPI
from pydantic import BaseModel

app = FastAPI(title="Mock Fraud Model Server", version="1.0.0")

FRAUD_CASES = 11


class ScoringTransaction(BaseModel):
    transaction_id: str
    amount: float
    timestamp: str
    payer_id: str
    payee_id: str
    channel: str
    payment_mode: str
    payment_gateway: str


class PredictRequest(BaseModel):
    transactions: List[ScoringTransaction]


@app.get("/health")
def health(): return {"status": "ok"}

@app.post("/predict")
def predict(body: PredictRequest):
    # Stand-in model: the highest amounts are fraud
    ranked = sorted(body.transactions, key=lambda t: t.amount, reverse=True)
    fraud_ids = {t.transaction_id for t in ranked[:FRAUD_CASES]}
    return {
        "predictions": [
            {
                "transaction_id": t.transaction_id,
                "is_fraud_predicted": t.transaction_id in fraud_ids,
                "fraud_score": 0.9 if t.transaction_id in fraud_ids else 0.2,
            }
            for t in body.transactions
        ],
        "total_fraud_count": len(fraud_ids),
        "model_version": "mock-model-v1.0",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
