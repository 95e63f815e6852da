"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from datetime import datetime
from typing import List, Literal, Optional, Union

from fraud_monitor.domain.models import Channel, PaymentMode, Transaction
from fraud_monitor.utils.date_utils import ensure_aware


class TransactionSchema(BaseModel):
    """Transaction as exchanged with the view layer"""

    model_config = ConfigDict(from_attributes=True)

    transaction_id: str = Field(..., min_length=1)
    amount: float = Field(..., ge=0, allow_inf_nan=False)
    timestamp: datetime
    payer_id: str
    payee_id: str
    channel: Channel
    payment_mode: PaymentMode
    payment_gateway: str
    is_fraud_predicted: bool = False
    is_fraud_reported: bool = False
    fraud_score: Optional[float] = None

    def to_domain(self) -> Transaction:
        data = self.model_dump()
        data["timestamp"] = ensure_aware(self.timestamp)
        return Transaction(**data)


class EnrichRequest(BaseModel):
    """Request body for POST /v1/enrich"""

    transactions: List[TransactionSchema]

    @field_validator("transactions")
    @classmethod
    def unique_transaction_ids(cls, transactions: List[TransactionSchema]) -> List[TransactionSchema]:
        seen = set()
        for t in transactions:
            if t.transaction_id in seen:
                raise ValueError(f"Duplicate transaction ID: {t.transaction_id}")
            seen.add(t.transaction_id)
        return transactions


class EnrichResponse(BaseModel):
    """Enriched transactions plus batch metadata"""

    transactions: List[TransactionSchema]
    total_fraud_count: int
    model_version: str
    source: str
    warning: Optional[str] = None


class TransactionListResponse(BaseModel):
    """Response for GET /v1/transactions"""

    transactions: List[TransactionSchema]
    total: int
    model_version: str
    total_fraud_count: int


class ImportRequest(BaseModel):
    """Request body for POST /v1/transactions/import"""

    content: str
    format: Optional[Literal["json", "csv"]] = None
    filename: Optional[str] = None


class ImportResponse(BaseModel):
    imported: int


class ChartSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    labels: List[str]
    predicted: List[int]
    reported: List[int]


class ConfusionMatrixSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    true_positives: int
    false_positives: int
    true_negatives: int
    false_negatives: int


class PerformanceSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    precision: float
    recall: float
    f1_score: float
    accuracy: float


class SummarySchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total_transactions: int
    flagged_transactions: int
    fraud_ratio: float
    avg_fraud_amount: float


class DashboardCharts(BaseModel):
    channel: ChartSchema
    payment_mode: ChartSchema
    time: ChartSchema


class DashboardResponse(BaseModel):
    """Response for GET /v1/dashboard"""

    summary: SummarySchema
    confusion_matrix: ConfusionMatrixSchema
    performance: PerformanceSchema
    charts: DashboardCharts
    model_version: str
    total_fraud_count: int
    prediction_source: str
    warning: Optional[str] = None


class EndpointSettingsRequest(BaseModel):
    """Request body for PUT /v1/settings/endpoint"""

    base_url: str = Field(..., min_length=1)


class EndpointSettingsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    base_url: str
    timeout_seconds: float
    fallback_fraud_count: int


class RuleCreateRequest(BaseModel):
    """Request body for POST /v1/rules"""

    name: str
    description: str
    type: str = "amount_threshold"
    value: Union[float, str]
    enabled: bool = True


class RuleSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    description: str
    type: str
    value: Union[float, str]
    enabled: bool


class ReportCreateRequest(BaseModel):
    """Request body for POST /v1/reports"""

    transaction_id: str
    description: str


class ReportSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    transaction_id: str
    description: str
    submitted_at: datetime
