"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import List, Optional, Tuple, Union


class Channel(str, Enum):
    WEB = "Web"
    MOBILE = "Mobile"
    IN_PERSON = "In-person"
    API = "API"


class PaymentMode(str, Enum):
    CARD = "Card"
    UPI = "UPI"
    BANK_TRANSFER = "Bank Transfer"
    WALLET = "Wallet"


@dataclass
class Transaction:
    """Payment transaction shown on the dashboard"""

    transaction_id: str
    amount: float
    timestamp: datetime  # timezone-aware
    payer_id: str
    payee_id: str
    channel: Channel
    payment_mode: PaymentMode
    payment_gateway: str
    is_fraud_predicted: bool = False
    is_fraud_reported: bool = False  # ground truth, never changed by enrichment
    fraud_score: Optional[float] = None


@dataclass(frozen=True)
class PredictionResult:
    """Model output for a single transaction"""

    transaction_id: str
    is_fraud_predicted: bool
    fraud_score: float


@dataclass(frozen=True)
class PredictionBatch:
    """Predictions produced by one enrichment call"""

    predictions: Tuple[PredictionResult, ...]
    total_fraud_count: int
    model_version: str
    timestamp: datetime


@dataclass
class EnrichmentResult:
    """Transactions merged with a prediction batch"""

    transactions: List[Transaction]
    total_fraud_count: int
    model_version: str
    source: str  # "remote" | "fallback" | "none"
    generation: int = 0
    warning: Optional[str] = None
    error: Optional[str] = None
    stale: bool = False


@dataclass
class ConfusionMatrix:
    """Predicted vs reported fraud over a transaction set"""

    true_positives: int = 0
    false_positives: int = 0
    true_negatives: int = 0
    false_negatives: int = 0

    @property
    def total(self) -> int:
        return self.true_positives + self.false_positives + self.true_negatives + self.false_negatives


@dataclass
class PerformanceMetrics:
    """Ratios derived from a confusion matrix, each in [0, 1]"""

    precision: float
    recall: float
    f1_score: float
    accuracy: float


@dataclass
class ChartData:
    """Count series for one chart"""

    labels: List[str]
    predicted: List[int]
    reported: List[int]


@dataclass
class SummaryMetrics:
    """Headline numbers for the dashboard cards"""

    total_transactions: int
    flagged_transactions: int
    fraud_ratio: float
    avg_fraud_amount: float


@dataclass
class TransactionFilters:
    """Client-side style filters applied to the dataset"""

    start_date: Optional[date] = None
    end_date: Optional[date] = None
    payer_id: str = ""
    payee_id: str = ""
    search_query: str = ""
    fraud_status: str = "all"  # all | predicted | reported | mismatch


@dataclass
class EndpointConfig:
    """Where and how to call the prediction endpoint"""

    base_url: str
    timeout_seconds: float = 10.0
    fallback_fraud_count: int = 11


@dataclass
class Rule:
    """User-configured fraud detection rule"""

    id: str
    name: str
    description: str
    type: str
    value: Union[float, str]
    enabled: bool = True


@dataclass
class FraudReport:
    """Suspicious transaction reported to the authorities"""

    transaction_id: str
    description: str
    submitted_at: datetime = field(default_factory=lambda: datetime.now().astimezone())
