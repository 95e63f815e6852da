"""Transaction import - JSON/CSV parsing and field-name normalisation"""

import csv
import io
import json
import math
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from fraud_monitor.domain.exceptions import InvalidImportDataError
from fraud_monitor.domain.models import Channel, PaymentMode, Transaction
from fraud_monitor.utils.date_utils import ensure_aware

SUPPORTED_FORMATS = ("json", "csv")

# Alternative source field names, in lookup order
FIELD_ALIASES: Dict[str, tuple] = {
    "transaction_id": ("transaction_id", "id", "txn_id"),
    "amount": ("amount", "transaction_amount"),
    "timestamp": ("timestamp", "date", "transaction_date"),
    "payer_id": ("payer_id", "sender_id", "from"),
    "payee_id": ("payee_id", "receiver_id", "to"),
    "channel": ("channel", "transaction_channel"),
    "payment_mode": ("payment_mode", "payment_method", "method"),
    "payment_gateway": ("payment_gateway", "gateway", "processor"),
    "is_fraud_predicted": ("is_fraud", "is_fraud_predicted", "fraud_predicted", "isFraud"),
    "is_fraud_reported": ("is_fraud_reported", "fraud_reported", "reported_fraud"),
}

CHANNEL_KEYWORDS = [
    (Channel.WEB, ("web", "online")),
    (Channel.MOBILE, ("mobile", "app")),
    (Channel.IN_PERSON, ("person", "pos", "terminal")),
    (Channel.API, ("api", "service")),
]

PAYMENT_MODE_KEYWORDS = [
    (PaymentMode.CARD, ("card", "credit", "debit")),
    (PaymentMode.UPI, ("upi", "instant")),
    (PaymentMode.BANK_TRANSFER, ("bank", "transfer", "wire")),
    (PaymentMode.WALLET, ("wallet", "paypal", "venmo")),
]

TRUE_STRINGS = {"true", "1", "yes", "y", "t"}


def detect_format(filename: str) -> str:
    """Import format from a file name's extension"""
    lowered = filename.lower()
    for fmt in SUPPORTED_FORMATS:
        if lowered.endswith(f".{fmt}"):
            return fmt
    raise InvalidImportDataError("Unsupported file format. Please upload .json or .csv files.")


def parse_import(content: str, fmt: str) -> List[Dict[str, Any]]:
    """
    Parse raw import text into a list of records.

    Raises:
        InvalidImportDataError: If the text cannot be parsed or is not a list of objects
    """
    if fmt == "json":
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise InvalidImportDataError("Invalid JSON. Please check your JSON syntax and try again.") from e
        if not isinstance(data, list):
            raise InvalidImportDataError("The data must be an array of transaction objects.")
        return data

    if fmt == "csv":
        try:
            reader = csv.DictReader(io.StringIO(content.strip()))
            return [
                {k.strip(): (v.strip() if isinstance(v, str) else v) for k, v in row.items() if k}
                for row in reader
                if any(isinstance(v, str) and v.strip() for v in row.values())
            ]
        except csv.Error as e:
            raise InvalidImportDataError("Failed to parse file. Please check the file format and try again.") from e

    raise InvalidImportDataError(f"Unsupported import format: {fmt}")


def transform_to_transactions(records: List[Any]) -> List[Transaction]:
    """
    Normalise heterogeneous records into Transactions.

    Missing fields get defaults; channel and payment mode are mapped by
    keyword. A record that is not an object, whose amount or timestamp
    cannot be read, or whose id repeats an earlier one rejects the whole
    import.
    """
    transactions = []
    seen_ids = set()
    for position, record in enumerate(records, start=1):
        if not isinstance(record, dict):
            raise InvalidImportDataError(f"Record {position} is not a transaction object.")
        try:
            transaction = _to_transaction(record)
        except (TypeError, ValueError) as e:
            raise InvalidImportDataError(f"Record {position} is invalid: {e}") from e
        if transaction.transaction_id in seen_ids:
            raise InvalidImportDataError(f"Duplicate transaction ID: {transaction.transaction_id}")
        seen_ids.add(transaction.transaction_id)
        transactions.append(transaction)
    return transactions


def _to_transaction(record: Dict[str, Any]) -> Transaction:
    amount = float(_pick(record, "amount") or 0)
    if not math.isfinite(amount):
        raise ValueError("amount must be a finite number")
    if amount < 0:
        raise ValueError("amount must not be negative")

    return Transaction(
        transaction_id=str(_pick(record, "transaction_id") or f"TXN-{uuid.uuid4().hex[:9]}"),
        amount=amount,
        timestamp=_parse_timestamp(_pick(record, "timestamp")),
        payer_id=str(_pick(record, "payer_id") or "unknown"),
        payee_id=str(_pick(record, "payee_id") or "unknown"),
        channel=map_channel(_pick(record, "channel")),
        payment_mode=map_payment_mode(_pick(record, "payment_mode")),
        payment_gateway=str(_pick(record, "payment_gateway") or "Unknown"),
        is_fraud_predicted=_to_bool(_pick(record, "is_fraud_predicted")),
        is_fraud_reported=_to_bool(_pick(record, "is_fraud_reported")),
    )


def _pick(record: Dict[str, Any], field_name: str) -> Optional[Any]:
    # First non-empty alias wins
    for alias in FIELD_ALIASES[field_name]:
        value = record.get(alias)
        if value not in (None, ""):
            return value
    return None


def _parse_timestamp(value: Any) -> datetime:
    if value is None:
        return datetime.now(timezone.utc)
    if isinstance(value, datetime):
        return ensure_aware(value)
    return ensure_aware(datetime.fromisoformat(str(value)))


def _to_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in TRUE_STRINGS
    return bool(value)


def map_channel(value: Optional[str]) -> Channel:
    """Map free-text channel names onto the standard channels (default Web)"""
    if not value:
        return Channel.WEB
    lowered = str(value).lower()
    for channel, keywords in CHANNEL_KEYWORDS:
        if any(k in lowered for k in keywords):
            return channel
    return Channel.WEB


def map_payment_mode(value: Optional[str]) -> PaymentMode:
    """Map free-text payment method names onto the standard modes (default Card)"""
    if not value:
        return PaymentMode.CARD
    lowered = str(value).lower()
    for mode, keywords in PAYMENT_MODE_KEYWORDS:
        if any(k in lowered for k in keywords):
            return mode
    return PaymentMode.CARD
