"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger import jsonlogger

from fraud_monitor.config import settings


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name


def setup_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    # JSON handler for stdout
    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_enrichment(
    generation: int,
    source: str,
    model_version: str,
    transaction_count: int,
    total_fraud_count: int,
    duration_ms: float,
) -> None:
    """Log structured enrichment outcome for analysis"""
    logging.info(
        "Enrichment completed",
        extra={
            "generation": generation,
            "step": "enrichment_complete",
            "prediction_source": source,
            "model_version": model_version,
            "transaction_count": transaction_count,
            "total_fraud_count": total_fraud_count,
            "duration_ms": duration_ms,
        },
    )
