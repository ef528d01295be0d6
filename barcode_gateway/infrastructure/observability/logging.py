"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from pythonjsonlogger import jsonlogger
from barcode_gateway.config import settings


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


def log_generation(
    request_id: str,
    request_key: str,
    cycle_count: int,
    outcome: str,
    duration_ms: float,
    error_message: Optional[str] = None,
) -> None:
    """Log one structured record per generation request, warning level when rejected"""
    rejected = error_message is not None
    logging.log(
        logging.WARNING if rejected else logging.INFO,
        "Barcode generation rejected" if rejected else "Barcode generation completed",
        extra={
            "request_id": request_id,
            "request_key": request_key,
            "step": "generation_rejected" if rejected else "generation_complete",
            "outcome": outcome,
            "error_message": error_message,
            "cycle_count": cycle_count,
            "duration_ms": duration_ms,
        },
    )


def log_deduction(
    request_id: str,
    account_id: str,
    outcome: str,
    balance: Optional[int],
    duration_ms: float,
    error_message: Optional[str] = None,
) -> None:
    """Log structured quota deduction outcome for auditing"""
    rejected = error_message is not None
    logging.log(
        logging.WARNING if rejected else logging.INFO,
        "Quota deduction rejected" if rejected else "Quota deduction completed",
        extra={
            "request_id": request_id,
            "account_id": account_id,
            "step": "deduction_rejected" if rejected else "deduction_complete",
            "outcome": outcome,
            "error_message": error_message,
            "balance": balance,
            "duration_ms": duration_ms,
        },
    )
