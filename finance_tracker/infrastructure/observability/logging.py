"""Structured JSON logging"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger import jsonlogger

from finance_tracker.config import settings


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


def log_rollover(
    changes_made: bool,
    installments_accrued: int,
    last_processed_month: str,
    duration_ms: float,
) -> None:
    """Log structured rollover outcome"""
    logging.info(
        "Month rollover processed" if changes_made else "Month rollover: nothing to accrue",
        extra={
            "step": "startup_rollover",
            "changes_made": changes_made,
            "installments_accrued": installments_accrued,
            "last_processed_month": last_processed_month,
            "duration_ms": duration_ms,
        },
    )


def log_mutation(request_id: str, operation: str, entity_id: str | None = None) -> None:
    """Log a snapshot mutation"""
    logging.info(
        "Snapshot updated",
        extra={
            "request_id": request_id,
            "step": "mutation",
            "operation": operation,
            "entity_id": entity_id,
        },
    )
