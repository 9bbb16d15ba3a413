"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict

from pythonjsonlogger import jsonlogger

from fiscal_engine.config import settings


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

    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter("%(timestamp)s %(level)s %(name)s %(message)s")
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_summary(
    run_id: str,
    health_score: int,
    health_level: str,
    alert_count: int,
    rules_to_run: int,
    duration_ms: float,
) -> None:
    """Log structured dashboard summary outcome for analysis"""
    logging.info(
        "Financial summary completed",
        extra={
            "run_id": run_id,
            "step": "summary_complete",
            "health_score": health_score,
            "health_level": health_level,
            "alert_count": alert_count,
            "rules_to_run": rules_to_run,
            "duration_ms": duration_ms,
        },
    )
