"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pythonjsonlogger.json import JsonFormatter

from payment_calculator.config import settings


class CustomJsonFormatter(JsonFormatter):
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


def log_comparison(
    request_id: str,
    monthly_turnover: float,
    recommended_strategy: str,
    annual_profit_difference: float,
    duration_ms: float,
) -> None:
    """Log structured comparison outcome for analysis"""
    logging.info(
        "Comparison completed",
        extra={
            "request_id": request_id,
            "step": "comparison_complete",
            "monthly_turnover": monthly_turnover,
            "recommended_strategy": recommended_strategy,
            "annual_profit_difference": annual_profit_difference,
            "duration_ms": duration_ms,
        },
    )


def log_sweep(
    request_id: str,
    points: int,
    break_even_turnover: Optional[float],
    duration_ms: float,
) -> None:
    """Log structured curve generation outcome"""
    logging.info(
        "Curve generated",
        extra={
            "request_id": request_id,
            "step": "curve_complete",
            "points": points,
            "break_even_turnover": break_even_turnover,
            "duration_ms": duration_ms,
        },
    )
