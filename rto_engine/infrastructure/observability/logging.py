"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger import jsonlogger

SERVICE_NAME = "rto-engine"


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = SERVICE_NAME


def setup_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_assessment(
    request_id: str,
    verdict: str,
    tier: str,
    score: float,
    duration_ms: float,
) -> None:
    """Log structured risk assessment outcome for analysis"""
    logging.info(
        "Risk assessment completed",
        extra={
            "request_id": request_id,
            "step": "risk_complete",
            "verdict": verdict,
            "risk_tier": tier,
            "risk_score": score,
            "duration_ms": duration_ms,
        },
    )


def log_ranking(
    request_id: str,
    candidates: int,
    ranked: int,
    excluded: int,
    duration_ms: float,
) -> None:
    """Log structured ranking outcome, including how many candidates were dropped"""
    logging.info(
        "Ranking completed",
        extra={
            "request_id": request_id,
            "step": "ranking_complete",
            "candidates": candidates,
            "ranked": ranked,
            "excluded": excluded,
            "duration_ms": duration_ms,
        },
    )
