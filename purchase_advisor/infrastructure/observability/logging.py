"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger.json import JsonFormatter


class CustomJsonFormatter(JsonFormatter):
    """JSON formatter stamping each record with a UTC timestamp and the service name"""

    def __init__(self, *args, service_name: str = "purchase-advisor", **kwargs):
        super().__init__(*args, **kwargs)
        self.service_name = service_name

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = self.service_name


def setup_logging(level: str = "INFO", service_name: str = "purchase-advisor") -> None:
    """Route the root logger to stdout as one JSON object per line"""
    root = logging.getLogger()
    root.setLevel(level)

    # Replace handlers installed by uvicorn or earlier calls
    root.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        CustomJsonFormatter("%(timestamp)s %(level)s %(name)s %(message)s", service_name=service_name)
    )
    root.addHandler(handler)


def log_decision(
    request_id: str,
    item_name: str,
    decision: str,
    final_score: float,
    flip_levers: list[str],
    duration_ms: float,
) -> None:
    """Log structured decision outcome for analysis"""
    logging.info(
        "Decision completed",
        extra={
            "request_id": request_id,
            "item_name": item_name,
            "step": "decision_complete",
            "decision": decision,
            "final_score": round(final_score, 2),
            "flip_levers": flip_levers,
            "duration_ms": duration_ms,
        },
    )


def log_classification(request_id: str, item_name: str, category: str, cached: bool) -> None:
    """Log structured classification outcome"""
    logging.info(
        "Classification completed",
        extra={
            "request_id": request_id,
            "item_name": item_name,
            "step": "classification_complete",
            "category": category,
            "cached": cached,
        },
    )
