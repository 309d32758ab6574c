"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Dict
from pythonjsonlogger import jsonlogger

from mei_finance.config import settings


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
        "%(timestamp)s %(level)s %(name)s %(message)s",
        json_default=str,
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_archive(month: int, year: int, net_balance: Decimal, created: bool) -> None:
    """Log archived month outcome"""
    logging.info(
        "Month archived",
        extra={
            "step": "archive_month",
            "period": f"{year}-{month:02d}",
            "net_balance": str(net_balance),
            "outcome": "created" if created else "updated",
        },
    )


def log_rollover(month: int, year: int, copied: int, das_copied: bool) -> None:
    logging.info(
        "Next month prepared",
        extra={
            "step": "prepare_next_month",
            "target_period": f"{year}-{month:02d}",
            "copied_transactions": copied,
            "das_copied": das_copied,
        },
    )


def log_card_transaction(card_id: str, amount: Decimal, installment_count: int) -> None:
    logging.info(
        "Card purchase recorded",
        extra={
            "step": "add_card_transaction",
            "card_id": card_id,
            "amount": str(amount),
            "installment_count": installment_count,
        },
    )
