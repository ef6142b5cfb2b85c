"""
Structured JSON log formatting built on python-json-logger.
"""

import logging
import traceback
from datetime import datetime, timezone
from typing import Any

from pythonjsonlogger.json import JsonFormatter

from .context import get_account_id, get_transaction_id

SERVICE_NAME = "estatedesk-backend"
SERVICE_VERSION = "1.0.0"

JSON_FORMAT = "%(timestamp)s %(level)s %(transaction_id)s %(message)s"
TEXT_FORMAT = (
    "%(asctime)s | %(levelname)s | %(transaction_id)s | "
    "%(filename)s:%(lineno)d | %(message)s"
)


class StructuredFormatter(JsonFormatter):
    """JSON formatter that adds correlation and source fields to every record."""

    def add_fields(
        self,
        log_record: dict[str, Any],
        record: logging.LogRecord,
        message_dict: dict[str, Any],
    ) -> None:
        super().add_fields(log_record, record, message_dict)

        log_record["timestamp"] = datetime.fromtimestamp(
            record.created, tz=timezone.utc
        ).isoformat()
        log_record["transaction_id"] = (
            getattr(record, "transaction_id", None) or get_transaction_id()
        )
        account_id = getattr(record, "account_id", None) or get_account_id()
        if account_id is not None:
            log_record["account_id"] = account_id

        log_record["level"] = record.levelname
        log_record["logger_name"] = record.name
        log_record["module"] = record.module
        log_record["function"] = record.funcName
        log_record["line"] = record.lineno
        log_record["service"] = {"name": SERVICE_NAME, "version": SERVICE_VERSION}

        if record.exc_info and record.exc_info[0] is not None:
            log_record["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "stacktrace": traceback.format_exception(*record.exc_info),
            }
            log_record.pop("exc_info", None)

        for field in ["msg", "args", "created", "msecs", "relativeCreated", "pathname"]:
            log_record.pop(field, None)


def build_formatter(use_json_format: bool) -> logging.Formatter:
    if use_json_format:
        return StructuredFormatter(fmt=JSON_FORMAT)
    return logging.Formatter(TEXT_FORMAT)
