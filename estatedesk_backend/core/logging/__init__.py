"""Logging infrastructure for the EstateDesk backend."""

from .context import (
    TransactionIdFilter,
    get_transaction_id,
    set_account_id,
    set_transaction_id,
)
from .formatter import StructuredFormatter
from .logger_config import get_logger, setup_logging, shutdown_logging
from .middleware import LoggingMiddleware, RequestIdMiddleware

__all__ = [
    "StructuredFormatter",
    "TransactionIdFilter",
    "get_transaction_id",
    "set_transaction_id",
    "set_account_id",
    "get_logger",
    "setup_logging",
    "shutdown_logging",
    "LoggingMiddleware",
    "RequestIdMiddleware",
]
