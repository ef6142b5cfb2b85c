"""
Central logging configuration.

Console output always goes through a ``StreamHandler``. When file logging is
enabled, records are pushed onto a queue and written by a background
``QueueListener`` to both the console and a rotating file, so request
handlers never block on disk I/O.
"""

import logging
import os
import queue
import sys
from logging.handlers import QueueHandler, QueueListener, RotatingFileHandler

from .context import TransactionIdFilter
from .formatter import build_formatter

APP_LOGGER = "estatedesk_backend"

QUIET_LOGGERS = {
    "sqlalchemy": logging.WARNING,
    "aiosqlite": logging.WARNING,
    "asyncmy": logging.WARNING,
    "uvicorn": logging.INFO,
    "fastapi": logging.INFO,
}


class LoggingConfig:
    """Owns the handlers installed on the application logger."""

    def __init__(self):
        self.listener: QueueListener | None = None
        self._is_configured = False

    def setup(
        self,
        log_level: str = "INFO",
        log_to_file: bool = False,
        log_file_path: str = "logs/app.log",
        use_json_format: bool = True,
        max_bytes: int = 50 * 1024 * 1024,
        backup_count: int = 5,
    ) -> logging.Logger:
        """
        Configure the application logger.

        Args:
            log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
            log_to_file: Whether to also write a rotating log file
            log_file_path: Path to the log file
            use_json_format: Whether to emit JSON lines
            max_bytes: Maximum file size before rotation
            backup_count: Number of rotated files to keep

        Returns:
            The configured application logger
        """
        logger = logging.getLogger(APP_LOGGER)
        if self._is_configured:
            return logger

        level = getattr(logging, log_level.upper(), logging.INFO)
        formatter = build_formatter(use_json_format)
        txn_filter = TransactionIdFilter()

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)

        logger.handlers.clear()
        logger.setLevel(level)
        logger.propagate = False

        if log_to_file:
            log_dir = os.path.dirname(log_file_path)
            if log_dir:
                os.makedirs(log_dir, exist_ok=True)
            file_handler = RotatingFileHandler(
                log_file_path, maxBytes=max_bytes, backupCount=backup_count
            )
            file_handler.setLevel(level)
            file_handler.setFormatter(formatter)

            log_queue: queue.Queue = queue.Queue()
            queue_handler = QueueHandler(log_queue)
            queue_handler.setLevel(level)
            # The filter must run on the request's thread, before the record is queued
            queue_handler.addFilter(txn_filter)
            self.listener = QueueListener(
                log_queue, console_handler, file_handler, respect_handler_level=True
            )
            self.listener.start()
            logger.addHandler(queue_handler)
        else:
            console_handler.addFilter(txn_filter)
            logger.addHandler(console_handler)

        for name, quiet_level in QUIET_LOGGERS.items():
            logging.getLogger(name).setLevel(quiet_level)

        self._is_configured = True
        return logger

    def shutdown(self) -> None:
        if self.listener:
            self.listener.stop()
            self.listener = None
        self._is_configured = False


_logging_config = LoggingConfig()


def setup_logging(settings=None) -> logging.Logger:
    """Set up logging from application settings (idempotent)."""
    if settings is None:
        from ...config import settings

    return _logging_config.setup(
        log_level=settings.log_level,
        log_to_file=settings.log_to_file,
        log_file_path=settings.log_file_path,
        use_json_format=settings.log_format.lower() == "json",
        max_bytes=settings.log_max_bytes,
        backup_count=settings.log_backup_count,
    )


def get_logger(name: str | None = None) -> logging.Logger:
    """Get a logger under the application namespace."""
    if name:
        if name.startswith(APP_LOGGER):
            return logging.getLogger(name)
        return logging.getLogger(f"{APP_LOGGER}.{name}")
    return logging.getLogger(APP_LOGGER)


def shutdown_logging() -> None:
    _logging_config.shutdown()
