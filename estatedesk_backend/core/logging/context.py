"""Per-request logging context (transaction id and calling account)."""

import logging
import uuid
from contextvars import ContextVar

_transaction_id: ContextVar[str | None] = ContextVar("transaction_id", default=None)
_account_id: ContextVar[int | None] = ContextVar("account_id", default=None)


def generate_transaction_id() -> str:
    """Short random id used to correlate all records of one request."""
    return uuid.uuid4().hex[:8]


def get_transaction_id() -> str:
    """Get the current transaction ID or generate a new one."""
    txn_id = _transaction_id.get()
    if txn_id is None:
        txn_id = generate_transaction_id()
        _transaction_id.set(txn_id)
    return txn_id


def set_transaction_id(txn_id: str) -> None:
    _transaction_id.set(txn_id)


def get_account_id() -> int | None:
    return _account_id.get()


def set_account_id(account_id: int | None) -> None:
    """Bind the authenticated account to the current request's log records."""
    _account_id.set(account_id)


class TransactionIdFilter(logging.Filter):
    """Logging filter that stamps transaction and account ids on records."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not getattr(record, "transaction_id", None):
            record.transaction_id = get_transaction_id()
        if getattr(record, "account_id", None) is None:
            record.account_id = get_account_id()
        return True
