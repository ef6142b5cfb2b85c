"""Financial ledger module."""

from .models import FinancialRecord, RecordType
from .routers import router

__all__ = [
    "FinancialRecord",
    "RecordType",
    "router",
]
