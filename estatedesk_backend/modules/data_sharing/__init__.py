"""Cross-account data sharing module."""

from .models import DataShare, ShareScope
from .routers import router

__all__ = [
    "DataShare",
    "ShareScope",
    "router",
]
