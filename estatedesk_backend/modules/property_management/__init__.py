"""Property management module."""

from .models import Property, PropertyStatus
from .routers import router

__all__ = [
    "Property",
    "PropertyStatus",
    "router",
]
