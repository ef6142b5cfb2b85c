"""Rent tracking module."""

from .models import PaymentMethod, RentTrackingEntry
from .routers import router

__all__ = [
    "PaymentMethod",
    "RentTrackingEntry",
    "router",
]
