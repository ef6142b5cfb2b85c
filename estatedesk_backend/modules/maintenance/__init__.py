"""Maintenance requests module."""

from .models import MaintenancePriority, MaintenanceRequest, MaintenanceStatus
from .routers import router

__all__ = [
    "MaintenanceRequest",
    "MaintenancePriority",
    "MaintenanceStatus",
    "router",
]
