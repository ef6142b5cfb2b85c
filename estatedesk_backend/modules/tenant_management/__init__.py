"""Tenant management module: tenants, leases and cheques."""

from .models import Cheque, FreeMonthType, Tenant, TenantStatus
from .routers import router

__all__ = [
    "Tenant",
    "Cheque",
    "TenantStatus",
    "FreeMonthType",
    "router",
]
