"""Admin control plane module."""

from .routers import router

__all__ = ["router"]
