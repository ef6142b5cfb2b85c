"""Dashboard module: aggregated statistics and account fixtures."""

from .routers import router

__all__ = ["router"]
