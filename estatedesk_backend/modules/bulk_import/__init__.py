"""Bulk spreadsheet import and export module."""

from .routers import router

__all__ = ["router"]
