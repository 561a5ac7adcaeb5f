"""Data models package."""

from markup_guard.models.tables import SanitizerTables

__all__ = ["SanitizerTables"]
