"""Hooks package - filter and action dispatch."""

from markup_guard.hooks.filters import FilterHookManager

__all__ = ["FilterHookManager"]
