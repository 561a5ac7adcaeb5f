"""Security package - filename sanitization."""

from markup_guard.security.filename import FilenameSanitizer

__all__ = ["FilenameSanitizer"]
