"""
Filename Sanitizer

Cleans user-supplied filenames:
- Remove invisible control characters
- Remove path traversal and markup tokens (raw and percent-encoded)
- Remove backslash escaping
"""

import re
from typing import Optional

from markup_guard.models.tables import SanitizerTables
from markup_guard.passes.convergence import DEFAULT_MAX_ITERATIONS, fixed_point
from markup_guard.passes.normalize import remove_invisible_characters

BACKSLASH_ESCAPE_PATTERN = re.compile(r"\\(.?)", re.DOTALL)


class FilenameSanitizer:
    """
    Sanitizes filenames to prevent directory traversal and other threats.

    If user input may include relative paths, e.g.
    ``file/in/some/approved/folder.txt``, pass ``relative_path=True``.
    """

    def __init__(
        self,
        tables: Optional[SanitizerTables] = None,
        max_iterations: int = DEFAULT_MAX_ITERATIONS,
    ):
        self.tables = tables or SanitizerTables()
        self.max_iterations = max_iterations
        self._bad = self._compile(self.tables.filename_bad_chars)
        self._bad_with_paths = self._compile(self.tables.filename_bad_chars + ("./", "/"))

    @staticmethod
    def _compile(tokens) -> re.Pattern:
        # Longest first so "<!--" is removed before "<"
        ordered = sorted(set(tokens), key=len, reverse=True)
        return re.compile("|".join(re.escape(token) for token in ordered), re.IGNORECASE)

    def sanitize(self, filename: str, relative_path: bool = False) -> str:
        """
        Sanitize a filename.

        Args:
            filename: Raw filename
            relative_path: Keep ``/`` and ``./`` so relative paths survive

        Returns:
            Sanitized filename (may be empty)
        """
        if not filename:
            return ""

        bad = self._bad if relative_path else self._bad_with_paths

        # Filenames are not URL-decoded, so only raw control characters matter
        filename = remove_invisible_characters(
            filename, url_encoded=False, max_iterations=self.max_iterations
        )
        filename = fixed_point(
            lambda value: bad.sub("", value), filename, self.max_iterations, "sanitize_filename"
        )

        return BACKSLASH_ESCAPE_PATTERN.sub(r"\1", filename)
