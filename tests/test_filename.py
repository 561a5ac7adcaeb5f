"""
Tests for Filename Sanitizer

Tests traversal removal, encoded token removal and relative paths.
"""

import pytest

from markup_guard.models.tables import SanitizerTables
from markup_guard.security.filename import FilenameSanitizer


class TestFilenameSanitizer:
    """Tests for FilenameSanitizer class."""

    @pytest.fixture
    def sanitizer(self):
        return FilenameSanitizer()

    def test_normal_filename_unchanged(self, sanitizer):
        """Test that normal filenames pass through."""
        assert sanitizer.sanitize("report-2024.pdf") == "report-2024.pdf"

    def test_empty_filename(self, sanitizer):
        assert sanitizer.sanitize("") == ""

    def test_removes_path_traversal(self, sanitizer):
        """Test removal of path traversal attempts."""
        assert sanitizer.sanitize("../../etc/passwd") == "etcpasswd"

    def test_relative_path_keeps_slashes(self, sanitizer):
        result = sanitizer.sanitize("uploads/../secret.txt", relative_path=True)
        assert result == "uploads/secret.txt"

    def test_nested_traversal_removed(self, sanitizer):
        """Test that removing one token cannot leave another behind."""
        assert sanitizer.sanitize("....//x", relative_path=True) == "x"

    def test_removes_markup_characters(self, sanitizer):
        result = sanitizer.sanitize('<script>"x".txt')
        assert result == "scriptx.txt"

    def test_removes_encoded_tokens_in_any_case(self, sanitizer):
        assert sanitizer.sanitize("file%3cname%3E.txt") == "filename.txt"

    def test_removes_control_characters(self, sanitizer):
        assert sanitizer.sanitize("na\x00me\x1f.txt") == "name.txt"

    def test_removes_backslash_escaping(self, sanitizer):
        assert sanitizer.sanitize("my\\ file.txt") == "my file.txt"

    def test_custom_bad_characters(self):
        sanitizer = FilenameSanitizer(SanitizerTables(filename_bad_chars=["~"]))
        assert sanitizer.sanitize("~backup<1>") == "backup<1>"
