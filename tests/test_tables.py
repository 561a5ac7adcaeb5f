"""
Tests for Sanitizer Tables
"""

import pytest
from pydantic import ValidationError

from markup_guard.models.tables import DEFAULT_NAUGHTY_HTML, SanitizerTables


class TestSanitizerTables:
    """Tests for SanitizerTables model."""

    def test_defaults(self):
        tables = SanitizerTables()
        assert tables.naughty_html == DEFAULT_NAUGHTY_HTML
        assert tables.never_allowed_str["<!--"] == "&lt;!--"
        assert "xmlns" in tables.disallowed_attributes

    def test_image_mode_allows_xmlns(self):
        tables = SanitizerTables()
        assert "xmlns" not in tables.attributes_for(True)
        assert "xmlns" in tables.attributes_for(False)
        assert r"on\w*" in tables.attributes_for(True)

    def test_words_lowercased(self):
        tables = SanitizerTables(naughty_html=["BLINK", "Marquee"])
        assert tables.naughty_html == ("blink", "marquee")

    def test_empty_word_list_rejected(self):
        with pytest.raises(ValidationError):
            SanitizerTables(naughty_scripts=[])

    def test_invalid_pattern_rejected(self):
        with pytest.raises(ValidationError):
            SanitizerTables(never_allowed_regex=["(unclosed"])

    def test_tables_are_frozen(self):
        tables = SanitizerTables()
        with pytest.raises(ValidationError):
            tables.naughty_html = ("blink",)

    def test_alternation_patterns_escaped(self):
        tables = SanitizerTables(naughty_scripts=["file_get_contents", "a.b"])
        assert tables.naughty_scripts_pattern == r"file_get_contents|a\.b"
