"""
Tests for Attribute Filter
"""

from markup_guard.models.tables import SanitizerTables
from markup_guard.passes.attributes import find_evil_attributes, remove_evil_attributes

ATTRIBUTES = SanitizerTables().disallowed_attributes


class TestFindEvilAttributes:
    """Tests for find_evil_attributes."""

    def test_finds_quoted_and_bare_tokens(self):
        tokens = find_evil_attributes('<a onclick="x()" onmouseover=y>', ATTRIBUTES)
        assert 'onclick="x()"' in tokens
        assert "onmouseover=y" in tokens

    def test_tokens_deduplicated(self):
        tokens = find_evil_attributes('<b onclick="x()">', ATTRIBUTES)
        assert tokens.count('onclick="x()"') == 1

    def test_name_must_start_attribute(self):
        tokens = find_evil_attributes('<p version="1" data-onload="x" action="y">', ATTRIBUTES)
        assert tokens == []

    def test_no_attributes_configured(self):
        assert find_evil_attributes('<a onclick="x()">', ()) == []


class TestRemoveEvilAttributes:
    """Tests for remove_evil_attributes."""

    def test_stacked_handlers_all_removed(self):
        """Test that several handlers on one tag are all removed."""
        result = remove_evil_attributes('<div onmouseover="a()" onclick="b()">x</div>', ATTRIBUTES)
        assert result == "<div  >x</div>"

    def test_unquoted_handler_removed(self):
        result = remove_evil_attributes('<a href="x" onclick=alert(1)>y</a>', ATTRIBUTES)
        assert result == '<a href="x" >y</a>'

    def test_xmlns_removed_outside_image_mode(self):
        tables = SanitizerTables()
        text = '<svg xmlns="http://www.w3.org/2000/svg">'
        assert remove_evil_attributes(text, tables.attributes_for(False)) == "<svg >"
        assert remove_evil_attributes(text, tables.attributes_for(True)) == text

    def test_text_without_tags_unchanged(self):
        text = "Nothing to see here"
        assert remove_evil_attributes(text, ATTRIBUTES) == text

    def test_free_text_untouched(self):
        """Test that text outside tags is never rewritten."""
        text = "the button = 5 is on"
        assert remove_evil_attributes(text, ATTRIBUTES) == text

    def test_names_ending_in_on_kept(self):
        text = '<div style="x">the common=1 case</div>'
        assert remove_evil_attributes(text, ATTRIBUTES) == text

    def test_benign_attributes_kept(self):
        text = '<form action="/submit" method="post"><input data-onclick="x"></form>'
        assert remove_evil_attributes(text, ATTRIBUTES) == text

    def test_xml_declaration_untouched(self):
        text = '<?xml version="1.0"?>'
        assert remove_evil_attributes(text, ATTRIBUTES) == text

    def test_entities_in_text_untouched(self):
        text = '&lt;b onclick="x"&gt; stays encoded'
        assert remove_evil_attributes(text, ATTRIBUTES) == text

    def test_tag_name_with_digit_kept(self):
        assert remove_evil_attributes('<h1 onclick="x()">T</h1>', ATTRIBUTES) == "<h1 >T</h1>"

    def test_slash_separated_handler_removed(self):
        assert remove_evil_attributes("<img/onerror=alert(1)>", ATTRIBUTES) == "<img >"
