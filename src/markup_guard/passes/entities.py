"""
Entity Decoder

Decodes character entities, but only inside attribute values and
tag-like tokens. Free text keeps its entities so encoded markup in
body text can never be turned back into a tag.
"""

import html
import re

from markup_guard.passes.convergence import DEFAULT_MAX_ITERATIONS, fixed_point

# Same shape html.unescape() recognizes: numeric refs and up to 32-char names,
# each with an optional semicolon
CHARREF_PATTERN = re.compile(r"&(#[0-9]+;?|#[xX][0-9a-fA-F]+;?|[^\t\n\f <&#;]{1,32};?)")

QUOTED_ATTRIBUTE_PATTERN = re.compile(r"[a-z]+=(['\"]).*?\1", re.IGNORECASE | re.DOTALL)
TAG_TOKEN_PATTERN = re.compile(r"<\w+.*?(?=>|<|$)", re.IGNORECASE | re.DOTALL)


def entity_decode(string: str, charset: str = "utf-8") -> str:
    """
    Decode HTML5 character entities, tolerating missing semicolons.

    Browsers decode ``&#106avascript`` even without the semicolon, so the
    decoder must too. Single-quote entities stay encoded, and so does any
    entity whose character cannot be represented in ``charset``.

    Args:
        string: Text to decode
        charset: Target character set of the decoded text

    Returns:
        The decoded string
    """
    if "&" not in string:
        return string

    def decode(match: re.Match) -> str:
        entity = match.group(0)
        char = html.unescape(entity)
        if char == entity or char.startswith("'"):
            return entity
        try:
            char.encode(charset)
        except UnicodeEncodeError:
            return entity
        return char

    return CHARREF_PATTERN.sub(decode, string)


def convert_attribute(match: re.Match) -> str:
    """Encode angle brackets inside a quoted attribute value."""
    return match.group(0).replace(">", "&gt;").replace("<", "&lt;")


def decode_tag_entities(
    string: str,
    charset: str = "utf-8",
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
) -> str:
    """
    Decode entities that sit inside tags, layer after layer.

    Quoted attribute values first get their angle brackets encoded so a
    ``>`` inside a value cannot end the tag token early; every tag-like
    token (``<name ...`` up to the next bracket) is then entity-decoded.
    Nested encodings (``&amp;quot;``) are peeled until nothing changes.
    """
    def decode_once(value: str) -> str:
        value = QUOTED_ATTRIBUTE_PATTERN.sub(convert_attribute, value)
        return TAG_TOKEN_PATTERN.sub(lambda m: entity_decode(m.group(0), charset), value)

    return fixed_point(decode_once, string, max_iterations, "decode_tag_entities")
