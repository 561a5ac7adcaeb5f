"""
Link/Image Sanitizer

Strips script payloads from ``<a href>`` and ``<img src>`` attribute
blocks and collapses ``<script>``/``<xss>`` tags to ``[removed]``.
"""

import re

from markup_guard.passes.convergence import DEFAULT_MAX_ITERATIONS, fixed_point

REMOVED = "[removed]"

LINK_PATTERN = re.compile(r"<a\s+([^>]*?)(>|$)", re.IGNORECASE | re.DOTALL)
IMG_PATTERN = re.compile(r"<img\s+([^>]*?)(\s?/?>|$)", re.IGNORECASE | re.DOTALL)
SCRIPT_TAG_PATTERN = re.compile(r"<(/*)(script|xss)(.*?)>", re.IGNORECASE | re.DOTALL)

# Everything from href=/src= up to and including the first script marker
LINK_HREF_PATTERN = re.compile(
    r"href=.*?(?:(?:alert|prompt|confirm)(?:\(|&\#40;|`|&\#96;)|javascript:|livescript:"
    r"|mocha:|charset=|window\.|\(?document\)?\.|\.cookie|<script|<xss|d\s*a\s*t\s*a\s*:)",
    re.IGNORECASE | re.DOTALL,
)
IMG_SRC_PATTERN = re.compile(
    r"src=.*?(?:(?:alert|prompt|confirm|eval)(?:\(|&\#40;|`|&\#96;)|javascript:|livescript:"
    r"|mocha:|charset=|window\.|\(?document\)?\.|\.cookie|<script|<xss|base64\s*,)",
    re.IGNORECASE | re.DOTALL,
)

QUOTED_ATTRIBUTE_PATTERN = re.compile(r"\s*[a-z\-]+\s*=\s*(['\"]).*?\1", re.IGNORECASE | re.DOTALL)
INLINE_COMMENT_PATTERN = re.compile(r"/\*.*?\*/", re.DOTALL)


def filter_attributes(string: str) -> str:
    """
    Keep only quoted ``name="value"`` pairs, minus ``/* */`` comments.

    Unquoted or malformed attributes are dropped.
    """
    return "".join(
        INLINE_COMMENT_PATTERN.sub("", match.group(0))
        for match in QUOTED_ATTRIBUTE_PATTERN.finditer(string)
    )


def _scrub_attributes(match: re.Match, dangerous: re.Pattern) -> str:
    attributes = match.group(1)
    if not attributes:
        return match.group(0)

    cleaned = dangerous.sub(
        "", filter_attributes(attributes.replace("<", "").replace(">", ""))
    )

    whole = match.group(0)
    start = match.start(1) - match.start(0)
    end = match.end(1) - match.start(0)
    return whole[:start] + cleaned + whole[end:]


def js_link_removal(match: re.Match) -> str:
    """Substitution callback stripping script-bearing ``href`` values."""
    return _scrub_attributes(match, LINK_HREF_PATTERN)


def js_img_removal(match: re.Match) -> str:
    """Substitution callback stripping script-bearing ``src`` values."""
    return _scrub_attributes(match, IMG_SRC_PATTERN)


def strip_script_vectors(string: str, max_iterations: int = DEFAULT_MAX_ITERATIONS) -> str:
    """
    Scrub links, images and script tags until nothing changes.

    Removing one vector can unmask another inside the same tag,
    hence the loop.
    """
    def strip_once(value: str) -> str:
        value = LINK_PATTERN.sub(js_link_removal, value)
        value = IMG_PATTERN.sub(js_img_removal, value)
        return SCRIPT_TAG_PATTERN.sub(REMOVED, value)

    return fixed_point(strip_once, string, max_iterations, "strip_script_vectors")
