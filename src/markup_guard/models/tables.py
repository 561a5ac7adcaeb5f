"""
Sanitizer Tables

Denylist and allowlist tables consulted by the purifier passes.
Built once, read by every call, never mutated during sanitization.
"""

import re
from typing import Dict, Tuple

from pydantic import BaseModel, Field, field_validator


DEFAULT_NEVER_ALLOWED_STR: Dict[str, str] = {
    "document.cookie": "[removed]",
    "document.write": "[removed]",
    ".parentNode": "[removed]",
    ".innerHTML": "[removed]",
    "window.location": "[removed]",
    "-moz-binding": "[removed]",
    "<!--": "&lt;!--",
    "-->": "--&gt;",
    "<![CDATA[": "&lt;![CDATA[",
    "<comment>": "&lt;comment&gt;",
}

DEFAULT_NEVER_ALLOWED_REGEX: Tuple[str, ...] = (
    r"javascript\s*:",
    r"expression\s*(\(|&\#40;)",  # CSS and IE
    r"vbscript\s*:",
    r"Redirect\s+30\d",
    r"([\"'])?data\s*:.*?base64.*?,.*?\1?",
)

DEFAULT_DISALLOWED_ATTRIBUTES: Tuple[str, ...] = (r"on\w*", "xmlns", "formaction")

DEFAULT_NAUGHTY_HTML: Tuple[str, ...] = (
    "alert", "applet", "audio", "basefont", "base", "behavior", "bgsound",
    "blink", "body", "embed", "expression", "form", "frameset", "frame",
    "head", "html", "iframe", "ilayer", "input", "isindex", "layer", "link", "meta",
    "object", "plaintext", "script", "textarea", "title", "video", "xml", "xss",
)

DEFAULT_NAUGHTY_SCRIPTS: Tuple[str, ...] = (
    "alert", "prompt", "confirm", "cmd", "passthru", "eval", "exec",
    "expression", "system", "fopen", "fsockopen", "file",
    "file_get_contents", "readfile", "unlink",
)

DEFAULT_COMPACT_WORDS: Tuple[str, ...] = (
    "javascript", "expression", "vbscript", "jscript", "wscript", "vbs",
    "script", "base64", "applet", "alert", "document", "write", "cookie",
    "window", "confirm", "prompt", "eval",
)

DEFAULT_FILENAME_BAD_CHARS: Tuple[str, ...] = (
    "../", "<!--", "-->", "<", ">", "'", '"', "&", "$", "#",
    "{", "}", "[", "]", "=", ";", "?",
    "%20", "%22",
    "%3c",    # <
    "%253c",  # <
    "%3e",    # >
    "%0e",    # >
    "%28",    # (
    "%29",    # )
    "%2528",  # (
    "%26",    # &
    "%24",    # $
    "%3f",    # ?
    "%3b",    # ;
    "%3d",    # =
)


class SanitizerTables(BaseModel):
    """
    Immutable configuration tables for the purifier.

    - never_allowed_str: literal substring -> replacement, applied in order
    - never_allowed_regex: patterns replaced by ``[removed]``
    - disallowed_attributes: attribute-name patterns stripped from tags
    - naughty_html: tag names encoded to entities
    - naughty_scripts: function tokens whose call brackets get encoded
    - compact_words: keywords re-joined when split by whitespace
    - filename_bad_chars: tokens removed from filenames
    """

    never_allowed_str: Dict[str, str] = Field(
        default_factory=lambda: dict(DEFAULT_NEVER_ALLOWED_STR)
    )
    never_allowed_regex: Tuple[str, ...] = DEFAULT_NEVER_ALLOWED_REGEX
    disallowed_attributes: Tuple[str, ...] = DEFAULT_DISALLOWED_ATTRIBUTES
    naughty_html: Tuple[str, ...] = DEFAULT_NAUGHTY_HTML
    naughty_scripts: Tuple[str, ...] = DEFAULT_NAUGHTY_SCRIPTS
    compact_words: Tuple[str, ...] = DEFAULT_COMPACT_WORDS
    filename_bad_chars: Tuple[str, ...] = DEFAULT_FILENAME_BAD_CHARS

    model_config = {"frozen": True}

    @field_validator("never_allowed_regex", "disallowed_attributes")
    @classmethod
    def _check_patterns(cls, patterns: Tuple[str, ...]) -> Tuple[str, ...]:
        for pattern in patterns:
            try:
                re.compile(pattern)
            except re.error as e:
                raise ValueError(f"Invalid pattern {pattern!r}: {e}") from e
        return patterns

    @field_validator("naughty_html", "naughty_scripts", "compact_words")
    @classmethod
    def _check_words(cls, words: Tuple[str, ...]) -> Tuple[str, ...]:
        if not words:
            raise ValueError("Word lists must not be empty")
        return tuple(word.lower() for word in words)

    @property
    def naughty_html_pattern(self) -> str:
        """Alternation of denylisted tag names."""
        return "|".join(re.escape(name) for name in self.naughty_html)

    @property
    def naughty_scripts_pattern(self) -> str:
        """Alternation of denylisted function tokens."""
        return "|".join(re.escape(name) for name in self.naughty_scripts)

    def attributes_for(self, is_image: bool) -> Tuple[str, ...]:
        """
        Disallowed attribute patterns for a purify call.

        Image metadata (e.g. XMP packets in JFIF) legitimately carries
        namespace declarations, so ``xmlns`` is allowed in image mode.
        """
        if is_image:
            return tuple(attr for attr in self.disallowed_attributes if attr != "xmlns")
        return self.disallowed_attributes
