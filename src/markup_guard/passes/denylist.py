"""
Denylist passes

- Never-allowed scrub: fixed literals and patterns removed everywhere
- Server tags: ``<?php`` / ``<?`` / ``?>`` made inert
- Naughty HTML: denylisted tags encoded to entities instead of deleted
- Naughty scripts: call brackets after denylisted tokens encoded
"""

import re
from functools import lru_cache
from typing import Dict, Tuple

from markup_guard.models.tables import SanitizerTables

REMOVED = "[removed]"

PHP_LONG_OPEN_PATTERN = re.compile(r"<\?(php)", re.IGNORECASE)


@lru_cache(maxsize=16)
def _compile_all(patterns: Tuple[str, ...]) -> Tuple[re.Pattern, ...]:
    return tuple(re.compile(pattern, re.IGNORECASE | re.DOTALL) for pattern in patterns)


@lru_cache(maxsize=16)
def _naughty_html(alternation: str) -> re.Pattern:
    return re.compile(rf"<(/*\s*)({alternation})\b([^><]*)([><]*)", re.IGNORECASE | re.DOTALL)


@lru_cache(maxsize=16)
def _naughty_scripts(alternation: str) -> Tuple[re.Pattern, re.Pattern]:
    parens = re.compile(rf"({alternation})(\s*)\((.*?)\)", re.IGNORECASE | re.DOTALL)
    backticks = re.compile(rf"({alternation})(\s*)`(.*?)`", re.IGNORECASE | re.DOTALL)
    return parens, backticks


def replace_literals(string: str, literals: Dict[str, str]) -> str:
    """Replace each literal in order, case-sensitively."""
    for search, replacement in literals.items():
        if search in string:
            string = string.replace(search, replacement)
    return string


def never_allowed(string: str, tables: SanitizerTables) -> str:
    """
    Remove strings that are never allowed in any context.

    Literals (``document.cookie``, ``<!--`` ...) are swapped for their
    fixed replacement, then each pattern (``javascript:``, data URIs ...)
    is replaced with ``[removed]``.
    """
    string = replace_literals(string, tables.never_allowed_str)

    for pattern in _compile_all(tables.never_allowed_regex):
        string = pattern.sub(REMOVED, string)

    return string


def neutralize_server_tags(string: str, is_image: bool = False) -> str:
    """
    Make PHP tags safe.

    Images contain the short ``<?`` / ``?>`` byte pairs every so often,
    so in image mode only the long ``<?php`` form is encoded.
    ``<?xml`` is caught by the short form too, which is harmless.
    """
    if is_image:
        return PHP_LONG_OPEN_PATTERN.sub(r"&lt;?\1", string)
    return string.replace("<?", "&lt;?").replace("?>", "?&gt;")


def _encode_naughty_tag(match: re.Match) -> str:
    # encode the opening brace, then any captured braces to stop recursive vectors
    string = "&lt;" + match.group(1) + match.group(2) + match.group(3)
    return string + match.group(4).replace(">", "&gt;").replace("<", "&lt;")


def sanitize_naughty_html(string: str, tables: SanitizerTables) -> str:
    """
    Encode denylisted tags so they render as text.

    So this: <blink>
    Becomes: &lt;blink&gt;
    """
    return _naughty_html(tables.naughty_html_pattern).sub(_encode_naughty_tag, string)


def sanitize_naughty_scripts(string: str, tables: SanitizerTables) -> str:
    """
    Encode the brackets after denylisted function tokens.

    For example: eval('some code')
    Becomes: eval&#40;'some code'&#41;
    """
    parens, backticks = _naughty_scripts(tables.naughty_scripts_pattern)
    string = parens.sub(r"\1\2&#40;\3&#41;", string)
    return backticks.sub(r"\1\2&#96;\3&#96;", string)
