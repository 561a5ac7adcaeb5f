"""
Keyword Compactor

Re-joins dangerous keywords that were split with whitespace,
e.g. ``j a v a s c r i p t:`` becomes ``javascript:``.
"""

import re
from functools import lru_cache
from typing import Iterable, Tuple

WHITESPACE_PATTERN = re.compile(r"\s+", re.DOTALL)


@lru_cache(maxsize=32)
def compile_exploded_words(words: Tuple[str, ...]) -> Tuple[re.Pattern, ...]:
    """
    One pattern per keyword, allowing whitespace between its letters.

    The keyword must be followed by a non-word character, so ordinary
    text such as "dealer to" never collapses into "dealerto".
    """
    patterns = []
    for word in words:
        spaced = r"\s*".join(re.escape(char) for char in word)
        patterns.append(re.compile(f"({spaced})(\\W)", re.IGNORECASE | re.DOTALL))
    return tuple(patterns)


def _compact(match: re.Match) -> str:
    return WHITESPACE_PATTERN.sub("", match.group(1)) + match.group(2)


def compact_exploded_words(string: str, words: Iterable[str]) -> str:
    """Collapse whitespace inside every watched keyword."""
    for pattern in compile_exploded_words(tuple(words)):
        string = pattern.sub(_compact, string)
    return string
