"""
Attribute Filter

Removes disallowed attributes (event handlers, xmlns, formaction) from
tag-like substrings. The whole ``name=value`` token goes, whether the
value is quoted or bare:

    <a |style=document.write('hello');alert('world');| class=link>
    <a |style="document.write('hello'); alert('world');"| class="link">
"""

import re
from functools import lru_cache
from typing import List, Tuple

from markup_guard.passes.convergence import DEFAULT_MAX_ITERATIONS, fixed_point


@lru_cache(maxsize=16)
def _finders(attributes: Tuple[str, ...]) -> Tuple[re.Pattern, re.Pattern]:
    # A name must start the attribute: "version=" is not an "on" handler
    names = r"(?<![\w:-])(" + "|".join(attributes) + ")"
    quoted = re.compile(rf"{names}\s*=\s*(['\"])(.*?)(\2)", re.IGNORECASE | re.DOTALL)
    bare = re.compile(rf"{names}\s*=\s*([^\s>]*)", re.IGNORECASE | re.DOTALL)
    return quoted, bare


def find_evil_attributes(string: str, attributes: Tuple[str, ...]) -> List[str]:
    """Every distinct disallowed ``name=value`` token in the string, in order."""
    if not attributes:
        return []

    found = []
    for finder in _finders(tuple(attributes)):
        found.extend(match.group(0) for match in finder.finditer(string))
    return list(dict.fromkeys(token for token in found if token))


def remove_evil_attributes(
    string: str,
    attributes: Tuple[str, ...],
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
) -> str:
    """
    Strip disallowed attribute tokens that sit inside a tag.

    Each pass removes at most one token per tag and can realign the
    string onto another match, so it repeats to a fixed point.

    Args:
        string: Fragment to clean
        attributes: Attribute-name patterns (regex) to remove
        max_iterations: Iteration cap

    Returns:
        The fragment without the disallowed attributes
    """
    def strip_once(value: str) -> str:
        tokens = find_evil_attributes(value, attributes)
        if not tokens:
            return value

        alternation = "|".join(re.escape(token) for token in tokens)
        tag = re.compile(
            r"(<)(/?[^><]+?)([^\w<>\-:;&#])(.*?)(?<![\w:-])(" + alternation + r")(.*?)([\s><]?)([><]*)",
            re.IGNORECASE,
        )
        return tag.sub(r"\1\2 \4\6\7\8", value)

    return fixed_point(strip_once, string, max_iterations, "remove_evil_attributes")
