"""Passes package - the individual transforms of the purify pipeline."""

from markup_guard.passes.attributes import remove_evil_attributes
from markup_guard.passes.convergence import fixed_point
from markup_guard.passes.denylist import (
    never_allowed,
    neutralize_server_tags,
    sanitize_naughty_html,
    sanitize_naughty_scripts,
)
from markup_guard.passes.entities import decode_tag_entities, entity_decode
from markup_guard.passes.keywords import compact_exploded_words
from markup_guard.passes.links import strip_script_vectors
from markup_guard.passes.normalize import (
    normalize_tabs,
    remove_invisible_characters,
    url_decode,
    validate_entities,
)

__all__ = [
    "fixed_point",
    "remove_invisible_characters",
    "validate_entities",
    "url_decode",
    "normalize_tabs",
    "entity_decode",
    "decode_tag_entities",
    "compact_exploded_words",
    "strip_script_vectors",
    "remove_evil_attributes",
    "never_allowed",
    "neutralize_server_tags",
    "sanitize_naughty_html",
    "sanitize_naughty_scripts",
]
