"""
HTML Purifier

Full-fragment XSS sanitizer. Runs the passes in a fixed order:
decode before strip, strip before encode, and scrub the never-allowed
list on both ends of the pipeline.
"""

import logging
from typing import Dict, List, Mapping, Optional, Sequence, Union

from markup_guard.config import PurifierConfig
from markup_guard.engine.base import Purifier
from markup_guard.passes.attributes import remove_evil_attributes
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
from markup_guard.security.filename import FilenameSanitizer

logger = logging.getLogger("markup_guard.purifier")


class HtmlPurifier(Purifier):
    """
    Sanitizes rich text (HTML fragments) for output.

    Stateless per call: the configuration tables are read-only, so one
    instance can be shared between threads.

    Example:
        >>> purifier = HtmlPurifier()
        >>> purifier.purify("<script>alert(1)</script>")
        '[removed]alert&#40;1&#41;[removed]'
    """

    def __init__(self, config: Optional[PurifierConfig] = None):
        """
        Initialize the purifier.

        Args:
            config: Purifier configuration. Defaults to the built-in tables.
        """
        self.config = config or PurifierConfig()
        self.tables = self.config.tables
        self.filenames = FilenameSanitizer(self.tables, self.config.max_iterations)

    def purify(self, string: str, is_image: bool = False) -> Union[str, bool]:
        """
        Escaping for rich text.

        Images are handled in a special way: after all the character
        conversion, the result is compared with the converted input. If
        nothing had to be removed or changed the image is clean (True);
        otherwise XSS was found (False). Image bytes are never rewritten.

        Args:
            string: The fragment to purify
            is_image: Whether the string is image data

        Returns:
            Purified fragment, or the image verdict in image mode
        """
        limit = self.config.max_iterations

        # Canonicalize
        string = remove_invisible_characters(string, max_iterations=limit)
        string = validate_entities(string)
        string = url_decode(string, limit)
        string = decode_tag_entities(string, self.config.charset, limit)
        string = remove_invisible_characters(string, max_iterations=limit)
        string = normalize_tabs(string)

        # Capture converted string for later comparison
        converted = string

        string = never_allowed(string, self.tables)
        string = neutralize_server_tags(string, is_image)
        string = compact_exploded_words(string, self.tables.compact_words)
        string = strip_script_vectors(string, limit)
        string = remove_evil_attributes(string, self.tables.attributes_for(is_image), limit)
        string = sanitize_naughty_html(string, self.tables)
        string = sanitize_naughty_scripts(string, self.tables)

        # Final clean up, in case something got through the above filters
        string = never_allowed(string, self.tables)

        if is_image:
            clean = string == converted
            logger.debug(f"Image purify verdict: {'clean' if clean else 'XSS found'}")
            return clean

        return string

    def purify_many(
        self, strings: Union[Sequence[str], Mapping[str, str]]
    ) -> Union[List[str], Dict[str, str]]:
        """
        Purify every string in a container.

        Sequences come back as lists, mappings as dicts with the same keys.
        """
        if isinstance(strings, Mapping):
            return {key: self.purify(value) for key, value in strings.items()}
        return [self.purify(value) for value in strings]

    def entity_decode(self, string: str, charset: Optional[str] = None) -> str:
        """Decode HTML entities, including ones missing their semicolon."""
        return entity_decode(string, charset or self.config.charset)

    def sanitize_filename(self, string: str, relative_path: bool = False) -> str:
        """Strip traversal and markup tokens from a user-supplied filename."""
        return self.filenames.sanitize(string, relative_path)
