"""
Sanitization Engine - Abstract Base Classes

Defines the two entry points callers choose between:
- CleanHtmlEntities: single-context escaping of atomic values (fast path)
- Purifier: full rich-text fragment sanitization (slow path)
"""

from abc import ABC, abstractmethod
from typing import List, Union


class CleanHtmlEntities(ABC):
    """
    Context escapers.

    Each method is a single deterministic transform for one output
    context; none of them iterate.
    """

    @abstractmethod
    def html(self, string: Union[str, bytes]) -> str:
        """
        Escaping for HTML blocks.

        Returns:
            Escaped HTML block
        """
        pass

    @abstractmethod
    def textarea(self, string: Union[str, bytes]) -> str:
        """Escaping for textarea content."""
        pass

    @abstractmethod
    def url(
        self,
        url: str,
        scheme: Union[List[str], None] = None,
        encode: bool = False,
    ) -> str:
        """
        Escaping for URLs.

        Args:
            url: The URL to be escaped
            scheme: Acceptable schemes, merged with http and https
            encode: Whether the fragment should be percent-encoded

        Returns:
            The rebuilt URL, "#" for a disallowed or unparseable URL,
            or "" for a value that is not a URL at all
        """
        pass

    @abstractmethod
    def attr(self, string: Union[str, bytes]) -> str:
        """Escaping for HTML attribute values."""
        pass

    @abstractmethod
    def js(self, string: Union[str, bytes]) -> str:
        """Escaping for inline javascript in attributes (onclick="...")."""
        pass


class Purifier(ABC):
    """
    Rich-text purifier.

    Should only be used on output. With the exception of uploaded
    images, never purify input: accept the data as-is and purify it
    when it is rendered.
    """

    @abstractmethod
    def purify(self, string: str, is_image: bool = False) -> Union[str, bool]:
        """
        Purify an HTML fragment.

        Process:
        1. Canonicalize (invisible characters, entities, URL encoding, tabs)
        2. Scrub never-allowed strings and server tags
        3. Compact split keywords, strip link/image/script vectors
        4. Strip disallowed attributes, encode denylisted tags and calls
        5. Scrub never-allowed strings again

        Args:
            string: The fragment to purify
            is_image: Report cleanliness instead of returning the fragment

        Returns:
            The purified fragment, or in image mode True when nothing
            had to be removed
        """
        pass
