"""
Context Escapers

Encodes atomic values for one output context: HTML body, attribute,
textarea, URL, or inline javascript attribute.
"""

import codecs
import logging
import re
from typing import List, Optional, Union
from urllib.parse import quote_plus, unquote_plus, urlsplit

from markup_guard.config import EscaperConfig
from markup_guard.engine.base import CleanHtmlEntities
from markup_guard.hooks.filters import FilterHookManager

logger = logging.getLogger("markup_guard.escaper")

DEFAULT_SCHEMES = ("http", "https")

# Quote-everything HTML5 mode
HTML_ESCAPES = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&apos;",
}
SPECIAL_CHARS_PATTERN = re.compile(r"[&<>\"']")
# Bare ampersands only; existing entities are left alone
BARE_SPECIAL_CHARS_PATTERN = re.compile(
    r"&(?!#[0-9]+;|#[xX][0-9a-fA-F]+;|[A-Za-z][A-Za-z0-9]*;)|[<>\"']"
)
SURROGATE_PATTERN = re.compile("[\ud800-\udfff]")

TAG_PATTERN = re.compile(r"<!--.*?(?:-->|$)|<[^>]*(?:>|$)", re.DOTALL)
URL_SPECIAL_CHARS_PATTERN = re.compile(r"[\x00-\x20\x7f\"'<>`]")
URL_SYNTAX_PATTERN = re.compile(r"^([a-z][a-z0-9+.\-]*):(.+)$", re.IGNORECASE | re.DOTALL)


def _percent_encode(match: re.Match) -> str:
    return f"%{ord(match.group(0)):02X}"


def is_valid_url(value: str) -> bool:
    """
    Syntactic check for an absolute URL.

    Requires a scheme and a non-empty remainder; URLs written with an
    authority (``scheme://``), and all http(s) URLs, must name a host.
    """
    match = URL_SYNTAX_PATTERN.match(value)
    if not match:
        return False

    scheme, rest = match.group(1).lower(), match.group(2)
    if rest.startswith("//") or scheme in DEFAULT_SCHEMES:
        authority = rest[2:].split("/", 1)[0].split("?", 1)[0].split("#", 1)[0]
        host = authority.rsplit("@", 1)[-1]
        return rest.startswith("//") and bool(host) and not host.startswith(":")

    return True


class Escaper(CleanHtmlEntities):
    """
    Escapes strings for a single output context.

    Every public method ends by passing its result through the
    matching filter hook (``esc_html``, ``esc_attr``, ``esc_textarea``,
    ``esc_url``, ``esc_js``) together with the raw input.
    """

    def __init__(
        self,
        config: Optional[EscaperConfig] = None,
        hooks: Optional[FilterHookManager] = None,
    ):
        """
        Initialize the escaper.

        Args:
            config: Escaper configuration
            hooks: Filter dispatcher; an empty one is a passthrough
        """
        self.config = config or EscaperConfig()
        self.hooks = hooks or FilterHookManager()

    def _to_text(self, string: Union[str, bytes]) -> str:
        """Coerce input to valid Unicode, replacing what cannot be decoded."""
        if isinstance(string, (bytes, bytearray)):
            return bytes(string).decode(self.config.charset, errors="replace")
        return SURROGATE_PATTERN.sub("\ufffd", string)

    def _resolve_charset(self, charset: str) -> str:
        try:
            return codecs.lookup(charset).name
        except LookupError:
            logger.warning(f"Unknown charset '{charset}', falling back to utf-8")
            return "utf-8"

    def _html_special_chars(self, string: str) -> str:
        """
        Convert special characters to HTML entities.

        Characters the output charset cannot represent become numeric
        character references.
        """
        if not string:
            return ""

        charset = self.hooks.apply_filter("escaper_character_encoding", self.config.charset)
        double_encode = self.hooks.apply_filter("escaper_double_encoding", self.config.double_encode)

        pattern = SPECIAL_CHARS_PATTERN if double_encode else BARE_SPECIAL_CHARS_PATTERN
        escaped = pattern.sub(lambda m: HTML_ESCAPES[m.group(0)], string)

        charset = self._resolve_charset(charset)
        return escaped.encode(charset, "xmlcharrefreplace").decode(charset)

    def _escape(self, string: Union[str, bytes]) -> str:
        return self._html_special_chars(self._to_text(string))

    def html(self, string: Union[str, bytes]) -> str:
        """
        Escaping for HTML blocks.

        Example:
            >>> Escaper().html("<b>Tom & 'Jerry'</b>")
            '&lt;b&gt;Tom &amp; &apos;Jerry&apos;&lt;/b&gt;'
        """
        return self.hooks.apply_filter("esc_html", self._escape(string), string)

    def textarea(self, string: Union[str, bytes]) -> str:
        """Escaping for textarea."""
        return self.hooks.apply_filter("esc_textarea", self._escape(string), string)

    def attr(self, string: Union[str, bytes]) -> str:
        """Escaping for HTML attributes."""
        return self.hooks.apply_filter("esc_attr", self._escape(string), string)

    def js(self, string: Union[str, bytes]) -> str:
        """
        Escaping for inline javascript.

        Example usage:

            attribute = escaper.js(f"alert({json.dumps(name)});")
            f'<input type="button" value="push" onclick="{attribute}" />'
        """
        return self.hooks.apply_filter("esc_js", self._escape(string), string)

    def url(
        self,
        url: str,
        scheme: Optional[List[str]] = None,
        encode: bool = False,
    ) -> str:
        """
        Escaping for url.

        The url is stripped of tags, decoded, sanitized, validated, and
        then rebuilt from its recognized parts only.

        Args:
            url: The url to be escaped
            scheme: Acceptable schemes; http and https are always accepted.
                Defaults to the configured ``allowed_schemes``.
            encode: Whether the fragment should be percent-encoded

        Returns:
            The escaped url after the ``esc_url`` filter is applied
        """
        schemes = self.config.allowed_schemes if scheme is None else scheme
        safe = self._clean_url(url, schemes, encode)
        return self.hooks.apply_filter("esc_url", safe, url)

    def _clean_url(self, url: str, schemes: List[str], encode: bool) -> str:
        if url == "":
            return url

        # First line of defense is to strip all tags
        stripped = TAG_PATTERN.sub("", url)

        candidate = URL_SPECIAL_CHARS_PATTERN.sub(_percent_encode, unquote_plus(stripped))
        if not is_valid_url(candidate):
            logger.debug(f"Rejected invalid url: {candidate[:100]!r}")
            return ""

        # Break the url down into its parts, then rebuild it
        try:
            parts = urlsplit(candidate)
            port = parts.port
        except ValueError:
            return "#"

        allowed = {s.lower() for s in schemes} | set(DEFAULT_SCHEMES)
        if parts.scheme not in allowed:
            logger.debug(f"Rejected url scheme: {parts.scheme}")
            return "#"

        result = f"{parts.scheme}:"
        host = parts.hostname
        if host:
            result += "//" + (f"[{host}]" if ":" in host else host)
        if port:
            result += f":{port}"
        result += parts.path
        if parts.query:
            result += "?" + parts.query
        if parts.fragment:
            result += quote_plus(parts.fragment) if encode else parts.fragment

        return result
