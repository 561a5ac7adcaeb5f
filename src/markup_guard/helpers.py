"""
Helpers

Module-level shortcuts over process-wide default instances.

Usage:
    from markup_guard.helpers import esc_attr, esc_html, esc_url, purify_html

    f"<p title='{esc_attr(title)}'>{esc_html(body)}</p>"
    f"<a href='{esc_url(link)}'>{purify_html(rich_text)}</a>"

Customize with ``configure()`` before the helpers are used concurrently.
"""

import re
from typing import List, Optional, Union

from markup_guard.config import GuardConfig
from markup_guard.engine.escaper import Escaper
from markup_guard.engine.purifier import HtmlPurifier
from markup_guard.hooks.filters import FilterHookManager
from markup_guard.i18n.translation import Translator

SCRIPT_STYLE_PATTERN = re.compile(r"<(script|style)[^>]*?>.*?</\1>", re.IGNORECASE | re.DOTALL)
TAG_NAME_PATTERN = re.compile(r"<(.+?)\s*/?\s*>", re.IGNORECASE | re.DOTALL)
BREAKS_PATTERN = re.compile(r"[\r\n\t ]+")
WHITESPACE_PATTERN = re.compile(r"\s")

# Global default instances
_config: Optional[GuardConfig] = None
_hooks: Optional[FilterHookManager] = None
_escaper: Optional[Escaper] = None
_purifier: Optional[HtmlPurifier] = None
_translator: Optional[Translator] = None


def configure(config: Optional[GuardConfig] = None, hooks: Optional[FilterHookManager] = None) -> None:
    """Replace the default configuration and hooks; instances are rebuilt lazily."""
    global _config, _hooks, _escaper, _purifier, _translator
    _config = config
    _hooks = hooks
    _escaper = None
    _purifier = None
    _translator = None


def get_config() -> GuardConfig:
    """Get or create global configuration."""
    global _config
    if _config is None:
        _config = GuardConfig()
    return _config


def get_hooks() -> FilterHookManager:
    """Get or create global hook manager."""
    global _hooks
    if _hooks is None:
        _hooks = FilterHookManager()
    return _hooks


def get_escaper() -> Escaper:
    """Get or create global escaper instance."""
    global _escaper
    if _escaper is None:
        _escaper = Escaper(get_config().escaper, get_hooks())
    return _escaper


def get_purifier() -> HtmlPurifier:
    """Get or create global purifier instance."""
    global _purifier
    if _purifier is None:
        _purifier = HtmlPurifier(get_config().purifier)
    return _purifier


def get_translator() -> Translator:
    """Get or create global translator instance."""
    global _translator
    if _translator is None:
        _translator = Translator(get_config().translation, get_hooks())
    return _translator


def esc_html(string: str) -> str:
    """Escaping for HTML output."""
    return get_escaper().html(string)


def esc_textarea(string: str) -> str:
    """Escaping for textarea."""
    return get_escaper().textarea(string)


def esc_attr(string: str) -> str:
    """Escaping for HTML attributes."""
    return get_escaper().attr(string)


def esc_js(string: str) -> str:
    """Escaping for inline javascript."""
    return get_escaper().js(string)


def esc_url(url: str, scheme: Optional[List[str]] = None, encode: bool = False) -> str:
    """
    Escaping for url.

    Args:
        url: The url to be escaped
        scheme: Optional list of acceptable schemes
        encode: Whether the fragment should be percent-encoded
    """
    return get_escaper().url(url, scheme, encode)


def translate(msgid: str, domain: str = "") -> str:
    """Translated text according to the current locale."""
    return get_translator().translate(msgid, domain)


def esc_html_translated(msgid: str, domain: str = "") -> str:
    """Escapes a translated string to make it safe for HTML output."""
    return esc_html(translate(msgid, domain))


def esc_attr_translated(msgid: str, domain: str = "") -> str:
    """Escapes a translated string to make it safe for an HTML attribute."""
    return esc_attr(translate(msgid, domain))


def purify_html(string: str, is_image: bool = False) -> Union[str, bool]:
    """
    Makes content safe to print on screen.

    Use on output only. With the exception of uploaded images, never
    purify input. For image URLs, escape with ``esc_url()``.
    """
    return get_purifier().purify(string, is_image)


def sanitize_filename(string: str, relative_path: bool = False) -> str:
    """Sanitize a user-supplied filename."""
    return get_purifier().sanitize_filename(string, relative_path)


def strip_tags(
    string: str,
    remove_breaks: bool = False,
    tags: str = "",
    invert: bool = False,
) -> str:
    """
    Strip HTML elements together with their contents.

    ``<script>`` and ``<style>`` elements always go. Other elements go
    too, except the ones listed in ``tags``; with ``invert`` only the
    listed ones go.

    Example:
        >>> text = "<b>sample</b> text with <div>tags</div>"
        >>> strip_tags(text)
        ' text with '
        >>> strip_tags(text, tags="<b>")
        '<b>sample</b> text with '
        >>> strip_tags(text, tags="<b>", invert=True)
        ' text with <div>tags</div>'

    Args:
        string: String containing HTML tags
        remove_breaks: Collapse leftover line breaks and whitespace runs
        tags: Tags to keep (or, with ``invert``, to remove), e.g. "<b><i>"
        invert: Remove only the listed tags
    """
    raw = string
    names = list(dict.fromkeys(TAG_NAME_PATTERN.findall(WHITESPACE_PATTERN.sub("", tags))))
    alternation = "|".join(re.escape(name) for name in names)

    string = SCRIPT_STYLE_PATTERN.sub("", string)

    if names and not invert:
        string = re.sub(
            rf"<(?!(?:{alternation})\b)(\w+)\b.*?>.*?</\1>", "", string, flags=re.IGNORECASE | re.DOTALL
        )
    elif names:
        string = re.sub(rf"<({alternation})\b.*?>.*?</\1>", "", string, flags=re.IGNORECASE | re.DOTALL)
    elif not invert:
        string = re.sub(r"<(\w+)\b.*?>.*?</\1>", "", string, flags=re.IGNORECASE | re.DOTALL)

    if remove_breaks:
        string = BREAKS_PATTERN.sub(" ", string)

    return get_hooks().apply_filter("strip_tags", string, raw, remove_breaks, tags, invert)
