"""
Translation Lookup

gettext-backed message catalogs keyed by text domain. Catalogs are
compiled ``.mo`` files named ``<domain>-<locale>.mo``.
"""

import gettext
import logging
import os
from pathlib import Path
from typing import Dict, Optional, Union

from markup_guard.config import TranslationConfig
from markup_guard.hooks.filters import FilterHookManager

logger = logging.getLogger("markup_guard.i18n")


class Translator:
    """
    Looks up translated strings by message id and text domain.

    Unknown domains and missing messages fall back to the message id.
    """

    def __init__(
        self,
        config: Optional[TranslationConfig] = None,
        hooks: Optional[FilterHookManager] = None,
    ):
        self.config = config or TranslationConfig()
        self.hooks = hooks or FilterHookManager()
        self.catalogs: Dict[str, gettext.NullTranslations] = {}

    def translate(self, msgid: str, domain: str = "") -> str:
        """
        Translated text according to the current locale.

        Args:
            msgid: The string to translate
            domain: Text domain; defaults to the configured default domain
        """
        domain = domain or self.config.default_domain
        catalog = self.catalogs.get(domain)
        if catalog is None:
            return msgid
        return catalog.gettext(msgid)

    def load_core_locale(self) -> str:
        """The current locale, after the ``core_locale`` filter."""
        return self.hooks.apply_filter("core_locale", self.config.locale)

    def load_textdomain(self, domain: str, path: Union[str, Path]) -> bool:
        """
        Load a ``.mo`` file into a text domain.

        The ``override_load_textdomain`` filter can claim the load (returns
        True without reading anything); the ``load_textdomain`` action fires
        before reading; ``load_textdomain_mofile`` may rewrite the path.

        Returns:
            True on success, False when the file is missing or unreadable
        """
        override = self.hooks.apply_filter("override_load_textdomain", False, domain, str(path))
        if override is True:
            return True

        self.hooks.do_action("load_textdomain", domain, str(path))

        mofile = Path(self.hooks.apply_filter("load_textdomain_mofile", str(path), domain))
        if not mofile.is_file() or not os.access(mofile, os.R_OK):
            logger.warning(f"Translation catalog not readable: {mofile}")
            return False

        try:
            with open(mofile, "rb") as f:
                catalog = gettext.GNUTranslations(f)
        except OSError as e:
            logger.warning(f"Failed to load translation catalog {mofile}: {e}")
            return False

        existing = self.catalogs.get(domain)
        if existing is not None:
            catalog.add_fallback(existing)
        self.catalogs[domain] = catalog
        logger.debug(f"Loaded text domain '{domain}' from {mofile}")
        return True

    def load_default_textdomain(self, domain: str, path: Optional[Union[str, Path]] = None) -> bool:
        """
        Load ``<path>/<domain>-<locale>.mo`` for the current locale.

        Args:
            domain: Text domain
            path: Directory holding the catalogs; defaults to ``locale_dir``
        """
        directory = path or self.config.locale_dir
        if directory is None:
            return False

        locale = self.load_core_locale()
        return self.load_textdomain(domain, Path(directory) / f"{domain}-{locale}.mo")
