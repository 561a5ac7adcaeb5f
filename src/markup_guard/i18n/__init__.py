"""Translation lookup package."""

from markup_guard.i18n.translation import Translator

__all__ = ["Translator"]
