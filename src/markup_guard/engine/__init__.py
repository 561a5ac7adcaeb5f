"""Engine package - purifier and context escapers."""

from markup_guard.engine.base import CleanHtmlEntities, Purifier
from markup_guard.engine.escaper import Escaper
from markup_guard.engine.purifier import HtmlPurifier

__all__ = ["CleanHtmlEntities", "Purifier", "Escaper", "HtmlPurifier"]
