"""
Markup Guard

Output-encoding and XSS purification for attacker-controlled text:
context escapers for HTML, attributes, textareas, URLs and inline
javascript, plus a multi-pass purifier for rich-text HTML fragments.
"""

from markup_guard.config import GuardConfig, load_config
from markup_guard.engine.escaper import Escaper
from markup_guard.engine.purifier import HtmlPurifier
from markup_guard.hooks.filters import FilterHookManager

__version__ = "0.1.0"
__all__ = ["Escaper", "HtmlPurifier", "FilterHookManager", "GuardConfig", "load_config"]
