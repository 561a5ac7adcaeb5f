"""
Filter Hook System

Provides filter and action hooks at the engine's extension points,
letting callers observe or override intermediate results without
modifying the sanitization code.
"""

import logging
from typing import Any, Callable, Dict, List, Optional

logger = logging.getLogger("markup_guard.hooks")

WILDCARD = "*"


class FilterHookManager:
    """
    Manages filters and actions (callbacks) for named extension points.

    Filters receive the current value plus the original call arguments and
    return a replacement value. Actions are notified and return nothing.

    Features:
    - Filters and actions for any hook name
    - Wildcard support ("*") for all hook names
    - Synchronous execution in registration order
    - Failing callbacks are logged and skipped

    With nothing registered, ``apply_filter`` returns its input unchanged,
    so an empty manager is a passthrough dispatcher.

    Example:
        >>> hooks = FilterHookManager()
        >>>
        >>> @hooks.filter("esc_html")
        >>> def mark_escaped(safe, raw):
        >>>     return safe + "<!-- escaped -->"
        >>>
        >>> hooks.apply_filter("esc_html", "&lt;b&gt;", "<b>")
    """

    def __init__(self):
        self.filters: Dict[str, List[Callable]] = {}
        self.actions: Dict[str, List[Callable]] = {}

    def add_filter(self, name: str, callback: Callable) -> None:
        """
        Register a filter for an extension point.

        Args:
            name: Hook name (e.g., "esc_url") or "*" for all hooks
            callback: Callable accepting (value, *args); wildcard
                callbacks accept (name, value, *args)
        """
        if name not in self.filters:
            self.filters[name] = []
        self.filters[name].append(callback)
        logger.debug(f"Registered filter for hook: {name}")

    def add_action(self, name: str, callback: Callable) -> None:
        """
        Register an action for an extension point.

        Args:
            name: Hook name (e.g., "load_textdomain") or "*" for all hooks
            callback: Callable accepting (*args); wildcard callbacks
                accept (name, *args)
        """
        if name not in self.actions:
            self.actions[name] = []
        self.actions[name].append(callback)
        logger.debug(f"Registered action for hook: {name}")

    def filter(self, name: str):
        """
        Decorator for registering filters.

        Example:
            >>> @hooks.filter("esc_url")
            >>> def force_https(safe_url, raw_url):
            >>>     return safe_url.replace("http:", "https:", 1)
        """
        def decorator(func: Callable) -> Callable:
            self.add_filter(name, func)
            return func
        return decorator

    def action(self, name: str):
        """
        Decorator for registering actions.

        Example:
            >>> @hooks.action("load_textdomain")
            >>> def announce(domain, path):
            >>>     print(f"Loading {domain} from {path}")
        """
        def decorator(func: Callable) -> Callable:
            self.add_action(name, func)
            return func
        return decorator

    def apply_filter(self, name: str, value: Any, *args: Any) -> Any:
        """
        Pass a value through every filter registered for a hook.

        Named filters run first in registration order, then wildcard
        filters. A filter returning a value of another type is ignored.

        Args:
            name: Extension point being applied
            value: Value computed by the engine
            *args: Original inputs, passed to each filter unchanged

        Returns:
            The (possibly overridden) value
        """
        for callback in self.filters.get(name, []):
            value = self._run_filter(name, value, callback, value, *args)

        for callback in self.filters.get(WILDCARD, []):
            value = self._run_filter(name, value, callback, name, value, *args)

        return value

    def _run_filter(self, name: str, value: Any, callback: Callable, *call_args: Any) -> Any:
        try:
            result = callback(*call_args)
        except Exception as e:
            logger.error(f"Filter failed for hook '{name}': {e}", exc_info=True)
            return value

        if not isinstance(result, type(value)):
            logger.warning(
                f"Filter for hook '{name}' returned {type(result).__name__}, "
                f"expected {type(value).__name__}; ignoring"
            )
            return value

        return result

    def do_action(self, name: str, *args: Any) -> None:
        """
        Notify every action registered for a hook.

        Wildcard actions run first, then named actions.
        """
        for callback in self.actions.get(WILDCARD, []):
            try:
                callback(name, *args)
            except Exception as e:
                logger.error(f"Action failed for hook '{name}': {e}", exc_info=True)

        for callback in self.actions.get(name, []):
            try:
                callback(*args)
            except Exception as e:
                logger.error(f"Action failed for hook '{name}': {e}", exc_info=True)

    def clear_hooks(self, name: Optional[str] = None) -> None:
        """Forget the callbacks of one hook, or of every hook when ``name`` is None."""
        for registry in (self.filters, self.actions):
            if name is None:
                registry.clear()
            else:
                registry.pop(name, None)
