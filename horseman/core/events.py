"""Page event subscriptions and browser-side dialog handlers."""

import asyncio
import re
from collections import defaultdict
from typing import Any, Callable, Dict, List, Optional, Set

from ..utils.logger import HorsemanLogger
from .errors import UnsupportedOperationError

# Notifications delivered to on() callbacks, with their callback arguments
EVENTS: Dict[str, str] = {
    "initialized": "()",
    "load_started": "()",
    "load_finished": "(status)",
    "tab_created": "(tab_index)",
    "tab_closed": "(tab_index)",
    "url_changed": "(target_url)",
    "navigation_requested": "(url, type, will_navigate, main)",
    "resource_requested": "(request_data, request)",
    "resource_received": "(response)",
    "resource_error": "(error)",
    "console_message": "(message, line_number, source_id)",
    "alert": "(message)",
    "confirm": "(message)",
    "prompt": "(message, default_value)",
    "error": "(message, trace)",
    "timeout": "(message)",
}

# Handlers installed with at(); their return value answers the page
HANDLERS: Dict[str, str] = {
    "confirm": "(message) -> bool",
    "prompt": "(message, default_value) -> str | None",
    "file_picker": "(old_file) -> str",
}

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def normalize_event_name(name: str) -> str:
    """Map camelCase names such as ``loadFinished`` to ``load_finished``."""
    return _CAMEL_BOUNDARY.sub("_", name).lower()


class EventRegistry:
    """Holds on() callbacks and at() handlers for one session."""

    def __init__(self, logger: HorsemanLogger):
        self._logger = logger
        self._listeners: Dict[str, List[Callable]] = defaultdict(list)
        self._handlers: Dict[str, Callable] = {}
        self._pending: Set[asyncio.Future] = set()

    def on(self, event: str, callback: Callable) -> None:
        """Subscribe ``callback`` to a page notification."""
        name = normalize_event_name(event)
        if name not in EVENTS:
            raise UnsupportedOperationError("on", f"unknown event '{event}'")
        self._listeners[name].append(callback)

    def off(self, event: str, callback: Optional[Callable] = None) -> None:
        """Remove one callback, or every callback when none is given."""
        name = normalize_event_name(event)
        if callback is None:
            self._listeners.pop(name, None)
        elif callback in self._listeners.get(name, []):
            self._listeners[name].remove(callback)

    def at(self, event: str, handler: Callable) -> None:
        """Install the handler that answers a browser-side request."""
        name = normalize_event_name(event)
        if name not in HANDLERS:
            raise UnsupportedOperationError("at", f"unknown event '{event}'")
        self._handlers[name] = handler

    def handler(self, event: str) -> Optional[Callable]:
        return self._handlers.get(normalize_event_name(event))

    def listeners(self, event: str) -> List[Callable]:
        return list(self._listeners.get(normalize_event_name(event), []))

    def emit(self, event: str, *args: Any) -> None:
        """
        Deliver a notification to every subscribed callback.

        Coroutine callbacks are scheduled on the running loop. A failing
        callback is logged and never reaches the page or the other callbacks.
        """
        for callback in self.listeners(event):
            try:
                result = callback(*args)
            except Exception as e:
                self._log_failure(event, e)
                continue
            if asyncio.iscoroutine(result) or isinstance(result, asyncio.Future):
                task = asyncio.ensure_future(result)
                self._pending.add(task)
                task.add_done_callback(lambda t, ev=event: self._settle(ev, t))

    async def answer(self, event: str, *args: Any) -> Any:
        """
        Ask the at() handler for ``event`` for an answer.

        Returns None when no handler is installed or the handler failed.
        """
        handler = self.handler(event)
        if handler is None:
            return None
        try:
            result = handler(*args)
            if asyncio.iscoroutine(result) or isinstance(result, asyncio.Future):
                result = await result
            return result
        except Exception as e:
            self._log_failure(event, e)
            return None

    async def drain(self) -> None:
        """Wait for scheduled coroutine callbacks to finish."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    def _settle(self, event: str, task: asyncio.Future) -> None:
        self._pending.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            self._log_failure(event, error)

    def _log_failure(self, event: str, error: BaseException) -> None:
        self._logger.error(
            "events:callback",
            f"Callback for '{event}' failed: {error}",
            event_name=event,
            error=str(error),
        )
