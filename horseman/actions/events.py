"""Event subscriptions as chainable operations."""

from typing import Callable, Optional

from ..core.chain import action
from .base import BaseActions


class EventActions(BaseActions):
    """
    Subscriptions take effect as soon as they are called, so a callback
    registered before open() sees the events of that navigation.
    """

    @action(launch=False, locked=False, requires_open=False, eager=True)
    def on(self, event: str, callback: Callable) -> None:
        """Subscribe ``callback`` to a page notification such as ``load_finished``."""
        self.events.on(event, callback)

    @action(launch=False, locked=False, requires_open=False, eager=True)
    def off(self, event: str, callback: Optional[Callable] = None) -> None:
        self.events.off(event, callback)

    @action(launch=False, locked=False, requires_open=False, eager=True)
    def at(self, event: str, handler: Callable) -> None:
        """Install the answer for ``confirm``, ``prompt`` or ``file_picker``."""
        self.events.at(event, handler)
