"""Helpers shared by the Horseman action mixins."""

import asyncio
import time
from typing import Any, Awaitable, Callable, Dict, List, Optional, TYPE_CHECKING

from playwright.async_api import Frame

from ..dom import scripts
from ..core.errors import (
    ElementNotFoundError,
    PageNotAvailableError,
    TimeoutError,
)

if TYPE_CHECKING:
    from ..core.events import EventRegistry
    from ..core.tab import Tab
    from ..types import HorsemanOptions
    from ..utils.logger import HorsemanLogger


class BaseActions:
    """
    Base for all action mixins.

    Provides access to the current tab and frame, element lookups, and the
    polling loop behind the wait primitives. The attributes declared below
    are owned by Horseman.
    """

    options: 'HorsemanOptions'
    logger: 'HorsemanLogger'
    events: 'EventRegistry'
    _tabs: List['Tab']
    _current: int

    @property
    def _tab(self) -> 'Tab':
        """The tab operations run against."""
        if not self._tabs:
            raise PageNotAvailableError("no open tab")
        return self._tabs[self._current]

    @property
    def _frame(self) -> Frame:
        """The frame operations run against."""
        return self._tab.frame

    def _timeout_ms(self, timeout: Optional[int] = None) -> int:
        return timeout if timeout is not None else self.options.timeout

    def _timed_out(self, operation: str, timeout_ms: int) -> TimeoutError:
        """Emit the timeout notification and build the matching error."""
        self.events.emit("timeout", f"{operation} timed out after {timeout_ms}ms")
        return TimeoutError(operation, timeout_ms)

    async def _count(self, selector: str) -> int:
        return await self._frame.evaluate(scripts.COUNT, selector)

    async def _require(self, selector: str, operation: str) -> None:
        """Raise ElementNotFoundError unless ``selector`` matches something."""
        if await self._count(selector) == 0:
            raise ElementNotFoundError(selector, operation)

    async def _read_element(self, script: str, arg: Any, selector: str, operation: str) -> Any:
        """Run a single-element read script and unwrap its answer."""
        result: Dict[str, Any] = await self._frame.evaluate(script, arg)
        if not result or not result.get("found"):
            raise ElementNotFoundError(selector, operation)
        return result.get("value")

    async def _poll(
        self,
        operation: str,
        check: Callable[[], Awaitable[bool]],
        timeout: Optional[int] = None,
    ) -> None:
        """
        Call ``check`` every ``interval`` ms until it returns True.

        Raises:
            TimeoutError: If the check is still False after the timeout
        """
        timeout_ms = self._timeout_ms(timeout)
        deadline = time.monotonic() + timeout_ms / 1000
        interval = self.options.interval / 1000

        while True:
            if await check():
                return
            if time.monotonic() >= deadline:
                raise self._timed_out(operation, timeout_ms)
            await asyncio.sleep(interval)

    def _log_debug(self, category: str, message: str, **kwargs: Any) -> None:
        self.logger.debug(f"horseman:{category}", message, **kwargs)

    def _log_info(self, category: str, message: str, **kwargs: Any) -> None:
        self.logger.info(f"horseman:{category}", message, **kwargs)
