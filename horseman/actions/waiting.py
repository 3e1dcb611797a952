"""Waiting primitives."""

import asyncio
from typing import Any, Optional, Union

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from ..core.chain import action
from ..types import WaitForOptions
from .base import BaseActions

_MISSING = object()


def _callable_source(fn: str, args: tuple) -> str:
    if args:
        return f"(args) => ({fn})(...args)"
    return f"() => ({fn})()"


class WaitingActions(BaseActions):
    """Sleeps, page loads, selectors and predicates."""

    @action(launch=False)
    async def wait(self, ms: int) -> None:
        """Sleep for ``ms`` milliseconds."""
        await asyncio.sleep(ms / 1000)

    @action
    async def wait_for_next_page(self, timeout: Optional[int] = None) -> None:
        """
        Wait until the current tab finishes its next main-frame load.

        Loads that completed while the previous step ran count, so
        ``click(link).wait_for_next_page()`` does not miss a fast page.
        """
        tab = self._tab
        start = tab.prior_step_loads

        async def loaded() -> bool:
            return tab.load_count > start

        await self._poll("wait_for_next_page", loaded, timeout)

    @action
    async def wait_for_selector(self, selector: str, timeout: Optional[int] = None) -> None:
        """Wait until ``selector`` matches an element in the current frame."""
        timeout_ms = self._timeout_ms(timeout)
        try:
            await self._frame.wait_for_selector(selector, state="attached", timeout=timeout_ms)
        except PlaywrightTimeoutError as e:
            raise self._timed_out(f"wait_for_selector({selector})", timeout_ms) from e

    @action
    async def wait_for(
        self,
        fn: Union[str, WaitForOptions, dict],
        *args: Any,
        value: Any = _MISSING,
        timeout: Optional[int] = None,
    ) -> None:
        """
        Poll ``fn(*args)`` in the page until it returns ``value``.

        ``fn`` is JavaScript function source. Without the ``value`` keyword
        the last positional argument is the expected value. A
        WaitForOptions (or dict) may be passed instead of the arguments.

        Raises:
            TimeoutError: If the value is not reached in time
        """
        if isinstance(fn, dict):
            fn = WaitForOptions(**fn)
        if isinstance(fn, WaitForOptions):
            options = fn
        else:
            call_args = list(args)
            if value is _MISSING:
                value = call_args.pop() if call_args else True
            options = WaitForOptions(fn=fn, args=call_args, value=value, timeout=timeout)

        source = _callable_source(options.fn, tuple(options.args))
        expected = options.value

        async def matches() -> bool:
            try:
                if options.args:
                    result = await self._frame.evaluate(source, options.args)
                else:
                    result = await self._frame.evaluate(source)
            except PlaywrightError as e:
                # Pages mid-navigation reject evaluation; try again next tick
                self._log_debug("wait", f"wait_for check failed: {e}")
                return False
            return result == expected

        await self._poll("wait_for", matches, options.timeout or timeout)
