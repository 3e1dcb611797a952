"""Chain utilities that do not touch the browser."""

from typing import Any, Callable

from ..core.chain import action, maybe_await
from .base import BaseActions


class UtilityActions(BaseActions):

    @action(launch=False, locked=False, with_value=True, requires_open=False)
    async def log(self, previous: Any, message: Any = None) -> Any:
        """Print ``message``, or the previous value, and pass the value on."""
        print(previous if message is None else message)
        return previous

    @action(launch=False, locked=False, with_value=True, requires_open=False)
    async def do(self, previous: Any, fn: Callable[[], Any]) -> Any:
        """Run a sync or async callable between steps and pass the value on."""
        await maybe_await(fn())
        return previous
