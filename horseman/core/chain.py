"""Chainable, awaitable command queue bound to one Horseman session."""

import asyncio
import functools
import inspect
from typing import Any, Awaitable, Callable, Optional, Tuple, Type, Union, TYPE_CHECKING

if TYPE_CHECKING:
    from .horseman import Horseman

StepRunner = Callable[[Any], Awaitable[Any]]
ErrorHandler = Callable[[BaseException], Awaitable[Any]]


async def maybe_await(result: Any) -> Any:
    """Await ``result`` if it is awaitable, otherwise return it unchanged."""
    if inspect.isawaitable(result):
        return await result
    return result


def action(
    func: Optional[Callable] = None,
    *,
    launch: bool = True,
    locked: bool = True,
    with_value: bool = False,
    requires_open: bool = True,
    eager: bool = False,
) -> Callable:
    """
    Turn a Horseman coroutine method into a chainable step.

    Calling the decorated method no longer runs it; it returns a Chain whose
    await runs it through the session's step executor.

    Args:
        launch: Launch the browser before the step if needed
        locked: Hold the session lock while the step runs
        with_value: Pass the previous value in the chain as first argument
        requires_open: Refuse to run after close()
        eager: The method is a plain function run at call time; the
            returned Chain only carries its result
    """
    def decorator(impl: Callable) -> Callable:
        @functools.wraps(impl)
        def wrapper(self: 'Horseman', *args: Any, **kwargs: Any) -> 'Chain':
            return Chain(self, None, impl.__name__, _step_runner(self, wrapper, args, kwargs))

        wrapper.__horseman_action__ = True
        wrapper.__horseman_impl__ = impl
        wrapper.__horseman_flags__ = {
            "launch": launch,
            "locked": locked,
            "with_value": with_value,
            "requires_open": requires_open,
        }
        wrapper.__horseman_eager__ = eager
        return wrapper

    if func is not None:
        return decorator(func)
    return decorator


def _step_runner(
    session: 'Horseman',
    wrapper: Callable,
    args: Tuple[Any, ...],
    kwargs: Any,
) -> StepRunner:
    impl = wrapper.__horseman_impl__
    flags = wrapper.__horseman_flags__

    if wrapper.__horseman_eager__:
        result = impl(session, *args, **kwargs)

        async def resolved(previous: Any) -> Any:
            return result

        return resolved

    async def run(previous: Any) -> Any:
        return await session._execute_step(impl, args, kwargs, previous=previous, **flags)

    return run


class Chain:
    """
    One queued step plus everything queued before it.

    A Chain is awaitable and lazy: nothing runs until it is awaited, then
    the parent runs first and hands its value to this step. The outcome is
    cached, so awaiting the same Chain twice does not repeat any step.

    Every Horseman operation is available on a Chain and appends a step:

        title = await horseman.open(url).click("a").wait_for_next_page().title()
    """

    def __init__(
        self,
        session: 'Horseman',
        parent: Optional['Chain'],
        name: str,
        run: StepRunner,
        on_error: Optional[ErrorHandler] = None,
    ):
        self._session = session
        self._parent = parent
        self._name = name
        self._run = run
        self._on_error = on_error
        self._task: Optional[asyncio.Future] = None

    @property
    def session(self) -> 'Horseman':
        return self._session

    @property
    def name(self) -> str:
        return self._name

    def __await__(self):
        if self._task is None:
            self._task = asyncio.ensure_future(self._execute())
        return self._task.__await__()

    async def _execute(self) -> Any:
        if self._parent is None:
            return await self._run(None)
        try:
            value = await self._parent
        except Exception as e:
            if self._on_error is None:
                raise
            return await self._on_error(e)
        return await self._run(value)

    def _extend(self, name: str, run: StepRunner, on_error: Optional[ErrorHandler] = None) -> 'Chain':
        return Chain(self._session, self, name, run, on_error)

    def __getattr__(self, name: str) -> Callable[..., 'Chain']:
        if name.startswith("_"):
            raise AttributeError(name)
        wrapper = getattr(type(self._session), name, None)
        if wrapper is None or not getattr(wrapper, "__horseman_action__", False):
            raise AttributeError(f"'{type(self).__name__}' has no operation '{name}'")

        def chained(*args: Any, **kwargs: Any) -> 'Chain':
            return self._extend(name, _step_runner(self._session, wrapper, args, kwargs))

        return chained

    def then(self, fn: Callable[[Any], Any]) -> 'Chain':
        """Pass the current value to ``fn``; its (awaited) result becomes the value."""
        async def run(value: Any) -> Any:
            return await maybe_await(fn(value))

        return self._extend("then", run)

    def tap(self, fn: Callable[[Any], Any]) -> 'Chain':
        """Call ``fn`` with the current value and keep the value unchanged."""
        async def run(value: Any) -> Any:
            await maybe_await(fn(value))
            return value

        return self._extend("tap", run)

    def catch(
        self,
        fn: Callable[[BaseException], Any],
        exc_type: Union[Type[BaseException], Tuple[Type[BaseException], ...]] = Exception,
    ) -> 'Chain':
        """
        Recover from an exception raised earlier in the chain.

        ``fn`` receives the exception and its result becomes the value.
        Exceptions that are not instances of ``exc_type`` keep propagating.
        """
        async def run(value: Any) -> Any:
            return value

        async def on_error(error: BaseException) -> Any:
            if not isinstance(error, exc_type):
                raise error
            return await maybe_await(fn(error))

        return self._extend("catch", run, on_error)

    def finally_(self, fn: Callable[[], Any]) -> 'Chain':
        """Call ``fn`` whether or not the chain failed so far."""
        async def run(value: Any) -> Any:
            await maybe_await(fn())
            return value

        async def on_error(error: BaseException) -> Any:
            await maybe_await(fn())
            raise error

        return self._extend("finally", run, on_error)

    def __repr__(self) -> str:
        return f"<Chain step={self._name!r} session={self._session.session_id}>"
