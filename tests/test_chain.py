import asyncio

import pytest
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from horseman import (
    ActionFailedError,
    Chain,
    ElementNotFoundError,
    SessionClosedError,
    TimeoutError,
)

pytestmark = pytest.mark.asyncio


async def test_operations_return_lazy_chains(session, page):
    chain = session.title()

    assert isinstance(chain, Chain)
    page.title.assert_not_awaited()

    assert await chain == "Example Domain"
    page.title.assert_awaited_once()


async def test_awaiting_twice_does_not_repeat_steps(session, page):
    chain = session.open("https://example.com/").title()

    first = await chain
    second = await chain

    assert first == second == "Example Domain"
    assert page.goto.await_count == 1
    assert page.title.await_count == 1


async def test_steps_run_in_order(session, page):
    calls = []
    page.goto.side_effect = lambda *a, **kw: calls.append("goto") or page.goto.return_value
    page.title.side_effect = lambda: calls.append("title") or "Example Domain"

    await session.open("https://example.com/").title()

    assert calls == ["goto", "title"]


async def test_then_transforms_value(session):
    result = await session.title().then(str.upper)
    assert result == "EXAMPLE DOMAIN"


async def test_then_awaits_coroutine_callbacks(session):
    async def shout(value):
        await asyncio.sleep(0)
        return value + "!"

    assert await session.title().then(shout) == "Example Domain!"


async def test_tap_keeps_value(session):
    seen = []
    result = await session.title().tap(seen.append)
    assert result == "Example Domain"
    assert seen == ["Example Domain"]


async def test_failure_skips_later_steps(session, frame, page):
    frame.evaluate.return_value = 0

    with pytest.raises(ElementNotFoundError):
        await session.click("#missing").title()

    page.title.assert_not_awaited()


async def test_catch_recovers(session, frame):
    frame.evaluate.return_value = 0

    result = await session.click("#missing").catch(lambda e: type(e).__name__)
    assert result == "ElementNotFoundError"


async def test_catch_filters_by_type(session, frame):
    frame.evaluate.return_value = 0

    with pytest.raises(ElementNotFoundError):
        await session.click("#missing").catch(lambda e: "nope", TimeoutError)


async def test_chain_continues_after_catch(session, frame):
    frame.evaluate.return_value = 0
    result = await session.click("#missing").catch(lambda e: None).title()
    assert result == "Example Domain"


async def test_finally_runs_on_success_and_failure(session, frame):
    calls = []

    await session.title().finally_(lambda: calls.append("ok"))

    frame.evaluate.return_value = 0
    with pytest.raises(ElementNotFoundError):
        await session.click("#missing").finally_(lambda: calls.append("failed"))

    assert calls == ["ok", "failed"]


async def test_unknown_operation_raises_attribute_error(session):
    with pytest.raises(AttributeError):
        session.title().no_such_operation()


async def test_log_prints_previous_value(session, capsys):
    result = await session.title().log()
    assert result == "Example Domain"
    assert "Example Domain" in capsys.readouterr().out


async def test_log_prints_message(session, capsys):
    await session.log("hello")
    assert capsys.readouterr().out.strip() == "hello"


async def test_do_runs_async_callable(session):
    ran = []

    async def work():
        ran.append(True)

    result = await session.title().do(work)
    assert result == "Example Domain"
    assert ran == [True]


async def test_playwright_errors_are_wrapped(session, page):
    page.title.side_effect = PlaywrightError("target closed")

    with pytest.raises(ActionFailedError) as info:
        await session.title()

    assert info.value.details["action"] == "title"
    assert isinstance(info.value.__cause__, PlaywrightError)


async def test_playwright_timeouts_are_mapped(session, page):
    messages = []
    session.events.on("timeout", messages.append)
    page.title.side_effect = PlaywrightTimeoutError("slow")

    with pytest.raises(TimeoutError):
        await session.title()

    assert messages and "title" in messages[0]


async def test_concurrent_chains_both_complete(session):
    first, second = await asyncio.gather(
        session.title(),
        session.url(),
    )
    assert first == "Example Domain"
    assert second == "https://example.com/"


async def test_steps_after_close_raise(session):
    await session.close()

    with pytest.raises(SessionClosedError):
        await session.title()


async def test_close_is_idempotent(session):
    context = session.context
    await session.close()
    await session.close()
    context.close.assert_awaited_once()


async def test_repr_names_step(session):
    assert "title" in repr(session.title())
