import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from horseman import UnsupportedOperationError
from horseman.core.events import EventRegistry, normalize_event_name
from horseman.utils.logger import HorsemanLogger


@pytest.fixture
def registry():
    return EventRegistry(HorsemanLogger(MagicMock(), verbose=3))


def test_normalize_event_name():
    assert normalize_event_name("loadFinished") == "load_finished"
    assert normalize_event_name("load_finished") == "load_finished"
    assert normalize_event_name("consoleMessage") == "console_message"
    assert normalize_event_name("initialized") == "initialized"


def test_emit_calls_listeners_in_order(registry):
    calls = []
    registry.on("load_finished", lambda status: calls.append(("a", status)))
    registry.on("loadFinished", lambda status: calls.append(("b", status)))

    registry.emit("load_finished", "success")

    assert calls == [("a", "success"), ("b", "success")]


def test_unknown_event_is_rejected(registry):
    with pytest.raises(UnsupportedOperationError):
        registry.on("explode", print)
    with pytest.raises(UnsupportedOperationError):
        registry.at("load_finished", print)


def test_failing_callback_does_not_stop_others(registry):
    calls = []

    def broken(message):
        raise RuntimeError("boom")

    registry.on("alert", broken)
    registry.on("alert", calls.append)

    registry.emit("alert", "hi")

    assert calls == ["hi"]
    registry._logger.logger.error.assert_called_once()


def test_off_removes_callbacks(registry):
    calls = []
    registry.on("alert", calls.append)
    registry.off("alert", calls.append)
    registry.emit("alert", "hi")

    registry.on("alert", calls.append)
    registry.off("alert")
    registry.emit("alert", "hi")

    assert calls == []


@pytest.mark.asyncio
async def test_coroutine_callbacks_are_scheduled(registry):
    calls = []

    async def callback(url):
        await asyncio.sleep(0)
        calls.append(url)

    registry.on("url_changed", callback)
    registry.emit("url_changed", "https://example.com/")
    await registry.drain()

    assert calls == ["https://example.com/"]


@pytest.mark.asyncio
async def test_answer_uses_handler(registry):
    registry.at("confirm", lambda message: message == "sure?")
    assert await registry.answer("confirm", "sure?") is True
    assert await registry.answer("confirm", "other") is False


@pytest.mark.asyncio
async def test_answer_awaits_async_handler(registry):
    async def prompt(message, default):
        return default + "!"

    registry.at("prompt", prompt)
    assert await registry.answer("prompt", "name?", "bob") == "bob!"


@pytest.mark.asyncio
async def test_answer_without_handler_is_none(registry):
    assert await registry.answer("confirm", "sure?") is None


@pytest.mark.asyncio
async def test_answer_with_failing_handler_is_none(registry):
    def broken(message):
        raise ValueError("nope")

    registry.at("confirm", broken)
    assert await registry.answer("confirm", "sure?") is None


def _dialog(kind, message="question", default_value=""):
    dialog = MagicMock()
    dialog.type = kind
    dialog.message = message
    dialog.default_value = default_value
    dialog.accept = AsyncMock()
    dialog.dismiss = AsyncMock()
    return dialog


@pytest.mark.asyncio
async def test_confirm_dismissed_without_handler(session):
    dialog = _dialog("confirm")
    await session._tab._on_dialog(dialog)
    dialog.dismiss.assert_awaited_once()
    dialog.accept.assert_not_awaited()


@pytest.mark.asyncio
async def test_confirm_answered_by_handler(session):
    seen = []
    session.on("confirm", seen.append)
    session.at("confirm", lambda message: True)

    dialog = _dialog("confirm", "Delete?")
    await session._tab._on_dialog(dialog)

    dialog.accept.assert_awaited_once()
    assert seen == ["Delete?"]


@pytest.mark.asyncio
async def test_prompt_answer_is_typed_in(session):
    session.at("prompt", lambda message, default: 42)

    dialog = _dialog("prompt", "Age?", "0")
    await session._tab._on_dialog(dialog)

    dialog.accept.assert_awaited_once_with("42")


@pytest.mark.asyncio
async def test_alert_is_accepted_and_reported(session):
    seen = []
    session.on("alert", seen.append)

    dialog = _dialog("alert", "Hello")
    await session._tab._on_dialog(dialog)

    dialog.accept.assert_awaited_once()
    assert seen == ["Hello"]


def test_load_events_track_status(session):
    statuses = []
    session.on("load_finished", statuses.append)
    tab = session._tab

    tab._on_load(tab.page)

    assert statuses == ["success"]
    assert tab.load_count == 1
    assert tab.loading is False


def test_console_message_event(session):
    messages = []
    session.on("consoleMessage", lambda msg, line, source: messages.append((msg, line, source)))

    message = MagicMock()
    message.text = "hi"
    message.location = {"lineNumber": 3, "url": "https://example.com/app.js"}
    session._tab._on_console(message)

    assert messages == [("hi", 3, "https://example.com/app.js")]


def test_main_frame_response_sets_status(session):
    tab = session._tab
    response = MagicMock()
    response.status = 404
    response.request.is_navigation_request.return_value = True
    response.request.frame = tab.page.main_frame

    tab._on_response(response)

    assert tab.status == 404
