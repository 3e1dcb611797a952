"""Raw mouse and keyboard events."""

from typing import Optional, Union

from ..core.chain import action
from ..core.errors import UnsupportedOperationError
from ..types import KeyboardEventType, MouseEventType
from ..utils.keys import key_name, parse_modifiers
from .base import BaseActions


class InputActions(BaseActions):
    """Mouse and keyboard events sent to the current tab."""

    @action
    async def mouse_event(
        self,
        type: Union[MouseEventType, str],
        x: Optional[float] = None,
        y: Optional[float] = None,
        button: str = "left",
    ) -> None:
        """
        Send a mouse event at a viewport position.

        Args:
            type: mouseup, mousedown, mousemove, doubleclick or click
            x: Horizontal position; last mouse position when omitted
            y: Vertical position; last mouse position when omitted
            button: left, right or middle
        """
        try:
            event = MouseEventType(type)
        except ValueError as e:
            raise UnsupportedOperationError("mouse_event", f"unknown event type {type!r}") from e
        tab = self._tab
        last_x, last_y = tab.mouse_position
        x = last_x if x is None else x
        y = last_y if y is None else y

        mouse = tab.page.mouse
        if event == MouseEventType.MOUSEMOVE:
            await mouse.move(x, y)
        elif event == MouseEventType.MOUSEDOWN:
            await mouse.move(x, y)
            await mouse.down(button=button)
        elif event == MouseEventType.MOUSEUP:
            await mouse.move(x, y)
            await mouse.up(button=button)
        elif event == MouseEventType.CLICK:
            await mouse.click(x, y, button=button)
        else:
            await mouse.dblclick(x, y, button=button)

        tab.mouse_position = (x, y)
        self._log_debug("input", f"Mouse {event.value}", x=x, y=y, button=button)

    @action
    async def keyboard_event(
        self,
        type: Union[KeyboardEventType, str],
        key: Union[str, int],
        modifier: Union[int, str, None] = 0,
    ) -> None:
        """
        Send a keyboard event to the current tab.

        ``key`` is a key name ("Enter"), a character, or a legacy numeric key
        code; ``modifier`` is a legacy bitmask or a string like "shift+ctrl".
        """
        try:
            event = KeyboardEventType(type)
        except ValueError as e:
            raise UnsupportedOperationError("keyboard_event", f"unknown event type {type!r}") from e
        name = key_name(key)
        if not name:
            raise UnsupportedOperationError("keyboard_event", f"unknown key {key!r}")

        keyboard = self._tab.page.keyboard
        modifiers = parse_modifiers(modifier)

        if event == KeyboardEventType.KEYPRESS:
            await keyboard.press("+".join(modifiers + [name]))
            return

        for mod in modifiers:
            await keyboard.down(mod)
        try:
            if event == KeyboardEventType.KEYDOWN:
                await keyboard.down(name)
            else:
                await keyboard.up(name)
        finally:
            for mod in reversed(modifiers):
                await keyboard.up(mod)
