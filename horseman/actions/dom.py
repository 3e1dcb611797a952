"""DOM interrogation and mutation in the current frame."""

import os
import re
from typing import Any, List, Optional, Union

import aiofiles

from ..core.chain import action
from ..core.errors import UploadFileNotFoundError
from ..dom import scripts
from ..types import KeyboardEventType, TypeOptions
from ..utils.keys import parse_modifiers
from .base import BaseActions

_UNSET = object()

_CAMEL_HUMP = re.compile(r"[A-Z]")


def css_name(name: str) -> str:
    """Kebab-case a camelCase CSS property name (``backgroundColor``)."""
    if name.startswith("--"):
        return name
    return _CAMEL_HUMP.sub(lambda m: "-" + m.group(0).lower(), name)


class DOMActions(BaseActions):
    """
    Queries and edits elements selected by CSS selector.

    Reads that target one element raise ElementNotFoundError when the
    selector matches nothing; aggregate reads return an empty answer.
    """

    @action
    async def exists(self, selector: str) -> bool:
        return await self._count(selector) > 0

    @action
    async def visible(self, selector: str) -> bool:
        return await self._frame.evaluate(scripts.VISIBLE, selector)

    @action
    async def count(self, selector: str) -> int:
        return await self._count(selector)

    @action
    async def html(self, selector: Optional[str] = None, file: Optional[str] = None) -> Optional[str]:
        """
        Get the HTML of the document or of the first element matching ``selector``.

        Args:
            selector: Element to read; whole document when omitted
            file: Write the markup to this path instead of returning it
        """
        if selector is None:
            markup = await self._frame.content()
        else:
            markup = await self._read_element(scripts.INNER_HTML, selector, selector, "html")

        if file is None:
            return markup

        async with aiofiles.open(file, "w", encoding="utf-8") as f:
            await f.write(markup)
        self._log_debug("dom", f"Wrote HTML to {file}", size=len(markup))
        return None

    @action
    async def text(self, selector: str) -> str:
        return await self._frame.evaluate(scripts.TEXT, selector)

    @action
    async def plain_text(self) -> str:
        return await self._frame.evaluate(scripts.PLAIN_TEXT)

    @action
    async def value(self, selector: str, value: Any = _UNSET) -> Any:
        """Read the value of a form element, or set it when ``value`` is given."""
        if value is _UNSET:
            return await self._read_element(scripts.GET_VALUE, selector, selector, "value")
        await self._read_element(
            scripts.SET_VALUE,
            {"selector": selector, "value": value},
            selector,
            "value",
        )
        return None

    @action
    async def attribute(self, selector: str, name: str) -> Optional[str]:
        return await self._read_element(
            scripts.ATTRIBUTE, {"selector": selector, "name": name}, selector, "attribute"
        )

    @action
    async def css_property(self, selector: str, name: str) -> str:
        arg = {"selector": selector, "name": css_name(name)}
        return await self._read_element(scripts.CSS_PROPERTY, arg, selector, "css_property")

    @action
    async def width(self, selector: str) -> float:
        size = await self._read_element(scripts.SIZE, selector, selector, "width")
        return size["width"]

    @action
    async def height(self, selector: str) -> float:
        size = await self._read_element(scripts.SIZE, selector, selector, "height")
        return size["height"]

    @action
    async def click(self, selector: str) -> None:
        await self._require(selector, "click")
        await self._frame.locator(selector).first.click(timeout=self.options.timeout)

    @action
    async def select(self, selector: str, value: Union[str, List[str]]) -> None:
        """Choose option(s) of a ``<select>`` element by value."""
        await self._require(selector, "select")
        await self._frame.locator(selector).first.select_option(value, timeout=self.options.timeout)

    @action
    async def clear(self, selector: str) -> None:
        await self._require(selector, "clear")
        await self._frame.locator(selector).first.fill("", timeout=self.options.timeout)

    @action
    async def type(self, selector: str, text: str, options: Union[TypeOptions, dict, None] = None) -> None:
        """
        Focus ``selector`` and type ``text`` into it key by key.

        Args:
            selector: Element to type into
            text: Characters to type
            options: Event type (keypress, keydown, keyup) and held modifiers
        """
        if options is None:
            options = TypeOptions()
        elif isinstance(options, dict):
            options = TypeOptions(**options)

        await self._require(selector, "type")
        await self._frame.locator(selector).first.focus(timeout=self.options.timeout)

        keyboard = self._tab.page.keyboard
        modifiers = parse_modifiers(options.modifiers)

        for modifier in modifiers:
            await keyboard.down(modifier)
        try:
            if options.event_type == KeyboardEventType.KEYPRESS:
                await keyboard.type(text)
            elif options.event_type == KeyboardEventType.KEYDOWN:
                for char in text:
                    await keyboard.down(char)
            else:
                for char in text:
                    await keyboard.up(char)
        finally:
            for modifier in reversed(modifiers):
                await keyboard.up(modifier)

    @action
    async def upload(self, selector: str, path: str) -> None:
        """Set the file of an ``<input type=file>``."""
        if not os.path.exists(path):
            raise UploadFileNotFoundError(path)
        await self._require(selector, "upload")
        await self._frame.locator(selector).first.set_input_files(path, timeout=self.options.timeout)
