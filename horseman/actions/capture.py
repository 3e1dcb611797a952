"""Screenshots, crops and PDF rendering."""

import base64
import os
from typing import Dict, Optional, Union

import aiofiles

from ..core.chain import action
from ..core.errors import ActionFailedError, UnsupportedOperationError
from ..dom import scripts
from ..types import Area, ImageType, PaperSize
from .base import BaseActions

Target = Union[str, Area, Dict[str, float]]

_FORMATS = {
    "PNG": "png",
    "JPEG": "jpeg",
    "JPG": "jpeg",
}


def _image_format(name: Union[ImageType, str], operation: str) -> str:
    """Map an image type or file extension to a Playwright screenshot type."""
    key = name.value if isinstance(name, ImageType) else str(name).lstrip(".").upper()
    if key == "GIF":
        raise UnsupportedOperationError(operation, "GIF capture is not supported")
    if key not in _FORMATS:
        raise UnsupportedOperationError(operation, f"unknown image type '{name}'")
    return _FORMATS[key]


def _format_for_path(path: str, operation: str) -> str:
    extension = os.path.splitext(path)[1]
    if not extension:
        return "png"
    return _image_format(extension, operation)


class CaptureActions(BaseActions):
    """Rendering the current tab to images and PDF."""

    @action
    async def screenshot(self, path: str) -> None:
        """Save a full page screenshot; the format follows the file extension."""
        image_type = _format_for_path(path, "screenshot")
        await self._tab.page.screenshot(path=path, full_page=True, type=image_type)
        self._log_debug("capture", f"Screenshot saved to {path}")

    @action
    async def screenshot_base64(self, type: Union[ImageType, str] = ImageType.PNG) -> str:
        image_type = _image_format(type, "screenshot_base64")
        data = await self._tab.page.screenshot(full_page=True, type=image_type)
        return base64.b64encode(data).decode("ascii")

    @action
    async def crop(self, target: Target, path: str) -> None:
        """
        Save a screenshot of part of the page.

        Args:
            target: CSS selector of an element, or an Area
            path: Output file; the format follows the extension
        """
        image_type = _format_for_path(path, "crop")
        data = await self._capture_part(target, image_type, "crop")
        async with aiofiles.open(path, "wb") as f:
            await f.write(data)

    @action
    async def crop_base64(self, target: Target, type: Union[ImageType, str] = ImageType.PNG) -> str:
        image_type = _image_format(type, "crop_base64")
        data = await self._capture_part(target, image_type, "crop_base64")
        return base64.b64encode(data).decode("ascii")

    @action
    async def pdf(self, path: str, paper_size: Union[PaperSize, dict, None] = None) -> None:
        """
        Render the current page to a PDF file.

        Raises:
            UnsupportedOperationError: Outside chromium
        """
        if self.options.browser != "chromium":
            raise UnsupportedOperationError("pdf", f"PDF rendering needs chromium, not {self.options.browser}")
        if paper_size is None:
            paper_size = PaperSize()
        elif isinstance(paper_size, dict):
            paper_size = PaperSize(**paper_size)

        await self._tab.page.pdf(path=path, **paper_size.to_pdf_options())
        self._log_debug("capture", f"PDF saved to {path}")

    async def _capture_part(self, target: Target, image_type: str, operation: str) -> bytes:
        if isinstance(target, str):
            await self._require(target, operation)
            return await self._frame.locator(target).first.screenshot(type=image_type)

        area = Area(**target) if isinstance(target, dict) else target
        page = self._tab.page
        size: Optional[Dict[str, float]] = await page.evaluate(scripts.DOCUMENT_SIZE)
        try:
            clip = area.to_clip(size["width"], size["height"])
        except ValueError as e:
            raise ActionFailedError(operation, str(e)) from e
        return await page.screenshot(full_page=True, clip=clip, type=image_type)
