"""Type definitions for Horseman."""

from .models import (
    KeyboardEventType,
    MouseEventType,
    ImageType,
    PaperFormat,
    Orientation,
    Viewport,
    Cookie,
    Area,
    PaperSize,
    PaperSizeElement,
    TypeOptions,
    WaitForOptions,
    InitResult,
)
from .options import HorsemanOptions

__all__ = [
    "KeyboardEventType",
    "MouseEventType",
    "ImageType",
    "PaperFormat",
    "Orientation",
    "Viewport",
    "Cookie",
    "Area",
    "PaperSize",
    "PaperSizeElement",
    "TypeOptions",
    "WaitForOptions",
    "InitResult",
    "HorsemanOptions",
]
