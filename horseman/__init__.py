"""
Horseman - a chainable client driving a browser.

Every operation queues a step on an awaitable chain:

    async with Horseman() as horseman:
        title = await horseman.open("https://example.com").title()
"""

__version__ = "0.1.0"

from .core import (
    Horseman,
    Chain,
    HorsemanError,
    HorsemanNotInitializedError,
    SessionClosedError,
    BrowserNotAvailableError,
    PageNotAvailableError,
    ElementNotFoundError,
    FrameNotFoundError,
    TabNotFoundError,
    ActionFailedError,
    NavigationError,
    TimeoutError,
    ConfigurationError,
    UnsupportedOperationError,
    UploadFileNotFoundError,
    CookieFileError,
)

from .types import (
    HorsemanOptions,
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

__all__ = [
    # Main class
    "Horseman",
    "Chain",
    # Types
    "HorsemanOptions",
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
    # Errors
    "HorsemanError",
    "HorsemanNotInitializedError",
    "SessionClosedError",
    "BrowserNotAvailableError",
    "PageNotAvailableError",
    "ElementNotFoundError",
    "FrameNotFoundError",
    "TabNotFoundError",
    "ActionFailedError",
    "NavigationError",
    "TimeoutError",
    "ConfigurationError",
    "UnsupportedOperationError",
    "UploadFileNotFoundError",
    "CookieFileError",
]
