"""Core Horseman components."""

from .chain import Chain, action
from .errors import (
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
from .events import EventRegistry, EVENTS, HANDLERS
from .horseman import Horseman
from .tab import Tab

__all__ = [
    # Main classes
    "Horseman",
    "Chain",
    "Tab",
    "EventRegistry",
    "action",
    "EVENTS",
    "HANDLERS",
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
