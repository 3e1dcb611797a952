"""Custom exception hierarchy for Horseman."""

from typing import Optional, Any, Dict


class HorsemanError(Exception):
    """Base exception for all Horseman errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    @property
    def error_code(self) -> Optional[str]:
        """Machine-readable error code."""
        return self.details.get("error_code")


class HorsemanNotInitializedError(HorsemanError):
    """Raised when the browser is needed before the session was launched."""

    def __init__(self):
        super().__init__(
            "Horseman not initialized. Call init() or run a browser step first.",
            {"error_code": "NOT_INITIALIZED"}
        )


class SessionClosedError(HorsemanError):
    """Raised when a step runs after close()."""

    def __init__(self, operation: str):
        super().__init__(
            f"Cannot run '{operation}': the session has been closed",
            {"operation": operation, "error_code": "SESSION_CLOSED"}
        )


class BrowserNotAvailableError(HorsemanError):
    """Raised when the browser process cannot be launched."""

    def __init__(self, reason: str):
        super().__init__(
            f"Browser not available: {reason}",
            {"reason": reason, "error_code": "BROWSER_NOT_AVAILABLE"}
        )


class PageNotAvailableError(HorsemanError):
    """Raised when there is no tab to operate on."""

    def __init__(self, reason: str):
        super().__init__(
            f"Page not available: {reason}",
            {"reason": reason, "error_code": "PAGE_NOT_AVAILABLE"}
        )


class ElementNotFoundError(HorsemanError):
    """Raised when a selector matches nothing."""

    def __init__(self, selector: str, operation: Optional[str] = None):
        message = f"Element not found: {selector}"
        if operation:
            message = f"Element not found for '{operation}': {selector}"
        super().__init__(
            message,
            {"selector": selector, "operation": operation, "error_code": "ELEMENT_NOT_FOUND"}
        )


class FrameNotFoundError(HorsemanError):
    """Raised when a frame switch target does not exist."""

    def __init__(self, target: Any):
        super().__init__(
            f"Frame not found: {target!r}",
            {"target": str(target), "error_code": "FRAME_NOT_FOUND"}
        )


class TabNotFoundError(HorsemanError):
    """Raised when a tab index is out of range."""

    def __init__(self, index: int, tab_count: int):
        super().__init__(
            f"Tab {index} does not exist ({tab_count} open)",
            {"index": index, "tab_count": tab_count, "error_code": "TAB_NOT_FOUND"}
        )


class ActionFailedError(HorsemanError):
    """Raised when a step fails inside the browser."""

    def __init__(self, action: str, reason: str):
        super().__init__(
            f"Action '{action}' failed: {reason}",
            {"action": action, "reason": reason, "error_code": "ACTION_FAILED"}
        )


class NavigationError(HorsemanError):
    """Raised when a navigation cannot be completed."""

    def __init__(self, url: str, reason: str):
        super().__init__(
            f"Navigation to {url} failed: {reason}",
            {"url": url, "reason": reason, "error_code": "NAVIGATION_FAILED"}
        )


class TimeoutError(HorsemanError):
    """Raised when operations timeout."""

    def __init__(self, operation: str, timeout_ms: int):
        super().__init__(
            f"Operation '{operation}' timed out after {timeout_ms}ms",
            {"operation": operation, "timeout_ms": timeout_ms, "error_code": "TIMEOUT"}
        )


class ConfigurationError(HorsemanError):
    """Raised when configuration is invalid."""

    def __init__(self, reason: str):
        super().__init__(
            f"Invalid configuration: {reason}",
            {"reason": reason, "error_code": "CONFIGURATION_ERROR"}
        )


class UnsupportedOperationError(HorsemanError):
    """Raised when an unsupported operation is attempted."""

    def __init__(self, operation: str, reason: Optional[str] = None):
        message = f"Unsupported operation: {operation}"
        if reason:
            message += f" - {reason}"
        super().__init__(
            message,
            {"operation": operation, "reason": reason, "error_code": "UNSUPPORTED_OPERATION"}
        )


class UploadFileNotFoundError(HorsemanError, FileNotFoundError):
    """Raised when upload() is given a path that does not exist."""

    def __init__(self, path: str):
        super().__init__(
            f"File path for upload does not exist: {path}",
            {"path": path, "error_code": "UPLOAD_FILE_NOT_FOUND"}
        )


class CookieFileError(HorsemanError):
    """Raised when a cookie jar cannot be read or written."""

    def __init__(self, path: str, reason: str):
        super().__init__(
            f"Cookie file {path}: {reason}",
            {"path": path, "reason": reason, "error_code": "COOKIE_FILE_ERROR"}
        )
