"""Tab: one Playwright page with frame, load and status tracking."""

import time
from typing import Optional, Any, Dict, Tuple, TYPE_CHECKING
from playwright.async_api import Page, Frame, Request, Response, ConsoleMessage, Dialog, FileChooser

from ..utils.logger import HorsemanLogger

if TYPE_CHECKING:
    from .horseman import Horseman


class Tab:
    """
    Wraps a Playwright Page for a Horseman session.

    Tracks the frame operations run in, the status of the last main-frame
    navigation, a load counter used by wait_for_next_page(), and the last
    mouse position. Page events are translated into session notifications.
    """

    def __init__(self, page: Page, session: 'Horseman'):
        """
        Initialize Tab.

        Args:
            page: Playwright Page instance
            session: Owning Horseman session
        """
        self.page = page
        self._session = session
        self._logger: HorsemanLogger = session.logger.child(component="tab")

        self.frame: Frame = page.main_frame
        self.status: Optional[int] = None
        self.loading = False
        self.load_count = 0
        # load_count at the start of the current and of the previous step
        self.step_loads = 0
        self.prior_step_loads = 0
        self.mouse_position: Tuple[float, float] = (0.0, 0.0)

        self._tab_id = id(self)
        self._wire_events()

        self._logger.debug("tab:init", "Tab created", tab_id=self._tab_id)

    def _wire_events(self) -> None:
        page = self.page
        page.on("request", self._on_request)
        page.on("response", self._on_response)
        page.on("requestfailed", self._on_request_failed)
        page.on("framenavigated", self._on_frame_navigated)
        page.on("framedetached", self._on_frame_detached)
        page.on("load", self._on_load)
        page.on("console", self._on_console)
        page.on("pageerror", self._on_page_error)
        page.on("dialog", self._on_dialog)
        page.on("filechooser", self._on_file_chooser)
        page.on("close", self._on_close)

    @property
    def events(self):
        return self._session.events

    @property
    def main_frame(self) -> Frame:
        return self.page.main_frame

    @property
    def url(self) -> str:
        return self.page.url

    def mark_step(self) -> None:
        """Record the load counter at the start of a step."""
        self.prior_step_loads = self.step_loads
        self.step_loads = self.load_count

    def rebase_steps(self) -> None:
        """Forget loads seen before this tab became current."""
        self.prior_step_loads = self.step_loads = self.load_count

    def reset_frame(self) -> None:
        """Point operations back at the main frame."""
        self.frame = self.page.main_frame

    def _is_main_navigation(self, request: Request) -> bool:
        try:
            return request.is_navigation_request() and request.frame == self.page.main_frame
        except Exception:
            # Service worker requests have no frame
            return False

    def _on_request(self, request: Request) -> None:
        if request.is_navigation_request():
            main = self._is_main_navigation(request)
            if main:
                self.loading = True
                self.events.emit("load_started")
            self.events.emit("navigation_requested", request.url, "Other", True, main)

        self.events.emit("resource_requested", _request_data(request), request)

    def _on_response(self, response: Response) -> None:
        if self._is_main_navigation(response.request):
            self.status = response.status
        self.events.emit("resource_received", _response_data(response))

    def _on_request_failed(self, request: Request) -> None:
        self.events.emit("resource_error", {
            "url": request.url,
            "error_string": request.failure,
            "method": request.method,
        })
        if self._is_main_navigation(request):
            self._logger.debug(
                "tab:load",
                "Main frame navigation failed",
                url=request.url,
                failure=request.failure,
            )
            self.loading = False
            self.load_count += 1
            self.events.emit("load_finished", "fail")

    def _on_frame_navigated(self, frame: Frame) -> None:
        if frame != self.page.main_frame:
            return
        if self.frame.is_detached():
            self.reset_frame()
        self.events.emit("initialized")
        self.events.emit("url_changed", frame.url)

    def _on_frame_detached(self, frame: Frame) -> None:
        if frame == self.frame:
            self._logger.debug("tab:frame", "Current frame detached, back to main frame")
            self.reset_frame()

    def _on_load(self, page: Page) -> None:
        self.loading = False
        self.load_count += 1
        self.events.emit("load_finished", "success")

    def _on_console(self, message: ConsoleMessage) -> None:
        location = message.location or {}
        self.events.emit(
            "console_message",
            message.text,
            location.get("lineNumber"),
            location.get("url"),
        )

    def _on_page_error(self, error: Any) -> None:
        message = getattr(error, "message", str(error))
        self.events.emit("error", message, getattr(error, "stack", None))

    async def _on_dialog(self, dialog: Dialog) -> None:
        kind = dialog.type
        message = dialog.message
        try:
            if kind == "confirm":
                self.events.emit("confirm", message)
                accepted = await self.events.answer("confirm", message)
                if accepted:
                    await dialog.accept()
                else:
                    await dialog.dismiss()
            elif kind == "prompt":
                default = dialog.default_value
                self.events.emit("prompt", message, default)
                answer = await self.events.answer("prompt", message, default)
                if answer is None or answer is False:
                    await dialog.dismiss()
                else:
                    await dialog.accept(str(answer))
            else:
                if kind == "alert":
                    self.events.emit("alert", message)
                await dialog.accept()
        except Exception as e:
            # The page may have navigated away and closed the dialog already
            self._logger.warn("tab:dialog", f"Could not answer {kind} dialog: {e}", error=str(e))

    async def _on_file_chooser(self, chooser: FileChooser) -> None:
        if self.events.handler("file_picker") is None:
            return
        current = await chooser.element.get_attribute("value")
        path = await self.events.answer("file_picker", current or "")
        if path:
            await chooser.set_files(path)

    def _on_close(self, page: Page) -> None:
        self._session._forget_tab(self)

    def __repr__(self) -> str:
        return f"<Tab id={self._tab_id} url='{self.page.url}'>"


def _request_data(request: Request) -> Dict[str, Any]:
    return {
        "url": request.url,
        "method": request.method,
        "headers": request.headers,
        "resource_type": request.resource_type,
        "post_data": request.post_data,
        "time": time.time(),
    }


def _response_data(response: Response) -> Dict[str, Any]:
    return {
        "url": response.url,
        "status": response.status,
        "status_text": response.status_text,
        "headers": response.headers,
        "time": time.time(),
    }
