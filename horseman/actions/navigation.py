"""Navigation: open/post/put, history, status, url and title."""

from typing import Any, Dict, Optional, Tuple, Union, TYPE_CHECKING
from urllib.parse import urlencode

from playwright.async_api import Error as PlaywrightError, Response, Route
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from ..core.chain import action
from ..core.errors import NavigationError
from ..dom import scripts
from .base import BaseActions

if TYPE_CHECKING:
    from ..core.tab import Tab

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"

PostData = Union[str, bytes, Dict[str, Any], None]


def encode_body(data: PostData) -> Tuple[Optional[Union[str, bytes]], str]:
    """
    Encode request data for a POST or PUT navigation.

    Mappings are form-urlencoded; strings and bytes are sent as they are.

    Returns:
        Tuple of (body, content type)
    """
    if data is None:
        return None, FORM_CONTENT_TYPE
    if isinstance(data, dict):
        return urlencode(data, doseq=True), FORM_CONTENT_TYPE
    return data, FORM_CONTENT_TYPE


class NavigationActions(BaseActions):
    """Page navigation and page-level queries."""

    @action
    async def open(self, url: str) -> None:
        """Load ``url`` with a GET request in the current tab."""
        await self._navigate("open", url)

    @action
    async def post(self, url: str, data: PostData = None) -> None:
        """Load ``url`` with a POST request carrying ``data``."""
        await self._navigate("post", url, "POST", data)

    @action
    async def put(self, url: str, data: PostData = None) -> None:
        """Load ``url`` with a PUT request carrying ``data``."""
        await self._navigate("put", url, "PUT", data)

    @action
    async def back(self) -> None:
        """Go back to the previous page."""
        tab = self._tab
        response = await tab.page.go_back(wait_until="load")
        self._after_navigation(tab, response)

    @action
    async def forward(self) -> None:
        """Go forward to the next page."""
        tab = self._tab
        response = await tab.page.go_forward(wait_until="load")
        self._after_navigation(tab, response)

    @action
    async def reload(self) -> None:
        """Refresh the current page."""
        tab = self._tab
        response = await tab.page.reload(wait_until="load")
        self._after_navigation(tab, response)

    @action
    async def status(self) -> Optional[int]:
        """HTTP status code of the last main-frame navigation."""
        return self._tab.status

    @action
    async def url(self) -> str:
        return self._tab.url

    @action
    async def title(self) -> str:
        return await self._tab.page.title()

    @action
    async def scroll_to(self, top: float, left: float) -> None:
        """Scroll the current frame to (``left``, ``top``)."""
        await self._frame.evaluate(scripts.SCROLL_TO, [top, left])

    @action
    async def zoom(self, factor: float) -> None:
        """Scale the rendering of the current page by ``factor``."""
        await self._tab.main_frame.evaluate(scripts.ZOOM, factor)

    async def _navigate(
        self,
        operation: str,
        url: str,
        method: str = "GET",
        data: PostData = None,
    ) -> Optional[Response]:
        tab = self._tab
        self._log_info("navigate", f"Navigating to {url}", method=method)

        if method == "GET":
            return await self._goto(tab, url, operation)

        body, content_type = encode_body(data)
        overridden = False

        async def override(route: Route) -> None:
            nonlocal overridden
            request = route.request
            if not overridden and request.is_navigation_request() and request.frame == tab.main_frame:
                overridden = True
                headers = {**request.headers, "content-type": content_type}
                await route.fallback(method=method, post_data=body, headers=headers)
            else:
                await route.fallback()

        await tab.page.route("**/*", override)
        try:
            return await self._goto(tab, url, operation)
        finally:
            await tab.page.unroute("**/*", override)

    async def _goto(self, tab: 'Tab', url: str, operation: str = "open") -> Optional[Response]:
        """Navigate ``tab`` and wait for the load event."""
        timeout_ms = self.options.timeout
        try:
            response = await tab.page.goto(url, wait_until="load", timeout=timeout_ms)
        except PlaywrightTimeoutError as e:
            raise self._timed_out(operation, timeout_ms) from e
        except PlaywrightError as e:
            raise NavigationError(url, str(e)) from e
        self._after_navigation(tab, response)
        return response

    def _after_navigation(self, tab: 'Tab', response: Optional[Response]) -> None:
        if response is not None:
            tab.status = response.status
        tab.reset_frame()
