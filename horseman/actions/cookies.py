"""Cookie access for the browser context."""

import os
from typing import Any, Dict, List, Optional, Union

from playwright.async_api import BrowserContext

from ..core.chain import action
from ..core.errors import ActionFailedError
from ..types import Cookie
from ..utils.cookie_jar import load_cookie_file
from .base import BaseActions

CookieLike = Union[Cookie, Dict[str, Any]]


def _as_cookie(value: CookieLike) -> Cookie:
    if isinstance(value, Cookie):
        return value
    return Cookie.model_validate(value)


class CookieActions(BaseActions):
    """Read and replace cookies of the browser context."""

    context: Optional[BrowserContext]

    @action
    async def cookies(
        self,
        arg: Union[str, os.PathLike, CookieLike, List[CookieLike], None] = None,
    ) -> Optional[List[Cookie]]:
        """
        Get or set cookies.

        Args:
            arg: Nothing to read the cookies visible to the current page;
                a cookie jar path or a list of cookies to replace every
                cookie; a single cookie to add it

        Returns:
            The cookies for the current URL when called without ``arg``
        """
        if arg is None:
            url = self._tab.url
            if url.startswith(("http://", "https://")):
                raw = await self.context.cookies(url)
            else:
                raw = await self.context.cookies()
            return [Cookie.from_playwright(c) for c in raw]

        if isinstance(arg, (str, os.PathLike)):
            await self._replace_cookies(load_cookie_file(os.fspath(arg)))
        elif isinstance(arg, list):
            await self._replace_cookies([_as_cookie(c) for c in arg])
        else:
            await self._add_cookies([_as_cookie(arg)])
        return None

    async def _replace_cookies(self, cookies: List[Cookie]) -> None:
        await self.context.clear_cookies()
        await self._add_cookies(cookies)

    async def _add_cookies(self, cookies: List[Cookie]) -> None:
        if not cookies:
            return
        default_url = self._tab.url if self._tabs else None
        try:
            payload = [cookie.to_playwright(default_url) for cookie in cookies]
        except ValueError as e:
            raise ActionFailedError("cookies", str(e)) from e
        await self.context.add_cookies(payload)
        self._log_debug("cookies", "Cookies set", count=len(payload))
