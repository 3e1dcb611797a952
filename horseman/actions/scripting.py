"""Script injection, evaluation and downloads."""

import codecs
import os
import re
from typing import Any, List, Optional, Union
from urllib.parse import urljoin

import aiofiles
import httpx

from ..core.chain import action
from ..core.errors import ActionFailedError, ConfigurationError
from ..types import HorsemanOptions
from .base import BaseActions

_CHARSET = re.compile(r"charset=([\w-]+)", re.IGNORECASE)


def _is_url(location: str) -> bool:
    return location.startswith(("http://", "https://"))


async def collect_init_scripts(options: HorsemanOptions, timeout: float = 30.0) -> List[str]:
    """
    Load the scripts installed into every page of a session.

    jQuery comes first when ``inject_jquery`` is set, followed by
    ``inject_scripts`` in order. Each entry is a URL or a local path.

    Raises:
        ConfigurationError: If a script cannot be loaded
    """
    locations: List[str] = []
    if options.inject_jquery:
        locations.append(options.jquery_url)
    locations.extend(options.inject_scripts)
    if not locations:
        return []

    sources: List[str] = []
    async with httpx.AsyncClient(follow_redirects=True, timeout=timeout) as client:
        for location in locations:
            if _is_url(location):
                try:
                    response = await client.get(location)
                    response.raise_for_status()
                except httpx.HTTPError as e:
                    raise ConfigurationError(f"could not fetch script {location}: {e}") from e
                sources.append(response.text)
            else:
                try:
                    async with aiofiles.open(location, "r", encoding="utf-8") as f:
                        sources.append(await f.read())
                except OSError as e:
                    raise ConfigurationError(f"could not read script {location}: {e}") from e
    return sources


class ScriptingActions(BaseActions):
    """Run JavaScript in the current frame and fetch resources as the page."""

    @action
    async def inject_js(self, file: str) -> None:
        """Add a local script file to the current frame."""
        if not os.path.exists(file):
            raise ActionFailedError("inject_js", f"no such file {file}")
        await self._frame.add_script_tag(path=file)

    @action
    async def include_js(self, url: str) -> None:
        """Load a remote script into the current frame."""
        await self._frame.add_script_tag(url=url)

    @action
    async def evaluate(self, fn: str, *args: Any) -> Any:
        """
        Evaluate JavaScript in the current frame and return its result.

        ``fn`` is function source called with ``args``, or, without
        arguments, any expression.
        """
        return await self._evaluate(fn, *args)

    async def _evaluate(self, fn: str, *args: Any) -> Any:
        if args:
            return await self._frame.evaluate(f"(args) => ({fn})(...args)", list(args))
        return await self._frame.evaluate(fn)

    @action
    async def download(
        self,
        url: str,
        path: Union[str, bool, None] = None,
        binary: bool = False,
    ) -> Union[str, bytes, None]:
        """
        Fetch ``url`` with the session's cookies.

        Args:
            url: Absolute URL, or relative to the current page
            path: Write the body to this file and return nothing
            binary: Return bytes instead of decoded text

        Returns:
            The response body, unless ``path`` is given
        """
        if isinstance(path, bool):
            binary, path = path, None

        page = self._tab.page
        target = urljoin(page.url, url) if page.url and page.url != "about:blank" else url
        response = await page.request.get(target, timeout=self.options.timeout)
        try:
            if not response.ok:
                raise ActionFailedError("download", f"{target} answered {response.status}")
            body = await response.body()
            content_type = response.headers.get("content-type", "")
        finally:
            await response.dispose()

        self._log_debug("download", f"Downloaded {target}", size=len(body))

        if path is not None:
            async with aiofiles.open(path, "wb") as f:
                await f.write(body)
            return None
        if binary:
            return body
        return body.decode(_charset(content_type) or "utf-8", errors="replace")


def _charset(content_type: str) -> Optional[str]:
    match = _CHARSET.search(content_type)
    if not match:
        return None
    try:
        return codecs.lookup(match.group(1)).name
    except LookupError:
        return None
