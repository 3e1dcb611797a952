"""Core Horseman class implementation."""

import asyncio
import shutil
import tempfile
import uuid
from typing import Optional, Dict, Any, List, Union, Callable, Tuple

from playwright.async_api import (
    async_playwright,
    Browser,
    BrowserContext,
    Error as PlaywrightError,
    Page,
    Playwright,
    Route,
    TimeoutError as PlaywrightTimeoutError,
)
from pydantic import ValidationError

from ..actions import (
    NavigationActions,
    DOMActions,
    InputActions,
    WaitingActions,
    FrameActions,
    TabActions,
    CaptureActions,
    ScriptingActions,
    EventActions,
    CookieActions,
    UtilityActions,
)
from ..actions.scripting import collect_init_scripts
from ..types import Cookie, HorsemanOptions, InitResult, Viewport
from ..utils.cookie_jar import load_cookie_file, save_cookie_file
from ..utils.logger import configure_logging, HorsemanLogger
from .chain import action
from .errors import (
    HorsemanError,
    HorsemanNotInitializedError,
    SessionClosedError,
    BrowserNotAvailableError,
    ActionFailedError,
    ConfigurationError,
    CookieFileError,
)
from .events import EventRegistry
from .launcher import build_launch_options, build_context_options, basic_auth_header
from .tab import Tab


class Horseman(
    NavigationActions,
    DOMActions,
    InputActions,
    WaitingActions,
    FrameActions,
    TabActions,
    CaptureActions,
    ScriptingActions,
    EventActions,
    CookieActions,
    UtilityActions,
):
    """
    A chainable client driving one browser session.

    Every operation returns a Chain that runs when awaited. The browser is
    launched on the first operation that needs it, or explicitly with init()
    or ``async with``:

        async with Horseman(timeout=10000) as horseman:
            title = await horseman.open("https://example.com").title()
    """

    def __init__(
        self,
        options: Union[HorsemanOptions, Dict[str, Any], None] = None,
        **kwargs: Any,
    ):
        """
        Initialize Horseman with configuration.

        Args:
            options: Session options, as a model or a dict
            **kwargs: Option values overriding ``options``

        Raises:
            ConfigurationError: If the options are invalid
        """
        try:
            if options is None:
                self.options = HorsemanOptions(**kwargs)
            else:
                if isinstance(options, HorsemanOptions):
                    base = options.model_dump()
                else:
                    base = dict(options)
                self.options = HorsemanOptions(**{**base, **kwargs})
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e

        self.session_id = str(uuid.uuid4())
        self.logger = HorsemanLogger(
            configure_logging(self.options.verbose, session_id=self.session_id),
            self.options.verbose,
        )
        self.events = EventRegistry(self.logger.child(component="events"))

        self.initialized = False
        self.closed = False
        self.playwright: Optional[Playwright] = None
        self.browser: Optional[Browser] = None
        self.context: Optional[BrowserContext] = None

        self._tabs: List[Tab] = []
        self._current = 0
        self._lock = asyncio.Lock()
        self._init_lock = asyncio.Lock()
        # Temporary disk cache, removed on teardown
        self._cache_dir: Optional[str] = None

        # Set before launch, folded into the context when it is created
        self._user_agent: Optional[str] = None
        self._headers: Dict[str, str] = {}
        self._credentials: Optional[Dict[str, str]] = None
        self._viewport: Optional[Viewport] = None

        self.logger.info(
            "horseman:init",
            "Horseman created",
            browser=self.options.browser,
        )

    async def _execute_step(
        self,
        impl: Callable,
        args: Tuple[Any, ...],
        kwargs: Dict[str, Any],
        previous: Any = None,
        launch: bool = True,
        locked: bool = True,
        with_value: bool = False,
        requires_open: bool = True,
    ) -> Any:
        """Run one queued operation."""
        name = impl.__name__
        if requires_open and self.closed:
            raise SessionClosedError(name)
        if launch and not self.initialized:
            await self.init()

        call_args = (previous,) + tuple(args) if with_value else tuple(args)
        self.logger.debug("horseman:step", f"Running {name}", step=name)

        if not locked:
            return await self._run_step(name, impl, call_args, kwargs)
        async with self._lock:
            if requires_open and self.closed:
                raise SessionClosedError(name)
            if self._tabs:
                self._tab.mark_step()
            return await self._run_step(name, impl, call_args, kwargs)

    async def _run_step(
        self,
        name: str,
        impl: Callable,
        args: Tuple[Any, ...],
        kwargs: Dict[str, Any],
    ) -> Any:
        try:
            return await impl(self, *args, **kwargs)
        except HorsemanError:
            raise
        except PlaywrightTimeoutError as e:
            raise self._timed_out(name, self.options.timeout) from e
        except PlaywrightError as e:
            self.logger.debug("horseman:step", f"{name} failed: {e}", step=name)
            raise ActionFailedError(name, str(e)) from e

    async def init(self) -> InitResult:
        """
        Launch the browser and return session information.

        Called implicitly by the first operation that needs the browser.

        Returns:
            InitResult with session details

        Raises:
            SessionClosedError: If the session was closed
            BrowserNotAvailableError: If the browser fails to start
            ConfigurationError: If an injected script cannot be loaded
        """
        async with self._init_lock:
            if self.closed:
                raise SessionClosedError("init")
            if self.initialized:
                return self._get_init_result()

            try:
                await self._launch()
            except HorsemanError as e:
                self.logger.error("horseman:init", f"Initialization failed: {e}", error=str(e))
                await self._teardown()
                raise
            except Exception as e:
                self.logger.error("horseman:init", f"Initialization failed: {e}", error=str(e))
                await self._teardown()
                raise BrowserNotAvailableError(str(e)) from e

            self.initialized = True
            result = self._get_init_result()
            self.logger.info(
                "horseman:init",
                "Initialization complete",
                browser_version=result.browser_version,
                debugger_url=result.debugger_url,
            )
            return result

    async def _launch(self) -> None:
        self.playwright = await async_playwright().start()

        options = self.options
        if options.disk_cache and not options.disk_cache_path and options.browser == "chromium":
            self._cache_dir = tempfile.mkdtemp(prefix="horseman-cache-")

        browser_type = getattr(self.playwright, options.browser)
        self.browser = await browser_type.launch(
            **build_launch_options(options, self.logger, cache_dir=self._cache_dir)
        )

        await self._create_context()

        page = await self.context.new_page()
        self._adopt_page(page, announce=False)
        self.context.on("page", self._on_context_page)

    async def _create_context(self) -> None:
        if not self.browser:
            raise BrowserNotAvailableError("Browser not initialized")

        context_options = build_context_options(
            self.options,
            user_agent=self._user_agent,
            headers=self._headers,
            credentials=self._credentials,
            viewport=self._viewport,
        )
        self.context = await self.browser.new_context(**context_options)
        self.context.set_default_timeout(self.options.timeout)
        self.context.set_default_navigation_timeout(self.options.timeout)

        if self.options.cookies_file:
            await self._load_cookie_jar(self.options.cookies_file)

        for script in await collect_init_scripts(self.options):
            await self.context.add_init_script(script=script)

        if not self.options.load_images:
            await self.context.route("**/*", _block_images)

    async def _load_cookie_jar(self, path: str) -> None:
        payload = []
        for cookie in load_cookie_file(path):
            try:
                payload.append(cookie.to_playwright())
            except ValueError as e:
                self.logger.warn("horseman:cookies", f"Skipping cookie: {e}", path=path)
        if payload:
            await self.context.add_cookies(payload)
        self.logger.debug("horseman:cookies", "Cookie jar loaded", path=path, count=len(payload))

    @property
    def page(self) -> Page:
        """Playwright page of the current tab."""
        if not self._tabs:
            raise HorsemanNotInitializedError()
        return self._tab.page

    @action(launch=False)
    async def user_agent(self, value: str) -> None:
        """Set the User-Agent sent by the browser."""
        self._user_agent = value
        if self.initialized:
            await self._apply_headers()

    @action(launch=False)
    async def headers(self, headers: Dict[str, str]) -> None:
        """Set extra HTTP headers sent with every request."""
        self._headers = dict(headers)
        if self.initialized:
            await self._apply_headers()

    @action(launch=False)
    async def authentication(self, user: str, password: str) -> None:
        """Set HTTP basic authentication credentials."""
        self._credentials = {"username": user, "password": password}
        if self.initialized:
            await self._apply_headers()

    @action(launch=False)
    async def viewport(self, width: int, height: int) -> None:
        """Resize the viewport of every tab."""
        try:
            self._viewport = Viewport(width=width, height=height)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid viewport: {e}") from e

        if self.initialized:
            size = {"width": width, "height": height}
            for tab in self._tabs:
                await tab.page.set_viewport_size(size)

    async def _apply_headers(self) -> None:
        headers = dict(self._headers)
        if self._user_agent:
            headers["User-Agent"] = self._user_agent
        if self._credentials:
            headers["Authorization"] = basic_auth_header(
                self._credentials["username"],
                self._credentials["password"],
            )
        await self.context.set_extra_http_headers(headers)

    @action(launch=False, requires_open=False)
    async def close(self) -> None:
        """
        Save the cookie jar and shut the browser down.

        Safe to call more than once; every later operation raises
        SessionClosedError.
        """
        if self.closed:
            return
        self.closed = True
        self.logger.info("horseman:close", "Closing Horseman")

        if self.initialized and self.context and self.options.cookies_file:
            try:
                raw = await self.context.cookies()
                save_cookie_file(
                    self.options.cookies_file,
                    [Cookie.from_playwright(c) for c in raw],
                )
            except (PlaywrightError, CookieFileError) as e:
                self.logger.warn("horseman:close", f"Could not save cookies: {e}", error=str(e))

        await self._teardown()
        await self.events.drain()
        self.logger.info("horseman:close", "Horseman closed")

    async def _teardown(self) -> None:
        self._tabs.clear()
        self._current = 0

        resources = (
            ("context", self.context.close if self.context else None),
            ("browser", self.browser.close if self.browser else None),
            ("playwright", self.playwright.stop if self.playwright else None),
        )
        for name, closer in resources:
            if closer is None:
                continue
            try:
                await closer()
            except Exception as e:
                self.logger.warn("horseman:close", f"Error closing {name}: {e}", error=str(e))

        self.context = None
        self.browser = None
        self.playwright = None
        self.initialized = False

        if self._cache_dir:
            shutil.rmtree(self._cache_dir, ignore_errors=True)
            self._cache_dir = None

    def _get_init_result(self) -> InitResult:
        debugger_url = None
        if self.options.debug_port and self.options.browser == "chromium":
            debugger_url = f"http://localhost:{self.options.debug_port}"

        return InitResult(
            session_id=self.session_id,
            browser=self.options.browser,
            browser_version=self.browser.version if self.browser else None,
            debugger_url=debugger_url,
        )

    async def __aenter__(self) -> 'Horseman':
        await self.init()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    def __repr__(self) -> str:
        state = "closed" if self.closed else "open" if self.initialized else "new"
        return f"<Horseman session={self.session_id} {state}>"


async def _block_images(route: Route) -> None:
    if route.request.resource_type == "image":
        await route.abort()
    else:
        await route.fallback()
