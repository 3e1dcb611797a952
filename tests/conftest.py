import asyncio
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio

from horseman import Horseman

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def pytest_configure(config):
    """Register the marker for tests that drive a real browser."""
    config.addinivalue_line(
        "markers", "browser: mark test as requiring Playwright and chromium"
    )


def make_frame(name: str = "", url: str = "https://example.com/") -> MagicMock:
    frame = MagicMock(name=f"frame:{name or 'main'}")
    frame.name = name
    frame.url = url
    frame.child_frames = []
    frame.parent_frame = None
    frame.evaluate = AsyncMock()
    frame.evaluate_handle = AsyncMock()
    frame.content = AsyncMock(return_value="<html><body></body></html>")
    frame.wait_for_selector = AsyncMock()
    frame.add_script_tag = AsyncMock()
    frame.is_detached = MagicMock(return_value=False)

    locator = MagicMock(name="locator")
    for method in ("click", "select_option", "fill", "focus", "set_input_files", "screenshot"):
        setattr(locator.first, method, AsyncMock())
    frame.locator = MagicMock(return_value=locator)
    return frame


def make_page(url: str = "https://example.com/") -> MagicMock:
    page = MagicMock(name="page")
    page.url = url
    page.main_frame = make_frame(url=url)

    response = MagicMock(name="response")
    response.status = 200
    for method in ("goto", "go_back", "go_forward", "reload"):
        setattr(page, method, AsyncMock(return_value=response))
    for method in ("route", "unroute", "close", "bring_to_front", "pdf", "set_viewport_size"):
        setattr(page, method, AsyncMock())
    page.title = AsyncMock(return_value="Example Domain")
    page.screenshot = AsyncMock(return_value=b"\x89PNG")
    page.evaluate = AsyncMock(return_value={"width": 800, "height": 600})

    page.keyboard = MagicMock(name="keyboard")
    for method in ("type", "down", "up", "press"):
        setattr(page.keyboard, method, AsyncMock())
    page.mouse = MagicMock(name="mouse")
    for method in ("move", "down", "up", "click", "dblclick"):
        setattr(page.mouse, method, AsyncMock())
    return page


def make_context() -> MagicMock:
    context = MagicMock(name="context")
    for method in ("cookies", "clear_cookies", "add_cookies", "set_extra_http_headers", "close"):
        setattr(context, method, AsyncMock())
    context.cookies.return_value = []
    context.new_page = AsyncMock(side_effect=lambda: make_page("about:blank"))
    return context


@pytest.fixture
def session():
    """A Horseman session wired to fake Playwright objects."""
    horseman = Horseman(timeout=200, interval=10)
    horseman.initialized = True
    horseman.context = make_context()
    horseman._adopt_page(make_page(), announce=False)
    return horseman


@pytest.fixture
def page(session):
    return session._tab.page


@pytest.fixture
def frame(page):
    return page.main_frame


async def _chromium_available() -> bool:
    from playwright.async_api import async_playwright

    try:
        async with async_playwright() as p:
            browser = await p.chromium.launch(headless=True)
            await browser.close()
        return True
    except Exception:
        return False


@pytest.fixture(scope="session")
def chromium_available():
    return asyncio.run(_chromium_available())


@pytest_asyncio.fixture
async def browser_session(chromium_available):
    """A real Horseman session; skipped when chromium cannot launch."""
    if not chromium_available:
        pytest.skip("Playwright chromium is not installed. Run: playwright install chromium")

    horseman = Horseman(timeout=5000, interval=20)
    try:
        yield horseman
    finally:
        await horseman.close()


@pytest.fixture
def fixture_url():
    """Build a file:// URL for an HTML file under tests/fixtures."""
    def build(name: str) -> str:
        return (FIXTURES_DIR / name).absolute().as_uri()

    return build
