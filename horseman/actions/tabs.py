"""Tab management."""

from typing import Optional

from playwright.async_api import BrowserContext, Page

from ..core.chain import action
from ..core.errors import ActionFailedError, TabNotFoundError
from ..core.tab import Tab
from .base import BaseActions


class TabActions(BaseActions):
    """
    Keeps the list of tabs in step with the pages of the browser context.

    Pages opened by script (popups, ``target=_blank`` links) are adopted
    the same way as tabs opened with open_tab().
    """

    context: Optional[BrowserContext]

    def _tab_for_page(self, page: Page) -> Optional[Tab]:
        for tab in self._tabs:
            if tab.page is page:
                return tab
        return None

    def _adopt_page(self, page: Page, announce: bool = True) -> Tab:
        existing = self._tab_for_page(page)
        if existing is not None:
            return existing

        tab = Tab(page, self)
        self._tabs.append(tab)
        index = len(self._tabs) - 1
        self._log_info("tabs", "Tab created", index=index)

        if announce:
            self.events.emit("tab_created", index)
            if self.options.switch_to_new_tab:
                self._make_current(index)
        return tab

    def _make_current(self, index: int) -> None:
        self._current = index
        self._tabs[index].rebase_steps()

    def _on_context_page(self, page: Page) -> None:
        self._adopt_page(page)

    def _forget_tab(self, tab: Tab) -> None:
        """Drop a tab whose page was closed from the page side."""
        if tab not in self._tabs:
            return
        index = self._tabs.index(tab)
        self._remove_tab(index)
        self.events.emit("tab_closed", index)

    def _remove_tab(self, index: int) -> None:
        del self._tabs[index]
        if not self._tabs:
            self._current = 0
        elif index < self._current:
            self._current -= 1
        elif index == self._current:
            self._make_current(max(index - 1, 0))

    def _check_index(self, index: int) -> None:
        if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < len(self._tabs):
            raise TabNotFoundError(index, len(self._tabs))

    @action
    async def open_tab(self, url: str) -> None:
        """Open ``url`` in a new tab."""
        page = await self.context.new_page()
        tab = self._adopt_page(page)
        await self._goto(tab, url, "open_tab")

    @action
    async def tab_count(self) -> int:
        return len(self._tabs)

    @action
    async def switch_to_tab(self, index: int) -> None:
        """Make the tab at ``index`` current and bring it to the front."""
        self._check_index(index)
        self._make_current(index)
        await self._tabs[index].page.bring_to_front()

    @action
    async def close_tab(self, index: int) -> None:
        """
        Close the tab at ``index``.

        Closing the current tab makes the previous tab current.

        Raises:
            TabNotFoundError: If ``index`` is out of range
            ActionFailedError: If it is the last remaining tab
        """
        self._check_index(index)
        if len(self._tabs) == 1:
            raise ActionFailedError("close_tab", "cannot close the last remaining tab")

        tab = self._tabs[index]
        self._remove_tab(index)
        await tab.page.close()
        self.events.emit("tab_closed", index)
