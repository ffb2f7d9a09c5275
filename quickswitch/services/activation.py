"""
Goal: Activation Dispatcher. Route an item to the right provider's activate path.

Tabs are a two-step affair: raise the browser's window first (so the user at
least sees the browser), then ask DevTools to switch to the tab. If only the
window raise worked we still report success.
"""

from __future__ import annotations

from typing import Any, Optional

from loguru import logger

from quickswitch import settings
from quickswitch.models.items import Item, ItemType, parse_item_type, strip_tab_prefix
from quickswitch.services.tab_service import TabProvider
from quickswitch.services.window_service import WindowProvider


class ActivationDispatcher:
    def __init__(
        self,
        windows: WindowProvider,
        tabs: TabProvider,
        browser_name: Optional[str] = None,
    ):
        self.windows = windows
        self.tabs = tabs
        self.browser_name = (browser_name or settings.BROWSER_NAME).lower()

    def activate(self, item: Item) -> bool:
        return self.activate_ref(item.type, item.id)

    def activate_ref(self, item_type: Any, item_id: str) -> bool:
        kind = parse_item_type(item_type)
        try:
            if kind is ItemType.WINDOW:
                return self.windows.activate(item_id)
            if kind is ItemType.TAB:
                return self._activate_tab(item_id)
        except Exception:  # noqa: BLE001
            logger.exception("Activation of {} {} failed", item_type, item_id)
            return False
        logger.warning("Unknown item type {!r}", item_type)
        return False

    def _raise_browser_window(self) -> bool:
        for window in self.windows.list_windows():
            owner = (window.raw.get("owner") or {}).get("name") or ""
            if self.browser_name in window.title.lower() or self.browser_name in owner.lower():
                if self.windows.activate(window.id):
                    logger.debug("Brought {} window {} to front", self.browser_name, window.id)
                    return True
        return False

    def _activate_tab(self, item_id: str) -> bool:
        target_id = strip_tab_prefix(item_id)
        window_raised = self._raise_browser_window()
        if self.tabs.activate(target_id):
            return True
        if window_raised:
            logger.info("Tab {} not activated via DevTools, but the browser window is focused", target_id)
            return True
        return False
