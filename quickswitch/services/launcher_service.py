r"""
Goal
- One Launcher per process that wires providers, cache, search and activation.
- Async-friendly wrappers so FastAPI endpoints can await the sync core safely.

Implements
- Launcher.search(query) / list_all() / lookup(query, show_all) / activate(type, id)
  / force_refresh() / close_tab(id) / browser_available()
- initialize_launcher() / get_launcher() / shutdown_launcher() / reset_launcher()
- lookup_items / activate_item / refresh / close_tab / browser_status (async)

Notes
- Uses anyio.to_thread to call provider code without blocking the loop.
"""

from __future__ import annotations

from typing import Any, List, Optional, Tuple

from anyio import to_thread
from loguru import logger

from quickswitch.models.items import Item, Snapshot, strip_tab_prefix
from quickswitch.models.schemas import RefreshResult
from quickswitch.services import search as search_engine
from quickswitch.services.activation import ActivationDispatcher
from quickswitch.services.inventory import InventoryCache
from quickswitch.services.tab_service import TabProvider
from quickswitch.services.window_service import WindowProvider


class Launcher:
    def __init__(
        self,
        windows: Optional[WindowProvider] = None,
        tabs: Optional[TabProvider] = None,
        cache: Optional[InventoryCache] = None,
        dispatcher: Optional[ActivationDispatcher] = None,
    ):
        self.windows = windows or WindowProvider()
        self.tabs = tabs or TabProvider()
        self.cache = cache or InventoryCache(self.windows.list_windows, self.tabs.list_tabs)
        self.dispatcher = dispatcher or ActivationDispatcher(self.windows, self.tabs)

    def lookup(self, query: str, show_all: bool = False) -> Tuple[Snapshot, List[Item]]:
        """Results and the one snapshot they were computed from."""
        snapshot = self.cache.get()
        if show_all and not (query or "").strip():
            return snapshot, search_engine.list_all(snapshot)
        return snapshot, search_engine.search(query, snapshot)

    def search(self, query: str) -> List[Item]:
        return self.lookup(query)[1]

    def list_all(self) -> List[Item]:
        return self.lookup("", show_all=True)[1]

    def activate(self, item_type: Any, item_id: str) -> bool:
        return self.dispatcher.activate_ref(item_type, item_id)

    def force_refresh(self) -> RefreshResult:
        return self.cache.force_refresh()

    def close_tab(self, item_id: str) -> bool:
        ok = self.tabs.close_tab(strip_tab_prefix(item_id))
        if ok:
            # The closed tab must not linger in results
            self.cache.force_refresh()
        return ok

    def browser_available(self) -> bool:
        return self.tabs.is_available()

    def close(self) -> None:
        self.cache.close()
        self.tabs.close()


# Module-level singleton instance
_instance: Optional[Launcher] = None


def get_launcher() -> Launcher:
    """Return the process-wide Launcher, creating it on first use."""
    global _instance
    if _instance is None:
        _instance = Launcher()
    return _instance


def initialize_launcher(launcher: Optional[Launcher] = None, warm: bool = True) -> Launcher:
    """
    Install the process-wide Launcher (idempotent unless one is passed in) and
    optionally do the initial cache load.
    """
    global _instance
    if launcher is not None:
        _instance = launcher
    inst = get_launcher()
    if warm:
        result = inst.force_refresh()
        if not result.success:
            logger.warning("Initial inventory load failed: {}", result.error)
    return inst


def shutdown_launcher() -> None:
    global _instance
    if _instance is not None:
        try:
            _instance.close()
        except Exception:  # noqa: BLE001
            logger.exception("Error while closing launcher")
    _instance = None


def reset_launcher() -> None:
    """Drop the instance without closing it (for tests)."""
    global _instance
    _instance = None


# --------------- async wrappers ----------------


async def lookup_items(query: str, show_all: bool = False) -> Tuple[Snapshot, List[Item]]:
    return await to_thread.run_sync(get_launcher().lookup, query, show_all)


async def activate_item(item_type: str, item_id: str) -> bool:
    return await to_thread.run_sync(get_launcher().activate, item_type, item_id)


async def refresh() -> RefreshResult:
    return await to_thread.run_sync(get_launcher().force_refresh)


async def close_tab(item_id: str) -> bool:
    return await to_thread.run_sync(get_launcher().close_tab, item_id)


async def browser_status() -> bool:
    return await to_thread.run_sync(get_launcher().browser_available)
