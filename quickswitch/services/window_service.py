"""
Goal: Window Provider. Lists OS windows as Items and focuses them by id.
- Native strategy first (pywinauto), `wmctrl` as fallback, via FallbackChain.
- Never raises past list_windows()/activate(); failure means [] or False.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

from loguru import logger

from quickswitch.adapters.base import FallbackChain, WindowStrategy
from quickswitch.adapters.windows_native import PywinautoStrategy
from quickswitch.adapters.windows_wmctrl import WmctrlStrategy
from quickswitch.models.items import Item, ItemType


def window_to_item(record: Dict[str, Any]) -> Item:
    owner = record.get("owner") or {}
    name = owner.get("name") or "Unknown"
    pid = owner.get("pid") or 0
    return Item(
        id=str(record.get("id")),
        type=ItemType.WINDOW,
        title=record.get("title") or "",
        subtitle=f"{name} - PID: {pid}",
        raw=record,
    )


class WindowProvider:
    def __init__(self, strategies: Optional[Sequence[WindowStrategy]] = None):
        if strategies is None:
            strategies = [PywinautoStrategy(), WmctrlStrategy()]
        self.chain = FallbackChain(strategies)

    def list_windows(self) -> List[Item]:
        try:
            records = self.chain.list_windows()
        except Exception:  # noqa: BLE001
            logger.exception("Window listing failed")
            return []
        items = []
        for record in records:
            try:
                items.append(window_to_item(record))
            except Exception as e:  # noqa: BLE001
                logger.debug("Dropping window record {!r}: {}", record, e)
        return items

    def activate(self, window_id: str) -> bool:
        try:
            ok = self.chain.activate(str(window_id))
        except Exception:  # noqa: BLE001
            logger.exception("Window activation failed for {}", window_id)
            return False
        if not ok:
            logger.info("Could not activate window {}", window_id)
        return ok
