"""
Goal: Tab Provider. Lists browser tabs over CDP and focuses/closes them.
A browser without remote debugging is normal: we just return [] / False.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from loguru import logger

from quickswitch.adapters.browser_cdp import CdpClient
from quickswitch.errors import ProviderUnavailableError
from quickswitch.models.items import Item, ItemType, tab_item_id


def is_listable_target(target: Dict[str, Any]) -> bool:
    """Pages with a web URL only; skips chrome://, extensions, devtools, workers."""
    url = str(target.get("url") or "")
    return target.get("type") == "page" and url.startswith(("http://", "https://"))


def target_to_item(target: Dict[str, Any]) -> Item:
    return Item(
        id=tab_item_id(str(target["id"])),
        type=ItemType.TAB,
        title=target.get("title") or "",
        subtitle=str(target.get("url") or ""),
        raw={
            "id": target["id"],
            "title": target.get("title") or "",
            "url": target.get("url") or "",
            "favicon_url": target.get("faviconUrl"),
        },
    )


class TabProvider:
    def __init__(self, client: Optional[CdpClient] = None):
        self.client = client or CdpClient()

    def list_tabs(self) -> List[Item]:
        try:
            targets = self.client.list_targets()
        except ProviderUnavailableError as e:
            logger.debug("Browser tabs unavailable: {}", e)
            return []
        except Exception as e:  # noqa: BLE001
            logger.warning("Failed to get browser tabs: {}", e)
            return []
        return [target_to_item(t) for t in targets if t.get("id") and is_listable_target(t)]

    def activate(self, target_id: str) -> bool:
        try:
            return self.client.activate_target(target_id)
        except Exception as e:  # noqa: BLE001
            logger.info("DevTools activation failed for {}: {}", target_id, e)
            return False

    def close_tab(self, target_id: str) -> bool:
        try:
            return self.client.close_target(target_id)
        except Exception as e:  # noqa: BLE001
            logger.warning("Failed to close tab {}: {}", target_id, e)
            return False

    def is_available(self) -> bool:
        try:
            self.client.version()
            return True
        except Exception:  # noqa: BLE001
            return False

    def close(self) -> None:
        self.client.close()
