"""
Goal: Core records shared by providers, the inventory cache and search.
Item and Snapshot are immutable; a refresh builds a new Snapshot and swaps it in whole.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

UNTITLED = "Untitled"
TAB_ID_PREFIX = "chrome-"


class ItemType(str, Enum):
    WINDOW = "window"
    TAB = "chrome_tab"


_TYPE_ALIASES = {"window": ItemType.WINDOW, "chrome_tab": ItemType.TAB, "tab": ItemType.TAB}


def parse_item_type(value: Any) -> Optional[ItemType]:
    """Map a caller-supplied type ("window", "chrome_tab" or "tab") to ItemType; None if unknown."""
    if isinstance(value, ItemType):
        return value
    return _TYPE_ALIASES.get(str(value or "").strip().lower())


def tab_item_id(target_id: str) -> str:
    return f"{TAB_ID_PREFIX}{target_id}"


def strip_tab_prefix(item_id: str) -> str:
    """Recover the DevTools target id from a type-qualified tab id."""
    if item_id.startswith(TAB_ID_PREFIX):
        return item_id[len(TAB_ID_PREFIX):]
    return item_id


class Item(BaseModel):
    """One activatable thing: an OS window or a browser tab."""

    model_config = ConfigDict(frozen=True)

    id: str
    type: ItemType
    title: str = UNTITLED
    subtitle: str = ""
    raw: Dict[str, Any] = Field(default_factory=dict, exclude=True, repr=False)

    @field_validator("title", mode="before")
    @classmethod
    def _placeholder_title(cls, v: Any) -> str:
        text = str(v or "")
        return text if text.strip() else UNTITLED

    @field_validator("subtitle", mode="before")
    @classmethod
    def _subtitle_text(cls, v: Any) -> str:
        return str(v or "")

    @property
    def key(self) -> Tuple[str, str]:
        return (self.type.value, self.id)

    def to_transport(self) -> Dict[str, str]:
        """The shape the UI depends on."""
        return {
            "id": self.id,
            "title": self.title,
            "subtitle": self.subtitle,
            "type": self.type.value,
        }


class Snapshot(BaseModel):
    """
    The cache's view of the world at one instant.

    captured_at is None until the first refresh completes, so "never refreshed"
    and "refreshed but nothing found" are distinguishable. failed_sources lists
    the providers that failed during the refresh that produced this snapshot.
    """

    model_config = ConfigDict(frozen=True)

    windows: Tuple[Item, ...] = ()
    tabs: Tuple[Item, ...] = ()
    captured_at: Optional[float] = None
    failed_sources: Tuple[str, ...] = ()

    @classmethod
    def empty(cls) -> "Snapshot":
        return cls()

    @property
    def items(self) -> Tuple[Item, ...]:
        return self.windows + self.tabs

    @property
    def is_populated(self) -> bool:
        return self.captured_at is not None
