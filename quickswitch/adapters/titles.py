"""
Goal: Pure helpers for deciding which windows are listable and who owns them.
No process spawning here so all of it is testable on any OS.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, Optional, Sequence, Tuple

TITLE_SEPARATOR = " - "


def is_listable_title(
    title: Optional[str],
    reserved: Iterable[str] = ("Desktop", "Launcher"),
    panel_prefix: Optional[str] = None,
) -> bool:
    """Non-blank, not a reserved name, and (when given) not a panel element."""
    if not title or not title.strip():
        return False
    if title in set(reserved):
        return False
    if panel_prefix and title.startswith(panel_prefix):
        return False
    return True


def infer_app_name(title: str, known_apps: Sequence[Tuple[str, str]] = ()) -> str:
    """
    Guess the owning application from a window title.

    "notes.md - Obsidian v1.5" -> "Obsidian"; "Inbox - Mail" -> "Mail";
    titles without " - " are returned as-is.
    """
    if TITLE_SEPARATOR not in title:
        return title
    last = title.split(TITLE_SEPARATOR)[-1]
    for needle, app_name in known_apps:
        if needle in last:
            return app_name
    return last


def is_usable_native_window(record: Dict[str, Any], reserved: Iterable[str]) -> bool:
    """A native window is shown only if titled, visible and has a real area."""
    if not is_listable_title(record.get("title"), reserved):
        return False
    if not record.get("is_visible"):
        return False
    bounds = record.get("bounds") or {}
    return (bounds.get("width") or 0) > 0 and (bounds.get("height") or 0) > 0
