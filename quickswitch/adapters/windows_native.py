"""
Goal: Native window strategy on top of pywinauto (Windows UI automation).
- List top-level windows that are titled, visible and have a real area.
- Focus a window by handle: restore if minimized, raise, focus.
"""

from __future__ import annotations

from importlib import import_module
from typing import Any, Dict, List, Optional, Sequence, Tuple

from quickswitch import settings
from quickswitch.adapters.base import WindowStrategy
from quickswitch.adapters.titles import infer_app_name, is_usable_native_window
from quickswitch.errors import ActivationError, ProviderUnavailableError

# Runtime import, typed as Any so the module stays importable off Windows
pywinauto: Any
try:
    pywinauto = import_module("pywinauto")
except Exception:
    pywinauto = None


def _bounds(element: Any) -> Dict[str, int]:
    rect = getattr(element, "rectangle", None)
    if rect is None:
        return {"x": 0, "y": 0, "width": 0, "height": 0}
    return {
        "x": int(rect.left),
        "y": int(rect.top),
        "width": int(rect.width()),
        "height": int(rect.height()),
    }


class PywinautoStrategy(WindowStrategy):
    name = "pywinauto"

    def __init__(
        self,
        backend: Any = None,
        reserved_titles: Optional[Sequence[str]] = None,
        known_apps: Optional[Sequence[Tuple[str, str]]] = None,
    ):
        # Tests pass a stand-in module with the same surface as pywinauto
        self._pwa = backend if backend is not None else pywinauto
        self.reserved_titles = list(settings.RESERVED_TITLES if reserved_titles is None else reserved_titles)
        self.known_apps = list(settings.KNOWN_APPS if known_apps is None else known_apps)

    def _require(self) -> Any:
        if self._pwa is None:
            raise ProviderUnavailableError("pywinauto is not installed (Windows only)")
        return self._pwa

    def list_windows(self) -> List[Dict[str, Any]]:
        pwa = self._require()
        windows = []
        for w in pwa.findwindows.find_elements():
            title = w.name or ""
            record = {
                "id": str(w.handle),
                "title": title,
                "bounds": _bounds(w),
                "is_visible": bool(getattr(w, "visible", False)),
                "is_minimized": False,
                "owner": {
                    # ElementInfo carries a pid but no process name
                    "name": infer_app_name(title, self.known_apps) or "Unknown",
                    "pid": int(getattr(w, "process_id", 0) or 0),
                },
            }
            if is_usable_native_window(record, self.reserved_titles):
                windows.append(record)
        return windows

    def activate(self, window_id: str) -> bool:
        pwa = self._require()
        try:
            handle = int(window_id, 0)
        except ValueError as e:
            raise ActivationError(f"not a native window handle: {window_id!r}") from e
        app = pwa.Application().connect(handle=handle)
        win = app.window(handle=handle).wrapper_object()
        if win.is_minimized():
            win.restore()
        win.set_focus()
        return True
