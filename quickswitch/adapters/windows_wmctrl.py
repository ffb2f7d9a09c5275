"""
Goal: Fallback window strategy that shells out to `wmctrl` (X11 / XWayland).
- `wmctrl -l` lines look like: "0x03a00007  0 host  Inbox - Mail"
- `wmctrl -i -a <id>` raises and focuses a window.
Parsing is split out into pure functions so it can be tested without wmctrl.
"""

from __future__ import annotations

import subprocess  # run wmctrl
from typing import Any, Dict, List, Optional, Sequence, Tuple

from loguru import logger

from quickswitch import settings
from quickswitch.adapters.base import WindowStrategy
from quickswitch.adapters.titles import infer_app_name, is_listable_title
from quickswitch.errors import ProviderError, ProviderTimeoutError, ProviderUnavailableError

# wmctrl gives no geometry with -l; report a plausible window size
_DEFAULT_BOUNDS = {"x": 0, "y": 0, "width": 800, "height": 600}


def parse_wmctrl_line(
    line: str,
    reserved: Sequence[str] = ("Desktop", "Launcher"),
    panel_prefix: str = "@!",
    known_apps: Sequence[Tuple[str, str]] = (),
) -> Optional[Dict[str, Any]]:
    """
    Turn one `wmctrl -l` line into a window record, or None if the line is
    malformed or describes something we don't list.

    Fields are positional: id, desktop index, host, then the title.
    Desktop -1 marks sticky/system windows.
    """
    parts = line.split()
    if len(parts) < 4:
        return None
    window_id = parts[0]
    try:
        desktop = int(parts[1])
    except ValueError:
        return None
    if desktop < 0:
        return None
    title = " ".join(parts[3:])
    if not is_listable_title(title, reserved, panel_prefix):
        return None
    return {
        "id": window_id,
        "title": title,
        "desktop": desktop,
        "bounds": dict(_DEFAULT_BOUNDS),
        "is_visible": True,
        "is_minimized": False,
        "owner": {"name": infer_app_name(title, known_apps), "pid": 0},
    }


def parse_wmctrl_output(
    stdout: str,
    reserved: Sequence[str] = ("Desktop", "Launcher"),
    panel_prefix: str = "@!",
    known_apps: Sequence[Tuple[str, str]] = (),
) -> List[Dict[str, Any]]:
    """Parse full `wmctrl -l` output; bad lines are skipped, the rest kept in order."""
    windows = []
    for line in stdout.splitlines():
        if not line.strip():
            continue
        record = parse_wmctrl_line(line, reserved, panel_prefix, known_apps)
        if record is None:
            logger.debug("Skipping wmctrl line: {!r}", line)
            continue
        windows.append(record)
    return windows


class WmctrlStrategy(WindowStrategy):
    name = "wmctrl"

    def __init__(
        self,
        executable: Optional[str] = None,
        timeout: Optional[float] = None,
        reserved_titles: Optional[Sequence[str]] = None,
        known_apps: Optional[Sequence[Tuple[str, str]]] = None,
        panel_prefix: str = settings.PANEL_PREFIX,
    ):
        self.executable = executable or settings.WMCTRL
        self.timeout = timeout or settings.PROVIDER_TIMEOUT
        self.reserved_titles = list(settings.RESERVED_TITLES if reserved_titles is None else reserved_titles)
        self.known_apps = list(settings.KNOWN_APPS if known_apps is None else known_apps)
        self.panel_prefix = panel_prefix

    def _run(self, *args: str) -> str:
        try:
            proc = subprocess.run(
                [self.executable, *args],
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except FileNotFoundError as e:
            raise ProviderUnavailableError(f"{self.executable} not found") from e
        except subprocess.TimeoutExpired as e:
            raise ProviderTimeoutError(f"{self.executable} {' '.join(args)} timed out") from e
        if proc.returncode != 0:
            raise ProviderError(
                f"{self.executable} {' '.join(args)} exited {proc.returncode}: {proc.stderr.strip()[:200]}"
            )
        return proc.stdout

    def list_windows(self) -> List[Dict[str, Any]]:
        stdout = self._run("-l")
        return parse_wmctrl_output(stdout, self.reserved_titles, self.panel_prefix, self.known_apps)

    def activate(self, window_id: str) -> bool:
        self._run("-i", "-a", window_id)
        return True
