"""
Goal: Centralized configuration for QuickSwitch (paths, ports, cache tuning).
Everything comes from the environment once, at import time.
"""

import os
import re
import sys
from pathlib import Path
from typing import List, Tuple


def _validate_port(port_str: str, default: int) -> int:
    """Validate port number is in valid range."""
    try:
        port = int(port_str)
        if 1024 <= port <= 65535:
            return port
    except ValueError:
        pass
    return default


def _validate_host(host_str: str, default: str) -> str:
    """Validate host is localhost or valid IP."""
    if not host_str:
        return default

    # Only allow localhost variants and private IPs
    allowed_hosts = {'127.0.0.1', 'localhost', '::1'}
    if host_str in allowed_hosts:
        return host_str

    # Validate private IP ranges
    if re.match(r'^192\.168\.\d{1,3}\.\d{1,3}$', host_str) or \
       re.match(r'^10\.\d{1,3}\.\d{1,3}\.\d{1,3}$', host_str) or \
       re.match(r'^172\.(1[6-9]|2[0-9]|3[0-1])\.\d{1,3}\.\d{1,3}$', host_str):
        return host_str

    return default


def _positive_float(raw: str, default: float) -> float:
    """Parse a positive number of seconds, falling back to the default."""
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return default
    return value if value > 0 else default


def _csv(raw: str) -> List[str]:
    return [part.strip() for part in raw.split(",") if part.strip()]


def parse_known_apps(raw: str) -> List[Tuple[str, str]]:
    """
    Parse "Chrome=Google Chrome,Code=VS Code" into (substring, app name) pairs.
    A bare entry ("Obsidian") maps to itself. Order is preserved: first hit wins.
    """
    pairs: List[Tuple[str, str]] = []
    for entry in _csv(raw):
        needle, _, name = entry.partition("=")
        needle = needle.strip()
        if not needle:
            continue
        pairs.append((needle, name.strip() or needle))
    return pairs


def _default_home() -> Path:
    if sys.platform == "win32":
        local_appdata = os.getenv("LOCALAPPDATA") or str(Path.home() / "AppData" / "Local")
        return Path(local_appdata) / "QuickSwitch"
    state_home = os.getenv("XDG_STATE_HOME") or str(Path.home() / ".local" / "state")
    return Path(state_home) / "quickswitch"


APP_DIR = Path(os.getenv("QUICKSWITCH_HOME") or _default_home())
LOG_DIR = APP_DIR / "logs"
TOKEN_FILE = APP_DIR / "token.txt"

# Local API used by the UI process
QS_PORT = _validate_port(os.getenv("QUICKSWITCH_PORT", "5030"), 5030)
QS_HOST = _validate_host(os.getenv("QUICKSWITCH_HOST", "127.0.0.1"), "127.0.0.1")

# Browser remote debugging endpoint (chrome --remote-debugging-port=9222)
CDP_HOST = _validate_host(os.getenv("QUICKSWITCH_CDP_HOST", "127.0.0.1"), "127.0.0.1")
CDP_PORT = _validate_port(os.getenv("QUICKSWITCH_CDP_PORT", "9222"), 9222)

# Max snapshot age before a read triggers a refresh. Native enumeration is not
# cheap, so a couple of seconds is plenty.
CACHE_TTL = _positive_float(os.getenv("QUICKSWITCH_CACHE_TTL", "2.0"), 2.0)

# Upper bound for any single provider call (wmctrl, CDP, join in the cache)
PROVIDER_TIMEOUT = _positive_float(os.getenv("QUICKSWITCH_PROVIDER_TIMEOUT", "3.0"), 3.0)

KNOWN_APPS = parse_known_apps(
    os.getenv(
        "QUICKSWITCH_KNOWN_APPS",
        "Chrome=Google Chrome,Firefox=Firefox,Terminal=Terminal,Code=VS Code,Obsidian=Obsidian",
    )
)

# Our own window and the desktop pseudo-window never show up in results
RESERVED_TITLES = _csv(os.getenv("QUICKSWITCH_RESERVED_TITLES", "Desktop,Launcher"))

# Ubuntu panel elements show up in wmctrl with this prefix
PANEL_PREFIX = "@!"

BROWSER_NAME = os.getenv("QUICKSWITCH_BROWSER_NAME", "chrome").strip() or "chrome"
WMCTRL = os.getenv("QUICKSWITCH_WMCTRL", "wmctrl").strip() or "wmctrl"

# "keyring" (OS credential store) or "file" (plain token.txt under APP_DIR)
TOKEN_STORE = os.getenv("QUICKSWITCH_TOKEN_STORE", "keyring").strip().lower()
