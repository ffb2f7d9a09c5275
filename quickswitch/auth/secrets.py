"""
Goal: Manage a single shared API token for the local HTTP agent.
Stored in the OS credential store via `keyring`; falls back to a file under
QUICKSWITCH_HOME when no keyring backend exists (or TOKEN_STORE=file).
"""

import secrets
import string
from typing import Optional

import keyring

from quickswitch import settings

_SERVICE = "QuickSwitchAgent"
_USERNAME = "X-QS-Token"


def _gen_token(n: int = 32) -> str:
    return secrets.token_urlsafe(n)


def _validate_token(token: Optional[str]) -> bool:
    """Validate token format and structure."""
    if not token or not isinstance(token, str):
        return False
    if len(token) < 32 or len(token) > 64:
        return False
    valid_chars = string.ascii_letters + string.digits + '-_'
    return all(c in valid_chars for c in token)


def _use_keyring() -> bool:
    return settings.TOKEN_STORE != "file"


def _read() -> Optional[str]:
    if _use_keyring():
        try:
            return keyring.get_password(_SERVICE, _USERNAME)
        except Exception:
            pass
    if settings.TOKEN_FILE.exists():
        return settings.TOKEN_FILE.read_text(encoding="utf-8").strip() or None
    return None


def _write(value: str) -> None:
    if _use_keyring():
        try:
            keyring.set_password(_SERVICE, _USERNAME, value)
            return
        except Exception:
            pass
    settings.TOKEN_FILE.parent.mkdir(parents=True, exist_ok=True)
    settings.TOKEN_FILE.write_text(value, encoding="utf-8")


def get_token() -> Optional[str]:
    token = _read()
    return token if _validate_token(token) else None


def get_or_create_token() -> str:
    current = get_token()
    if current:
        return current
    newv = _gen_token()
    _write(newv)
    return newv


def set_token(value: str) -> None:
    if not _validate_token(value):
        raise ValueError("Invalid token format")
    _write(value)


def reset_token() -> str:
    newv = _gen_token()
    _write(newv)
    return newv
