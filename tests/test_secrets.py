"""
Goal: API token store round-trips through the file backend selected in conftest.
"""
import pytest

from quickswitch import settings
from quickswitch.auth.secrets import get_or_create_token, get_token, reset_token, set_token


def test_token_is_created_once_and_persisted():
    first = get_or_create_token()
    assert get_or_create_token() == first
    assert settings.TOKEN_FILE.read_text(encoding="utf-8") == first


def test_reset_issues_a_new_token():
    old = get_or_create_token()
    new = reset_token()
    assert new != old
    assert get_token() == new


def test_set_token_rejects_bad_format():
    with pytest.raises(ValueError):
        set_token("short")
    with pytest.raises(ValueError):
        set_token("x" * 40 + "!")
