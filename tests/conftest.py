"""
Goal: Keep tests away from the real home directory and OS keyring.
Settings are read at import time, so the environment is set before anything imports quickswitch.
"""
import os
import tempfile

os.environ["QUICKSWITCH_HOME"] = tempfile.mkdtemp(prefix="quickswitch-tests-")
os.environ["QUICKSWITCH_TOKEN_STORE"] = "file"

import pytest  # noqa: E402

from quickswitch.models.items import Item, ItemType, Snapshot  # noqa: E402


def window(id_, title, subtitle=""):
    return Item(id=str(id_), type=ItemType.WINDOW, title=title, subtitle=subtitle)


def tab(id_, title, url):
    return Item(id=f"chrome-{id_}", type=ItemType.TAB, title=title, subtitle=url)


class FakeClock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def mail_snapshot():
    return Snapshot(
        windows=(window("1", "Inbox - Mail", "Mail - PID: 10"),),
        tabs=(tab("7", "Mail - Gmail", "https://mail.google.com"),),
        captured_at=1000.0,
    )
