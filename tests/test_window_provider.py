"""
Goal: Window Provider fallback behaviour with fake strategies, plus the pywinauto and
wmctrl strategies against stand-ins (no real desktop needed).
"""
import subprocess
from types import SimpleNamespace

import pytest

from quickswitch.adapters.base import WindowStrategy
from quickswitch.adapters.windows_native import PywinautoStrategy
from quickswitch.adapters.windows_wmctrl import WmctrlStrategy
from quickswitch.errors import ProviderError, ProviderTimeoutError, ProviderUnavailableError
from quickswitch.models.items import ItemType
from quickswitch.services.window_service import WindowProvider, window_to_item


def _record(id_, title, name="App", pid=1):
    return {
        "id": id_,
        "title": title,
        "bounds": {"x": 0, "y": 0, "width": 100, "height": 100},
        "is_visible": True,
        "is_minimized": False,
        "owner": {"name": name, "pid": pid},
    }


class FakeStrategy(WindowStrategy):
    def __init__(self, name, windows=(), error=None, activate_result=True, activate_error=None):
        self.name = name
        self.windows = list(windows)
        self.error = error
        self.activate_result = activate_result
        self.activate_error = activate_error
        self.activated = []

    def list_windows(self):
        if self.error:
            raise self.error
        return self.windows

    def activate(self, window_id):
        self.activated.append(window_id)
        if self.activate_error:
            raise self.activate_error
        return self.activate_result


def test_native_results_win_when_present():
    native = FakeStrategy("native", [_record("1", "Editor")])
    fallback = FakeStrategy("fallback", [_record("0x2", "Other")])
    items = WindowProvider([native, fallback]).list_windows()
    assert [i.id for i in items] == ["1"]


@pytest.mark.parametrize("native", [
    FakeStrategy("native", error=RuntimeError("broken")),
    FakeStrategy("native", error=ProviderUnavailableError("no pywinauto")),
    FakeStrategy("native", windows=[]),
])
def test_falls_back_when_native_errors_or_is_empty(native):
    fallback = FakeStrategy("fallback", [_record("0x2", "Other")])
    items = WindowProvider([native, fallback]).list_windows()
    assert [i.id for i in items] == ["0x2"]


def test_total_failure_is_an_empty_list():
    provider = WindowProvider([
        FakeStrategy("a", error=RuntimeError("x")),
        FakeStrategy("b", error=ProviderTimeoutError("y")),
    ])
    assert provider.list_windows() == []


def test_item_shape():
    item = window_to_item(_record(42, "Inbox - Mail", name="Mail", pid=10))
    assert item.id == "42"
    assert item.type is ItemType.WINDOW
    assert item.subtitle == "Mail - PID: 10"
    assert item.raw["owner"]["pid"] == 10


def test_activation_falls_back_on_error():
    native = FakeStrategy("native", activate_error=RuntimeError("access denied"))
    fallback = FakeStrategy("fallback")
    assert WindowProvider([native, fallback]).activate("0x2") is True
    assert native.activated == ["0x2"] and fallback.activated == ["0x2"]


def test_activation_never_raises():
    provider = WindowProvider([
        FakeStrategy("a", activate_error=RuntimeError("x")),
        FakeStrategy("b", activate_result=False),
    ])
    assert provider.activate("1") is False


# ---- pywinauto strategy ------------------------------------------------------


class _Rect:
    def __init__(self, w, h):
        self.left, self.top, self._w, self._h = 0, 0, w, h

    def width(self):
        return self._w

    def height(self):
        return self._h


def _element(handle, name, visible=True, w=200, h=100, pid=77):
    return SimpleNamespace(handle=handle, name=name, visible=visible, rectangle=_Rect(w, h), process_id=pid)


class _Wrapper:
    def __init__(self, minimized):
        self.minimized = minimized
        self.calls = []

    def is_minimized(self):
        return self.minimized

    def restore(self):
        self.calls.append("restore")

    def set_focus(self):
        self.calls.append("set_focus")


def _fake_pywinauto(elements, wrapper=None):
    wrapper = wrapper or _Wrapper(False)

    class _App:
        def connect(self, handle):
            self.handle = handle
            return self

        def window(self, handle):
            return SimpleNamespace(wrapper_object=lambda: wrapper)

    return SimpleNamespace(
        findwindows=SimpleNamespace(find_elements=lambda: elements),
        Application=_App,
    )


def test_pywinauto_filters_unusable_windows():
    backend = _fake_pywinauto([
        _element(1, "notes.md - Obsidian"),
        _element(2, "   "),
        _element(3, "Desktop"),
        _element(4, "Launcher"),
        _element(5, "Hidden", visible=False),
        _element(6, "Zero", w=0),
        _element(7, "Flat", h=0),
    ])
    strategy = PywinautoStrategy(backend=backend, reserved_titles=["Desktop", "Launcher"])
    windows = strategy.list_windows()
    assert [w["id"] for w in windows] == ["1"]
    assert windows[0]["owner"] == {"name": "Obsidian", "pid": 77}


def test_pywinauto_activation_restores_minimized_window():
    wrapper = _Wrapper(minimized=True)
    strategy = PywinautoStrategy(backend=_fake_pywinauto([], wrapper))
    assert strategy.activate("1234") is True
    assert wrapper.calls == ["restore", "set_focus"]


def test_pywinauto_missing_is_unavailable():
    strategy = PywinautoStrategy()
    strategy._pwa = None
    with pytest.raises(ProviderUnavailableError):
        strategy.list_windows()


# ---- wmctrl strategy ---------------------------------------------------------


def test_wmctrl_lists_and_activates(monkeypatch):
    seen = []

    def fake_run(args, **kwargs):
        seen.append((args, kwargs.get("timeout")))
        out = "0x01 0 host Inbox - Mail\n0x02 -1 host panel\n" if args[1] == "-l" else ""
        return subprocess.CompletedProcess(args, 0, stdout=out, stderr="")

    monkeypatch.setattr(subprocess, "run", fake_run)
    strategy = WmctrlStrategy(executable="wmctrl", timeout=1.5)
    assert [w["id"] for w in strategy.list_windows()] == ["0x01"]
    assert strategy.activate("0x01") is True
    assert seen == [(["wmctrl", "-l"], 1.5), (["wmctrl", "-i", "-a", "0x01"], 1.5)]


def test_wmctrl_missing_binary_is_unavailable(monkeypatch):
    def fake_run(args, **kwargs):
        raise FileNotFoundError(args[0])

    monkeypatch.setattr(subprocess, "run", fake_run)
    with pytest.raises(ProviderUnavailableError):
        WmctrlStrategy().list_windows()


def test_wmctrl_hang_is_a_timeout(monkeypatch):
    def fake_run(args, **kwargs):
        raise subprocess.TimeoutExpired(args, kwargs.get("timeout"))

    monkeypatch.setattr(subprocess, "run", fake_run)
    with pytest.raises(ProviderTimeoutError):
        WmctrlStrategy(timeout=0.1).list_windows()


def test_wmctrl_nonzero_exit_is_an_error(monkeypatch):
    monkeypatch.setattr(
        subprocess, "run",
        lambda args, **kw: subprocess.CompletedProcess(args, 1, stdout="", stderr="Cannot open display."),
    )
    with pytest.raises(ProviderError):
        WmctrlStrategy().activate("0x01")
