"""
Goal: Quick smoke test that the CLI parses, shows help and prints agent responses.
"""
import json

import httpx
from typer.testing import CliRunner

from quickswitch.cli import cli
from quickswitch.cli.cli import app


def test_cli_help():
    r = CliRunner().invoke(app, ["--help"])
    assert r.exit_code == 0
    assert "QuickSwitch CLI" in r.stdout


def test_search_prints_items(monkeypatch):
    seen = {}

    def fake_get(path, params=None):
        seen["path"], seen["params"] = path, params
        return httpx.Response(200, json={"items": [{"id": "1", "title": "Inbox - Mail"}]})

    monkeypatch.setattr(cli, "_get", fake_get)
    r = CliRunner().invoke(app, ["search", "mail"])
    assert r.exit_code == 0
    assert "Inbox - Mail" in r.stdout
    assert seen == {"path": "/v1/items", "params": {"q": "mail"}}


def test_failed_activation_exits_nonzero(monkeypatch):
    monkeypatch.setattr(cli, "_post", lambda path, payload=None: httpx.Response(200, json={"ok": False}))
    r = CliRunner().invoke(app, ["activate", "window", "0x01"])
    assert r.exit_code == 1


def test_doctor_reports_browser(monkeypatch):
    def agent(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/health":
            return httpx.Response(200, json={"status": "ok"})
        if request.url.path == "/v1/refresh":
            return httpx.Response(200, json={"success": True})
        if request.url.path == "/v1/browser":
            return httpx.Response(200, json={"available": True, "endpoint": "http://127.0.0.1:9222"})
        return httpx.Response(404)

    real_client = httpx.Client
    monkeypatch.setattr(cli.httpx, "Client", lambda **kw: real_client(transport=httpx.MockTransport(agent), **kw))
    r = CliRunner().invoke(app, ["doctor"])
    assert r.exit_code == 0
    assert json.loads(r.stdout)["browser"]["available"] is True


def test_token_set_posts_value(monkeypatch):
    seen = {}

    def fake_post(path, payload=None):
        seen["path"], seen["payload"] = path, payload
        return httpx.Response(200, json={"token": payload["token"]})

    monkeypatch.setattr(cli, "_post", fake_post)
    r = CliRunner().invoke(app, ["token", "--op", "set", "--value", "B" * 40])
    assert r.exit_code == 0
    assert seen == {"path": "/v1/token", "payload": {"op": "set", "token": "B" * 40}}


def test_token_set_without_value_is_rejected():
    r = CliRunner().invoke(app, ["token", "--op", "set"])
    assert r.exit_code == 2
