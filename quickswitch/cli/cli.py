r"""
Goal: Friendly, typed CLI for QuickSwitch.

- Export `app` (tests import this).
- Show "QuickSwitch CLI" in --help output.
- Talks to the running agent over HTTP with httpx; `serve` starts the agent.
"""

from __future__ import annotations

import json
import os
from typing import Any, Dict, Optional

import httpx
import typer

from quickswitch import settings
from quickswitch.auth.secrets import get_token

app = typer.Typer(
    help="QuickSwitch CLI",
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)


def _base_url() -> str:
    return os.getenv("QUICKSWITCH_URL", f"http://{settings.QS_HOST}:{settings.QS_PORT}")


BASE_URL = _base_url()


def _headers() -> Dict[str, str]:
    tok = os.getenv("QUICKSWITCH_TOKEN") or get_token()
    return {"X-QS-Token": tok or ""}


def _get(path: str, params: Optional[Dict[str, Any]] = None) -> httpx.Response:
    with httpx.Client(timeout=10.0, headers=_headers()) as c:
        return c.get(f"{BASE_URL}{path}", params=params)


def _post(path: str, payload: Dict[str, Any] | None = None) -> httpx.Response:
    with httpx.Client(timeout=15.0, headers=_headers()) as c:
        return c.post(f"{BASE_URL}{path}", json=payload or {})


def _echo(r: httpx.Response) -> None:
    typer.echo(json.dumps(r.json(), indent=2))


@app.callback(help="QuickSwitch CLI")
def _root_callback() -> None:  # noqa: D401 - short help callback
    """Root callback for the CLI."""
    return None


# -----------------------
# Basic
# -----------------------
@app.command("health")
def health() -> None:
    with httpx.Client(timeout=5.0) as c:
        _echo(c.get(f"{BASE_URL}/health"))


@app.command("token")
def token(
    op: Optional[str] = typer.Option(None, help="'show', 'ensure', 'reset' or 'set'"),
    value: Optional[str] = typer.Option(None, help="Token to store with --op set"),
) -> None:
    if op in (None, "show", "ensure"):
        r = _post("/v1/token", {"op": "ensure"})
    elif op == "reset":
        r = _post("/v1/token", {"op": "reset"})
    elif op == "set" and value:
        r = _post("/v1/token", {"op": "set", "token": value})
    else:
        typer.echo("invalid op")
        raise typer.Exit(2)
    _echo(r)


@app.command("doctor")
def doctor() -> None:
    try:
        with httpx.Client(timeout=3.0) as c:
            h = c.get(f"{BASE_URL}/health").json()
    except Exception as e:  # noqa: BLE001
        typer.echo(json.dumps({"ok": False, "error": f"health: {e}"}, indent=2))
        raise typer.Exit(1)
    try:
        refreshed = _post("/v1/refresh").json()
    except Exception as e:  # noqa: BLE001
        refreshed = {"success": False, "error": f"refresh: {e}"}
    try:
        browser = _get("/v1/browser").json()
    except Exception as e:  # noqa: BLE001
        browser = {"available": False, "error": f"browser: {e}"}
    typer.echo(json.dumps({"ok": True, "health": h, "refresh": refreshed, "browser": browser}, indent=2))


# -----------------------
# Inventory
# -----------------------
@app.command("search")
def search(query: str) -> None:
    """Ranked windows and tabs matching QUERY (all words must match)."""
    _echo(_get("/v1/items", {"q": query}))


@app.command("items")
def items() -> None:
    """Every window and tab currently in the cache."""
    _echo(_get("/v1/items", {"all": "true"}))


@app.command("activate")
def activate(
    item_type: str = typer.Argument(..., help="window, chrome_tab (or tab)"),
    item_id: str = typer.Argument(..., help="id as printed by search/items"),
) -> None:
    r = _post("/v1/activate", {"type": item_type, "id": item_id})
    _echo(r)
    if not r.json().get("ok"):
        raise typer.Exit(1)


@app.command("refresh")
def refresh() -> None:
    _echo(_post("/v1/refresh"))


@app.command("close-tab")
def close_tab(item_id: str) -> None:
    _echo(_post("/v1/tabs/close", {"id": item_id}))


@app.command("serve")
def serve() -> None:
    """Run the agent in the foreground."""
    from quickswitch.main import main as run_agent

    run_agent()


def main() -> None:
    app()


if __name__ == "__main__":
    main()
