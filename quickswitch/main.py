"""
QuickSwitch Agent (FastAPI + Uvicorn)

Goals
- Give the UI process a local API over the inventory cache: search, activate, refresh.
- Auth: /health is open; /v1/* requires X-QS-Token.
- Token: /v1/token {op: ensure|reset|set} so the CLI/UI can manage tokens.
- Never crash on a provider problem: return {"ok": false, ...} and log it.

Notes
- Startup does the initial cache load so the first search is warm.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any, Callable, Optional

from fastapi import Body, FastAPI, Query, Request
from fastapi.responses import JSONResponse
from loguru import logger

from quickswitch import settings
from quickswitch.auth.secrets import get_or_create_token, reset_token, set_token
from quickswitch.models.items import parse_item_type
from quickswitch.models.schemas import (
    ActivateRequest,
    BrowserStatus,
    CloseTabRequest,
    HealthResponse,
    ItemsResponse,
    OkResponse,
    RefreshResult,
)
from quickswitch.services import launcher_service
from quickswitch.services.logs import configure_logging

VERSION = "0.3.0"


@asynccontextmanager
async def lifespan(_: FastAPI):
    """Startup/shutdown hooks: warm the cache, then close the CDP client on the way out."""
    configure_logging()
    logger.info("Agent startup; logs at {}", settings.LOG_DIR)
    try:
        launcher_service.initialize_launcher(warm=False)
        result = await launcher_service.refresh()
        logger.info("Initial inventory load: success={}", result.success)
    except Exception:  # noqa: BLE001
        # The cache retries on the next read
        logger.exception("Initial inventory load failed (non-fatal)")
    yield
    launcher_service.shutdown_launcher()
    logger.info("Agent shutdown")


app = FastAPI(title="QuickSwitch Agent", version=VERSION, lifespan=lifespan)


@app.middleware("http")
async def dispatch(request: Request, call_next: Callable[..., Any]):
    """
    - Allow / and /health without token.
    - Require X-QS-Token for /v1/*.
    """
    path = request.url.path or "/"

    if path == "/" or path.startswith("/health"):
        return await call_next(request)

    if path.startswith("/v1"):
        hdr = request.headers.get("x-qs-token")
        if hdr != get_or_create_token():
            logger.warning("Rejected request: missing/invalid auth header")
            return JSONResponse({"error": "unauthorized"}, status_code=401)

    return await call_next(request)


# ---- Health -----------------------------------------------------------------


@app.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse(status="ok", name="QuickSwitch Agent", version=VERSION, port=settings.QS_PORT)


# ---- Token management -------------------------------------------------------


@app.get("/v1/token")
async def token_get() -> dict[str, Any]:
    """Return the current token (ensures one exists)."""
    return {"token": get_or_create_token()}


@app.post("/v1/token")
async def token_post(body: Optional[dict] = Body(None)) -> dict[str, Any]:
    """
    Body: {"op": "ensure"}, {"op": "reset"} or {"op": "set", "token": "..."}
    - reset and set take effect immediately; clients must re-read the token.
    """
    body = body or {}
    op = str(body.get("op", "ensure")).lower()
    if op == "reset":
        return {"token": reset_token()}
    if op == "set":
        value = str(body.get("token") or "").strip()
        try:
            set_token(value)
        except ValueError as e:
            return JSONResponse({"error": str(e)}, status_code=400)
        return {"token": value}
    return {"token": get_or_create_token()}


# ---- Inventory ----------------------------------------------------------------


@app.get("/v1/items", response_model=ItemsResponse)
async def items(
    q: str = Query("", description="Search text; blank returns nothing unless all=true"),
    show_all: bool = Query(False, alias="all", description="Return every item (initial population)"),
) -> ItemsResponse:
    try:
        snapshot, found = await launcher_service.lookup_items(q, show_all)
    except Exception:  # noqa: BLE001
        logger.exception("Search failed for {!r}", q)
        return ItemsResponse(items=[], query=q)
    return ItemsResponse(
        items=[i.to_transport() for i in found],
        query=q,
        captured_at=snapshot.captured_at,
    )


@app.post("/v1/activate", response_model=OkResponse)
async def activate(body: ActivateRequest) -> OkResponse:
    if parse_item_type(body.type) is None:
        return OkResponse(ok=False, error=f"unknown type {body.type!r}")
    try:
        ok = await launcher_service.activate_item(body.type, body.id)
    except Exception as e:  # noqa: BLE001
        logger.exception("Activation error for {} {}", body.type, body.id)
        return OkResponse(ok=False, error=str(e))
    return OkResponse(ok=ok, error=None if ok else "activation_failed")


@app.post("/v1/refresh", response_model=RefreshResult)
async def refresh() -> RefreshResult:
    try:
        return await launcher_service.refresh()
    except Exception as e:  # noqa: BLE001
        logger.exception("Manual cache refresh error")
        return RefreshResult(success=False, error=str(e))


@app.get("/v1/browser", response_model=BrowserStatus)
async def browser() -> BrowserStatus:
    """Whether the DevTools endpoint answers (tabs are listed only when it does)."""
    launcher = launcher_service.get_launcher()
    try:
        available = await launcher_service.browser_status()
    except Exception:  # noqa: BLE001
        logger.exception("Browser probe failed")
        available = False
    return BrowserStatus(available=available, endpoint=launcher.tabs.client.base_url)


@app.post("/v1/tabs/close", response_model=OkResponse)
async def close_tab(body: CloseTabRequest) -> OkResponse:
    try:
        ok = await launcher_service.close_tab(body.id)
    except Exception as e:  # noqa: BLE001
        logger.exception("Close tab error for {}", body.id)
        return OkResponse(ok=False, error=str(e))
    return OkResponse(ok=ok, error=None if ok else "close_failed")


# --------------- Runner -------------------


def main() -> None:
    """Run uvicorn with its own logging disabled (Loguru handles logs)."""
    import uvicorn

    config = uvicorn.Config(
        app,
        host=settings.QS_HOST,
        port=settings.QS_PORT,
        log_config=None,
        access_log=False,
        loop="asyncio",
        lifespan="on",
    )

    server = uvicorn.Server(config)
    logger.info("Starting Uvicorn on {}:{}", settings.QS_HOST, settings.QS_PORT)
    try:
        server.run()  # blocking
    except Exception:  # noqa: BLE001
        logger.exception("Fatal error starting QuickSwitch Agent")
        raise
    finally:
        logger.info("Uvicorn exited (graceful={})", getattr(server, "should_exit", None))


if __name__ == "__main__":
    main()
