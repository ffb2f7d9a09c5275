"""
Goal: Minimal Chromium DevTools (CDP) HTTP client for listing and focusing tabs.
- Talks to the browser started with --remote-debugging-port (default 9222).
- One httpx.Client, created on first use and reused until close().
- Raises ProviderUnavailableError when the endpoint is not up; callers decide what that means.
"""

from __future__ import annotations

import threading  # guard lazy client creation
from typing import Any, Dict, List, Optional

import httpx  # HTTP to DevTools endpoints

from quickswitch import settings
from quickswitch.errors import ProviderError, ProviderTimeoutError, ProviderUnavailableError


class CdpClient:
    """Thin wrapper over the DevTools /json/* endpoints."""

    def __init__(
        self,
        host: Optional[str] = None,
        port: Optional[int] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.host = host or settings.CDP_HOST
        self.port = port or settings.CDP_PORT
        self.timeout = timeout or settings.PROVIDER_TIMEOUT
        self._transport = transport
        self._client: Optional[httpx.Client] = None
        self._lock = threading.Lock()

    @property
    def base_url(self) -> str:
        return f"http://{self.host}:{self.port}"

    def _http(self) -> httpx.Client:
        """Return the shared client, creating it on first use."""
        with self._lock:
            if self._client is None:
                self._client = httpx.Client(
                    base_url=self.base_url,
                    timeout=self.timeout,
                    transport=self._transport,
                )
            return self._client

    def _get(self, path: str) -> httpx.Response:
        try:
            r = self._http().get(path)
        except httpx.TimeoutException as e:
            raise ProviderTimeoutError(f"DevTools {path} timed out") from e
        except httpx.TransportError as e:
            raise ProviderUnavailableError(
                f"DevTools not reachable at {self.base_url} (start the browser with "
                f"--remote-debugging-port={self.port})"
            ) from e
        if r.status_code != 200:
            raise ProviderError(f"DevTools {path} answered {r.status_code}: {r.text[:200]}")
        return r

    def version(self) -> Dict[str, Any]:
        data = self._get("/json/version").json()
        return data if isinstance(data, dict) else {}

    def list_targets(self) -> List[Dict[str, Any]]:
        """Return every CDP target (pages, workers, extensions...)."""
        data = self._get("/json/list").json()
        if not isinstance(data, list):
            raise ProviderError("DevTools /json/list did not return a list")
        return [t for t in data if isinstance(t, dict)]

    def activate_target(self, target_id: str) -> bool:
        self._get(f"/json/activate/{target_id}")
        return True

    def close_target(self, target_id: str) -> bool:
        self._get(f"/json/close/{target_id}")
        return True

    def close(self) -> None:
        with self._lock:
            if self._client is not None:
                self._client.close()
                self._client = None
