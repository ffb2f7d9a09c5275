"""
Goal: Inventory Cache. Holds the latest Snapshot of windows + tabs.

- get() refreshes only when the snapshot is stale, and never waits on a
  refresh someone else already started: it hands back the current snapshot.
- Both providers run concurrently; each one's failure or timeout only empties
  its own half of the snapshot.
- The new Snapshot replaces the old one with a single assignment.
- Age is measured on a monotonic clock; the wall clock only stamps captured_at.
- One executor lives as long as the cache. A source whose previous call is
  still running is not called again; it counts as timed out.
- Clocks and providers are injected so staleness is testable without timers.
"""

from __future__ import annotations

import threading
import time
from concurrent.futures import Future, ThreadPoolExecutor, wait
from typing import Callable, Dict, Optional, Sequence

from loguru import logger

from quickswitch import settings
from quickswitch.models.items import Item, Snapshot
from quickswitch.models.schemas import RefreshResult

ItemSource = Callable[[], Sequence[Item]]


class InventoryCache:
    def __init__(
        self,
        list_windows: ItemSource,
        list_tabs: ItemSource,
        ttl: Optional[float] = None,
        timeout: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
        wall_clock: Callable[[], float] = time.time,
    ):
        self._sources: Dict[str, ItemSource] = {"windows": list_windows, "tabs": list_tabs}
        self.ttl = settings.CACHE_TTL if ttl is None else ttl
        self.timeout = settings.PROVIDER_TIMEOUT if timeout is None else timeout
        self._clock = clock
        self._wall_clock = wall_clock
        self._refreshed_at: Optional[float] = None
        self._snapshot = Snapshot.empty()
        self._refreshing = threading.Lock()
        self._generation = 0
        self._last_result: Optional[RefreshResult] = None
        self._executor = ThreadPoolExecutor(
            max_workers=len(self._sources), thread_name_prefix="quickswitch-refresh"
        )
        self._inflight: Dict[str, Future] = {}

    @property
    def snapshot(self) -> Snapshot:
        return self._snapshot

    @property
    def last_refresh(self) -> Optional[float]:
        return self._snapshot.captured_at

    @property
    def is_refreshing(self) -> bool:
        return self._refreshing.locked()

    def is_stale(self) -> bool:
        refreshed_at = self._refreshed_at
        return refreshed_at is None or self._clock() - refreshed_at > self.ttl

    def get(self) -> Snapshot:
        """Current snapshot, refreshed first if stale and nobody else is refreshing."""
        if self.is_stale() and self._refreshing.acquire(blocking=False):
            try:
                # Someone may have finished a refresh between the check and the acquire
                if self.is_stale():
                    self._refresh_locked()
            except Exception:  # noqa: BLE001
                logger.exception("Cache refresh failed")
            finally:
                self._refreshing.release()
        return self._snapshot

    def force_refresh(self) -> RefreshResult:
        """
        Refresh regardless of staleness. If a refresh is already running, wait
        for it and report its outcome rather than starting a second one.
        """
        generation = self._generation
        if not self._refreshing.acquire(timeout=self.timeout + 1.0):
            return RefreshResult(
                success=False,
                timestamp=self.last_refresh,
                error="another refresh is still running",
            )
        try:
            if self._generation != generation and self._last_result is not None:
                return self._last_result
            return self._refresh_locked()
        except Exception as e:  # noqa: BLE001
            logger.exception("Manual cache refresh failed")
            return RefreshResult(success=False, timestamp=self.last_refresh, error=str(e))
        finally:
            self._refreshing.release()

    def close(self) -> None:
        """Stop the worker pool. A provider call that never returns is left behind."""
        self._executor.shutdown(wait=False, cancel_futures=True)

    def _refresh_locked(self) -> RefreshResult:
        """Run every source concurrently and swap in the merged snapshot. Caller holds the lock."""
        results: Dict[str, tuple] = {}
        errors: Dict[str, str] = {}
        futures: Dict[str, Future] = {}
        for name, fn in self._sources.items():
            previous = self._inflight.get(name)
            if previous is not None and not previous.done():
                errors[name] = "previous call still running"
                results[name] = ()
                continue
            futures[name] = self._inflight[name] = self._executor.submit(fn)

        done, _ = wait(list(futures.values()), timeout=self.timeout)
        for name, future in futures.items():
            if future not in done:
                errors[name] = f"timed out after {self.timeout:g}s"
                results[name] = ()
            elif future.exception() is not None:
                errors[name] = repr(future.exception())
                results[name] = ()
            else:
                results[name] = tuple(future.result() or ())

        for name, err in errors.items():
            logger.warning("Provider {} contributed nothing: {}", name, err)

        refreshed_at = self._clock()
        snapshot = Snapshot(
            windows=results["windows"],
            tabs=results["tabs"],
            captured_at=self._wall_clock(),
            failed_sources=tuple(name for name in self._sources if name in errors),
        )
        self._snapshot = snapshot
        self._refreshed_at = refreshed_at
        self._generation += 1

        result = RefreshResult(
            success=len(errors) < len(self._sources),
            timestamp=snapshot.captured_at,
            error="; ".join(f"{name}: {err}" for name, err in errors.items()) or None,
        )
        self._last_result = result
        logger.info(
            "Cache refreshed: {} windows, {} tabs", len(snapshot.windows), len(snapshot.tabs)
        )
        return result
