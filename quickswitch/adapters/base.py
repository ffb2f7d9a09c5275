"""
Goal: Strategy interface for window backends plus an ordered fallback chain.
A chain tries each strategy in priority order and returns the first usable answer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Sequence

from loguru import logger

from quickswitch.errors import ProviderUnavailableError


class WindowStrategy(ABC):
    """One way of listing and focusing OS windows."""

    name: str = "strategy"

    @abstractmethod
    def list_windows(self) -> List[Dict[str, Any]]:
        """
        Return raw window records:
            {"id", "title", "bounds": {x, y, width, height}, "is_visible",
             "is_minimized", "owner": {"name", "pid"}}
        Raises ProviderError (or anything else) on failure.
        """

    @abstractmethod
    def activate(self, window_id: str) -> bool:
        """Restore, raise and focus a window. Raises on failure."""


class FallbackChain:
    """Composite over strategies: first non-empty, non-error result wins."""

    def __init__(self, strategies: Sequence[WindowStrategy]):
        self.strategies = list(strategies)

    def list_windows(self) -> List[Dict[str, Any]]:
        for strategy in self.strategies:
            try:
                windows = strategy.list_windows()
            except ProviderUnavailableError as e:
                logger.debug("{} unavailable: {}", strategy.name, e)
                continue
            except Exception as e:  # noqa: BLE001
                logger.warning("{} failed to list windows: {}", strategy.name, e)
                continue
            if windows:
                return windows
            logger.debug("{} returned no windows; trying next strategy", strategy.name)
        return []

    def activate(self, window_id: str) -> bool:
        for strategy in self.strategies:
            try:
                if strategy.activate(window_id):
                    return True
            except ProviderUnavailableError as e:
                logger.debug("{} unavailable for activation: {}", strategy.name, e)
            except Exception as e:  # noqa: BLE001
                logger.warning("{} failed to activate {}: {}", strategy.name, window_id, e)
        return False


__all__ = ["WindowStrategy", "FallbackChain"]
