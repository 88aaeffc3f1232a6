"""Usage statistics for calls made against the Kong Admin API.

Counts requests per HTTP verb and, when asked to, keeps a log of every
changing (non-GET) call plus the object pairs the matcher found to differ.
Used to check that a resync pass after a completed sync issues no
changing calls at all.
"""

from __future__ import annotations

import copy
import threading
from typing import Any

import structlog
from pydantic import BaseModel, Field

logger = structlog.get_logger()


class KongAction(BaseModel):
    """A changing call recorded in the action log."""

    method: str
    url: str
    body: Any = None


class FailedComparison(BaseModel):
    """A desired/observed pair that did not match."""

    api_object: Any = None
    kong_object: Any = None


class SyncStatistics(BaseModel):
    """Snapshot of the collected statistics."""

    counters: dict[str, int] = Field(default_factory=dict)
    actions: list[KongAction] = Field(default_factory=list)
    failed_comparisons: list[FailedComparison] = Field(default_factory=list)

    def count(self, method: str) -> int:
        return self.counters.get(method.upper(), 0)


class StatisticsRecorder:
    """Thread-safe owner of the statistics state."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._statistics = SyncStatistics()
        self._keep_changing_actions = False

    @property
    def keep_changing_actions(self) -> bool:
        with self._lock:
            return self._keep_changing_actions

    def reset(self, keep_changing_actions: bool = False) -> None:
        """Clear all counters and logs.

        Args:
            keep_changing_actions: Record non-GET calls and failed
                comparisons until the next ``get_statistics()``.
        """
        with self._lock:
            self._statistics = SyncStatistics()
            self._keep_changing_actions = bool(keep_changing_actions)
        logger.debug("statistics_reset", keep_changing_actions=keep_changing_actions)

    def snapshot(self) -> SyncStatistics:
        """Return the statistics collected so far and stop keeping changing actions."""
        with self._lock:
            self._keep_changing_actions = False
            return self._statistics.model_copy(deep=True)

    def record_action(self, method: str, url: str, body: Any = None) -> None:
        method = method.upper()
        with self._lock:
            counters = self._statistics.counters
            counters[method] = counters.get(method, 0) + 1
            if self._keep_changing_actions and method != "GET":
                self._statistics.actions.append(
                    KongAction(method=method, url=url, body=copy.deepcopy(body))
                )

    def record_mismatch(self, api_object: Any, kong_object: Any) -> bool:
        """Store a failed comparison if changing actions are being kept.

        Returns:
            True if the pair was stored.
        """
        with self._lock:
            if not self._keep_changing_actions:
                return False
            self._statistics.failed_comparisons.append(
                FailedComparison(
                    api_object=copy.deepcopy(api_object),
                    kong_object=copy.deepcopy(kong_object),
                )
            )
            return True


_recorder = StatisticsRecorder()


def get_statistics_recorder() -> StatisticsRecorder:
    """Return the process-wide recorder."""
    return _recorder


def reset_statistics(keep_changing_actions: bool = False) -> None:
    _recorder.reset(keep_changing_actions)


def get_statistics() -> SyncStatistics:
    """Retrieve the collected statistics.

    Clears the "keep changing actions" flag; a later reset decides whether
    the next round keeps them again.
    """
    return _recorder.snapshot()
