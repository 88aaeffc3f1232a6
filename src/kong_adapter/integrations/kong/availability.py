"""Availability gate for the Kong Admin API.

The gate is an advisory flag: while it is closed, the admin client fails
fast instead of issuing requests. Only the client's retry path closes it,
and any response (or retry exhaustion) opens it again so that no caller is
blocked forever.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Any

import structlog

logger = structlog.get_logger()


@dataclass(frozen=True)
class AvailabilityState:
    """Consistent snapshot of the gate."""

    available: bool = True
    message: str | None = None
    cluster_status: Any = None


class AvailabilityGate:
    """Thread-safe holder of the Kong availability state.

    Starts out available so the very first call is attempted optimistically.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._state = AvailabilityState()

    def mark_available(
        self,
        available: bool,
        message: str | None = None,
        cluster_status: Any = None,
    ) -> None:
        """Replace the whole state in one step."""
        with self._lock:
            previous = self._state
            self._state = AvailabilityState(available, message, cluster_status)
        if previous.available != available:
            logger.info("kong_availability_changed", available=available, message=message)

    def set_available(self, available: bool, message: str | None = None) -> None:
        """Flip availability while keeping the last known cluster status."""
        with self._lock:
            previous = self._state
            self._state = AvailabilityState(available, message, previous.cluster_status)
        if previous.available != available:
            logger.info("kong_availability_changed", available=available, message=message)

    def is_available(self) -> bool:
        with self._lock:
            return self._state.available

    def get_message(self) -> str | None:
        with self._lock:
            return self._state.message

    def get_cluster_status(self) -> Any:
        with self._lock:
            return self._state.cluster_status

    def snapshot(self) -> AvailabilityState:
        with self._lock:
            return self._state

    def reset(self) -> None:
        with self._lock:
            self._state = AvailabilityState()


_gate = AvailabilityGate()


def get_availability_gate() -> AvailabilityGate:
    """Return the process-wide gate."""
    return _gate


def mark_kong_available(
    available: bool,
    message: str | None = None,
    cluster_status: Any = None,
) -> None:
    _gate.mark_available(available, message, cluster_status)


def is_kong_available() -> bool:
    return _gate.is_available()


def get_kong_cluster_status() -> Any:
    return _gate.get_cluster_status()


def reset_availability() -> None:
    """Return the process-wide gate to its initial (available) state."""
    _gate.reset()
