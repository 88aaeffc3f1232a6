"""Process-wide URLs known to the adapter.

``set_kong_url`` must run during startup before any client is built
without an explicit base URL; ``set_my_url`` records the adapter's own
externally visible URL for callers that need to hand it out.
"""

from __future__ import annotations

import threading

_lock = threading.Lock()
_kong_url: str | None = None
_my_url: str | None = None


def set_kong_url(url: str) -> None:
    global _kong_url
    with _lock:
        _kong_url = url.rstrip("/")


def get_kong_url() -> str:
    """Return the Kong Admin API URL.

    Raises:
        RuntimeError: If ``set_kong_url`` was never called.
    """
    with _lock:
        if not _kong_url:
            raise RuntimeError("set_kong_url() was never called, Kong URL is yet unknown")
        return _kong_url


def set_my_url(url: str | None) -> None:
    global _my_url
    with _lock:
        _my_url = url


def get_my_url() -> str | None:
    with _lock:
        return _my_url


def reset_runtime() -> None:
    """Forget both URLs."""
    global _kong_url, _my_url
    with _lock:
        _kong_url = None
        _my_url = None
