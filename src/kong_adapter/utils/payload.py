"""Helpers for Kong request and response payloads."""

from __future__ import annotations

import json
from typing import Any


def get_json(body: Any) -> Any:
    """Return ``body`` as structured data.

    Text (or bytes) is parsed as JSON, an empty body becomes None, and
    anything already structured is passed through unchanged.
    """
    if isinstance(body, (bytes, bytearray)):
        body = body.decode("utf-8")
    if isinstance(body, str):
        if body == "":
            return None
        return json.loads(body)
    return body


def get_text(body: Any) -> str:
    """Return ``body`` as text, pretty-printing structured data."""
    if isinstance(body, str):
        return body
    return json.dumps(body, indent=2, default=str)


def make_user_name(app_id: str, api_id: str) -> str:
    """Build the Kong consumer username for an application subscribed to an API."""
    return f"{app_id}${api_id}"
