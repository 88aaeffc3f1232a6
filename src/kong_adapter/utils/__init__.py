"""Utility functions for kong_adapter."""

from kong_adapter.utils.payload import get_json, get_text, make_user_name

__all__ = ["get_json", "get_text", "make_user_name"]
