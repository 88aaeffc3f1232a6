"""Unit tests for payload helpers."""

from __future__ import annotations

import json

import pytest

from kong_adapter.utils import get_json, get_text, make_user_name


@pytest.mark.unit
class TestGetJson:
    """Tests for get_json."""

    def test_parses_text(self) -> None:
        assert get_json('{"a": [1, 2]}') == {"a": [1, 2]}

    def test_parses_bytes(self) -> None:
        assert get_json(b'{"a": 1}') == {"a": 1}

    def test_empty_body(self) -> None:
        assert get_json("") is None
        assert get_json(b"") is None

    def test_structured_passthrough(self) -> None:
        data = {"a": 1}

        assert get_json(data) is data

    def test_invalid_json(self) -> None:
        with pytest.raises(json.JSONDecodeError):
            get_json("not json")


@pytest.mark.unit
class TestGetText:
    """Tests for get_text."""

    def test_text_passthrough(self) -> None:
        assert get_text("plain") == "plain"

    def test_structured_is_pretty_printed(self) -> None:
        assert get_text({"a": 1}) == '{\n  "a": 1\n}'


@pytest.mark.unit
def test_make_user_name() -> None:
    assert make_user_name("my-app", "petstore") == "my-app$petstore"
