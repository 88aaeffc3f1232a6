"""Shared pytest fixtures for kong_adapter tests."""

from __future__ import annotations

import logging
import os
from collections.abc import Generator

import pytest
from typer.testing import CliRunner

from kong_adapter.core.runtime import reset_runtime
from kong_adapter.integrations.kong.availability import reset_availability
from kong_adapter.integrations.kong.statistics import reset_statistics


@pytest.fixture
def cli_runner() -> CliRunner:
    """Create a Typer CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def reset_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Reset environment variables for each test."""
    for key in list(os.environ.keys()):
        if key.startswith("KONG_ADAPTER_") or key == "KONG_CURL":
            monkeypatch.delenv(key, raising=False)


@pytest.fixture(autouse=True)
def reset_process_state() -> Generator[None]:
    """Give every test a fresh gate, fresh statistics and no known URLs."""
    reset_availability()
    reset_statistics()
    reset_runtime()
    yield
    reset_availability()
    reset_statistics()
    reset_runtime()


@pytest.fixture(autouse=True)
def _reset_root_logger() -> Generator[None]:
    """Remove handlers added by configure_logging after each test."""
    root = logging.getLogger()
    original_handlers = list(root.handlers)
    original_level = root.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
