"""Unit tests for logging configuration."""

from __future__ import annotations

import json
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

import pytest
import structlog

from kong_adapter.logging.config import (
    BACKUP_COUNT,
    MAX_LOG_SIZE,
    configure_logging,
    get_logger,
)


@pytest.fixture(autouse=True)
def _reset_structlog() -> None:
    """Drop cached structlog configuration between tests."""
    structlog.reset_defaults()


def _new_handlers(before: list[logging.Handler]) -> list[logging.Handler]:
    return [h for h in logging.getLogger().handlers if h not in before]


@pytest.mark.unit
class TestConfigureLogging:
    """Tests for configure_logging."""

    @pytest.mark.parametrize(
        ("verbose", "debug", "level"),
        [
            (False, False, logging.WARNING),
            (True, False, logging.INFO),
            (False, True, logging.DEBUG),
            (True, True, logging.DEBUG),
        ],
    )
    def test_console_level(self, verbose: bool, debug: bool, level: int) -> None:
        before = list(logging.getLogger().handlers)

        configure_logging(verbose=verbose, debug=debug)

        (handler,) = _new_handlers(before)
        assert handler.level == level

    def test_httpx_quieted(self) -> None:
        configure_logging(debug=True)

        assert logging.getLogger("httpx").level == logging.WARNING

    def test_log_file(self, tmp_path: Path) -> None:
        """A log file gets JSON lines from both structlog and stdlib loggers."""
        log_file = tmp_path / "logs" / "adapter.log"
        before = list(logging.getLogger().handlers)

        configure_logging(log_file=log_file)
        get_logger("kong_adapter.test").warning("kong_unavailable", reason="refused")
        logging.getLogger("some.library").warning("plain message")

        file_handlers = [h for h in _new_handlers(before) if isinstance(h, RotatingFileHandler)]
        assert len(file_handlers) == 1
        assert file_handlers[0].maxBytes == MAX_LOG_SIZE
        assert file_handlers[0].backupCount == BACKUP_COUNT
        for handler in file_handlers:
            handler.flush()

        lines = [json.loads(line) for line in log_file.read_text().splitlines()]
        assert lines[0]["event"] == "kong_unavailable"
        assert lines[0]["reason"] == "refused"
        assert lines[0]["level"] == "warning"
        assert lines[1]["event"] == "plain message"


@pytest.mark.unit
class TestGetLogger:
    """Tests for get_logger."""

    def test_binds_initial_context(self) -> None:
        configure_logging()

        logger = get_logger("kong_adapter.test", component="sync")

        assert structlog.get_context(logger) == {"component": "sync"}
