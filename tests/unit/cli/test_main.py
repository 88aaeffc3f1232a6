"""Tests for the command line interface."""

from __future__ import annotations

from unittest.mock import AsyncMock, patch

import pytest
from typer.testing import CliRunner

from kong_adapter import __version__
from kong_adapter.cli.main import app
from kong_adapter.core.runtime import get_kong_url
from kong_adapter.integrations.kong.exceptions import (
    KongConnectionError,
    KongUnavailableError,
)
from kong_adapter.integrations.kong.models.api import KongApi

INFO = {
    "version": "3.4.2",
    "hostname": "kong-0",
    "node_id": "node-1",
    "configuration": {"database": "postgres"},
}
STATUS = {"database": {"reachable": True}, "server": {"connections_active": 1}}


class TestCLIMain:
    """Test main CLI entry point."""

    @pytest.mark.unit
    def test_help_option(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["--help"])

        assert result.exit_code == 0
        assert "status" in result.stdout
        assert "apis" in result.stdout

    @pytest.mark.unit
    def test_version_option(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert f"kong-adapter version {__version__}" in result.stdout

    @pytest.mark.unit
    def test_kong_url_option(self, cli_runner: CliRunner) -> None:
        """--kong-url sets the process-wide Kong URL."""
        with patch(
            "kong_adapter.cli.commands.status._fetch_status",
            AsyncMock(return_value=(INFO, STATUS, True)),
        ):
            result = cli_runner.invoke(app, ["--kong-url", "http://gateway:8001/", "status"])

        assert result.exit_code == 0
        assert get_kong_url() == "http://gateway:8001"

    @pytest.mark.unit
    def test_kong_url_from_env(
        self, cli_runner: CliRunner, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("KONG_ADAPTER_KONG_URL", "http://env-kong:8001")
        with patch(
            "kong_adapter.cli.commands.status._fetch_status",
            AsyncMock(return_value=(INFO, STATUS, True)),
        ):
            result = cli_runner.invoke(app, ["status"])

        assert result.exit_code == 0
        assert get_kong_url() == "http://env-kong:8001"


class TestStatusCommand:
    """Test status command."""

    @pytest.mark.unit
    def test_status_table(self, cli_runner: CliRunner) -> None:
        with patch(
            "kong_adapter.cli.commands.status._fetch_status",
            AsyncMock(return_value=(INFO, STATUS, True)),
        ):
            result = cli_runner.invoke(app, ["status"])

        assert result.exit_code == 0
        assert "Kong Status" in result.stdout
        assert "3.4.2" in result.stdout
        assert "reachable" in result.stdout
        assert "available" in result.stdout

    @pytest.mark.unit
    def test_status_shows_build_info(self, cli_runner: CliRunner) -> None:
        with (
            patch(
                "kong_adapter.cli.commands.status._fetch_status",
                AsyncMock(return_value=(INFO, STATUS, True)),
            ),
            patch("kong_adapter.cli.commands.status.get_git_branch", return_value="main"),
            patch("kong_adapter.cli.commands.status.get_git_last_commit", return_value="3f2c1ab"),
            patch("kong_adapter.cli.commands.status.get_build_date", return_value="2026-10-01"),
        ):
            result = cli_runner.invoke(app, ["status"])

        assert result.exit_code == 0
        assert "Git" in result.stdout
        assert "main" in result.stdout
        assert "3f2c1ab" in result.stdout
        assert "2026-10-01" in result.stdout

    @pytest.mark.unit
    def test_status_connection_error(self, cli_runner: CliRunner) -> None:
        error = KongConnectionError("connection refused", attempts=11)
        with patch(
            "kong_adapter.cli.commands.status._fetch_status",
            AsyncMock(side_effect=error),
        ):
            result = cli_runner.invoke(app, ["status"])

        assert result.exit_code == 1
        assert "Cannot connect to Kong Admin API" in result.stdout
        assert "11 attempts" in result.stdout

    @pytest.mark.unit
    def test_status_unavailable(self, cli_runner: CliRunner) -> None:
        with patch(
            "kong_adapter.cli.commands.status._fetch_status",
            AsyncMock(side_effect=KongUnavailableError("timed out")),
        ):
            result = cli_runner.invoke(app, ["status"])

        assert result.exit_code == 1
        assert "marked unavailable" in result.stdout


class TestApisCommand:
    """Test apis command."""

    @pytest.mark.unit
    def test_apis_table(self, cli_runner: CliRunner) -> None:
        apis = [
            KongApi(
                id="svc-1",
                name="pets",
                upstream_url="http://pets:8080",
                uris=["/pets"],
                https_only=True,
            )
        ]
        with patch("kong_adapter.cli.commands.apis._list_apis", AsyncMock(return_value=apis)):
            result = cli_runner.invoke(app, ["apis"])

        assert result.exit_code == 0
        assert "pets" in result.stdout
        assert "/pets" in result.stdout

    @pytest.mark.unit
    def test_no_apis(self, cli_runner: CliRunner) -> None:
        with patch("kong_adapter.cli.commands.apis._list_apis", AsyncMock(return_value=[])):
            result = cli_runner.invoke(app, ["apis"])

        assert result.exit_code == 0
        assert "No APIs found" in result.stdout
