"""Status command: Kong node information and the adapter's view of it."""

from __future__ import annotations

import asyncio
from typing import Any

import structlog
import typer
from rich.table import Table

from kong_adapter import __version__
from kong_adapter.cli.commands.base import build_client, console, handle_kong_error
from kong_adapter.core.build_info import get_build_date, get_git_branch, get_git_last_commit
from kong_adapter.integrations.kong.config import EXPECTED_KONG_VERSION, kong_version_matches
from kong_adapter.integrations.kong.exceptions import KongAPIError

logger = structlog.get_logger()


async def _fetch_status(ctx: typer.Context) -> tuple[dict[str, Any], dict[str, Any], bool]:
    async with build_client(ctx) as client:
        info = await client.get_info()
        node_status = await client.check_status()
        return info, node_status, client.gate.is_available()


def status(ctx: typer.Context) -> None:
    """Show Kong version, database reachability and availability."""
    logger.info("Checking Kong status")
    try:
        info, node_status, available = asyncio.run(_fetch_status(ctx))
    except KongAPIError as e:
        handle_kong_error(e)

    kong_version = str(info.get("version", "unknown"))
    version_style = "green" if kong_version_matches(info) else "yellow"
    database = node_status.get("database", {})

    table = Table(title="Kong Status")
    table.add_column("Component", style="cyan", no_wrap=True)
    table.add_column("Status")
    table.add_column("Details", style="dim")

    table.add_row("Adapter", __version__, f"built {get_build_date()}")
    table.add_row("Git", get_git_branch(), get_git_last_commit())
    table.add_row(
        "Kong",
        f"[{version_style}]{kong_version}[/{version_style}]",
        f"expected {EXPECTED_KONG_VERSION}",
    )
    table.add_row("Node", str(info.get("hostname", "unknown")), str(info.get("node_id", "")))
    table.add_row(
        "Database",
        "reachable" if database.get("reachable") else "unreachable",
        str(info.get("configuration", {}).get("database", "")),
    )
    table.add_row("Admin API", "available" if available else "unavailable", "")

    console.print(table)
