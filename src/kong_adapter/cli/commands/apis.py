"""List the composite APIs currently configured in Kong."""

from __future__ import annotations

import asyncio

import typer
from rich.table import Table

from kong_adapter.cli.commands.base import build_client, console, handle_kong_error
from kong_adapter.integrations.kong.exceptions import KongAPIError
from kong_adapter.integrations.kong.models.api import KongApi
from kong_adapter.services.kong.api_manager import ApiManager


async def _list_apis(ctx: typer.Context) -> list[KongApi]:
    async with build_client(ctx) as client:
        return await ApiManager(client).list_all()


def apis(ctx: typer.Context) -> None:
    """List APIs (Service + Route pairs) known to Kong."""
    try:
        kong_apis = asyncio.run(_list_apis(ctx))
    except KongAPIError as e:
        handle_kong_error(e)

    if not kong_apis:
        console.print("[yellow]No APIs found.[/yellow]")
        return

    table = Table(title="Kong APIs")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("ID", style="dim")
    table.add_column("Upstream")
    table.add_column("Paths")
    table.add_column("HTTPS only")

    for api in sorted(kong_apis, key=lambda a: a.name or ""):
        table.add_row(
            api.name or "",
            api.id or "",
            api.upstream_url or "",
            ", ".join(api.uris or []),
            "yes" if api.https_only else "no",
        )

    console.print(table)
