"""Main CLI entry point using Typer."""

from __future__ import annotations

import typer
from rich.console import Console

from kong_adapter import __version__
from kong_adapter.cli.commands import apis, status
from kong_adapter.core.runtime import set_kong_url, set_my_url
from kong_adapter.integrations.kong.config import KongAdapterConfig, KongConnectionConfig
from kong_adapter.logging.config import configure_logging

app = typer.Typer(
    name="kong-adapter",
    help="Inspect the Kong gateway as seen by the portal adapter.",
    add_completion=False,
)

console = Console()

DEFAULT_KONG_URL = "http://localhost:8001"


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"kong-adapter version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    kong_url: str | None = typer.Option(
        None,
        "--kong-url",
        help=f"Kong Admin API URL (default: $KONG_ADAPTER_KONG_URL or {DEFAULT_KONG_URL}).",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output.",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Enable debug mode.",
    ),
) -> None:
    """Kong adapter - look at Kong the way the portal adapter does."""
    configure_logging(verbose=verbose, debug=debug)

    config = KongAdapterConfig.from_env()
    base_url = kong_url or config.connection.base_url or DEFAULT_KONG_URL
    connection = KongConnectionConfig.model_validate(
        {**config.connection.model_dump(), "base_url": base_url}
    )
    config = config.model_copy(update={"connection": connection})
    set_kong_url(connection.base_url or base_url)
    set_my_url(config.my_url)
    ctx.obj = config


app.command()(status.status)
app.command()(apis.apis)


if __name__ == "__main__":
    app()
