"""Shared helpers for CLI commands: client construction and error output."""

from __future__ import annotations

from typing import NoReturn

import typer
from rich.console import Console

from kong_adapter.integrations.kong.client import KongAdminClient
from kong_adapter.integrations.kong.config import KongAdapterConfig
from kong_adapter.integrations.kong.exceptions import (
    KongAPIError,
    KongAuthError,
    KongConnectionError,
    KongNotFoundError,
    KongUnavailableError,
    KongUnexpectedStatusError,
    KongValidationError,
)

console = Console()


def build_client(ctx: typer.Context) -> KongAdminClient:
    """Create an admin client from the configuration stored on the context."""
    config: KongAdapterConfig = ctx.obj
    return KongAdminClient(config.connection, config.auth, debug_curl=config.debug_curl)


def handle_kong_error(error: KongAPIError) -> NoReturn:
    """Print a Kong error in a user-friendly way and exit with status 1."""
    if isinstance(error, KongConnectionError):
        console.print("[red]Error:[/red] Cannot connect to Kong Admin API")
        console.print(f"  {error.message}")
        if error.attempts:
            console.print(f"  Gave up after {error.attempts} attempts")
        console.print("\n[dim]Hint: Check that Kong is running and the URL is correct.[/dim]")

    elif isinstance(error, KongUnavailableError):
        console.print("[red]Error:[/red] Kong is currently marked unavailable")
        console.print(f"  {error.last_message}")

    elif isinstance(error, KongAuthError):
        console.print("[red]Error:[/red] Authentication failed")
        console.print(f"  {error.message}")
        console.print("\n[dim]Hint: Check your API key or certificate configuration.[/dim]")

    elif isinstance(error, KongNotFoundError):
        console.print(f"[red]Error:[/red] {error.message}")

    elif isinstance(error, KongValidationError):
        console.print("[red]Error:[/red] Validation failed")
        console.print(f"  {error.message}")
        for field, err in error.validation_errors.items():
            console.print(f"    - {field}: {err}")

    elif isinstance(error, KongUnexpectedStatusError):
        console.print(f"[red]Error:[/red] {error.message}")
        if error.endpoint:
            console.print(f"  Endpoint: {error.endpoint}")

    else:
        console.print(f"[red]Error:[/red] {error.message}")

    raise typer.Exit(1)
