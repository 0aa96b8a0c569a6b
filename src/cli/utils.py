"""Shared utilities for CLI commands."""

from contextlib import AbstractContextManager
from typing import Any

import httpx
import typer
from rich.console import Console

from src.user_admin.runtime.config.settings import EnvironmentVariables

# Initialize Rich console for colored output
console = Console()


def get_api_url() -> str:
    """Base URL of the running user admin API."""
    return EnvironmentVariables().api_url


def get_api_client() -> AbstractContextManager[httpx.Client]:
    """Create an HTTP client for the user admin API."""
    return httpx.Client(base_url=get_api_url(), timeout=10.0)


def _print_error_body(response: httpx.Response) -> None:
    try:
        body = response.json()
    except ValueError:
        console.print(f"[red]{response.text}[/red]")
        return

    console.print(f"[red]{body.get('detail', 'Request failed')}[/red]")
    for error in body.get("errors", []):
        field = error.get("field") or "request"
        console.print(f"[red]  • {field}: {error.get('message')}[/red]")
    if body.get("retryable"):
        console.print("[yellow]The external source may recover; try again shortly.[/yellow]")


def api_request(method: str, path: str, **kwargs: Any) -> Any:
    """Send a request to the API and return the decoded JSON body.

    Any failure is reported on the console and ends the command with exit
    code 1.
    """
    try:
        with get_api_client() as client:
            response = client.request(method, path, **kwargs)
    except httpx.HTTPError as e:
        console.print(f"[red]❌ Cannot reach the API at {get_api_url()}: {e}[/red]")
        console.print("[yellow]Start it with: user-admin serve[/yellow]")
        raise typer.Exit(1) from None

    if response.status_code == 404:
        console.print("[red]❌ Not found[/red]")
        raise typer.Exit(1)
    if response.is_error:
        console.print(f"[red]❌ {method} {path} failed with status {response.status_code}[/red]")
        _print_error_body(response)
        raise typer.Exit(1)
    return response.json()
