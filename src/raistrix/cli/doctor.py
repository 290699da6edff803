"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from raistrix.adapters.http_client import build_async_client
from raistrix.core.config import AppSettings, load_settings, write_user_env_vars
from raistrix.core.errors import ConfigError

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_http(url: str, settings: AppSettings) -> tuple[bool, str]:
    try:
        async with build_async_client(settings) as client:
            response = await client.get(url)
        return True, f"HTTP {response.status_code}"
    except Exception as exc:
        return False, str(exc)


def _settings_or_exit() -> AppSettings:
    try:
        return load_settings()
    except ConfigError as exc:
        _console.print(f"[red]{escape(str(exc))}[/red]")
        raise typer.Exit(code=2) from exc


def _mask(secret: str) -> str:
    if len(secret) <= 4:
        return "****"
    return f"{secret[:2]}…{secret[-2:]}"


@app.command()
def run(
    skip_network: bool = typer.Option(False, "--skip-network", help="Do not contact the registry host."),
) -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = _settings_or_exit()

    table = Table(title="raistrix Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Config
    if settings.api_key:
        table.add_row("API key", "OK", _mask(settings.api_key))
    else:
        table.add_row("API key", "MISSING", "Set RAISTRIX_API_KEY or run `raistrix doctor configure`")
    if settings.project_id:
        table.add_row("Project ID", "OK", settings.project_id)
    else:
        table.add_row("Project ID", "MISSING", "Find it in the raistrix.com dashboard")
    table.add_row("Base URL", "OK", settings.base_url)

    # Connectivity (best-effort)
    ok_http = True
    if skip_network:
        table.add_row("HTTP connectivity", "SKIPPED", "--skip-network")
    else:
        ok_http, detail_http = asyncio.run(_check_http(settings.base_url, settings))
        table.add_row("HTTP connectivity", "OK" if ok_http else "FAIL", detail_http)

    _console.print(table)

    if not (settings.api_key and settings.project_id and ok_http):
        raise typer.Exit(code=1)


@app.command()
def configure() -> None:
    """Interactive setup (stores credentials in the user config .env)."""

    current = _settings_or_exit()

    api_key = typer.prompt("API key", hide_input=True, confirmation_prompt=False).strip()
    project_id = typer.prompt("Project ID", default=current.project_id or "", show_default=True).strip()
    base_url = typer.prompt("Base URL", default=current.base_url, show_default=True).strip()

    if not api_key or not project_id:
        raise typer.BadParameter("API key and project ID are required")

    env_path = write_user_env_vars(
        {
            "RAISTRIX_API_KEY": api_key,
            "RAISTRIX_PROJECT_ID": project_id,
            "RAISTRIX_BASE_URL": base_url,
        }
    )

    _console.print(f"[green]Saved config to:[/green] {env_path}")
