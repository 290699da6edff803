"""CLI de raistrix (Typer + Rich).

Por qué una CLI:
- Permite registrar entrypoints desde CI con un JSON versionado junto al
  código de la API, sin escribir Python.
- Los errores del SDK se capturan aquí, en el borde, y se traducen a exit
  codes: 2 para problemas de entrada/config, 1 para fallos del registry.
"""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from raistrix.adapters.entrypoints_loader import load_entrypoints_file
from raistrix.adapters.json_exporter import export_sync_report
from raistrix.adapters.sync_client import SyncClient
from raistrix.cli import doctor
from raistrix.cli.ui_components import build_entrypoints_table, build_result_panel, print_banner
from raistrix.core.config import load_settings
from raistrix.core.errors import AuthError, ConfigError, SyncError, ValidationError
from raistrix.core.interfaces.registry import EntrypointRegistry

app = typer.Typer(no_args_is_help=True, help="Register API entrypoints with raistrix.com.")
app.add_typer(doctor.app, name="doctor")

_console = Console()


def _configure_logging(quiet: bool) -> None:
    logging.basicConfig(
        level=logging.WARNING if quiet else logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(console=_console, show_path=False)],
        force=True,
    )


async def _register(registry: EntrypointRegistry, descriptors: list[dict[str, object]]):
    return await registry.register_entrypoints(descriptors)


@app.command()
def register(
    file: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True, help="JSON file with entrypoints."),
    api_key: str | None = typer.Option(None, "--api-key", help="Overrides RAISTRIX_API_KEY."),
    project_id: str | None = typer.Option(None, "--project-id", help="Overrides RAISTRIX_PROJECT_ID."),
    base_url: str | None = typer.Option(None, "--base-url", help="Overrides RAISTRIX_BASE_URL."),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write a JSON sync report here."),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="No banner, warnings only."),
) -> None:
    """Validate the entrypoints in FILE and sync them as one batch."""

    _configure_logging(quiet)
    if not quiet:
        print_banner(_console)

    try:
        descriptors = load_entrypoints_file(file)
    except (OSError, ValueError) as exc:
        _console.print(f"[red]Could not read entrypoints:[/red] {escape(str(exc))}")
        raise typer.Exit(code=2) from exc

    try:
        settings = load_settings(api_key=api_key, project_id=project_id, base_url=base_url)
        client = SyncClient.from_settings(settings)
        result = asyncio.run(_register(client, descriptors))
    except (ConfigError, ValidationError) as exc:
        _console.print(f"[red]{escape(str(exc))}[/red]")
        raise typer.Exit(code=2) from exc
    except (AuthError, SyncError) as exc:
        _console.print(f"[red]{escape(str(exc))}[/red]")
        raise typer.Exit(code=1) from exc

    if not quiet:
        _console.print(build_entrypoints_table(client.entrypoints))
        _console.print(build_result_panel(result, count=len(client.entrypoints)))

    if output is not None:
        path = export_sync_report(
            project_id=client.config.project_id,
            entrypoints=client.entrypoints,
            result=result,
            output_path=output,
        )
        _console.print(f"[green]Report saved to:[/green] {path}")
    elif quiet:
        _console.print_json(json.dumps(result.to_wire()))


def run() -> None:
    app()
