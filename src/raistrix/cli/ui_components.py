"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en `register` y `doctor`.
"""

from __future__ import annotations

from typing import Sequence

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from raistrix.core.domain.models import Entrypoint, SyncResult


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida.

    Por qué aquí:
    - Evita dependencias circulares (main <-> doctor).
    - Permite desactivar banner en modos no interactivos (`--quiet`).
    """

    title = Text("raistrix", style="bold cyan")
    subtitle = Text("Entrypoint registry • Sync", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_entrypoints_table(entrypoints: Sequence[Entrypoint]) -> Table:
    """Tabla con el buffer tal como se envió al registry."""

    table = Table(title="Entrypoints")
    table.add_column("#", style="dim", no_wrap=True)
    table.add_column("Method", style="cyan", no_wrap=True)
    table.add_column("Path", style="magenta")
    table.add_column("Name", style="white")
    table.add_column("Description", style="dim")
    for index, ep in enumerate(entrypoints, start=1):
        table.add_row(str(index), ep.method.value, ep.path, ep.name, ep.description)
    return table


def build_result_panel(result: SyncResult, *, count: int) -> Panel:
    """Panel para presentar el `SyncResult`."""

    style = "green" if result.success else "yellow"
    body = Text()
    body.append(f"Success: {result.success}\n", style=f"bold {style}")
    body.append(f"Entrypoints synced: {count}\n")
    body.append(f"Created at: {result.created_at}", style="dim")
    return Panel(body, title=Text("Sync", style=f"bold {style}"), border_style=style)
