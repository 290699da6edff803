"""Exportación JSON de una sincronización.

Por qué JSON:
- Permite a pipelines de CI guardar qué se registró y qué respondió el servidor.
- El formato reutiliza los nombres del wire (`projectId`, `createdAt`).
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Sequence

from raistrix.core.domain.models import Entrypoint, SyncPayload, SyncResult


def export_sync_report(
    *,
    project_id: str,
    entrypoints: Sequence[Entrypoint],
    result: SyncResult,
    output_path: Path,
) -> Path:
    """Exporta el buffer sincronizado y la respuesta a JSON UTF-8 con formato estable."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    payload = SyncPayload(project_id=project_id, entrypoints=list(entrypoints)).to_wire()
    payload["result"] = result.to_wire()
    output_path.write_text(
        json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    return output_path
