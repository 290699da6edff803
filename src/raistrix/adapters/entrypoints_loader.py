"""Carga de descriptores desde JSON.

Soporta formatos tipo:
- Lista:  [{...}, {...}]
- Objeto: {...} (un único entrypoint)
- Envoltorio: {"entrypoints": [...]}

La validación de forma NO ocurre aquí: el cliente valida el lote completo
al registrarlo, así los errores llevan el índice correcto.
"""

from __future__ import annotations

import json
from pathlib import Path


def load_entrypoints_file(path: Path) -> list[dict[str, object]]:
    raw = path.read_text(encoding="utf-8")
    data = json.loads(raw)
    if isinstance(data, dict) and isinstance(data.get("entrypoints"), list):
        data = data["entrypoints"]
    if isinstance(data, dict):
        return [data]
    if isinstance(data, list):
        return data
    raise ValueError(f"{path}: expected a JSON object or a list of objects")
