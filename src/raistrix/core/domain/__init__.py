"""Modelos y entidades del dominio.

Por qué:
- Aquí viven las estructuras de datos puras y estrictas (Pydantic v2).
- El dominio no conoce HTTP, CLI, ni SDKs: solo conceptos del problema.
"""

from raistrix.core.domain.http_method import HttpMethod
from raistrix.core.domain.models import (
    ClientConfig,
    Entrypoint,
    EntrypointSchema,
    SyncPayload,
    SyncResult,
)

__all__ = [
    "ClientConfig",
    "Entrypoint",
    "EntrypointSchema",
    "HttpMethod",
    "SyncPayload",
    "SyncResult",
]
