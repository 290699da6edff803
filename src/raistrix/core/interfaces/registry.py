"""Contrato del registro de entrypoints.

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- La CLI y los tests trabajan contra este contrato; `SyncClient` es la
  implementación HTTP.
"""

from __future__ import annotations

from typing import Iterable, Mapping, Protocol, runtime_checkable

from raistrix.core.domain.models import Entrypoint, SyncResult


@runtime_checkable
class EntrypointRegistry(Protocol):
    """Contrato mínimo para registrar entrypoints.

    Reglas de diseño:
    - Ambos métodos son asíncronos porque típicamente hacen I/O (HTTP).
    - Devuelven el `SyncResult` de la única sincronización que disparan.
    """

    @property
    def entrypoints(self) -> tuple[Entrypoint, ...]:
        ...

    async def register_entrypoint(self, descriptor: Entrypoint | Mapping[str, object]) -> SyncResult:
        ...

    async def register_entrypoints(
        self,
        descriptors: Iterable[Entrypoint | Mapping[str, object]],
    ) -> SyncResult:
        ...
