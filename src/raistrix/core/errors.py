"""Taxonomía de errores del SDK.

Por qué una jerarquía propia:
- El llamador distingue configuración, validación local, credenciales
  rechazadas y fallos de sincronización sin inspeccionar mensajes.
- La CLI captura `RaistrixError` en el borde y decide el exit code.
"""

from __future__ import annotations


class RaistrixError(Exception):
    """Base de todos los errores que levanta el SDK."""


class ConfigError(RaistrixError):
    """Credencial ausente o vacía al construir el cliente."""


class ValidationError(RaistrixError):
    """Un descriptor (o un miembro de un lote) no cumple la forma esperada.

    `field` es el primer campo problemático (o `None` si el descriptor ni
    siquiera es un objeto); `index` es la posición dentro del lote.
    """

    def __init__(self, message: str, *, field: str | None = None, index: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.field = field
        self.index = index


class AuthError(RaistrixError):
    """El registry rechazó las credenciales (401/403)."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class SyncError(RaistrixError):
    """Fallo de transporte, status no-2xx o respuesta ilegible."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
