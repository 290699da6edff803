"""SDK para registrar entrypoints de API en raistrix.com.

Uso típico::

    client = SyncClient(api_key="...", project_id="...")
    result = await client.register_entrypoint({...})
"""

from raistrix.adapters.sync_client import SyncClient
from raistrix.core.config import AppSettings
from raistrix.core.domain import (
    ClientConfig,
    Entrypoint,
    EntrypointSchema,
    HttpMethod,
    SyncResult,
)
from raistrix.core.errors import AuthError, ConfigError, RaistrixError, SyncError, ValidationError
from raistrix.core.validation import validate_entrypoint, validate_entrypoints

# Nombre público histórico del cliente.
RaistrixClient = SyncClient

__version__ = "0.1.0"

__all__ = [
    "AppSettings",
    "AuthError",
    "ClientConfig",
    "ConfigError",
    "Entrypoint",
    "EntrypointSchema",
    "HttpMethod",
    "RaistrixClient",
    "RaistrixError",
    "SyncClient",
    "SyncError",
    "SyncResult",
    "ValidationError",
    "validate_entrypoint",
    "validate_entrypoints",
]
