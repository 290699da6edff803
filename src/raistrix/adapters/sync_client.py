"""Cliente de sincronización con el registry de raistrix.com.

Responsabilidad:
- Guardar credenciales y un buffer append-only de entrypoints validados.
- Enviar el buffer completo en un único POST por cada llamada de registro.
- Clasificar fallos de transporte/protocolo en `AuthError` / `SyncError`.

Concurrencia:
- Pensado para asyncio de un solo hilo. Dos registros concurrentes sobre la
  misma instancia comparten el buffer sin lock; cada request ve el buffer
  según el orden de intercalado.
"""

from __future__ import annotations

import logging
from typing import Iterable, Mapping

import httpx
from pydantic import ValidationError as PydanticValidationError

from raistrix.adapters.http_client import build_async_client, entrypoints_url, host_label
from raistrix.core.config import AppSettings, load_settings
from raistrix.core.domain.models import ClientConfig, Entrypoint, SyncPayload, SyncResult
from raistrix.core.errors import AuthError, ConfigError, SyncError
from raistrix.core.validation import validate_entrypoint, validate_entrypoints

logger = logging.getLogger(__name__)

_AUTH_FAILED = "Authentication failed. Your API key or project ID may have been revoked."
_SYNC_FAILED = "Entrypoints sync failed"


def _error_message(response: httpx.Response) -> str:
    """Extrae `message` del cuerpo de error (best-effort, nunca falla)."""

    try:
        data = response.json()
    except ValueError:
        return ""
    if isinstance(data, dict) and isinstance(data.get("message"), str):
        return data["message"]
    return ""


class SyncClient:
    """Registra entrypoints y los sincroniza con el registry.

    El buffer nunca se vacía: la llamada N reenvía todo lo aceptado en las
    llamadas 1..N.
    """

    def __init__(
        self,
        api_key: str | None,
        project_id: str | None,
        *,
        settings: AppSettings | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        if not api_key:
            raise ConfigError("API key is required")
        if not project_id:
            raise ConfigError(
                "project ID is required, you will find the project ID in the raistrix.com dashboard"
            )

        try:
            self._config = ClientConfig(api_key=api_key, project_id=project_id)
        except PydanticValidationError as exc:
            fields = {str(err["loc"][0]) for err in exc.errors() if err.get("loc")}
            field = "API key" if "api_key" in fields else "project ID"
            raise ConfigError(f"{field} must be a non-empty string") from exc
        self._settings = settings or load_settings()
        self._http_client = http_client
        self._entrypoints: list[Entrypoint] = []

    @classmethod
    def from_settings(
        cls,
        settings: AppSettings | None = None,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> "SyncClient":
        """Construye el cliente con `RAISTRIX_API_KEY` / `RAISTRIX_PROJECT_ID`."""

        settings = settings or load_settings()
        return cls(
            settings.api_key,
            settings.project_id,
            settings=settings,
            http_client=http_client,
        )

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def entrypoints(self) -> tuple[Entrypoint, ...]:
        """Snapshot de solo lectura del buffer."""

        return tuple(self._entrypoints)

    async def register_entrypoint(self, descriptor: Entrypoint | Mapping[str, object]) -> SyncResult:
        """Valida un descriptor, lo añade al buffer y sincroniza."""

        validated = validate_entrypoint(descriptor)
        self._entrypoints.append(validated)
        return await self._sync_entrypoints()

    async def register_entrypoints(
        self,
        descriptors: Iterable[Entrypoint | Mapping[str, object]],
    ) -> SyncResult:
        """Valida el lote completo (todo o nada), lo añade en orden y sincroniza una vez."""

        validated = validate_entrypoints(descriptors)
        self._entrypoints.extend(validated)
        return await self._sync_entrypoints()

    async def _sync_entrypoints(self) -> SyncResult:
        payload = SyncPayload(project_id=self._config.project_id, entrypoints=list(self._entrypoints))
        count = len(payload.entrypoints)

        if self._http_client is not None:
            response = await self._post(self._http_client, payload)
        else:
            async with build_async_client(self._settings) as client:
                response = await self._post(client, payload)

        if response.status_code in (401, 403):
            raise AuthError(_AUTH_FAILED, status_code=response.status_code)

        if not response.is_success:
            detail = _error_message(response)
            raise SyncError(
                f"{_SYNC_FAILED}: {response.status_code} {response.reason_phrase}. {detail}".rstrip(),
                status_code=response.status_code,
            )

        try:
            result = SyncResult.model_validate(response.json())
        except (ValueError, PydanticValidationError) as exc:
            raise SyncError(
                f"{_SYNC_FAILED}: invalid response body ({exc.__class__.__name__})",
                status_code=response.status_code,
            ) from exc

        logger.info("%d entrypoint(s) synced to %s", count, host_label(self._settings.base_url))
        return result

    async def _post(self, client: httpx.AsyncClient, payload: SyncPayload) -> httpx.Response:
        try:
            return await client.post(
                entrypoints_url(self._settings.base_url),
                json=payload.to_wire(),
                headers={
                    "Authorization": f"Bearer {self._config.api_key}",
                    "Content-Type": "application/json",
                },
            )
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise SyncError(f"{_SYNC_FAILED}: {exc}") from exc
