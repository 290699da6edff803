"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza timeouts y headers para toda llamada al registry.
- Facilita testeo: se puede sustituir por un cliente con `httpx.MockTransport`.
"""

from __future__ import annotations

from urllib.parse import urlsplit

import httpx

from raistrix.core.config import AppSettings

ENTRYPOINTS_PATH = "/api/v1/entrypoints/"


def build_async_client(
    settings: AppSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` con defaults seguros.

    Por qué un builder:
    - Centraliza timeouts/headers para que CLI y SDK se comporten igual.
    - Sin reintentos: cada registro hace exactamente un intento de red.
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/json",
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers=headers,
    )


def entrypoints_url(base_url: str) -> str:
    """URL absoluta del endpoint de entrypoints para un host dado."""

    return base_url.rstrip("/") + ENTRYPOINTS_PATH


def host_label(base_url: str) -> str:
    """Host legible para mensajes (`https://raistrix.com` -> `raistrix.com`)."""

    return urlsplit(base_url).netloc or base_url
