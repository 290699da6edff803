"""Configuración del SDK.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Permite que el cliente HTTP y la CLI lean config de forma consistente.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic import ValidationError as PydanticValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from raistrix.core.errors import ConfigError


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "raistrix"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "raistrix"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "raistrix"
    return Path.home() / ".config" / "raistrix"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str | None], *, env_path: Path | None = None) -> Path:
    """Escribe/actualiza variables en el .env global del usuario.

    Las claves con valor `None` o vacío no pisan lo que ya existe.
    """

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v})

    lines = ["# raistrix user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Configuración central del SDK.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core.
    - Un único contrato de configuración para CLI y cliente HTTP.

    Las credenciales son opcionales aquí: la validación fail-fast vive en
    el constructor del cliente, que es quien levanta `ConfigError`.
    """

    model_config = SettingsConfigDict(
        env_prefix="RAISTRIX_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    api_key: str | None = Field(
        default=None,
        description="API key (bearer) del proyecto en raistrix.com.",
    )
    project_id: str | None = Field(
        default=None,
        description="Identificador del proyecto (dashboard de raistrix.com).",
    )
    base_url: str = Field(
        default="https://raistrix.com",
        min_length=8,
        description="Host del registry de entrypoints.",
    )
    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Timeout por request (segundos).",
    )
    user_agent: str = Field(
        default="raistrix-python/0.1",
        min_length=1,
        description="User-Agent enviado al registry.",
    )


def load_settings(**overrides: object) -> AppSettings:
    """Carga `AppSettings`; solo los overrides no-`None` pisan env/.env.

    Un valor inválido (flag o env var) se traduce a `ConfigError` para que
    la CLI lo trate como cualquier otro error de configuración.
    """

    try:
        return AppSettings(**{key: value for key, value in overrides.items() if value is not None})
    except PydanticValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in err['loc']) or 'settings'}: {err['msg']}" for err in exc.errors()
        )
        raise ConfigError(f"Invalid configuration: {problems}") from exc
