"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Nos da validación estricta y documentación autocontenida (Field) sin acoplar
  el Core a librerías de I/O.
- La misma definición sirve para validar descriptores y para serializar el
  payload que viaja al registry.

Nota:
- Estos modelos describen *qué* se registra, no *cómo* se envía.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, JsonValue
from pydantic.config import ConfigDict

from raistrix.core.domain.http_method import HttpMethod


class ClientConfig(BaseModel):
    """Credenciales de un cliente.

    Inmutable: se construye una vez por cliente. Los mensajes de error
    amigables los produce el constructor del cliente antes de llegar aquí.
    """

    model_config = ConfigDict(frozen=True)

    api_key: str = Field(
        ...,
        min_length=1,
        description="Credencial bearer del proyecto.",
    )
    project_id: str = Field(
        ...,
        min_length=1,
        description="Identificador del proyecto (tenant).",
    )


class EntrypointSchema(BaseModel):
    """Forma laxa (tipo JSON-schema) de request y response.

    `JsonValue` es el tipo recursivo de pydantic (null/bool/número/string/
    lista/objeto), así aceptamos cualquier forma sin caer en `Any`.
    """

    model_config = ConfigDict(frozen=True)

    request: dict[str, JsonValue] = Field(
        ...,
        description="Forma del cuerpo de entrada.",
    )
    response: dict[str, JsonValue] = Field(
        ...,
        description="Forma del cuerpo de salida.",
    )


class Entrypoint(BaseModel):
    """Descriptor de una ruta de API a registrar.

    Por qué `schema_` con alias:
    - `schema` choca con un atributo heredado de `BaseModel`; en el wire y en
      los dicts de entrada el campo sigue llamándose `schema`.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    name: str = Field(
        ...,
        min_length=1,
        description="Nombre del entrypoint (único por proyecto por convención).",
    )
    description: str = Field(
        ...,
        min_length=1,
        description="Descripción legible del entrypoint.",
    )
    method: HttpMethod = Field(
        ...,
        description="Verbo HTTP.",
    )
    path: str = Field(
        ...,
        min_length=1,
        description="Plantilla de ruta (p.ej. '/api/users/{id}').",
    )
    schema_: EntrypointSchema = Field(
        ...,
        alias="schema",
        description="Formas de request y response.",
    )

    def to_wire(self) -> dict[str, object]:
        return self.model_dump(mode="json", by_alias=True)


class SyncPayload(BaseModel):
    """Cuerpo del POST: siempre el buffer completo, nunca un delta."""

    model_config = ConfigDict(populate_by_name=True)

    project_id: str = Field(..., alias="projectId")
    entrypoints: list[Entrypoint] = Field(default_factory=list)

    def to_wire(self) -> dict[str, object]:
        return self.model_dump(mode="json", by_alias=True)


class SyncResult(BaseModel):
    """Respuesta de éxito del registry."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    success: bool = Field(
        ...,
        description="Indicador de éxito devuelto por el servidor.",
    )
    created_at: str = Field(
        ...,
        alias="createdAt",
        description="Timestamp ISO-8601 asignado por el servidor (sin reinterpretar).",
    )

    def to_wire(self) -> dict[str, object]:
        return self.model_dump(mode="json", by_alias=True)
