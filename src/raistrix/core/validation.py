"""Validación de forma de los descriptores de entrypoint.

Responsabilidad:
- Rechazar descriptores malformados antes de que entren al buffer o lleguen
  a la red.
- Traducir los errores de pydantic a un único `ValidationError` que nombra
  el primer campo problemático, con un mensaje propio por campo.

Funciones puras: no hay efectos secundarios ni en éxito ni en fallo.
"""

from __future__ import annotations

from typing import Iterable, Mapping

from pydantic import ValidationError as PydanticValidationError

from raistrix.core.domain.http_method import HttpMethod
from raistrix.core.domain.models import Entrypoint
from raistrix.core.errors import ValidationError

# Orden en que se reporta el "primer" campo problemático.
_FIELD_MESSAGES: dict[str, str] = {
    "name": "Entrypoint name is required",
    "description": "Entrypoint description is required",
    "method": f"Entrypoint method is required (expected one of {HttpMethod.choices()})",
    "path": "Entrypoint path is required",
    "schema": "Entrypoint schema is required (request and response must be objects)",
}

_NOT_AN_OBJECT = "Entrypoint must be an object"


def _first_offending_field(exc: PydanticValidationError) -> str | None:
    fields = {str(err["loc"][0]) for err in exc.errors() if err.get("loc")}
    for field in _FIELD_MESSAGES:
        if field in fields:
            return field
    return None


def validate_entrypoint(candidate: Entrypoint | Mapping[str, object]) -> Entrypoint:
    """Valida un descriptor y devuelve una copia normalizada e inmutable.

    Levanta `ValidationError` con `field` apuntando al primer campo inválido
    (name, description, method, path, schema, en ese orden).
    """

    if isinstance(candidate, Entrypoint):
        # `model_construct` salta la validación; el cliente guarda su propia copia.
        data = candidate.model_dump(by_alias=True)
    elif isinstance(candidate, Mapping):
        data = dict(candidate)
    else:
        raise ValidationError(_NOT_AN_OBJECT)

    try:
        return Entrypoint.model_validate(data)
    except PydanticValidationError as exc:
        field = _first_offending_field(exc)
        if field is None:
            raise ValidationError(_NOT_AN_OBJECT) from exc
        raise ValidationError(_FIELD_MESSAGES[field], field=field) from exc


def validate_entrypoints(candidates: Iterable[Entrypoint | Mapping[str, object]]) -> list[Entrypoint]:
    """Valida un lote completo respetando el orden.

    Todo o nada: el primer descriptor inválido corta el lote y el error
    indica su posición (`index`) además del campo.
    """

    validated: list[Entrypoint] = []
    for index, candidate in enumerate(candidates):
        try:
            validated.append(validate_entrypoint(candidate))
        except ValidationError as exc:
            raise ValidationError(
                f"entrypoints[{index}]: {exc.message}",
                field=exc.field,
                index=index,
            ) from exc
    return validated
