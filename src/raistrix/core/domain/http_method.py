"""HTTP methods accepted for an entrypoint.

Kept in the domain layer so the validator, the CLI and the HTTP adapter
share a single source of truth.
"""

from __future__ import annotations

from enum import Enum


class HttpMethod(str, Enum):
    """Verbs the registry recognizes for an entrypoint."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    PATCH = "PATCH"

    @classmethod
    def choices(cls) -> str:
        """Comma separated list of the accepted verbs, for error messages."""

        return ", ".join(member.value for member in cls)
