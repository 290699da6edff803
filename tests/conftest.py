"""Pytest configuration for raistrix tests."""

from __future__ import annotations

import json
from typing import Callable

import httpx
import pytest

from raistrix.core.config import AppSettings

BASE_URL = "https://raistrix.test"


def make_entrypoint(**overrides: object) -> dict[str, object]:
    entrypoint: dict[str, object] = {
        "name": "Test Entrypoint",
        "description": "A test entrypoint",
        "method": "GET",
        "path": "/api/test",
        "schema": {"request": {}, "response": {"success": True}},
    }
    entrypoint.update(overrides)
    return entrypoint


class Recorder:
    """Collects the requests seen by an `httpx.MockTransport`."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self._handler = handler
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._handler(request)

    def bodies(self) -> list[dict[str, object]]:
        return [json.loads(request.content) for request in self.requests]


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path):
    for name in ("RAISTRIX_API_KEY", "RAISTRIX_PROJECT_ID", "RAISTRIX_BASE_URL"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(_env_file=None, base_url=BASE_URL)


@pytest.fixture
def ok_recorder() -> Recorder:
    return Recorder(
        lambda request: httpx.Response(200, json={"success": True, "createdAt": "2025-01-01T00:00:00Z"})
    )


@pytest.fixture
def entrypoint_factory() -> Callable[..., dict[str, object]]:
    return make_entrypoint
