"""Tests for the registry sync client."""

import logging

import httpx
import pytest

from raistrix import RaistrixClient
from raistrix.adapters import sync_client as sync_client_module
from raistrix.adapters.sync_client import SyncClient
from raistrix.core.config import AppSettings
from raistrix.core.errors import AuthError, ConfigError, SyncError, ValidationError
from raistrix.core.interfaces.registry import EntrypointRegistry


def _client(recorder, settings, api_key="k", project_id="p"):
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(recorder))
    return SyncClient(api_key, project_id, settings=settings, http_client=http_client)


class TestConstruction:
    def test_missing_api_key(self):
        with pytest.raises(ConfigError, match="API key is required"):
            SyncClient("", "p")

    def test_missing_project_id(self):
        with pytest.raises(ConfigError, match="project ID is required"):
            SyncClient("k", "")

    def test_api_key_checked_first(self):
        with pytest.raises(ConfigError, match="API key is required"):
            SyncClient(None, None)

    @pytest.mark.parametrize(
        ("api_key", "project_id", "expected"),
        [(123, "p", "API key must be a non-empty string"), ("k", ["p"], "project ID must be a non-empty string")],
    )
    def test_non_string_credentials(self, api_key, project_id, expected):
        with pytest.raises(ConfigError, match=expected):
            SyncClient(api_key, project_id)

    def test_construction_does_no_network(self, settings):
        """A client is built without touching the transport."""
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(200)

        client = _client(handler, settings)

        assert calls == []
        assert client.entrypoints == ()
        assert client.config.project_id == "p"

    def test_from_settings(self):
        settings = AppSettings(_env_file=None, api_key="k", project_id="p")

        client = SyncClient.from_settings(settings)

        assert client.config.api_key == "k"

    def test_from_settings_without_credentials(self):
        with pytest.raises(ConfigError):
            SyncClient.from_settings(AppSettings(_env_file=None))

    def test_public_alias_and_protocol(self, settings, ok_recorder):
        client = _client(ok_recorder, settings)

        assert RaistrixClient is SyncClient
        assert isinstance(client, EntrypointRegistry)


@pytest.mark.asyncio
async def test_register_entrypoint_success(settings, entrypoint_factory):
    """Scenario: HTTP 200 resolves to exactly the server body."""
    body = {"success": True, "createdAt": "2025-01-01T00:00:00Z"}
    requests = []

    def handler(request):
        requests.append(request)
        return httpx.Response(200, json=body)

    client = _client(handler, settings)
    descriptor = {
        "name": "t",
        "description": "d",
        "method": "GET",
        "path": "/x",
        "schema": {"request": {}, "response": {}},
    }

    result = await client.register_entrypoint(descriptor)

    assert result.to_wire() == body
    assert result.created_at == "2025-01-01T00:00:00Z"

    request = requests[0]
    assert request.method == "POST"
    assert str(request.url) == "https://raistrix.test/api/v1/entrypoints/"
    assert request.headers["Authorization"] == "Bearer k"
    assert request.headers["Content-Type"] == "application/json"


@pytest.mark.asyncio
async def test_payload_carries_project_and_buffer(settings, ok_recorder, entrypoint_factory):
    client = _client(ok_recorder, settings)

    await client.register_entrypoint(entrypoint_factory(method="PATCH"))

    payload = ok_recorder.bodies()[0]
    assert payload["projectId"] == "p"
    assert payload["entrypoints"] == [
        {
            "name": "Test Entrypoint",
            "description": "A test entrypoint",
            "method": "PATCH",
            "path": "/api/test",
            "schema": {"request": {}, "response": {"success": True}},
        }
    ]


@pytest.mark.asyncio
async def test_same_descriptor_twice_resends_full_buffer(settings, ok_recorder, entrypoint_factory):
    """Two calls make two requests; the second carries both entries."""
    client = _client(ok_recorder, settings)
    descriptor = entrypoint_factory()

    await client.register_entrypoint(descriptor)
    await client.register_entrypoint(descriptor)

    assert len(client.entrypoints) == 2
    bodies = ok_recorder.bodies()
    assert len(bodies) == 2
    assert len(bodies[0]["entrypoints"]) == 1
    assert len(bodies[1]["entrypoints"]) == 2


@pytest.mark.asyncio
async def test_register_entrypoints_syncs_once_in_order(settings, ok_recorder, entrypoint_factory):
    client = _client(ok_recorder, settings)
    await client.register_entrypoint(entrypoint_factory(name="first"))

    await client.register_entrypoints([entrypoint_factory(name="a"), entrypoint_factory(name="b")])

    bodies = ok_recorder.bodies()
    assert len(bodies) == 2
    assert [ep["name"] for ep in bodies[1]["entrypoints"]] == ["first", "a", "b"]


@pytest.mark.asyncio
async def test_batch_is_all_or_nothing(settings, ok_recorder, entrypoint_factory):
    """[validA, invalidB, validC] fails and appends nothing."""
    client = _client(ok_recorder, settings)
    batch = [
        entrypoint_factory(name="A"),
        entrypoint_factory(path=""),
        entrypoint_factory(name="C"),
    ]

    with pytest.raises(ValidationError) as info:
        await client.register_entrypoints(batch)

    assert info.value.index == 1
    assert info.value.field == "path"
    assert client.entrypoints == ()
    assert ok_recorder.requests == []


@pytest.mark.asyncio
async def test_invalid_single_descriptor_leaves_buffer(settings, ok_recorder, entrypoint_factory):
    client = _client(ok_recorder, settings)
    await client.register_entrypoint(entrypoint_factory())

    with pytest.raises(ValidationError, match="description is required"):
        await client.register_entrypoint(entrypoint_factory(description=""))

    assert len(client.entrypoints) == 1
    assert len(ok_recorder.requests) == 1


@pytest.mark.asyncio
@pytest.mark.parametrize("status", [401, 403])
async def test_auth_failure(settings, entrypoint_factory, status):
    """401/403 map to AuthError without leaking the body."""
    client = _client(lambda request: httpx.Response(status, json={"message": "secret detail"}), settings)

    with pytest.raises(AuthError, match="Authentication failed") as info:
        await client.register_entrypoint(entrypoint_factory())

    assert not isinstance(info.value, SyncError)
    assert info.value.status_code == status
    assert "secret detail" not in str(info.value)


@pytest.mark.asyncio
async def test_server_error_includes_status_and_message(settings, entrypoint_factory):
    client = _client(lambda request: httpx.Response(500, json={"message": "boom"}), settings)

    with pytest.raises(SyncError) as info:
        await client.register_entrypoint(entrypoint_factory())

    text = str(info.value)
    assert "500" in text
    assert "Internal Server Error" in text
    assert "boom" in text
    assert info.value.status_code == 500


@pytest.mark.asyncio
async def test_server_error_with_unparseable_body(settings, entrypoint_factory):
    client = _client(lambda request: httpx.Response(502, text="<html>bad gateway</html>"), settings)

    with pytest.raises(SyncError, match="502 Bad Gateway"):
        await client.register_entrypoint(entrypoint_factory())


@pytest.mark.asyncio
async def test_transport_error_is_wrapped(settings, entrypoint_factory):
    def handler(request):
        raise httpx.ConnectError("ECONNRESET", request=request)

    client = _client(handler, settings)

    with pytest.raises(SyncError, match="Entrypoints sync failed: ECONNRESET") as info:
        await client.register_entrypoint(entrypoint_factory())

    assert isinstance(info.value.__cause__, httpx.ConnectError)
    assert info.value.status_code is None


@pytest.mark.asyncio
async def test_failed_sync_keeps_buffer(settings, entrypoint_factory):
    """A sync failure does not roll back; the next call resends everything."""
    responses = iter([httpx.Response(500), httpx.Response(200, json={"success": True, "createdAt": "t"})])
    seen = []

    def handler(request):
        seen.append(request)
        return next(responses)

    client = _client(handler, settings)

    with pytest.raises(SyncError):
        await client.register_entrypoint(entrypoint_factory(name="a"))
    await client.register_entrypoint(entrypoint_factory(name="b"))

    assert [ep.name for ep in client.entrypoints] == ["a", "b"]
    assert len(seen) == 2


@pytest.mark.asyncio
async def test_invalid_success_body(settings, entrypoint_factory):
    client = _client(lambda request: httpx.Response(200, text="not json"), settings)

    with pytest.raises(SyncError, match="invalid response body"):
        await client.register_entrypoint(entrypoint_factory())


@pytest.mark.asyncio
async def test_success_is_logged(settings, ok_recorder, entrypoint_factory, caplog):
    client = _client(ok_recorder, settings)

    with caplog.at_level(logging.INFO, logger="raistrix.adapters.sync_client"):
        await client.register_entrypoints([entrypoint_factory(), entrypoint_factory()])

    assert "2 entrypoint(s) synced to raistrix.test" in caplog.text


@pytest.mark.asyncio
async def test_failure_is_not_logged(settings, entrypoint_factory, caplog):
    client = _client(lambda request: httpx.Response(500), settings)

    with caplog.at_level(logging.DEBUG, logger="raistrix.adapters.sync_client"):
        with pytest.raises(SyncError):
            await client.register_entrypoint(entrypoint_factory())

    assert [record for record in caplog.records if record.name.startswith("raistrix")] == []


@pytest.mark.asyncio
async def test_builds_own_client_when_none_injected(monkeypatch, settings, ok_recorder, entrypoint_factory):
    """Without an injected client one is built from settings per exchange."""
    built = []

    def fake_builder(received_settings):
        built.append(received_settings)
        return httpx.AsyncClient(transport=httpx.MockTransport(ok_recorder))

    monkeypatch.setattr(sync_client_module, "build_async_client", fake_builder)
    client = SyncClient("k", "p", settings=settings)

    await client.register_entrypoint(entrypoint_factory())
    await client.register_entrypoint(entrypoint_factory())

    assert built == [settings, settings]
    assert len(ok_recorder.requests) == 2


@pytest.mark.asyncio
async def test_redirect_loop_is_wrapped(settings, entrypoint_factory):
    """Redirects are followed; an endless loop still surfaces as SyncError."""

    def handler(request):
        return httpx.Response(307, headers={"Location": str(request.url)})

    http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler), follow_redirects=True)
    client = SyncClient("k", "p", settings=settings, http_client=http_client)

    with pytest.raises(SyncError, match="Entrypoints sync failed") as info:
        await client.register_entrypoint(entrypoint_factory())

    assert isinstance(info.value.__cause__, httpx.TooManyRedirects)


@pytest.mark.asyncio
async def test_corrupt_body_encoding_is_wrapped(settings, entrypoint_factory):
    def handler(request):
        return httpx.Response(200, headers={"Content-Encoding": "gzip"}, content=b"not gzip")

    client = _client(handler, settings)

    with pytest.raises(SyncError, match="Entrypoints sync failed") as info:
        await client.register_entrypoint(entrypoint_factory())

    assert isinstance(info.value.__cause__, httpx.DecodingError)


@pytest.mark.asyncio
async def test_malformed_base_url_is_wrapped(entrypoint_factory, ok_recorder):
    settings = AppSettings(_env_file=None, base_url="https://raistrix.test/\x01")
    client = _client(ok_recorder, settings)

    with pytest.raises(SyncError, match="Entrypoints sync failed"):
        await client.register_entrypoint(entrypoint_factory())

    assert ok_recorder.requests == []
