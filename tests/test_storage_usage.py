from __future__ import annotations

import httpx
import pytest

from fleet_records.account_clients.storage_usage import (
    StorageUsage,
    StorageUsageClient,
    StorageUsageError,
    StorageUsageNotConfigured,
)
from fleet_records.settings import Settings


def _settings(**overrides) -> Settings:
    values = {
        "env": "test",
        "storage_api_base_url": "https://account.example/api/v2/",
        "storage_project_id": "proj-1",
        "storage_api_key": "secret",
    }
    values.update(overrides)
    return Settings(**values)


@pytest.mark.asyncio
async def test_reports_storage_in_megabytes() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"project": {"id": "proj-1", "synthetic_storage_size": 5 * 1024 * 1024}})

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http:
        usage = await StorageUsageClient(settings=_settings(), http=http).storage_usage()

    assert usage == StorageUsage(storage_bytes=5 * 1024 * 1024, storage_mb=5.0)
    assert usage.as_wire() == {"storageMB": 5.0, "storageBytes": 5 * 1024 * 1024}
    assert str(seen[0].url) == "https://account.example/api/v2/projects/proj-1"
    assert seen[0].headers["Authorization"] == "Bearer secret"


@pytest.mark.asyncio
async def test_explicit_project_and_missing_size() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path.endswith("/projects/other")
        return httpx.Response(200, json={"project": {"id": "other"}})

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http:
        usage = await StorageUsageClient(settings=_settings(), http=http).storage_usage(
            project_id="other"
        )

    assert usage.storage_bytes == 0
    assert usage.storage_mb == 0.0


@pytest.mark.asyncio
@pytest.mark.parametrize("missing", ["storage_project_id", "storage_api_key"])
async def test_unconfigured_client_makes_no_call(missing: str) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("no request expected")

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http:
        client = StorageUsageClient(settings=_settings(**{missing: None}), http=http)
        with pytest.raises(StorageUsageNotConfigured):
            await client.storage_usage()


@pytest.mark.asyncio
async def test_upstream_error_is_reported() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, json={"message": "invalid API key"})

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http:
        with pytest.raises(StorageUsageError, match="401"):
            await StorageUsageClient(settings=_settings(), http=http).storage_usage()


@pytest.mark.asyncio
async def test_unreachable_upstream_is_reported() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http:
        with pytest.raises(StorageUsageError, match="unreachable"):
            await StorageUsageClient(settings=_settings(), http=http).storage_usage()


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body",
    [
        ["not", "an", "object"],
        {"project": {"synthetic_storage_size": "lots"}},
        {"project": "proj-1"},
    ],
)
async def test_unexpected_body_is_reported(body) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=body)

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http:
        with pytest.raises(StorageUsageError, match="unexpected body"):
            await StorageUsageClient(settings=_settings(), http=http).storage_usage()
