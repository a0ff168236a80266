"""
fleet_records.account_clients.storage_usage

Read-only client for the hosted database account's storage figure.

Responsibilities:
- Call the account API's project endpoint with the configured API key.
- Convert the reported storage size (bytes) into megabytes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import httpx

from fleet_records.observability.logging import get_logger
from fleet_records.settings import Settings

log = get_logger(__name__)

_BYTES_PER_MB = 1024 * 1024


class StorageUsageError(Exception):
    """The account API could not be reached or answered with an error."""


class StorageUsageNotConfigured(StorageUsageError):
    pass


@dataclass(frozen=True, slots=True)
class StorageUsage:
    storage_bytes: int
    storage_mb: float

    @classmethod
    def from_bytes(cls, storage_bytes: int) -> StorageUsage:
        return cls(storage_bytes=storage_bytes, storage_mb=storage_bytes / _BYTES_PER_MB)

    def as_wire(self) -> dict[str, Any]:
        return {"storageMB": self.storage_mb, "storageBytes": self.storage_bytes}


class StorageUsageClient:
    def __init__(self, *, settings: Settings, http: httpx.AsyncClient) -> None:
        self._settings = settings
        self._http = http

    async def storage_usage(self, *, project_id: str | None = None) -> StorageUsage:
        project = project_id or self._settings.storage_project_id
        api_key = self._settings.storage_api_key
        if not project:
            raise StorageUsageNotConfigured("storage project id not configured")
        if not api_key:
            raise StorageUsageNotConfigured("storage API key not configured")

        url = f"{self._settings.storage_api_base_url.rstrip('/')}/projects/{project}"
        try:
            r = await self._http.get(
                url,
                headers={"Authorization": f"Bearer {api_key}", "Accept": "application/json"},
                timeout=self._settings.storage_timeout_s,
            )
            r.raise_for_status()
            payload = r.json()
            # A project without a reported size counts as empty.
            storage_bytes = int((payload.get("project") or {}).get("synthetic_storage_size") or 0)
        except httpx.HTTPStatusError as exc:
            log.warning(
                "storage_usage_upstream_error",
                status_code=exc.response.status_code,
                body=exc.response.text[:500],
            )
            raise StorageUsageError(
                f"account API answered {exc.response.status_code}"
            ) from exc
        except httpx.HTTPError as exc:
            log.warning("storage_usage_unreachable", error=str(exc))
            raise StorageUsageError("account API unreachable") from exc
        except (AttributeError, TypeError, ValueError) as exc:
            log.warning("storage_usage_malformed", error=str(exc))
            raise StorageUsageError("account API answered an unexpected body") from exc

        return StorageUsage.from_bytes(storage_bytes)
