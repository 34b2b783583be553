"""REST gateway — implements the RecordGateway port over httpx.

One instance serves one catalog entity. Paths come from the entity's
EntityConfig, the base URL from the platform selection in
``churchapp.infrastructure.platform``.
"""

from __future__ import annotations

import logging
import time
from typing import Any

import httpx

from churchapp.application.interfaces import RecordGateway
from churchapp.domain.entities import EntityConfig, EventWindow, Identifier, Record
from churchapp.domain.exceptions import GatewayError, UnsupportedOperationError
from churchapp.infrastructure.logging.colored_logger import ExchangeLogger

logger = logging.getLogger(__name__)
exchange_log = ExchangeLogger(__name__)

# Body keys checked, in order, for a backend-supplied error message.
_MESSAGE_KEYS = ("message", "error", "detail")

_REDACTED = "***"


class HttpGateway(RecordGateway):
    """Infrastructure adapter — talks to the church REST API for one entity.

    Makes a single attempt per call. Every failure, whether the backend
    answered with a non-2xx status or no response arrived at all, is
    raised as GatewayError carrying a human-readable message.
    """

    def __init__(
        self,
        config: EntityConfig,
        base_url: str,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = 10.0,
    ):
        self._config = config
        self._base_url = base_url.rstrip("/")
        self._http_client = http_client
        self._timeout = timeout

    @property
    def config(self) -> EntityConfig:
        return self._config

    @property
    def base_url(self) -> str:
        return self._base_url

    def _get_headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    async def _get_client(self) -> httpx.AsyncClient:
        """Return the injected client or create a new one."""
        if self._http_client is not None:
            return self._http_client
        return httpx.AsyncClient(timeout=self._timeout)

    # ── CRUD ────────────────────────────────────────────────────────

    async def list(self) -> list[Record]:
        data = await self._request(
            "GET",
            self._config.list_path,
            default_message=f"Failed to fetch {self._config.plural}",
        )
        return self._to_records(data)

    async def search(self, params: dict[str, Any]) -> list[Record]:
        query = {k: v for k, v in params.items() if v not in (None, "")}
        data = await self._request(
            "GET",
            self._config.search_path,
            params=query,
            default_message=f"Failed to search {self._config.plural}",
        )
        return self._to_records(data)

    async def get(self, record_id: Identifier) -> Record:
        data = await self._request(
            "GET",
            self._config.item_path(record_id),
            default_message=f"Failed to fetch {self._config.noun}",
        )
        return self._to_record(data, {}, record_id)

    async def create(self, fields: dict[str, Any]) -> Record:
        data = await self._request(
            "POST",
            self._config.add_path,
            json=fields,
            default_message=f"Failed to add {self._config.noun}",
        )
        return self._to_record(data, fields, None)

    async def update(self, record_id: Identifier, fields: dict[str, Any]) -> Record:
        data = await self._request(
            "PUT",
            self._config.edit_path(record_id),
            json=fields,
            default_message=f"Failed to update {self._config.noun}",
        )
        return self._to_record(data, fields, record_id)

    async def delete(self, record_id: Identifier) -> Any:
        return await self._request(
            "DELETE",
            self._config.item_path(record_id),
            default_message=f"Failed to delete {self._config.noun}",
        )

    # ── Entity-specific reads and status changes ────────────────────

    async def window(self, window: EventWindow) -> list[Record]:
        if window not in self._config.windows:
            raise UnsupportedOperationError(self._config.label, window.value)
        data = await self._request(
            "GET",
            self._config.window_path(window),
            default_message=f"Failed to fetch {window.value.replace('_', ' and ')} {self._config.plural}",
        )
        return self._to_records(data)

    async def lookup(self, name: str, value: Identifier) -> list[Record]:
        if name not in self._config.lookups:
            raise UnsupportedOperationError(self._config.label, name)
        data = await self._request(
            "GET",
            self._config.lookup_path(name, value),
            default_message=f"Failed to fetch {self._config.plural}",
        )
        return self._to_records(data)

    async def transition(self, action: str, record_id: Identifier) -> Record | None:
        if action not in self._config.transitions:
            raise UnsupportedOperationError(self._config.label, action)
        data = await self._request(
            "POST",
            self._config.transition_path(action, record_id),
            default_message=f"Failed to {action} {self._config.noun}",
        )
        if isinstance(data, dict):
            return self._to_record(data, {}, record_id)
        return None

    # ── Transport ───────────────────────────────────────────────────

    async def _request(
        self,
        method: str,
        path: str,
        *,
        default_message: str,
        json: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """Perform one exchange and return the decoded JSON body (None if empty)."""
        url = f"{self._base_url}{path}"
        client = await self._get_client()
        should_close = self._http_client is None

        exchange_log.request(
            method, url, params=self._redact(params) or None, body=self._redact(json)
        )
        start = time.perf_counter()
        try:
            try:
                response = await client.request(
                    method, url, headers=self._get_headers(), json=json, params=params
                )
            except httpx.HTTPError as e:
                exchange_log.failure(
                    method, url, message=default_message, error=e,
                    elapsed=time.perf_counter() - start,
                )
                raise GatewayError(self._config.name, None, default_message) from e

            elapsed = time.perf_counter() - start
            if not response.is_success:
                message = self._extract_message(response) or default_message
                exchange_log.failure(
                    method, url, status_code=response.status_code,
                    message=message, elapsed=elapsed,
                )
                raise GatewayError(self._config.name, response.status_code, message)

            exchange_log.response(method, url, response.status_code, elapsed)
            if not response.content:
                return None
            try:
                return response.json()
            except ValueError as e:
                logger.warning("Undecodable response body from %s %s", method, url)
                raise GatewayError(self._config.name, None, default_message) from e

        finally:
            if should_close:
                await client.aclose()

    def _redact(self, values: dict[str, Any] | None) -> dict[str, Any] | None:
        """Copy of ``values`` safe to log: secret fields are masked."""
        if not values:
            return values
        return {
            key: _REDACTED if key in self._config.secret_fields else value
            for key, value in values.items()
        }

    @staticmethod
    def _extract_message(response: httpx.Response) -> str | None:
        """Pull the backend's error message out of a non-2xx response."""
        try:
            data = response.json()
        except ValueError:
            return None
        if isinstance(data, str):
            return data or None
        if not isinstance(data, dict):
            return None
        for key in _MESSAGE_KEYS:
            value = data.get(key)
            if isinstance(value, str) and value:
                return value
        return None

    def _to_records(self, data: Any) -> list[Record]:
        """Decode a collection body: a bare array, or an object wrapping one under ``data``."""
        if isinstance(data, dict) and isinstance(data.get("data"), list):
            data = data["data"]
        if data is None:
            return []
        if not isinstance(data, list):
            raise GatewayError(
                self._config.name, None, f"Failed to fetch {self._config.plural}"
            )
        return [Record.from_payload(item) for item in data if isinstance(item, dict)]

    @staticmethod
    def _to_record(
        data: Any, fallback_fields: dict[str, Any], record_id: Identifier | None
    ) -> Record:
        """Decode a single-record body.

        Mutation endpoints sometimes answer with a bare confirmation
        message; the submitted fields then stand in for the record.
        """
        if isinstance(data, dict) and isinstance(data.get("data"), dict):
            data = data["data"]
        if isinstance(data, dict) and "id" in data:
            return Record.from_payload(data)
        return Record(fields=dict(fallback_fields), id=record_id)
