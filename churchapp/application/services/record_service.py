"""Application service (use case) for catalog entity records on the server."""

import hashlib
import logging
import secrets
from datetime import date
from typing import Any

from churchapp.application.interfaces import RecordRepository
from churchapp.domain.entities import EntityConfig, EventWindow, StoredRecord
from churchapp.domain.exceptions import (
    DuplicateEntityError,
    EntityNotFoundError,
    InvalidTransitionError,
    RecordValidationError,
    UnsupportedOperationError,
)
from churchapp.domain.validation import coerce_fields, parse_date, validate_fields

logger = logging.getLogger(__name__)

_HASH_ITERATIONS = 240_000


def hash_secret(value: str, *, salt: bytes | None = None) -> str:
    """PBKDF2-SHA256 hash in ``pbkdf2_sha256$iterations$salt$digest`` form."""
    salt = salt or secrets.token_bytes(16)
    digest = hashlib.pbkdf2_hmac("sha256", value.encode("utf-8"), salt, _HASH_ITERATIONS)
    return f"pbkdf2_sha256${_HASH_ITERATIONS}${salt.hex()}${digest.hex()}"


def verify_secret(value: str, hashed: str) -> bool:
    try:
        _, iterations, salt_hex, digest_hex = hashed.split("$")
    except ValueError:
        return False
    digest = hashlib.pbkdf2_hmac(
        "sha256", value.encode("utf-8"), bytes.fromhex(salt_hex), int(iterations)
    )
    return secrets.compare_digest(digest.hex(), digest_hex)


class RecordService:
    """Orchestrates CRUD, search and status logic for one entity type.

    Depends on the repository port (DI); the EntityConfig supplies the
    field rules, unique and secret fields, windows, lookups and transitions.
    """

    def __init__(self, repository: RecordRepository, config: EntityConfig):
        self._repository = repository
        self._config = config

    @property
    def config(self) -> EntityConfig:
        return self._config

    def present(self, record: StoredRecord) -> dict[str, Any]:
        """API representation — secret fields and their hashes never leave the server."""
        hidden = frozenset(self._config.secret_fields) | frozenset(
            f"{name}_hash" for name in self._config.secret_fields
        )
        return record.to_payload(hidden=hidden)

    async def get_record(self, record_id: int) -> StoredRecord:
        record = await self._repository.get_by_id(self._config.name, record_id)
        if record is None:
            raise EntityNotFoundError(self._config.label, record_id)
        return record

    async def list_records(self) -> list[StoredRecord]:
        return await self._repository.get_all(self._config.name)

    async def search_records(self, params: dict[str, str]) -> list[StoredRecord]:
        """Filter by free text, per-field substrings and a date range.

        ``text`` matches any search field; a param named after a field
        matches that field; ``start_date``/``end_date`` bound the window
        field. Unknown params are ignored.
        """
        text = (params.get("text") or "").strip().casefold()
        field_terms = {
            name: value.strip().casefold()
            for name, value in params.items()
            if name in self._config.field_names and value and value.strip()
        }
        start = parse_date(params["start_date"]) if params.get("start_date") else None
        end = parse_date(params["end_date"]) if params.get("end_date") else None

        def matches(record: StoredRecord) -> bool:
            data = record.data
            if text and not any(
                text in str(data.get(name, "")).casefold()
                for name in (self._config.search_fields or self._config.field_names)
            ):
                return False
            for name, term in field_terms.items():
                if term not in str(data.get(name, "")).casefold():
                    return False
            if (start or end) and self._config.window_field:
                value = parse_date(data.get(self._config.window_field))
                if value is None:
                    return False
                if start and value < start:
                    return False
                if end and value > end:
                    return False
            return True

        return [r for r in await self.list_records() if matches(r)]

    async def records_in_window(
        self, window: EventWindow, today: date | None = None
    ) -> list[StoredRecord]:
        if window not in self._config.windows or not self._config.window_field:
            raise UnsupportedOperationError(self._config.label, window.value)
        today = today or date.today()
        field = self._config.window_field

        selected = []
        for record in await self.list_records():
            value = parse_date(record.data.get(field))
            if value is not None and window.contains(value, today):
                selected.append(record)
        return selected

    async def lookup_records(self, name: str, value: str) -> list[StoredRecord]:
        field = self._config.lookups.get(name)
        if field is None:
            raise UnsupportedOperationError(self._config.label, name)
        wanted = value.strip().casefold()
        return [
            r for r in await self.list_records()
            if str(r.data.get(field, "")).casefold() == wanted
        ]

    async def create_record(self, values: dict[str, Any]) -> StoredRecord:
        errors = validate_fields(self._config, values, creating=True)
        if errors:
            raise RecordValidationError(self._config.label, errors)

        payload = coerce_fields(self._config, values)
        await self._ensure_unique(payload)
        record = StoredRecord(entity_type=self._config.name, data=self._protect(payload))
        created = await self._repository.create(record)
        logger.info("Created %s id=%s", self._config.noun, created.id)
        return created

    async def update_record(self, record_id: int, values: dict[str, Any]) -> StoredRecord:
        record = await self.get_record(record_id)
        errors = validate_fields(self._config, values, creating=False, partial=True)
        if errors:
            raise RecordValidationError(self._config.label, errors)

        payload = coerce_fields(self._config, values)
        await self._ensure_unique(payload, exclude_id=record_id)
        record.update(self._protect(payload))
        return await self._repository.update(record)

    async def delete_record(self, record_id: int) -> bool:
        exists = await self._repository.get_by_id(self._config.name, record_id)
        if exists is None:
            raise EntityNotFoundError(self._config.label, record_id)
        return await self._repository.delete(self._config.name, record_id)

    async def apply_transition(self, action: str, record_id: int) -> StoredRecord:
        transition = self._config.transitions.get(action)
        if transition is None:
            raise UnsupportedOperationError(self._config.label, action)
        record = await self.get_record(record_id)
        current = record.data.get(transition.field)
        if not transition.allowed_from(current):
            raise InvalidTransitionError(self._config.noun, action, current)
        record.update({transition.field: transition.value})
        logger.info("%s id=%s → %s", self._config.label, record_id, transition.value)
        return await self._repository.update(record)

    async def _ensure_unique(
        self, payload: dict[str, Any], exclude_id: int | None = None
    ) -> None:
        checks = {
            name: str(payload[name]).casefold()
            for name in self._config.unique_fields
            if payload.get(name) not in (None, "")
        }
        if not checks:
            return
        for existing in await self.list_records():
            if existing.id == exclude_id:
                continue
            for name, value in checks.items():
                if str(existing.data.get(name, "")).casefold() == value:
                    raise DuplicateEntityError(self._config.label, name, payload[name])

    def _protect(self, payload: dict[str, Any]) -> dict[str, Any]:
        """Replace secret values with their hash under ``<name>_hash``."""
        protected = dict(payload)
        for name in self._config.secret_fields:
            value = protected.pop(name, None)
            if value:
                protected[f"{name}_hash"] = hash_secret(str(value))
        return protected
