"""Domain entity — pure Python business object for server-side record storage."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any


@dataclass
class StoredRecord:
    """A persisted record of one catalog entity type.

    Every entity (events, users, media, …) shares the same storage shape:
    the entity type plus a JSON object of field values. ``id`` is assigned
    by the database on insert.
    """

    entity_type: str
    data: dict[str, Any]
    id: int | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def update(self, changes: dict[str, Any]) -> None:
        """Merge changed fields and refresh the updated_at timestamp."""
        self.data = {**self.data, **changes}
        self.updated_at = datetime.now(timezone.utc)

    def to_payload(self, hidden: frozenset[str] = frozenset()) -> dict[str, Any]:
        """Flatten into the API's JSON shape, dropping hidden keys."""
        payload = {k: v for k, v in self.data.items() if k not in hidden}
        payload["id"] = self.id
        return payload
