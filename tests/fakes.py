"""In-memory fakes shared by the unit tests."""

from __future__ import annotations

import copy
from typing import Any

from churchapp.application.interfaces import RecordGateway, RecordRepository, UserRepository
from churchapp.domain.entities import EntityConfig, EventWindow, Record, StoredRecord, User


class FakeRecordGateway(RecordGateway):
    """In-memory fake gateway that records every call made to it."""

    def __init__(self, config: EntityConfig, records: list[Record] | None = None):
        self._config = config
        self._records = {r.id: r.copy() for r in records or []}
        self._next_id = max(self._records, default=0) + 1
        self.calls: list[tuple[Any, ...]] = []
        self.failures: dict[str, Exception] = {}

    @property
    def config(self) -> EntityConfig:
        return self._config

    def _call(self, name: str, *args: Any) -> None:
        self.calls.append((name, *args))
        if name in self.failures:
            raise self.failures[name]

    def call_names(self) -> list[str]:
        return [c[0] for c in self.calls]

    async def list(self) -> list[Record]:
        self._call("list")
        return [r.copy() for r in self._records.values()]

    async def search(self, params: dict[str, Any]) -> list[Record]:
        self._call("search", params)
        return [
            r.copy() for r in self._records.values()
            if all(str(v).lower() in str(r.get(k, "")).lower() for k, v in params.items())
        ]

    async def get(self, record_id):
        self._call("get", record_id)
        return self._records[record_id].copy()

    async def create(self, fields: dict[str, Any]) -> Record:
        self._call("create", fields)
        record = Record(fields=dict(fields), id=self._next_id)
        self._records[record.id] = record
        self._next_id += 1
        return record.copy()

    async def update(self, record_id, fields: dict[str, Any]) -> Record:
        self._call("update", record_id, fields)
        record = self._records[record_id]
        record.fields.update(fields)
        return record.copy()

    async def delete(self, record_id) -> Any:
        self._call("delete", record_id)
        self._records.pop(record_id, None)
        return {"message": "deleted"}

    async def window(self, window: EventWindow) -> list[Record]:
        self._call("window", window)
        return [r.copy() for r in self._records.values()]

    async def lookup(self, name: str, value) -> list[Record]:
        self._call("lookup", name, value)
        return [r.copy() for r in self._records.values()]

    async def transition(self, action: str, record_id):
        self._call("transition", action, record_id)
        return self._records[record_id].copy()


class FakeRecordRepository(RecordRepository):
    """In-memory fake record repository keyed by (entity_type, id)."""

    def __init__(self):
        self._records: dict[int, StoredRecord] = {}
        self._next_id = 1

    async def get_by_id(self, entity_type: str, record_id: int) -> StoredRecord | None:
        record = self._records.get(record_id)
        if record is None or record.entity_type != entity_type:
            return None
        return copy.deepcopy(record)

    async def get_all(self, entity_type: str) -> list[StoredRecord]:
        return [copy.deepcopy(r) for r in self._records.values() if r.entity_type == entity_type]

    async def create(self, record: StoredRecord) -> StoredRecord:
        record.id = self._next_id
        self._next_id += 1
        self._records[record.id] = copy.deepcopy(record)
        return record

    async def update(self, record: StoredRecord) -> StoredRecord:
        if record.id not in self._records:
            raise ValueError(f"Record {record.id} not found")
        self._records[record.id] = copy.deepcopy(record)
        return record

    async def delete(self, entity_type: str, record_id: int) -> bool:
        record = self._records.get(record_id)
        if record is None or record.entity_type != entity_type:
            return False
        del self._records[record_id]
        return True


class FakeUserRepository(UserRepository):
    """In-memory fake user repository."""

    def __init__(self):
        self._users: dict[int, User] = {}
        self._next_id = 1

    async def get_by_id(self, user_id: int) -> User | None:
        return self._users.get(user_id)

    async def get_by_email(self, email: str) -> User | None:
        return next((u for u in self._users.values() if u.email == email), None)

    async def get_all(self, sort_by: str | None = None) -> list[User]:
        users = list(self._users.values())
        if sort_by:
            users.sort(key=lambda u: getattr(u, sort_by) or "")
        return users

    async def create(self, user: User) -> User:
        user.id = self._next_id
        self._next_id += 1
        self._users[user.id] = user
        return user

    async def update(self, user: User) -> User:
        if user.id not in self._users:
            raise ValueError(f"User {user.id} not found")
        self._users[user.id] = user
        return user

    async def delete(self, user_id: int) -> bool:
        return self._users.pop(user_id, None) is not None
