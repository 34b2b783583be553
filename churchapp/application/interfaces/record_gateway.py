"""Abstract record gateway interface — port for REST-backed entity access.

The list and form controllers depend only on this port; the HTTP
implementation lives in the infrastructure layer and unit tests use an
in-memory fake.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from churchapp.domain.entities import EntityConfig, EventWindow, Identifier, Record


class RecordGateway(ABC):
    """Port — the CRUD verbs one entity type exposes over the network.

    Every method makes a single attempt and raises GatewayError on failure.
    """

    @property
    @abstractmethod
    def config(self) -> EntityConfig:
        """The entity configuration this gateway serves."""
        ...

    @abstractmethod
    async def list(self) -> list[Record]:
        """Fetch the full current collection."""
        ...

    @abstractmethod
    async def search(self, params: dict[str, Any]) -> list[Record]:
        """Fetch the collection filtered server-side by ``params``."""
        ...

    @abstractmethod
    async def get(self, record_id: Identifier) -> Record:
        """Fetch one record by id."""
        ...

    @abstractmethod
    async def create(self, fields: dict[str, Any]) -> Record:
        """Create a record and return it as persisted."""
        ...

    @abstractmethod
    async def update(self, record_id: Identifier, fields: dict[str, Any]) -> Record:
        """Send changed fields for an existing record and return the result."""
        ...

    @abstractmethod
    async def delete(self, record_id: Identifier) -> Any:
        """Delete a record; returns the backend's confirmation body."""
        ...

    @abstractmethod
    async def window(self, window: EventWindow) -> list[Record]:
        """Fetch the records falling in a time window (past/current/future)."""
        ...

    @abstractmethod
    async def lookup(self, name: str, value: Identifier) -> list[Record]:
        """Fetch the records whose lookup field equals ``value``."""
        ...

    @abstractmethod
    async def transition(self, action: str, record_id: Identifier) -> Record | None:
        """Apply a named status change (e.g. confirm, decline)."""
        ...
