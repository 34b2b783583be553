"""Abstract repository interface (port) for StoredRecord persistence."""

from abc import ABC, abstractmethod

from churchapp.domain.entities import StoredRecord


class RecordRepository(ABC):
    """Port for record persistence — implemented in the infrastructure layer."""

    @abstractmethod
    async def get_by_id(self, entity_type: str, record_id: int) -> StoredRecord | None:
        """Retrieve a single record of the given entity type."""
        ...

    @abstractmethod
    async def get_all(self, entity_type: str) -> list[StoredRecord]:
        """Retrieve every record of an entity type, oldest first."""
        ...

    @abstractmethod
    async def create(self, record: StoredRecord) -> StoredRecord:
        """Persist a new record and return it with its assigned id."""
        ...

    @abstractmethod
    async def update(self, record: StoredRecord) -> StoredRecord:
        """Update an existing record."""
        ...

    @abstractmethod
    async def delete(self, entity_type: str, record_id: int) -> bool:
        """Delete a record. Returns True if deleted, False if not found."""
        ...
