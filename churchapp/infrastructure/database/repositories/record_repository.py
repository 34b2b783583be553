"""Concrete record repository backed by SQLAlchemy."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from churchapp.application.interfaces import RecordRepository
from churchapp.domain.entities import StoredRecord
from churchapp.infrastructure.database.models import RecordModel


class SQLAlchemyRecordRepository(RecordRepository):
    """Implements the RecordRepository port using SQLAlchemy async sessions."""

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: RecordModel) -> StoredRecord:
        """Map ORM model → domain entity."""
        return StoredRecord(
            id=model.id,
            entity_type=model.entity_type,
            data=dict(model.data or {}),
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    async def _get_model(self, entity_type: str, record_id: int) -> RecordModel | None:
        model = await self._session.get(RecordModel, record_id)
        if model is None or model.entity_type != entity_type:
            return None
        return model

    async def get_by_id(self, entity_type: str, record_id: int) -> StoredRecord | None:
        model = await self._get_model(entity_type, record_id)
        return self._to_entity(model) if model else None

    async def get_all(self, entity_type: str) -> list[StoredRecord]:
        stmt = (
            select(RecordModel)
            .where(RecordModel.entity_type == entity_type)
            .order_by(RecordModel.id)
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(row) for row in result.scalars().all()]

    async def create(self, record: StoredRecord) -> StoredRecord:
        model = RecordModel(entity_type=record.entity_type, data=dict(record.data))
        self._session.add(model)
        await self._session.flush()
        return self._to_entity(model)

    async def update(self, record: StoredRecord) -> StoredRecord:
        model = await self._get_model(record.entity_type, record.id)
        if model is None:
            raise ValueError(f"Record {record.id} not found in database")
        # Reassign so the JSON column is flagged dirty.
        model.data = dict(record.data)
        await self._session.flush()
        return self._to_entity(model)

    async def delete(self, entity_type: str, record_id: int) -> bool:
        model = await self._get_model(entity_type, record_id)
        if model is None:
            return False
        await self._session.delete(model)
        await self._session.flush()
        return True
