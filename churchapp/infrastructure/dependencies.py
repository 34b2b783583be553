"""FastAPI dependency injection — wires infrastructure to application layer."""

from collections.abc import AsyncGenerator, Callable

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from churchapp.application.services import RecordService, UserService
from churchapp.domain.entities import EntityConfig
from churchapp.infrastructure.database.session import get_db_session
from churchapp.infrastructure.database.repositories import (
    SQLAlchemyRecordRepository,
    SQLAlchemyUserRepository,
)


async def get_user_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[UserService, None]:
    """Provides a UserService instance with its repository wired up."""
    repository = SQLAlchemyUserRepository(session)
    yield UserService(repository)


def record_service_provider(
    config: EntityConfig,
) -> Callable[..., AsyncGenerator[RecordService, None]]:
    """Build the dependency that provides a RecordService bound to ``config``."""

    async def get_record_service(
        session: AsyncSession = Depends(get_db_session),
    ) -> AsyncGenerator[RecordService, None]:
        repository = SQLAlchemyRecordRepository(session)
        yield RecordService(repository, config)

    return get_record_service
