from .record_repository import SQLAlchemyRecordRepository
from .user_repository import SQLAlchemyUserRepository

__all__ = [
    "SQLAlchemyRecordRepository",
    "SQLAlchemyUserRepository",
]
