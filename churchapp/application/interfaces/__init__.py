from .record_gateway import RecordGateway
from .record_repository import RecordRepository
from .user_repository import UserRepository

__all__ = [
    "RecordGateway",
    "RecordRepository",
    "UserRepository",
]
