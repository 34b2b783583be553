from .record import RecordModel
from .user import UserModel

__all__ = [
    "RecordModel",
    "UserModel",
]
