from .record import MessageResponse, ValidationErrorResponse
from .user import UserRegister, UserUpdate, UserResponse

__all__ = [
    "MessageResponse",
    "ValidationErrorResponse",
    "UserRegister",
    "UserUpdate",
    "UserResponse",
]
