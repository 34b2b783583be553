"""Application service (use case) for the demo registration server."""

from churchapp.application.interfaces import UserRepository
from churchapp.application.schemas import UserRegister, UserUpdate
from churchapp.domain.entities import User
from churchapp.domain.exceptions import DuplicateEntityError, EntityNotFoundError

SORTABLE_FIELDS = ("username", "email")


class InvalidSortError(ValueError):
    """Raised when users are requested sorted by an unsupported column."""

    def __init__(self, sort_by: str):
        self.sort_by = sort_by
        super().__init__("Invalid sort parameter")


class UserService:
    """Orchestrates user registration logic. Depends on the repository port (DI)."""

    def __init__(self, repository: UserRepository):
        self._repository = repository

    async def get_user(self, user_id: int) -> User:
        user = await self._repository.get_by_id(user_id)
        if user is None:
            raise EntityNotFoundError("User", user_id)
        return user

    async def list_users(self, sort_by: str | None = None) -> list[User]:
        if sort_by and sort_by not in SORTABLE_FIELDS:
            raise InvalidSortError(sort_by)
        return await self._repository.get_all(sort_by=sort_by or None)

    async def register(self, data: UserRegister) -> User:
        if await self._repository.get_by_email(data.email) is not None:
            raise DuplicateEntityError("User", "email", data.email)
        return await self._repository.create(User(username=data.username, email=data.email))

    async def update_user(self, user_id: int, data: UserUpdate) -> User:
        user = await self.get_user(user_id)
        if data.email is not None and data.email != user.email:
            if await self._repository.get_by_email(data.email) is not None:
                raise DuplicateEntityError("User", "email", data.email)
        user.update(username=data.username, email=data.email)
        return await self._repository.update(user)

    async def delete_user(self, user_id: int) -> bool:
        exists = await self._repository.get_by_id(user_id)
        if exists is None:
            raise EntityNotFoundError("User", user_id)
        return await self._repository.delete(user_id)
