"""Abstract repository interface (port) for the demo server's users table."""

from abc import ABC, abstractmethod

from churchapp.domain.entities import User


class UserRepository(ABC):
    """Port for user persistence — implemented in the infrastructure layer."""

    @abstractmethod
    async def get_by_id(self, user_id: int) -> User | None:
        ...

    @abstractmethod
    async def get_by_email(self, email: str) -> User | None:
        ...

    @abstractmethod
    async def get_all(self, sort_by: str | None = None) -> list[User]:
        """Retrieve all users, optionally ordered by username or email."""
        ...

    @abstractmethod
    async def create(self, user: User) -> User:
        ...

    @abstractmethod
    async def update(self, user: User) -> User:
        ...

    @abstractmethod
    async def delete(self, user_id: int) -> bool:
        """Delete a user. Returns True if deleted, False if not found."""
        ...
