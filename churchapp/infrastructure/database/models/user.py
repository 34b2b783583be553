"""SQLAlchemy ORM model for the demo server's User entity."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from churchapp.infrastructure.database.base import Base


class UserModel(Base):
    """ORM model — maps to the 'users' table."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    username: Mapped[str | None] = mapped_column(String(255), nullable=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)

    def __repr__(self) -> str:
        return f"<UserModel(id={self.id}, email='{self.email}')>"
