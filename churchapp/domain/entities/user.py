"""Domain entity for the demo registration server's users table."""

from dataclasses import dataclass


@dataclass
class User:
    """A registered user — unique email, optional username."""

    email: str
    username: str | None = None
    id: int | None = None

    def update(self, username: str | None = None, email: str | None = None) -> None:
        if username is not None:
            self.username = username
        if email is not None:
            self.email = email
