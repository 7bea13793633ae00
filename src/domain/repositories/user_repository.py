"""User repository protocol."""

from typing import Any, Mapping, Protocol
from uuid import UUID

from domain.entities.user import User


class IUserRepository(Protocol):
    """Repository interface for User entities.

    Reads leave ``password_hash`` empty unless ``include_password`` is set.
    """

    async def is_email_taken(self, email: str) -> bool:
        """Check whether any user already has this email (case-insensitive)."""
        ...

    async def is_nickname_taken(self, nickname: str, exclude_id: UUID | None = None) -> bool:
        """Check whether another user already has this nickname."""
        ...

    async def create(self, user: User) -> User:
        """Insert a user. Raises DuplicateEmailError / DuplicateNicknameError."""
        ...

    async def get(self, id: UUID, include_password: bool = False) -> User | None:
        """Get a user by ID."""
        ...

    async def get_by_email(self, email: str, include_password: bool = False) -> User | None:
        """Get a user by email."""
        ...

    async def get_by_nickname(self, nickname: str) -> User | None:
        """Get a user by nickname."""
        ...

    async def update(self, id: UUID, changes: Mapping[str, Any]) -> User:
        """Apply profile changes. Raises UserNotFoundError / DuplicateNicknameError."""
        ...

    async def list_all(self) -> list[User]:
        """Get every user, newest first."""
        ...

    async def delete_all(self) -> int:
        """Delete every user and return how many were removed."""
        ...
