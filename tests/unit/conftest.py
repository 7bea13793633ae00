"""Shared fixtures for unit tests."""

from datetime import datetime
from typing import Any
from unittest.mock import AsyncMock

import pytest

from domain.entities.user import Gender, User

FIXED_NOW = datetime(2024, 9, 13, 12, 0, 0)


class FakeUnitOfWork:
    """Fake Unit of Work with a mocked user repository for unit testing."""

    def __init__(self) -> None:
        self.users = AsyncMock()
        self.committed = False
        self.rolled_back = False
        self.entered = 0

    async def commit(self) -> None:
        self.committed = True

    async def rollback(self) -> None:
        self.rolled_back = True

    async def __aenter__(self) -> "FakeUnitOfWork":
        self.entered += 1
        return self

    async def __aexit__(self, exc_type: Any, *args: Any) -> None:
        if exc_type:
            await self.rollback()


class FakePasswordHasher:
    """Deterministic stand-in for bcrypt that records how often it ran."""

    def __init__(self) -> None:
        self.hash_calls = 0
        self.verify_calls = 0
        self.dummy_calls = 0

    def hash(self, password: str) -> str:
        self.hash_calls += 1
        return f"hashed::{password}"

    def verify(self, password: str, hashed: str) -> bool:
        self.verify_calls += 1
        return hashed == f"hashed::{password}"

    def dummy_verify(self, password: str) -> bool:
        self.dummy_calls += 1
        return False


@pytest.fixture
def uow() -> FakeUnitOfWork:
    """Create a fresh FakeUnitOfWork."""
    return FakeUnitOfWork()


@pytest.fixture
def hasher() -> FakePasswordHasher:
    return FakePasswordHasher()


@pytest.fixture
def stored_user() -> User:
    """A user as the repository returns it (no password hash)."""
    return User(
        email="test@example.com",
        nickname="테스트유저",
        birth_date="20030913",
        gender=Gender.FEMALE,
        bio="hello",
        created_at=datetime(2024, 9, 1, 8, 30, 0),
    )
