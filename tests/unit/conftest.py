"""Shared fixtures for unit tests."""

from typing import Any
from unittest.mock import AsyncMock

import pytest


class FakeUnitOfWork:
    """Fake Unit of Work with a profile repository mock for unit testing."""

    def __init__(self) -> None:
        self.profiles = AsyncMock()
        self.committed = False
        self.rolled_back = False

    async def commit(self) -> None:
        self.committed = True

    async def rollback(self) -> None:
        self.rolled_back = True

    async def __aenter__(self) -> "FakeUnitOfWork":
        return self

    async def __aexit__(self, *args: Any) -> None:
        pass


class FakeAvatarStorage:
    """Records saved avatars instead of touching the filesystem."""

    def __init__(self) -> None:
        self.saved: list[tuple[bytes, str]] = []
        self.deleted: list[str] = []

    async def save(self, data: bytes, filename: str) -> str:
        self.saved.append((data, filename))
        return f"/uploads/avatars/{len(self.saved)}-{filename}"

    async def delete(self, url: str) -> None:
        self.deleted.append(url)


@pytest.fixture
def uow() -> FakeUnitOfWork:
    """Create a fresh FakeUnitOfWork."""
    return FakeUnitOfWork()


@pytest.fixture
def avatars() -> FakeAvatarStorage:
    """Create a fresh FakeAvatarStorage."""
    return FakeAvatarStorage()
