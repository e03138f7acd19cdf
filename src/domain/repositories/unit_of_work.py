"""Unit of Work protocol."""

from typing import Any, Protocol

from domain.repositories.profile_repository import IProfileRepository


class IUnitOfWork(Protocol):
    """Transaction boundary around the profile repository.

    Leaving the context without ``commit()`` discards the changes.
    """

    @property
    def profiles(self) -> IProfileRepository: ...

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...

    async def __aenter__(self) -> "IUnitOfWork": ...

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None: ...
