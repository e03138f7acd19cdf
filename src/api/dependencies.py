"""Dependency injection factories for the API."""

from functools import lru_cache
from typing import Callable

from core.config import settings
from domain.services.profile_service import ProfileService
from infrastructure.database.session import async_session_factory
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork
from infrastructure.storage.local_avatar_storage import LocalAvatarStorage


def get_uow_factory() -> Callable[[], SQLAlchemyUnitOfWork]:
    """Factory for creating Unit of Work instances."""

    def factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(async_session_factory)

    return factory


@lru_cache
def get_avatar_storage() -> LocalAvatarStorage:
    """Get avatar storage rooted at the configured upload directory."""
    return LocalAvatarStorage(
        directory=f"{settings.upload_dir.rstrip('/')}/avatars",
        url_prefix=settings.avatar_url_prefix,
    )


@lru_cache
def get_profile_service() -> ProfileService:
    """Get Profile service instance."""
    return ProfileService(
        get_uow_factory(),
        avatar_storage=get_avatar_storage(),
        avatar_max_bytes=settings.avatar_max_bytes,
    )
