"""Integration tests for the SQLAlchemy profile repository."""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from core.exceptions import VersionConflictError
from infrastructure.database.repositories.sqlalchemy_profile_repo import (
    SQLAlchemyProfileRepository,
)
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork
from tests.factories import make_profile


@pytest.fixture
async def stored(session_factory: async_sessionmaker[AsyncSession]) -> None:
    async with SQLAlchemyUnitOfWork(session_factory) as uow:
        await uow.profiles.create(make_profile(version=1))
        await uow.commit()


@pytest.mark.asyncio
async def test_get_empty(session_factory: async_sessionmaker[AsyncSession]):
    async with session_factory() as session:
        assert await SQLAlchemyProfileRepository(session).get() is None


@pytest.mark.asyncio
async def test_create_round_trips_json_columns(
    session_factory: async_sessionmaker[AsyncSession], stored: None
):
    async with session_factory() as session:
        profile = await SQLAlchemyProfileRepository(session).get()

    assert profile is not None
    assert profile.version == 1
    assert profile.skills == ["math", "poetry"]
    assert profile.social_links.github == "https://github.com/ada"


@pytest.mark.asyncio
async def test_conditional_update_bumps_version(
    session_factory: async_sessionmaker[AsyncSession], stored: None
):
    async with SQLAlchemyUnitOfWork(session_factory) as uow:
        updated = await uow.profiles.update_if_version(make_profile(version=2, name="B"), 1)
        await uow.commit()

    assert updated is not None
    assert updated.version == 2
    assert updated.name == "B"


@pytest.mark.asyncio
async def test_conditional_update_rejects_stale_version(
    session_factory: async_sessionmaker[AsyncSession], stored: None
):
    async with SQLAlchemyUnitOfWork(session_factory) as uow:
        assert await uow.profiles.update_if_version(make_profile(version=2), 1) is not None
        await uow.commit()

    async with SQLAlchemyUnitOfWork(session_factory) as uow:
        result = await uow.profiles.update_if_version(make_profile(version=2, name="Stale"), 1)
        current = await uow.profiles.get()

    assert result is None
    assert current is not None
    assert current.version == 2
    assert current.name == "Ada Lovelace"


@pytest.mark.asyncio
async def test_second_create_is_a_conflict(
    session_factory: async_sessionmaker[AsyncSession], stored: None
):
    async with SQLAlchemyUnitOfWork(session_factory) as uow:
        with pytest.raises(VersionConflictError) as exc_info:
            await uow.profiles.create(make_profile(version=1, email="other@analytical.org"))

    assert exc_info.value.current_version == 1
