"""Pytest configuration and fixtures."""

import os
import sys
import tempfile
from collections.abc import AsyncGenerator, Iterator
from pathlib import Path
from typing import Any

# Settings are read once at import time, so the environment is set up first
_TEST_ROOT = Path(tempfile.mkdtemp(prefix="profile-editor-tests-"))
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["DATABASE_AUTO_CREATE"] = "false"
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TEST_ROOT / 'app.db'}"
os.environ["UPLOAD_DIR"] = str(_TEST_ROOT / "uploads")

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.ext.compiler import compiles

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from infrastructure.database.models import Base


# Compile JSONB as JSON for SQLite (used in tests)
@compiles(JSONB, "sqlite")
def _compile_jsonb_sqlite(type_: Any, compiler: Any, **kw: Any) -> str:
    return "JSON"


@pytest.fixture
async def engine(tmp_path: Path) -> AsyncGenerator[AsyncEngine, None]:
    """Create a test database engine backed by a fresh SQLite file."""
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def session_factory(
    engine: AsyncEngine,
) -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    """Create session factory."""
    factory = async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    yield factory


@pytest.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """Create async test client against the module-level app."""
    from main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
def app(session_factory: async_sessionmaker[AsyncSession]) -> Iterator[FastAPI]:
    """
    Create an application wired to an isolated database.

    This app:
    - Uses a per-test SQLite database
    - Overrides the profile service to use a test Unit of Work
    - Stores avatars under the configured upload directory so they are served
    """
    from api.dependencies import get_profile_service
    from core.config import settings
    from domain.services.profile_service import ProfileService
    from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork
    from infrastructure.storage.local_avatar_storage import LocalAvatarStorage
    from main import create_app

    application = create_app()

    def test_uow_factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(session_factory)

    service = ProfileService(
        test_uow_factory,
        avatar_storage=LocalAvatarStorage(
            Path(settings.upload_dir) / "avatars", settings.avatar_url_prefix
        ),
        avatar_max_bytes=settings.avatar_max_bytes,
    )

    def override_get_profile_service() -> ProfileService:
        return service

    application.dependency_overrides[get_profile_service] = override_get_profile_service
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
async def api_client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Create test client for the isolated application."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
