"""
Global pytest fixtures for all tests.

Includes:
- Database fixtures for integration/CRUD/service tests
- A persisted user to act as folder creator
- A folder factory for building hierarchies quickly
- FastAPI TestClient for router/API tests
"""

import os
import uuid

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

# Set test environment variables before any app imports
# This prevents Settings validation errors during test collection
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("API_ORIGIN", "http://localhost:3000")
os.environ.setdefault("AUTH_SECRET", "test_auth_secret_for_testing")

from app.db.base import Base  # noqa: E402
from app.main import app  # noqa: E402
from app.db.session import get_db_session  # noqa: E402
from app.db.models.folder import Folder  # noqa: E402
from app.db.models.media import Media  # noqa: E402
from app.auth.models import User  # noqa: E402
from app.auth.deps import current_active_user  # noqa: E402


# Database Testing Fixtures


@pytest_asyncio.fixture
async def test_engine():
    """
    Create an in-memory SQLite database engine for testing.

    Uses StaticPool to maintain single connection across async operations.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )

    # Create all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    # Drop all tables after tests
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(test_engine):
    """
    Provide a clean database session for each test.

    Each test gets a fresh session with a transaction that rolls back.
    """
    async_session_maker = async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session_maker() as session:
        yield session
        await session.rollback()  # Rollback any uncommitted changes


@pytest_asyncio.fixture
async def test_user(db_session):
    """A persisted, active user that owns the folders created in tests."""
    user = User(
        id=uuid.uuid4(),
        email="librarian@example.com",
        hashed_password="not-a-real-hash",
        is_active=True,
        is_superuser=False,
        is_verified=True,
    )
    db_session.add(user)
    await db_session.commit()
    await db_session.refresh(user)
    return user


@pytest.fixture
def make_folder(db_session, test_user):
    """
    Factory that inserts a folder row directly, bypassing the service rules.

    Slugs default to ``folder-<name>`` lowercased so tests can build
    hierarchies (including deliberately broken ones) without collisions.
    """

    async def _make(name: str, parent_id: int | None = None, **kwargs) -> Folder:
        folder = Folder(
            name=name,
            slug=kwargs.pop("slug", f"folder-{name.lower().replace(' ', '-')}"),
            parent_id=parent_id,
            created_by=test_user.id,
            **kwargs,
        )
        db_session.add(folder)
        await db_session.commit()
        await db_session.refresh(folder)
        return folder

    return _make


@pytest.fixture
def make_media(db_session, test_user):
    """Factory that attaches a media item to a folder."""

    async def _make(folder_id: int | None, title: str = "photo.jpg") -> Media:
        media = Media(
            title=title,
            file_name=title,
            mime_type="image/jpeg",
            folder_id=folder_id,
            uploaded_by=test_user.id,
        )
        db_session.add(media)
        await db_session.commit()
        await db_session.refresh(media)
        return media

    return _make


# FastAPI TestClient Fixtures


@pytest.fixture
def test_client(db_session, test_user):
    """
    FastAPI TestClient for testing API endpoints.

    Overrides app dependencies with test fixtures:
    - Database session uses in-memory SQLite
    - Current user is the persisted test user
    """

    # Create async generator override for db_session
    async def override_get_db_session():
        yield db_session

    # Override app dependencies
    app.dependency_overrides[get_db_session] = override_get_db_session
    app.dependency_overrides[current_active_user] = lambda: test_user

    client = TestClient(app)
    yield client

    # Clear dependency overrides after test
    app.dependency_overrides.clear()
