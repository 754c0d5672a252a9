"""
Pytest configuration and shared fixtures.

Database tests run against an in-memory SQLite database. The schema is
created from the SQLModel metadata, which is the source of truth for the
tables.
"""

from collections.abc import AsyncGenerator

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

import profile_service.models  # noqa: F401  (registers all tables)
from profile_service.models.user import Users

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


class StubSessionContext:
    """Session context with a fixed requester and site."""

    def __init__(self, user_id: str | None = None, site_id: str | None = None):
        self.user_id = user_id
        self.site_id = site_id

    def get_current_user_id(self) -> str | None:
        return self.user_id

    def get_current_site_id(self) -> str | None:
        return self.site_id


@pytest.fixture(scope="function")
async def engine():
    """
    Create a fresh in-memory database for each test function.

    StaticPool keeps the single in-memory connection alive for the whole
    test, otherwise every checkout would see an empty database.
    """
    test_engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    async with test_engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield test_engine

    await test_engine.dispose()


@pytest.fixture(scope="function")
async def db_session(engine) -> AsyncGenerator[AsyncSession, None]:
    """
    Create a new database session for each test.

    Creates directory users alice, bob and admin. carol is deliberately
    absent from the directory.
    """
    async_session_maker = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session_maker() as session:
        session.add(Users(user_id="alice", eid="asmith", first_name="Alice", last_name="Smith"))
        session.add(Users(user_id="bob", eid="bjones", first_name="Bob", last_name="Jones"))
        session.add(Users(user_id="admin", eid="admin", first_name="Sakai", last_name="Admin"))
        await session.commit()

        yield session

        await session.rollback()


@pytest.fixture
def session_context() -> StubSessionContext:
    """Requester bob inside site "site-1"; tests reassign user_id as needed."""
    return StubSessionContext(user_id="bob", site_id="site-1")
