"""Tests for database session management."""

from sqlalchemy.ext.asyncio import AsyncSession

from profile_service.core.database import get_async_session


async def test_get_async_session_is_lazy() -> None:
    """Sessions are created without touching the database."""
    session = get_async_session()
    try:
        assert isinstance(session, AsyncSession)
        assert session.sync_session.expire_on_commit is False
    finally:
        await session.close()
