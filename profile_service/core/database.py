"""
Database configuration and session management
"""

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from profile_service.config import settings

# Create async engine
engine = create_async_engine(
    settings.DATABASE_URL,
    echo=settings.DB_ECHO,
    pool_size=settings.DB_POOL_SIZE,
    max_overflow=settings.DB_MAX_OVERFLOW,
    pool_pre_ping=True,  # Verify connections before using
    pool_recycle=3600,
)

# Create async session factory
AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False,
)


def get_async_session() -> AsyncSession:
    """
    Get a standalone async database session.

    This is a context manager that should be used with 'async with':
        async with get_async_session() as db:
            manager = create_profile_manager(db)
            profiles = await manager.find_profiles("smith")

    Note: Caller is responsible for committing/rolling back.
    """
    return AsyncSessionLocal()
