"""
Database session and engine configuration.

This file sets up the async database connection using SQLAlchemy.
"""

from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from taskhub.core.config import settings


engine = create_async_engine(
    settings.DATABASE_URL,
    echo=settings.DEBUG,  # When DEBUG=True, SQL statements are logged
    future=True,
)

async_session_maker = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,  # Keeps data accessible after commit
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Get a database session for one request.

    Everything the request writes is committed together when the endpoint
    returns, and rolled back if it raises, so a failed operation never leaves
    a partial update behind.
    """
    async with async_session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise

