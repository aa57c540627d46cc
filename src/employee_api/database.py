"""Async engine and per-request sessions."""

from collections.abc import AsyncGenerator

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from employee_api.config import Settings, get_settings

POOL_RECYCLE_SECONDS = 3600


def build_engine(settings: Settings) -> AsyncEngine:
    """Create the application's connection pool.

    SQL echo stays off regardless of debug mode; statements carry personal
    data and password hashes.
    """
    return create_async_engine(
        settings.async_database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
        pool_pre_ping=True,
        pool_recycle=POOL_RECYCLE_SECONDS,
        echo=False,
    )


engine = build_engine(get_settings())

# Objects stay readable after commit; services project them afterwards
async_session_maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Yield one session per request.

    Repositories commit their own unit of work. Anything still pending when
    the handler returns is committed here, and a database error rolls the
    session back before propagating.
    """
    async with async_session_maker() as session:
        try:
            yield session
            await session.commit()
        except SQLAlchemyError:
            await session.rollback()
            raise
