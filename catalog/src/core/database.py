import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from config import settings
from core.errors import StoreTimeoutError

logger = logging.getLogger(__name__)


def build_engine(database_url: str) -> AsyncEngine:
    url = make_url(database_url)
    kwargs = {"pool_pre_ping": True}
    if url.get_backend_name() != "sqlite":
        kwargs.update(
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=settings.DB_MAX_OVERFLOW,
            pool_recycle=settings.DB_POOL_RECYCLE,
        )
    return create_async_engine(url, **kwargs)


engine = build_engine(settings.DATABASE_URL)
async_session = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@asynccontextmanager
async def get_db() -> AsyncIterator[AsyncSession]:
    """One session per request: commit on success, roll back on any error.

    The commit gets the same ``DB_QUERY_TIMEOUT`` deadline as a store call.
    """
    async with async_session() as session:
        try:
            yield session
            await _commit(session, settings.DB_QUERY_TIMEOUT)
        except BaseException:
            await session.rollback()
            raise


async def _commit(session: AsyncSession, timeout: float) -> None:
    try:
        await asyncio.wait_for(session.commit(), timeout)
    except asyncio.TimeoutError as exc:
        logger.warning("Commit timed out after %ss", timeout)
        raise StoreTimeoutError("commit", timeout) from exc
