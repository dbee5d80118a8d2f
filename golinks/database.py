from typing import Any, Dict, Union

from sqlalchemy.engine import URL, make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import AsyncAdaptedQueuePool, StaticPool

from .config import Settings


class Base(DeclarativeBase):
    pass


def is_memory_sqlite(url: Union[str, URL]) -> bool:
    parsed = make_url(url)
    return parsed.get_backend_name() == "sqlite" and parsed.database in (None, "", ":memory:")


def engine_options(
    url: str,
    pool_size: int = 5,
    max_overflow: int = 10,
    pool_timeout: float = 5.0,
) -> Dict[str, Any]:
    # An in-memory SQLite database lives inside one connection
    if is_memory_sqlite(url):
        return {"poolclass": StaticPool}
    return {
        "poolclass": AsyncAdaptedQueuePool,
        "pool_size": pool_size,
        "max_overflow": max_overflow,
        "pool_timeout": pool_timeout,
    }


def build_engine(
    url: str,
    pool_size: int = 5,
    max_overflow: int = 10,
    pool_timeout: float = 5.0,
    echo: bool = False,
) -> AsyncEngine:
    return create_async_engine(
        url,
        echo=echo,
        **engine_options(url, pool_size, max_overflow, pool_timeout),
    )


def engine_from_settings(settings: Settings) -> AsyncEngine:
    return build_engine(
        settings.DATABASE_URL,
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
        pool_timeout=settings.DB_POOL_TIMEOUT,
        echo=settings.ENVIRONMENT == "development",
    )


def build_sessionmaker(engine: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
