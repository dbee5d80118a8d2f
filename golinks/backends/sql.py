import asyncio
import logging
from contextlib import asynccontextmanager, nullcontext
from typing import AsyncIterator, List

from sqlalchemy.exc import IntegrityError, SQLAlchemyError, TimeoutError as PoolTimeoutError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from .. import crud
from ..config import Settings
from ..database import Base, build_sessionmaker, engine_from_settings, is_memory_sqlite
from ..errors import ConflictError, NotFoundError, UnavailableError
from ..schemas import Link
from .base import LinkBackend

logger = logging.getLogger(__name__)


class SQLBackend(LinkBackend):
    """Durable backend over a relational table, one transaction per operation.

    Every operation checks one connection out of the engine's pool and returns
    it on exit, error paths included. Pool exhaustion and driver failures are
    reported as UnavailableError; nothing is retried here. An in-memory SQLite
    engine has a single shared connection, so its transactions run one at a time.
    """

    name = "sql"

    def __init__(self, engine: AsyncEngine):
        self.engine = engine
        self.sessionmaker = build_sessionmaker(engine)
        self._serial = asyncio.Lock() if is_memory_sqlite(engine.url) else None

    @classmethod
    def from_settings(cls, settings: Settings) -> "SQLBackend":
        return cls(engine_from_settings(settings))

    async def init(self) -> None:
        try:
            async with self.engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except (SQLAlchemyError, OSError) as e:
            raise UnavailableError(f"Database error: {e}") from e
        logger.info(f"Golink table ready on {self.engine.url.render_as_string(hide_password=True)}")

    async def close(self) -> None:
        await self.engine.dispose()

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[AsyncSession]:
        try:
            async with self._serial or nullcontext():
                async with self.sessionmaker() as db:
                    async with db.begin():
                        yield db
        except PoolTimeoutError as e:
            logger.warning(f"Connection pool exhausted: {e}")
            raise UnavailableError("Database connection pool exhausted") from e
        except IntegrityError:
            raise
        except (SQLAlchemyError, OSError) as e:
            logger.error(f"Database error: {e}")
            raise UnavailableError(f"Database error: {e}") from e

    async def create(self, short_link: str, url: str) -> Link:
        try:
            async with self.transaction() as db:
                link = Link.new(short_link, url)
                await crud.insert_link(db, link)
        except IntegrityError as e:
            raise ConflictError(f"Golink {short_link} already exists") from e
        return link

    async def get(self, short_link: str) -> Link:
        async with self.transaction() as db:
            record = await crud.get_link_by_short_link(db, short_link)
            if record is None:
                raise NotFoundError(f"Golink {short_link} not found")
            return Link.model_validate(record)

    async def list(self) -> List[Link]:
        async with self.transaction() as db:
            records = await crud.list_links(db)
            return [Link.model_validate(record) for record in records]

    async def update(self, short_link: str, url: str) -> Link:
        async with self.transaction() as db:
            if not await crud.update_link_url(db, short_link, url):
                raise NotFoundError(f"Golink {short_link} not found")
            record = await crud.get_link_by_short_link(db, short_link)
            return Link.model_validate(record)

    async def delete(self, short_link: str) -> None:
        async with self.transaction() as db:
            if not await crud.delete_link(db, short_link):
                raise NotFoundError(f"Golink {short_link} not found")
