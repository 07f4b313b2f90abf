import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from cartelera.core.config import Settings
from cartelera.models.listing import listings_table


log = logging.getLogger(__name__)

# driver failures that are not wrapped in SQLAlchemyError (refused, TLS, connect timeout)
CONNECTION_ERRORS = (OSError, asyncio.TimeoutError)


class StoreUnavailableError(RuntimeError):
    """The one-shot connection attempt failed; the store is not used by this process."""


class Database:
    """
    Process-wide store handle.

    The first connect() performs a single round trip and caches the outcome.
    Every later caller gets the same result: a ready session factory, or the
    same StoreUnavailableError. No reconnection is attempted.
    """

    def __init__(self, settings: Settings) -> None:
        self.url = settings.sqlalchemy_url
        self.engine = create_async_engine(
            self.url,
            future=True,
            pool_pre_ping=True,
            connect_args=settings.connect_args(),
        )
        self.session_factory = async_sessionmaker(bind=self.engine, expire_on_commit=False, class_=AsyncSession)
        self.listings = listings_table(settings.listings_table)

        self._lock = asyncio.Lock()
        self._attempted = False
        self._failure: str | None = None

    @property
    def state(self) -> str:
        if not self._attempted:
            return "pending"
        return "unavailable" if self._failure is not None else "ready"

    async def connect(self) -> None:
        async with self._lock:
            if not self._attempted:
                self._attempted = True
                try:
                    async with self.engine.connect() as conn:
                        await conn.execute(text("SELECT 1"))
                except (SQLAlchemyError, *CONNECTION_ERRORS) as e:
                    reason = getattr(e, "orig", None) or e
                    self._failure = str(reason)
                    log.error("store connection failed host=%s db=%s: %s", self.url.host, self.url.database, reason)
                else:
                    log.info("store connected host=%s db=%s", self.url.host, self.url.database)

        if self._failure is not None:
            raise StoreUnavailableError(self._failure)

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        await self.connect()
        async with self.session_factory() as session:
            yield session

    async def dispose(self) -> None:
        await self.engine.dispose()


def get_database(request: Request) -> Database:
    return request.app.state.database
