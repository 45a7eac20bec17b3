"""
Store handles: one capability object per physical store kind.

Callers receive a StoreHandle from the initializer and use query/execute or the
per-entity collections without ever checking which database is behind it.
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Union
from sqlalchemy import inspect, text
from sqlalchemy.engine import URL
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool
from unitycure.config import Settings
from unitycure.database import Base
from unitycure.exceptions import TableAbsentException
from unitycure.store.collections import Collections
import unitycure.models  # noqa: F401  registers every table on Base.metadata

logger = logging.getLogger(__name__)

Params = Optional[Union[dict, list[dict]]]


class StoreHandle(ABC):
    kind: str = ""

    def __init__(self, engine: AsyncEngine):
        self.engine = engine
        self.session_factory = async_sessionmaker(engine, expire_on_commit=False)
        self.collections = Collections(self.session_factory)

    @classmethod
    @abstractmethod
    async def from_settings(cls, settings: Settings) -> "StoreHandle":
        ...

    @property
    @abstractmethod
    def location(self) -> str:
        ...

    async def query(self, sql: str, params: Params = None) -> list[dict]:
        async with self.engine.connect() as conn:
            result = await conn.execute(text(sql), params or {})
            return [dict(row) for row in result.mappings().all()]

    async def execute(self, sql: str, params: Params = None) -> int:
        """Run a write statement in its own transaction and return the rowcount."""
        async with self.engine.begin() as conn:
            result = await conn.execute(text(sql), params or {})
            return result.rowcount

    async def has_table(self, name: str) -> bool:
        async with self.engine.connect() as conn:
            return await conn.run_sync(lambda sync_conn: inspect(sync_conn).has_table(name))

    async def fetch_table(self, name: str) -> list[dict]:
        if not await self.has_table(name):
            raise TableAbsentException(name)
        return await self.query(f"SELECT * FROM {name}")

    async def ensure_schema(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.debug("Schema ensured on %s store %s", self.kind, self.location)

    async def dispose(self) -> None:
        await self.engine.dispose()


class MySQLStore(StoreHandle):
    kind = "mysql"

    def __init__(self, engine: AsyncEngine, database: str):
        super().__init__(engine)
        self.database = database

    @property
    def location(self) -> str:
        url = self.engine.url
        return f"{url.host}:{url.port}/{self.database}"

    @classmethod
    async def from_settings(cls, settings: Settings) -> "MySQLStore":
        server_url = URL.create(
            settings.db_driver,
            username=settings.db_user,
            password=settings.db_password or None,
            host=settings.db_host,
            port=settings.db_port,
        )
        connect_args = {"connect_timeout": max(1, int(settings.db_connect_timeout))}

        # Server-level connection, only used to create the database
        bootstrap = create_async_engine(
            server_url, connect_args=connect_args, isolation_level="AUTOCOMMIT", poolclass=NullPool
        )
        try:
            async with bootstrap.connect() as conn:
                name = settings.db_name.replace("`", "``")
                await conn.execute(text(f"CREATE DATABASE IF NOT EXISTS `{name}`"))
        finally:
            await bootstrap.dispose()

        engine = create_async_engine(
            server_url.set(database=settings.db_name),
            pool_size=settings.db_pool_size,
            max_overflow=0,
            pool_timeout=settings.db_pool_timeout,
            pool_pre_ping=True,
            connect_args=connect_args,
        )
        store = cls(engine, settings.db_name)
        try:
            await store.ensure_schema()
        except BaseException:
            # includes the cancellation from a connect deadline
            await engine.dispose()
            raise
        return store


class SQLiteStore(StoreHandle):
    kind = "sqlite"

    def __init__(self, engine: AsyncEngine, path: Path, read_only: bool = False):
        super().__init__(engine)
        self.path = path
        self.read_only = read_only

    @property
    def location(self) -> str:
        return str(self.path)

    @classmethod
    async def from_settings(cls, settings: Settings) -> "SQLiteStore":
        return await cls.open(settings.fallback_db_path)

    @classmethod
    async def open(cls, path: Union[str, Path]) -> "SQLiteStore":
        """Open (creating if needed) a writable store file with the full schema."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        engine = create_async_engine(f"sqlite+aiosqlite:///{path}", connect_args={"timeout": 30})
        store = cls(engine, path)
        try:
            await store.ensure_schema()
        except BaseException:
            # includes the cancellation from a connect deadline
            await engine.dispose()
            raise
        return store

    @classmethod
    def open_readonly(cls, path: Union[str, Path]) -> "SQLiteStore":
        """Attach to an existing file without creating it or touching its schema."""
        path = Path(path)
        engine = create_async_engine(
            f"sqlite+aiosqlite:///file:{path.resolve().as_posix()}?mode=ro&uri=true",
            poolclass=NullPool,
        )
        return cls(engine, path, read_only=True)
