import secrets
from datetime import datetime, timezone

from fastapi import Request
from sqlalchemy import event
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def new_id() -> str:
    """8 hex character record identifier."""
    return secrets.token_hex(4)


def utcnow() -> datetime:
    # SQLite has no timezone support; timestamps are stored as naive UTC
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _set_sqlite_pragmas(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.close()


class Database:
    """
    Owns the engine and session factory for one application instance.

    Built by the application factory, kept on ``app.state.database`` and
    disposed when the application shuts down.
    """

    def __init__(self, url: str, echo: bool = False):
        self.engine = create_async_engine(url, echo=echo)
        if self.engine.dialect.name == "sqlite":
            # Without this SQLite ignores ON DELETE CASCADE
            event.listen(self.engine.sync_engine, "connect", _set_sqlite_pragmas)
        self.sessionmaker = async_sessionmaker(self.engine, expire_on_commit=False)

    async def create_all(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self) -> None:
        await self.engine.dispose()


async def get_db(request: Request):
    async with request.app.state.database.sessionmaker() as session:
        yield session
