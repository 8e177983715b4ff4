from sqlmodel import SQLModel
from sqlalchemy import event
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from sqlmodel.ext.asyncio.session import AsyncSession
from .base import BaseDatabaseDriver


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class SQLDriver(BaseDatabaseDriver):
    def __init__(self, url: str):
        engine_kwargs = {"echo": False, "future": True}
        is_sqlite = url.startswith("sqlite")
        if is_sqlite and ":memory:" in url:
            # One shared connection, otherwise every session sees an empty database
            engine_kwargs.update(connect_args={"check_same_thread": False}, poolclass=StaticPool)
        self.engine = create_async_engine(url, **engine_kwargs)
        if is_sqlite:
            event.listen(self.engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
        self.session_factory = sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False
        )
        self._schema_ready = False

    async def connect(self):
        """Connect to database (SQLModel engine manages connections)."""
        from sqlalchemy import text
        async with self.engine.begin() as conn:
            await conn.execute(text("SELECT 1"))

    async def disconnect(self):
        """Disconnect from database."""
        await self.engine.dispose()
        self._schema_ready = False

    async def ensure_schema(self):
        """Create missing tables for every registered model (once per driver)."""
        if self._schema_ready:
            return
        async with self.engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)
        self._schema_ready = True

    def new_session(self) -> AsyncSession:
        return self.session_factory()
