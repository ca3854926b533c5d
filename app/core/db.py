from typing import AsyncGenerator

from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import NullPool

from .config import get_settings


class Base(DeclarativeBase):
    pass


def _begin_immediate(engine: AsyncEngine) -> None:
    """SQLite has no SELECT ... FOR UPDATE, so every transaction takes the
    write lock up front with BEGIN IMMEDIATE instead."""

    @event.listens_for(engine.sync_engine, "connect")
    def _disable_driver_begin(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine.sync_engine, "begin")
    def _emit_begin(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")


def build_engine(url: str, echo: bool = False) -> AsyncEngine:
    if make_url(url).get_backend_name() == "sqlite":
        engine = create_async_engine(url, echo=echo, poolclass=NullPool)
        _begin_immediate(engine)
        return engine
    # READ COMMITTED: FOR UPDATE locks matching rows only, no InnoDB gap locks
    return create_async_engine(
        url, echo=echo, pool_pre_ping=True, isolation_level="READ COMMITTED"
    )


_settings = get_settings()
engine = build_engine(_settings.database_url, echo=_settings.DB_ECHO)
SessionLocal = async_sessionmaker(engine, expire_on_commit=False, autoflush=False)


async def create_db_and_tables() -> None:
    # models must be registered on Base.metadata before create_all
    from app.models import booking  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def dispose_engine() -> None:
    await engine.dispose()


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    async with SessionLocal() as session:
        yield session
