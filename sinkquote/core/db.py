# sinkquote/core/db.py
from contextlib import asynccontextmanager
from typing import AsyncGenerator
import logging

from sqlalchemy import event
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker, declarative_base

from sinkquote.core.config import DATABASE_URL, DB_TYPE
from sinkquote.core.errors import QuotingError, TransactionFailure

logger = logging.getLogger(__name__)

Base = declarative_base()

# Postgres gets a pool, SQLite uses the driver default
engine_kwargs = {"echo": False, "future": True}
if DB_TYPE == "postgres":
    engine_kwargs.update(pool_size=5, max_overflow=10)

engine = create_async_engine(DATABASE_URL, **engine_kwargs)

AsyncSessionLocal = sessionmaker(
    bind=engine,
    class_=AsyncSession,
    autoflush=False,
    autocommit=False,
    expire_on_commit=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async with AsyncSessionLocal() as session:
        yield session


def enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


# SQLite foreign key enforcement (needed for line item cascades)
if DB_TYPE == "sqlite":
    event.listen(engine.sync_engine, "connect", enable_sqlite_foreign_keys)


@asynccontextmanager
async def atomic(db: AsyncSession):
    """
    Run a unit of work as one transaction.

    Commits when the block exits cleanly. Any failure rolls back everything
    written inside the block; database errors surface as TransactionFailure,
    domain errors are re-raised untouched.
    """
    try:
        yield db
        await db.commit()
    except QuotingError:
        await db.rollback()
        raise
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.exception("Transaction rolled back")
        raise TransactionFailure("Database write failed; no changes were saved") from exc


import sinkquote.models  # noqa: E402,F401


async def init_models(bind=None):
    """
    Create all tables defined in the models. Called on startup.
    """
    async with (bind or engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def dispose_engine():
    await engine.dispose()
