# core/db.py
from typing import AsyncGenerator, Generator

from sqlalchemy import event
from sqlalchemy.pool import StaticPool
from sqlalchemy.ext.asyncio import create_async_engine
from sqlmodel import SQLModel, Session, create_engine
from sqlmodel.ext.asyncio.session import AsyncSession
from contextlib import contextmanager

from core.settings import settings

# export environment variables
DATABASE_URL = settings.DATABASE_URL

# Sync engine, used at startup for schema creation and seeding
engine = create_engine(
    DATABASE_URL,
    echo=False,
    pool_pre_ping=True,
    poolclass=StaticPool,
    connect_args={
        "check_same_thread": False,
        "timeout": 20,  # 20s timeout for database locks
    },
)

# Async engine serving requests - sqlite:// becomes sqlite+aiosqlite://
async_database_url = DATABASE_URL.replace("sqlite://", "sqlite+aiosqlite://")
async_engine = create_async_engine(
    async_database_url,
    echo=False,
    pool_pre_ping=True,
    poolclass=StaticPool,
    connect_args={
        "check_same_thread": False,
        "timeout": 20,
    },
)

def _enable_foreign_keys(dbapi_connection, connection_record):
    # Off by default on every new SQLite connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()

event.listen(engine, "connect", _enable_foreign_keys)
event.listen(async_engine.sync_engine, "connect", _enable_foreign_keys)

def init_db():
    """Create database tables (sync)"""
    SQLModel.metadata.create_all(engine)

def reset_db():
    """Drop and recreate every table (sync)"""
    SQLModel.metadata.drop_all(engine)
    SQLModel.metadata.create_all(engine)

@contextmanager
def get_sync_session() -> Generator[Session, None, None]:
    """Context manager for sync database operations"""
    with Session(engine) as session:
        try:
            yield session
        except Exception:
            session.rollback()
            raise

# Async session management
async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """Dependency for FastAPI async endpoints, one unit of work per request"""
    async with AsyncSession(async_engine, expire_on_commit=False) as session:
        yield session

