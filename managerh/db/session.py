"""
db/session.py
-------------
Async SQLAlchemy engine and session factory.

Design decisions:
  - The engine and session factory are built once by the application
    factory (main.create_application) and kept on app.state; nothing here
    opens a connection at import time.
  - PostgreSQL (asyncpg) pool sized for typical workloads:
      pool_size=10, max_overflow=20 → max 30 concurrent DB connections.
    SQLite (aiosqlite, used by tests) keeps SQLAlchemy's default pool.
  - pool_pre_ping=True: validates connections before checkout.
  - expire_on_commit=False: avoids lazy-load errors after commit in async
    context (attributes are already loaded, no implicit SELECT needed).
  - One request == one transaction: get_db commits once at the end and
    rolls back on any exception, so multi-step operations (e.g. clearing a
    computer's holder then deleting the employee) are all-or-nothing.
"""

from typing import AsyncIterator

from fastapi import Request
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from managerh.core.config import settings


def build_engine(database_url: str) -> AsyncEngine:
    if database_url.startswith("sqlite"):
        return create_async_engine(database_url, echo=settings.DEBUG)
    return create_async_engine(
        database_url,
        echo=settings.DEBUG,          # Log SQL in development
        pool_size=10,
        max_overflow=20,
        pool_pre_ping=True,
        pool_recycle=3600,             # Recycle connections every hour
    )


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    """
    FastAPI dependency that yields a database session bound to the
    application's session factory.
    The session is committed when the request finishes and rolled back
    on exceptions.

    Usage:
        @router.get("/example")
        async def handler(db: AsyncSession = Depends(get_db)):
            ...
    """
    session_factory = request.app.state.session_factory
    async with session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
