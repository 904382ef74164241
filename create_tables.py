"""
create_tables.py
----------------
Create the companies, employees, computers and revoked_sessions tables
(with their unique and check constraints) on DATABASE_URL. Tables that
already exist are left untouched.

Usage:
    python create_tables.py
"""

import asyncio
from typing import Optional

from sqlalchemy import inspect

from managerh.core.config import settings
from managerh.core.logging import configure_logging, get_logger
from managerh.db.session import build_engine
from managerh.models import Base  # Imports all models so metadata is populated

logger = get_logger(__name__)


async def create_all_tables(database_url: Optional[str] = None) -> list[str]:
    """Create missing tables and return the table names now present."""
    engine = build_engine(database_url or settings.DATABASE_URL)
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
            tables = await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names())
    finally:
        await engine.dispose()
    logger.info("Schema ready", tables=sorted(tables))
    return sorted(tables)


if __name__ == "__main__":
    configure_logging()
    asyncio.run(create_all_tables())
