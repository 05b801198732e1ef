from __future__ import annotations

import logging

import asyncpg

from .settings import Settings

logger = logging.getLogger(__name__)


# PUBLIC_INTERFACE
async def create_pool(settings: Settings) -> asyncpg.Pool:
    """
    Open a bounded asyncpg connection pool for DATABASE_URL and verify the
    database answers ``SELECT 1`` before returning it.

    Raises:
        ConfigurationError if DATABASE_URL is not set.
        asyncpg / OSError exceptions if the database cannot be reached; the pool
        is closed before the error propagates.
    """
    dsn = settings.require_database_url()
    pool = await asyncpg.create_pool(
        dsn,
        min_size=settings.db_pool_min_size,
        max_size=settings.db_pool_max_size,
    )
    try:
        await pool.fetchval("SELECT 1")
    except Exception:
        await pool.close()
        raise
    logger.info(
        "Database pool ready (min_size=%d, max_size=%d)",
        settings.db_pool_min_size,
        settings.db_pool_max_size,
    )
    return pool


# PUBLIC_INTERFACE
async def close_pool(pool: asyncpg.Pool) -> None:
    """Close all pool connections."""
    await pool.close()
    logger.info("Database pool closed")
