"""
Database table creation script.

Creates all tables defined in ORM models using SQLAlchemy metadata.
On PostgreSQL the pgvector extension is enabled first.

Dependencies: sqlalchemy, chatbot_rag.configs
System role: Database schema initialization

Usage:
    python -m chatbot_rag.boundary.db.create_tables
"""

import asyncio
import logging

from sqlalchemy import text

from chatbot_rag.boundary.db.base import Base
from chatbot_rag.boundary.db.connection import get_async_engine

# Import all models to register them with Base.metadata
from chatbot_rag.boundary.db import models  # noqa: F401

logger = logging.getLogger(__name__)


async def create_all_tables() -> None:
    """
    Create all database tables from registered ORM models.

    Idempotent: CREATE TABLE IF NOT EXISTS for each model, so safe to run
    multiple times. Existing tables remain unchanged.

    Raises:
        SQLAlchemyError: If database connection fails or table creation fails
    """
    engine = get_async_engine()
    async with engine.begin() as conn:
        if conn.dialect.name == "postgresql":
            await conn.execute(text("CREATE EXTENSION IF NOT EXISTS vector"))
        await conn.run_sync(Base.metadata.create_all)
    logger.info(f"{__name__}:create_all_tables - All tables created")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(create_all_tables())
