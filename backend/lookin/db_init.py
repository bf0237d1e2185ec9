"""Database initialization from the SQLAlchemy models."""
import logging
from typing import List
from sqlalchemy import inspect
from lookin.database import Base, engine
from lookin import models  # noqa: F401  registers every table on Base.metadata

logger = logging.getLogger(__name__)

REQUIRED_TABLES = [
    "users",
    "profiles",
    "conversations",
    "messages",
    "room_listings",
    "safety_reports",
]


def existing_tables() -> List[str]:
    """Names of tables currently present in the database."""
    return inspect(engine).get_table_names()


def missing_tables() -> List[str]:
    present = set(existing_tables())
    return [name for name in REQUIRED_TABLES if name not in present]


def init_database() -> List[str]:
    """Create any missing tables and return the names that were created."""
    missing = missing_tables()
    if not missing:
        logger.info("Database schema is up to date")
        return []

    logger.info(f"Creating tables: {', '.join(missing)}")
    Base.metadata.create_all(bind=engine)
    logger.info("Database initialization complete")
    return missing


def drop_database():
    """Drop every table. Used by the maintenance script."""
    logger.warning("Dropping all tables")
    Base.metadata.drop_all(bind=engine)
