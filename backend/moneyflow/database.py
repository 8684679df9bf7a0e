"""
SQLAlchemy engine and session for the user store. Supports PostgreSQL and SQLite (local runs and tests).
"""
import logging
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base

from moneyflow.config import settings

logger = logging.getLogger(__name__)

_is_sqlite = "sqlite" in settings.database_url
_connect_args = {"check_same_thread": False} if _is_sqlite else {}
engine = create_engine(
    settings.database_url,
    pool_pre_ping=not _is_sqlite,
    connect_args=_connect_args,
    echo=False,  # Set True for SQL logging during development
)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def init_sqlite_db():
    """When using SQLite: create tables. Call once at app startup."""
    if not _is_sqlite:
        return
    # Import all models so they register with Base before create_all
    from moneyflow.models import user  # noqa: F401
    Base.metadata.create_all(bind=engine)
    logger.info("SQLite user store ready at %s", settings.database_url)
