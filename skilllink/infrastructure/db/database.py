"""
Database configuration and session management.
"""

import logging
from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session, declarative_base
from sqlalchemy.pool import StaticPool

from skilllink.config import settings


logger = logging.getLogger(__name__)


def _engine_options(url: str) -> dict:
    options = {"echo": False}
    if url.startswith("sqlite"):
        options["connect_args"] = {"check_same_thread": False}
        if url in ("sqlite://", "sqlite:///:memory:"):
            # One shared connection keeps the in-memory database alive
            options["poolclass"] = StaticPool
    else:
        options["pool_pre_ping"] = True
    return options


# Create SQLAlchemy engine
engine = create_engine(settings.database_url, **_engine_options(settings.database_url))

# Create SessionLocal class
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    expire_on_commit=False,
    bind=engine,
)

# Create declarative base
Base = declarative_base()


def get_db() -> Generator[Session, None, None]:
    """
    Dependency function to get database session.
    One session per request; use cases commit it.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db() -> None:
    """Create all tables that do not exist yet."""
    from skilllink.infrastructure.db import models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    logger.info("Database tables ensured")
