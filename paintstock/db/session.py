"""Database session management.

This module provides SQLAlchemy engine and session factory configured
from paintstock.core.config settings.
"""

from __future__ import annotations

import logging

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from paintstock.core.config import get_settings
from paintstock.db.models import Base

logger = logging.getLogger(__name__)

_settings = get_settings()

_engine_kwargs: dict = {"pool_pre_ping": True, "echo": False}
if _settings.database_url.startswith("sqlite"):
    _engine_kwargs["connect_args"] = {"check_same_thread": False}
    if ":memory:" in _settings.database_url or _settings.database_url == "sqlite://":
        # Single shared connection so every session sees the same in-memory DB
        _engine_kwargs["poolclass"] = StaticPool

engine = create_engine(_settings.database_url, **_engine_kwargs)

# Session factory
SessionLocal = sessionmaker(
    bind=engine,
    autoflush=False,
    autocommit=False,
)


def init_db() -> None:
    """Create missing tables."""
    Base.metadata.create_all(engine)
    logger.info("db_initialized", extra={"tables": sorted(Base.metadata.tables)})
