"""Database configuration and session management."""

from __future__ import annotations

from collections.abc import Generator
from typing import Any

import logging

from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from app.config import get_settings


class Base(DeclarativeBase):
    """Base class for SQLAlchemy models."""


settings = get_settings()

logger = logging.getLogger(__name__)


def _build_connect_args(database_url: str) -> dict[str, Any]:
    """Return driver specific connection arguments for ``database_url``."""

    url = make_url(database_url)
    if url.get_backend_name() == "sqlite":
        # FastAPI runs sync dependencies in a threadpool.
        return {"check_same_thread": False}
    return {}


def build_engine(database_url: str):
    """Create the SQLAlchemy engine for ``database_url``."""

    connect_args = _build_connect_args(database_url)
    logger.debug("Creating database engine for backend %s", make_url(database_url).get_backend_name())
    return create_engine(database_url, pool_pre_ping=True, connect_args=connect_args)


engine = build_engine(settings.database_url)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def initialize_database(bind=None) -> None:
    """Ensure all ORM models have corresponding database tables."""

    from app.infrastructure import models  # noqa: F401  # ensure models are imported

    Base.metadata.create_all(bind=bind or engine, checkfirst=True)


def get_db() -> Generator[Session, None, None]:
    """Yield a database session and close it afterwards."""

    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
