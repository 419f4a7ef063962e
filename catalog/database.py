"""
Database connection and session management.
Uses SQLAlchemy; any dialect reachable through DATABASE_URL works.
"""
from __future__ import annotations

import logging

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from .config import settings

logger = logging.getLogger(__name__)

Base = declarative_base()


def make_engine(url: str | None = None) -> Engine:
    url = url or settings.database_url
    if url.startswith("sqlite"):
        if url == "sqlite://" or ":memory:" in url:
            # single shared connection, otherwise every session sees an empty database
            return create_engine(url, connect_args={"check_same_thread": False}, poolclass=StaticPool)
        return create_engine(url, connect_args={"check_same_thread": False})
    return create_engine(url, pool_pre_ping=True)


def make_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)


def create_schema(engine: Engine) -> None:
    from . import record_store  # noqa: F401  registers the ORM table

    logger.info("Ensuring database schema on %s", engine.url.render_as_string(hide_password=True))
    Base.metadata.create_all(bind=engine)
