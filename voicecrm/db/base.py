"""
Database Base Module
Provides database session management and initialization
"""

import os
from typing import Generator
from sqlalchemy import create_engine, event
from sqlalchemy.engine import make_url
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from voicecrm.core.config import settings
from voicecrm.core.logging import get_logger
from .models import Base

logger = get_logger(__name__)

# Global engine and session factory
_engine = None
_SessionLocal = None


def create_db_engine(db_url: str):
    """Create an engine with pool settings suited to the backend"""
    if db_url.startswith("sqlite"):
        url = make_url(db_url)
        if url.database and url.database != ":memory:":
            directory = os.path.dirname(url.database)
            if directory:
                os.makedirs(directory, exist_ok=True)

        engine = create_engine(
            db_url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
            echo=settings.debug
        )

        # Enable foreign keys for SQLite
        @event.listens_for(engine, "connect")
        def set_sqlite_pragma(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        return engine

    return create_engine(
        db_url,
        pool_size=5,
        max_overflow=10,
        pool_pre_ping=True,
        echo=settings.debug
    )


def init_database() -> None:
    """Initialize the database engine and create tables"""
    global _engine, _SessionLocal

    logger.info("Initializing database", backend=make_url(settings.database_url).get_backend_name())

    _engine = create_db_engine(settings.database_url)
    _SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=_engine)

    Base.metadata.create_all(bind=_engine)
    logger.info("Database tables created/verified")


def get_session_factory():
    """Get the session factory, initializing if needed"""
    global _SessionLocal
    if _SessionLocal is None:
        init_database()
    return _SessionLocal


def get_db() -> Generator[Session, None, None]:
    """
    Dependency that provides a database session
    For use with FastAPI's Depends()
    """
    SessionLocal = get_session_factory()
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


async def close_database() -> None:
    """Close database connections"""
    global _engine, _SessionLocal
    if _engine:
        _engine.dispose()
        _engine = None
        _SessionLocal = None
        logger.info("Database connections closed")
