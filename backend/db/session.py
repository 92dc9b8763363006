"""
Database Session
Provides the engine and session factory for the API, Celery tasks and scripts.
"""

import logging

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from ..config.settings import get_settings
from .models import Base

logger = logging.getLogger(__name__)

# Created lazily so importing this module never opens a connection
_engine = None
_SessionLocal = None


def get_db_engine() -> Engine:
    """Get database engine (singleton)."""
    global _engine
    if _engine is None:
        settings = get_settings()
        options = {"echo": settings.db_echo, "pool_pre_ping": True}
        if not settings.database_url.startswith("sqlite"):
            options["pool_size"] = settings.db_pool_size
            options["max_overflow"] = settings.db_max_overflow
        _engine = create_engine(settings.database_url, **options)
        logger.info(f"Database engine created: {_engine.url.render_as_string(hide_password=True)}")
    return _engine


def get_session_factory() -> sessionmaker:
    """Get database session factory (singleton)."""
    global _SessionLocal
    if _SessionLocal is None:
        _SessionLocal = sessionmaker(autoflush=False, bind=get_db_engine())
        logger.info("Database session factory created")
    return _SessionLocal


def init_db(engine: Engine = None) -> None:
    """Create missing tables (products, unique name index, price check)."""
    engine = engine or get_db_engine()
    Base.metadata.create_all(bind=engine)
    logger.info("Database schema ensured")


def reset_engine() -> None:
    """Dispose the engine and forget the session factory (useful for testing)."""
    global _engine, _SessionLocal
    if _engine is not None:
        _engine.dispose()
    _engine = None
    _SessionLocal = None
