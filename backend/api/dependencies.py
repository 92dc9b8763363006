"""
Dependency Injection
FastAPI dependencies for database sessions and ingestion services.
"""

import logging
from typing import Generator

from fastapi import Depends
from sqlalchemy.orm import Session

from ..db.repository import ProductRepository
from ..db.session import get_session_factory
from ..ingestion.persistence import ProductService

logger = logging.getLogger(__name__)


def get_db() -> Generator[Session, None, None]:
    """
    Get database session.

    Use as FastAPI dependency:
        @app.get("/endpoint")
        def endpoint(db: Session = Depends(get_db)):
            ...
    """
    SessionLocal = get_session_factory()
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_product_service(db: Session = Depends(get_db)) -> ProductService:
    """Get a product service bound to the request's session."""
    return ProductService(ProductRepository(db))
