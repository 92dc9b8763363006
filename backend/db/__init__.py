"""
Database Package
ORM models, session factory and the product storage gateway.
"""

from .models import Base, Product
from .repository import ProductRepository
from .session import get_db_engine, get_session_factory, init_db

__all__ = [
    "Base",
    "Product",
    "ProductRepository",
    "get_db_engine",
    "get_session_factory",
    "init_db",
]
