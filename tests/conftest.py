"""
Pytest configuration and shared fixtures
"""

import sys
from pathlib import Path

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from backend.config.settings import reset_settings
from backend.db.models import Base, Product
from backend.db.repository import ProductRepository
from backend.ingestion.csv_processor import ProductCSVProcessor
from backend.ingestion.persistence import ProductService


@pytest.fixture(autouse=True)
def fresh_settings():
    """Drop cached settings so environment patches take effect."""
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def engine():
    """In-memory SQLite database with the products schema."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autoflush=False, bind=engine)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def repository(db_session):
    return ProductRepository(db_session)


@pytest.fixture
def product_service(repository):
    return ProductService(repository)


@pytest.fixture
def csv_processor(product_service):
    return ProductCSVProcessor(persister=product_service)


@pytest.fixture
def stored_names(db_session):
    """Return the names currently stored, sorted."""

    def _names():
        db_session.expire_all()
        return sorted(p.name for p in db_session.query(Product).all())

    return _names


@pytest.fixture
def make_csv():
    """Build a CSV buffer from lines."""

    def _make(*lines: str) -> bytes:
        return ("\n".join(lines) + "\n").encode("utf-8")

    return _make


@pytest.fixture
def sample_csv_data():
    """Sample CSV data for testing."""
    return b"""name,description,price
Pen,Blue ink,10.50
Book,,20.00
Eraser,White,1.50
"""
