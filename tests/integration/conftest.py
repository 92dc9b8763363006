"""
Integration test fixtures
"""

import pytest
from fastapi.testclient import TestClient

from backend.api.dependencies import get_db
from backend.api.main import app


@pytest.fixture
def client(session_factory):
    """API client whose requests use the in-memory test database."""

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    # No lifespan: the schema comes from the engine fixture
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def upload(client):
    """POST a CSV file to an upload endpoint."""

    def _upload(content: bytes, filename="products.csv", path="/api/v1/products/upload", **form):
        return client.post(
            path,
            files={"file": (filename, content, "text/csv")},
            data=form or None,
        )

    return _upload
