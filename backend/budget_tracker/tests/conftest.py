"""
Shared fixtures: an in-memory SQLite database recreated for every test.
"""
import os

# Must be set before the application settings are imported
os.environ["DATABASE_URL"] = "sqlite://"

import pytest
from fastapi.testclient import TestClient

from budget_tracker.db.base import Base
from budget_tracker.db.session import engine, SessionLocal
from budget_tracker.main import app


@pytest.fixture(autouse=True)
def setup_database():
    """Create all tables before a test and drop them afterwards."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    """Database session for service-level tests."""
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    """HTTP client for API tests."""
    return TestClient(app)


@pytest.fixture
def project_payload():
    """Request body for a typical project."""
    return {
        "name": "Casa Escazú",
        "description": "Two-storey house",
        "total_budget_usd": "80000.00",
        "current_exchange_rate": "500.0000",
        "start_date": "2024-01-01",
        "end_date": "2024-12-31",
    }


@pytest.fixture
def activity_payload():
    """Request body for a typical activity."""
    return {
        "name": "Foundation",
        "description": "Excavation and concrete footings",
        "estimated_start_date": "2024-01-15",
        "estimated_end_date": "2024-02-28",
        "contractor": "Constructora Pérez",
        "planned_budget_usd": "20000.00",
    }
