"""
Shared fixtures.

DATABASE_URL is pointed at an in-memory SQLite database before the
application is imported, and the schema is rebuilt for every test.
"""
import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("DEFAULT_USER_ID", "user-1")

import pytest
from fastapi.testclient import TestClient

from budget_app.database import Base, SessionLocal, engine
from budget_app.main import app
from budget_app import models  # noqa: F401


@pytest.fixture(autouse=True)
def reset_schema():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def other_client():
    """Client acting as a second owner"""
    return TestClient(app, headers={"X-User-Id": "user-2"})


@pytest.fixture
def make_transaction(client):
    def _make(**overrides):
        payload = {
            "type": "expense",
            "amount": 10,
            "category": "Food & Dining",
            "date": "2024-01-15T00:00:00.000Z",
        }
        payload.update(overrides)
        response = client.post("/api/transactions", json=payload)
        assert response.status_code == 201, response.text
        return response.json()
    return _make


@pytest.fixture
def make_category(client):
    def _make(**overrides):
        payload = {"name": "Rent", "type": "expense"}
        payload.update(overrides)
        response = client.post("/api/categories", json=payload)
        assert response.status_code == 201, response.text
        return response.json()
    return _make
