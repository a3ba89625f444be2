"""Pytest fixtures: in-memory SQLite database and a FastAPI test client"""
import os

import pytest

# Configure before any app imports
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.database import get_db
from app.main import app
from app.models import Base

API = "/api/v1"

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db_session):
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def create_property(client):
    """Factory creating a property through the API and returning its JSON"""
    counter = {"n": 0}

    def _create(**overrides):
        counter["n"] += 1
        payload = {
            "apartmentNumber": counter["n"],
            "location": f"Main street {counter['n']}",
            "rooms": 2,
            "readinessStatus": "FURNISHED",
        }
        payload.update(overrides)
        response = client.post(f"{API}/properties", json=payload)
        assert response.status_code == 201, response.text
        return response.json()

    return _create


@pytest.fixture
def create_tenant(client, create_property):
    """Factory creating a tenant (and a property when none is given)"""
    def _create(apartment_id=None, **overrides):
        if apartment_id is None:
            apartment_id = create_property()["id"]
        payload = {
            "name": "Jane Doe",
            "apartmentId": apartment_id,
            "entryDate": "2024-01-01T00:00:00",
        }
        payload.update(overrides)
        response = client.post(f"{API}/tenants", json=payload)
        assert response.status_code == 201, response.text
        return response.json()

    return _create
