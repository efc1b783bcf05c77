"""
Shared fixtures.

Each test runs against a fresh in-memory SQLite database. S3 and OpenAI are
replaced with mocks through FastAPI dependency overrides.
"""

import os
from unittest.mock import MagicMock

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("JWT_SECRET", "test-secret")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.auth import create_access_token, get_password_hash
from app.core.config import settings
from app.core.database import Base, get_db
from app.core.rate_limit import FixedWindowRateLimiter
from app.models.admin import Admin
from app.services.description_generator import DescriptionGenerator, get_description_generator
from app.services.storage_service import StorageService, get_storage_service
from main import app


ADMIN_PASSWORD = "s3cret-pass"


@pytest.fixture
def engine():
    test_engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=test_engine)
    yield test_engine
    Base.metadata.drop_all(bind=test_engine)
    test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def s3_client():
    return MagicMock()


@pytest.fixture
def storage(s3_client):
    return StorageService(
        bucket_name="test-bucket",
        cloudfront_url="https://cdn.example.com",
        client=s3_client,
    )


@pytest.fixture
def generator():
    fake = MagicMock(spec=DescriptionGenerator)
    fake.generate.return_value = "A generated sales description."
    return fake


@pytest.fixture(autouse=True)
def rate_limits(monkeypatch):
    monkeypatch.setattr(settings, "RATE_LIMIT_ENABLED", False)
    FixedWindowRateLimiter.reset_all()
    yield
    FixedWindowRateLimiter.reset_all()


@pytest.fixture
def client(session_factory, storage, generator):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_storage_service] = lambda: storage
    app.dependency_overrides[get_description_generator] = lambda: generator

    yield TestClient(app)

    app.dependency_overrides.clear()


@pytest.fixture
def admin(db):
    admin = Admin(username="admin", password=get_password_hash(ADMIN_PASSWORD))
    db.add(admin)
    db.commit()
    db.refresh(admin)
    return admin


@pytest.fixture
def auth_headers(admin):
    token = create_access_token(data={"sub": str(admin.id), "username": admin.username})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def vehicle_payload():
    return {
        "type": "Car",
        "brand": "Toyota",
        "model": "Corolla",
        "color": "Blue",
        "engineSize": "1.8L",
        "year": 2022,
        "price": 21000,
    }


@pytest.fixture
def admin_password():
    return ADMIN_PASSWORD
