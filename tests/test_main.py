import importlib

from fastapi.testclient import TestClient

from app.core.config import settings
from app.core.database import get_db


def test_root_reports_app_info(client):
    response = client.get("/")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"
    assert response.json()["app_name"] == settings.app_name


def test_health_check(client):
    body = client.get("/health").json()

    assert body["status"] == "healthy"
    assert "timestamp" in body


def test_validation_errors_are_summarised(client, auth_headers):
    response = client.post("/api/vehicles", json={"brand": "Toyota"}, headers=auth_headers)

    assert response.status_code == 422
    body = response.json()
    assert body["detail"] == "Validation Error"
    assert any("type" in message for message in body["errors"])


def test_global_rate_limit_applies_to_api_routes(client, monkeypatch):
    monkeypatch.setattr(settings, "RATE_LIMIT_ENABLED", True)

    statuses = [client.get("/api/vehicles").status_code for _ in range(settings.RATE_LIMIT_REQUESTS + 1)]

    assert statuses[:-1] == [200] * settings.RATE_LIMIT_REQUESTS
    assert statuses[-1] == 429


def test_api_prefix_is_configurable(monkeypatch, session_factory, admin):
    import main

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    default_prefix = settings.API_PREFIX
    monkeypatch.setattr(settings, "API_PREFIX", "")
    root_app = importlib.reload(main).app
    try:
        root_app.dependency_overrides[get_db] = override_get_db
        root_client = TestClient(root_app)

        assert root_client.get("/vehicles").status_code == 200
        assert root_client.post("/auth/login", json={"username": "admin", "password": "wrong-pass"}).status_code == 401
        assert root_client.get("/api/vehicles").status_code == 404
    finally:
        monkeypatch.setattr(settings, "API_PREFIX", default_prefix)
        importlib.reload(main)
