from datetime import timedelta
from unittest.mock import MagicMock

import bcrypt
from jose import jwt

from app.core.auth import authenticate_admin, create_access_token, get_password_hash, verify_password
from app.core.config import settings
from app.models.admin import Admin


class TestPasswordHashing:

    def test_hash_is_salted_and_verifiable(self):
        first = get_password_hash("admin")
        second = get_password_hash("admin")

        assert first != second
        assert verify_password("admin", first)
        assert verify_password("admin", second)

    def test_wrong_password_does_not_verify(self):
        assert not verify_password("nope", get_password_hash("admin"))

    def test_non_bcrypt_hash_does_not_verify(self):
        assert not verify_password("admin", "plain-text")


class TestLogin:

    def test_login_returns_token_for_admin(self, client, admin, admin_password):
        response = client.post("/api/auth/login", json={"username": "admin", "password": admin_password})

        assert response.status_code == 200
        body = response.json()
        assert body["token_type"] == "bearer"
        assert body["user"]["id"] == str(admin.id)
        assert body["user"]["username"] == "admin"
        assert "createdAt" in body["user"]
        assert "password" not in body["user"]

        payload = jwt.decode(body["access_token"], settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
        assert payload["sub"] == str(admin.id)
        assert payload["username"] == "admin"

    def test_wrong_password_and_unknown_user_are_indistinguishable(self, client, admin, admin_password):
        wrong_password = client.post("/api/auth/login", json={"username": "admin", "password": "bad-password"})
        unknown_user = client.post("/api/auth/login", json={"username": "ghost", "password": admin_password})

        assert wrong_password.status_code == 401
        assert unknown_user.status_code == 401
        assert wrong_password.json() == unknown_user.json()
        assert wrong_password.json()["detail"] == "Invalid username or password"

    def test_unknown_user_still_checks_a_password_hash(self, db, admin, monkeypatch):
        checkpw = MagicMock(wraps=bcrypt.checkpw)
        monkeypatch.setattr("app.core.auth.bcrypt.checkpw", checkpw)

        assert authenticate_admin(db, "ghost", "whatever") is None
        assert checkpw.call_count == 1

        assert authenticate_admin(db, "admin", "whatever") is None
        assert checkpw.call_count == 2

    def test_short_password_is_a_validation_error(self, client):
        response = client.post("/api/auth/login", json={"username": "admin", "password": "abc"})

        assert response.status_code == 422
        assert response.json()["detail"] == "Validation Error"


class TestCurrentAdmin:

    def test_me_returns_token_owner(self, client, admin, auth_headers):
        response = client.get("/api/auth/me", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["username"] == "admin"

    def test_missing_token_is_rejected(self, client, admin):
        assert client.get("/api/auth/me").status_code == 401

    def test_garbage_token_is_rejected(self, client, admin):
        response = client.get("/api/auth/me", headers={"Authorization": "Bearer not-a-jwt"})
        assert response.status_code == 401

    def test_expired_token_is_rejected(self, client, admin):
        token = create_access_token(
            data={"sub": str(admin.id), "username": admin.username},
            expires_delta=timedelta(seconds=-10),
        )
        response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401

    def test_token_for_deleted_admin_is_rejected(self, client, db, admin, auth_headers):
        db.delete(admin)
        db.commit()

        assert client.get("/api/auth/me", headers=auth_headers).status_code == 401

    def test_token_without_uuid_subject_is_rejected(self, client, admin):
        token = create_access_token(data={"sub": "42", "username": "admin"})
        response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401


class TestCreateAdmin:

    def test_admin_can_create_another_admin(self, client, db, auth_headers):
        response = client.post(
            "/api/auth/admins",
            json={"username": "manager", "password": "manager-pass"},
            headers=auth_headers,
        )

        assert response.status_code == 201
        created = db.query(Admin).filter(Admin.username == "manager").first()
        assert created is not None
        assert verify_password("manager-pass", created.password)

        login = client.post("/api/auth/login", json={"username": "manager", "password": "manager-pass"})
        assert login.status_code == 200

    def test_duplicate_username_is_rejected(self, client, auth_headers):
        response = client.post(
            "/api/auth/admins",
            json={"username": "admin", "password": "another-pass"},
            headers=auth_headers,
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Username already registered"

    def test_requires_authentication(self, client, admin):
        response = client.post("/api/auth/admins", json={"username": "manager", "password": "manager-pass"})
        assert response.status_code == 401

    def test_password_longer_than_bcrypt_accepts_is_rejected(self, client, auth_headers):
        response = client.post(
            "/api/auth/admins",
            json={"username": "second", "password": "p" * 100},
            headers=auth_headers,
        )
        assert response.status_code == 422

    def test_password_limit_counts_bytes_not_characters(self, client, auth_headers):
        response = client.post(
            "/api/auth/admins",
            json={"username": "second", "password": "é" * 37},
            headers=auth_headers,
        )
        assert response.status_code == 422

    def test_password_at_the_limit_is_accepted(self, client, auth_headers):
        response = client.post(
            "/api/auth/admins",
            json={"username": "second", "password": "p" * 72},
            headers=auth_headers,
        )
        assert response.status_code == 201
