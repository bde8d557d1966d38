# tests/v1/test_users_api.py
"""Tests for identity resolution and profile endpoints."""

from datetime import timedelta

from fastapi import status
from fastapi.testclient import TestClient
from jose import jwt

from inkwell.core.security import create_identity_token
from inkwell.core.settings import settings
from inkwell.models import User


class TestAuthentication:
    def test_missing_token(self, client: TestClient) -> None:
        response = client.get("/api/v1/users/me")

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_malformed_token(self, client: TestClient) -> None:
        response = client.get(
            "/api/v1/users/me", headers={"Authorization": "Bearer not.a.valid.jwt"}
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()["detail"] == "Could not validate credentials"

    def test_wrong_secret(self, client: TestClient) -> None:
        token = jwt.encode({"sub": "idp|forged"}, "not-the-secret", algorithm="HS256")

        response = client.get("/api/v1/users/me", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_expired_token(self, client: TestClient) -> None:
        token = create_identity_token("idp|late", expires_in=timedelta(seconds=-60))

        response = client.get("/api/v1/users/me", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_token_without_subject(self, client: TestClient) -> None:
        token = jwt.encode(
            {"name": "No Subject"},
            settings.identity_jwt_secret,
            algorithm=settings.identity_jwt_algorithm,
        )

        response = client.get("/api/v1/users/me", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_first_request_registers_user(self, client: TestClient, db_session) -> None:
        token = create_identity_token(
            "idp|newcomer", name="New Comer", picture="https://img.test/a.png"
        )

        response = client.get("/api/v1/users/me", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["name"] == "New Comer"
        assert data["image_url"] == "https://img.test/a.png"
        assert data["username"] is None
        assert db_session.query(User).filter(User.external_id == "idp|newcomer").count() == 1


class TestProfileUpdate:
    def test_update_profile(
        self, client: TestClient, test_user: User, auth_token: dict[str, str]
    ) -> None:
        response = client.put(
            "/api/v1/users/me/profile",
            json={"username": "writer-one", "bio": "I write.", "country": "NZ"},
            headers=auth_token,
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["username"] == "writer-one"
        assert response.json()["bio"] == "I write."
        assert test_user.username == "writer-one"

    def test_invalid_username(self, client: TestClient, auth_token: dict[str, str]) -> None:
        response = client.put(
            "/api/v1/users/me/username", json={"username": "no"}, headers=auth_token
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["detail"] == "Username must be between 3 and 20 characters"

    def test_username_taken(
        self, client: TestClient, other_user: User, auth_token: dict[str, str]
    ) -> None:
        response = client.put(
            "/api/v1/users/me/username", json={"username": "other_user"}, headers=auth_token
        )

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.json()["detail"] == "Username is already taken"
