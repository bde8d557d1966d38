# tests/v1/test_media_api.py
"""Tests for upload-auth and writing assistant endpoints."""

from collections.abc import Callable, Iterator

import httpx
import pytest
from fastapi import FastAPI, status
from fastapi.testclient import TestClient

from inkwell.api.v1.endpoints.media import get_writing_assistant_dep
from inkwell.core.settings import settings
from inkwell.services.writing_assistant import AssistantConfig, WritingAssistantClient

GENERATED = "<h2>Heading</h2><p>" + "Generated text. " * 10 + "</p>"


def _assistant(handler, api_key: str | None = "test-key") -> WritingAssistantClient:
    config = AssistantConfig(
        api_key=api_key,
        model="test-model",
        base_url="https://assistant.test/v1beta",
        timeout_seconds=5.0,
    )
    return WritingAssistantClient(config, transport=httpx.MockTransport(handler))


@pytest.fixture()
def override_assistant(app: FastAPI) -> Iterator[Callable[[WritingAssistantClient], None]]:
    def _install(assistant: WritingAssistantClient) -> None:
        app.dependency_overrides[get_writing_assistant_dep] = lambda: assistant

    try:
        yield _install
    finally:
        app.dependency_overrides.pop(get_writing_assistant_dep, None)


class TestUploadAuth:
    def test_unconfigured(self, client: TestClient, auth_token: dict[str, str]) -> None:
        response = client.get("/api/v1/media/upload-auth", headers=auth_token)

        assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE

    def test_configured(
        self, client: TestClient, auth_token: dict[str, str], monkeypatch
    ) -> None:
        monkeypatch.setattr(settings, "imagekit_public_key", "public_test_key")
        monkeypatch.setattr(settings, "imagekit_private_key", "private_test_key")

        response = client.get("/api/v1/media/upload-auth", headers=auth_token)

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["public_key"] == "public_test_key"
        assert len(data["signature"]) == 40
        assert data["token"]

    def test_requires_auth(self, client: TestClient) -> None:
        response = client.get("/api/v1/media/upload-auth")

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


class TestAssistant:
    def test_generate(
        self, client: TestClient, auth_token: dict[str, str], override_assistant
    ) -> None:
        payload = {"candidates": [{"content": {"parts": [{"text": GENERATED}]}}]}
        override_assistant(_assistant(lambda request: httpx.Response(200, json=payload)))

        response = client.post(
            "/api/v1/assistant/generate",
            json={"title": "Testing FastAPI", "tags": ["python"]},
            headers=auth_token,
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"content": GENERATED}

    def test_rate_limited(
        self, client: TestClient, auth_token: dict[str, str], override_assistant
    ) -> None:
        override_assistant(_assistant(lambda request: httpx.Response(429)))

        response = client.post(
            "/api/v1/assistant/improve",
            json={"content": "<p>Draft</p>", "mode": "expand"},
            headers=auth_token,
        )

        assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE
        assert "overloaded" in response.json()["detail"]

    def test_upstream_failure(
        self, client: TestClient, auth_token: dict[str, str], override_assistant
    ) -> None:
        override_assistant(_assistant(lambda request: httpx.Response(500)))

        response = client.post(
            "/api/v1/assistant/improve", json={"content": "<p>Draft</p>"}, headers=auth_token
        )

        assert response.status_code == status.HTTP_502_BAD_GATEWAY

    def test_disabled(
        self, client: TestClient, auth_token: dict[str, str], override_assistant
    ) -> None:
        override_assistant(_assistant(lambda request: httpx.Response(200), api_key=None))

        response = client.post(
            "/api/v1/assistant/generate", json={"title": "Anything"}, headers=auth_token
        )

        assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE
