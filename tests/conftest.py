from __future__ import annotations

import httpx
import pytest
from fastapi.testclient import TestClient

from snapscribe.adapters.inference.mock_inference import MockInference
from snapscribe.services.api import create_app
from snapscribe.services.settings import Settings
from snapscribe.services.status_store import StatusStore

FAKE_KEY = "gsk_test_secret_key"


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the developer's real credentials out of every test."""
    for name in (
        "GROQ_API_KEY", "GROQ_BASE_URL", "GROQ_MODEL", "INFERENCE_TIMEOUT_S", "INFERENCE_ADAPTER",
        "HOST", "PORT", "GATEWAY_URL", "CAMERA_INDEX", "FAKE_UPSTREAM_MODE",
    ):
        # setenv first so teardown also removes values a .env file loaded mid-test
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    yield


@pytest.fixture
def status() -> StatusStore:
    return StatusStore()


@pytest.fixture
def settings() -> Settings:
    return Settings(api_key=FAKE_KEY, base_url="https://upstream.test/openai/v1", model="vision-test")


@pytest.fixture
def mock_inference(status) -> MockInference:
    return MockInference(status, description="A cat on a mat")


@pytest.fixture
def client(settings, mock_inference, status) -> TestClient:
    return TestClient(create_app(settings, inference=mock_inference, status=status))


@pytest.fixture
def make_http_client():
    """Factory: httpx client whose every request is answered by handler(request)."""

    def _make(handler) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(handler))

    return _make


@pytest.fixture
def forward_to():
    """Factory: MockTransport handler relaying requests into a FastAPI TestClient."""

    def _forward(test_client: TestClient):
        def handler(request: httpx.Request) -> httpx.Response:
            resp = test_client.request(
                request.method,
                request.url.path,
                content=request.content,
                headers={k: v for k, v in request.headers.items() if k.lower() != "host"},
            )
            return httpx.Response(resp.status_code, content=resp.content)

        return handler

    return _forward
