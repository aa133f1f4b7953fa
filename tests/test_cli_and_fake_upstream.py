from __future__ import annotations

from fastapi.testclient import TestClient

from snapscribe.adapters.camera.mock_camera import MockCamera
from snapscribe.adapters.gateway.http_gateway import HttpGateway
from snapscribe.adapters.inference.groq_inference import GroqInference
from snapscribe.orchestrator.errors import InferenceError
from snapscribe.orchestrator.state_machine import DescribeSession
from snapscribe.scripts import describe_photo, fake_inference_server
from snapscribe.services.api import create_app
from snapscribe.services.settings import Settings

import pytest


def _groq_against_fake(status, make_http_client, forward_to) -> GroqInference:
    upstream = TestClient(fake_inference_server.app)
    settings = Settings(api_key="dummy", base_url="http://fake-upstream/v1")
    return GroqInference(status, settings, client=make_http_client(forward_to(upstream)))


def test_fake_upstream_ok(status, make_http_client, forward_to, monkeypatch) -> None:
    monkeypatch.setenv("FAKE_UPSTREAM_MODE", "ok")
    adapter = _groq_against_fake(status, make_http_client, forward_to)
    assert adapter.describe(b"12345") == "A photo of 5 bytes, described in detail."


def test_fake_upstream_empty(status, make_http_client, forward_to, monkeypatch) -> None:
    monkeypatch.setenv("FAKE_UPSTREAM_MODE", "empty")
    adapter = _groq_against_fake(status, make_http_client, forward_to)
    assert adapter.describe(b"12345") == "No description generated"


def test_fake_upstream_error(status, make_http_client, forward_to, monkeypatch) -> None:
    monkeypatch.setenv("FAKE_UPSTREAM_MODE", "error")
    adapter = _groq_against_fake(status, make_http_client, forward_to)
    with pytest.raises(InferenceError) as excinfo:
        adapter.describe(b"12345")
    assert excinfo.value.status_code == 503


def test_fake_upstream_requires_bearer() -> None:
    resp = TestClient(fake_inference_server.app).post("/v1/chat/completions", json={})
    assert resp.status_code == 401


def _cli_session(status, make_http_client, forward_to, inference, camera=None) -> DescribeSession:
    settings = Settings(api_key="dummy", inference_adapter="mock")
    app_client = TestClient(create_app(settings, inference=inference, status=status))
    gateway = HttpGateway(status, base_url="http://gateway.test", client=make_http_client(forward_to(app_client)))
    return DescribeSession(camera=camera or MockCamera(status), gateway=gateway, status_store=status)


def test_cli_run_prints_description(status, make_http_client, forward_to, capsys) -> None:
    from snapscribe.adapters.inference.mock_inference import MockInference

    session = _cli_session(status, make_http_client, forward_to, MockInference(status, description="A mug"))
    assert describe_photo.run(session) == 0
    assert capsys.readouterr().out.strip() == "A mug"
    assert session.image is None


def test_cli_run_retries_then_reports(status, make_http_client, forward_to, capsys) -> None:
    from snapscribe.adapters.inference.mock_inference import MockInference

    inference = MockInference(status, fail=True)
    session = _cli_session(status, make_http_client, forward_to, inference)
    assert describe_photo.run(session, retries=2) == 1
    assert len(inference.calls) == 3
    assert capsys.readouterr().out.strip() == "Error: Internal Server Error"


def test_cli_run_capture_failure(status, make_http_client, forward_to, capsys) -> None:
    from snapscribe.adapters.inference.mock_inference import MockInference

    inference = MockInference(status)
    session = _cli_session(status, make_http_client, forward_to, inference, camera=MockCamera(status, fail=True))
    assert describe_photo.run(session) == 2
    assert inference.calls == []
    assert "Failed to take picture" in capsys.readouterr().err


def test_cli_args() -> None:
    args = describe_photo.parse_args(["--file", "cat.jpg", "--retries", "1"])
    assert args.file == "cat.jpg"
    assert args.retries == 1
    assert not args.mock
