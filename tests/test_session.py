from __future__ import annotations

import pytest

from snapscribe.adapters.camera.mock_camera import MockCamera, MOCK_JPEG
from snapscribe.orchestrator.contracts import InferenceResult, SessionState, UploadRequest
from snapscribe.orchestrator.errors import CaptureError, SessionError
from snapscribe.orchestrator.state_machine import DescribeSession


class FakeGateway:
    """Records what the session looked like while the upload was in flight."""

    def __init__(self, results: list[InferenceResult]):
        self.results = list(results)
        self.requests: list[UploadRequest] = []
        self.seen_states: list[SessionState] = []
        self.seen_busy: list[bool] = []
        self.session: DescribeSession | None = None

    def upload(self, req: UploadRequest) -> InferenceResult:
        self.requests.append(req)
        if self.session is not None:
            self.seen_states.append(self.session.state)
            self.seen_busy.append(self.session.busy)
        return self.results.pop(0)


def _session(status, results, camera=None) -> tuple[DescribeSession, FakeGateway]:
    gateway = FakeGateway(results)
    session = DescribeSession(camera=camera or MockCamera(status), gateway=gateway, status_store=status)
    gateway.session = session
    return session, gateway


def test_happy_path(status) -> None:
    session, gateway = _session(status, [InferenceResult.success("A cat on a mat")])
    assert session.state is SessionState.IDLE

    image = session.capture()
    assert image.data == MOCK_JPEG
    assert session.state is SessionState.CAPTURED
    assert session.can_describe()

    result = session.describe()
    assert gateway.seen_states == [SessionState.UPLOADING]
    assert gateway.seen_busy == [True]
    assert result.ok
    assert session.state is SessionState.DESCRIBED
    assert session.display_text() == "A cat on a mat"
    assert not session.busy


def test_capture_failure_leaves_state(status) -> None:
    session, _ = _session(status, [], camera=MockCamera(status, fail=True))
    with pytest.raises(CaptureError):
        session.capture()
    assert session.state is SessionState.IDLE
    assert session.image is None
    assert not session.busy
    assert status.last_error == "CAPTURE_FAILED"


def test_capture_never_silently_replaces(status) -> None:
    camera = MockCamera(status, frames=[b"first", b"second"])
    session, _ = _session(status, [], camera=camera)
    session.capture()
    with pytest.raises(SessionError):
        session.capture()
    assert session.image.data == b"first"
    session.retake()
    assert session.capture().data == b"second"


def test_failed_then_retry(status) -> None:
    session, gateway = _session(
        status,
        [InferenceResult.failure("inference", "Internal Server Error"), InferenceResult.success("ok now")],
    )
    session.capture()
    result = session.describe()
    assert not result.ok
    assert session.state is SessionState.FAILED
    assert session.display_text() == "Error: Internal Server Error"
    assert session.can_retake() and session.can_describe()

    session.describe()
    assert session.state is SessionState.DESCRIBED
    assert len(gateway.requests) == 2
    assert gateway.requests[0] == gateway.requests[1]


@pytest.mark.parametrize("outcome", ["captured", "described", "failed"])
def test_retake_returns_to_idle(status, outcome) -> None:
    result = InferenceResult.success("x") if outcome == "described" else InferenceResult.failure("transport", "down")
    session, _ = _session(status, [result])
    session.capture()
    if outcome != "captured":
        session.describe()
    session.retake()
    assert session.state is SessionState.IDLE
    assert session.image is None
    assert session.result is None
    assert session.display_text() == ""


def test_retake_from_idle_is_noop(status) -> None:
    session, _ = _session(status, [])
    session.retake()
    assert session.state is SessionState.IDLE


def test_describe_requires_image(status) -> None:
    session, gateway = _session(status, [InferenceResult.success("x")])
    with pytest.raises(SessionError):
        session.describe()
    session.capture()
    session.describe()
    with pytest.raises(SessionError):
        session.describe()
    assert len(gateway.requests) == 1


def test_actions_rejected_while_uploading(status) -> None:
    errors_seen = []

    class ReentrantGateway(FakeGateway):
        def upload(self, req):
            assert not self.session.can_describe()
            assert not self.session.can_retake()
            for action in (self.session.describe, self.session.retake, self.session.capture):
                try:
                    action()
                except SessionError as e:
                    errors_seen.append(str(e))
            return InferenceResult.success("done")

    gateway = ReentrantGateway([])
    session = DescribeSession(camera=MockCamera(status), gateway=gateway, status_store=status)
    gateway.session = session
    session.capture()
    session.describe()
    assert len(errors_seen) == 3
    assert all("BUSY" in e for e in errors_seen)
    assert session.state is SessionState.DESCRIBED


def test_gateway_exception_lands_in_failed(status) -> None:
    class Broken(FakeGateway):
        def upload(self, req):
            raise RuntimeError("socket closed")

    gateway = Broken([])
    session = DescribeSession(camera=MockCamera(status), gateway=gateway, status_store=status)
    session.capture()
    result = session.describe()
    assert result.error_kind == "transport"
    assert session.state is SessionState.FAILED
    assert not session.busy
