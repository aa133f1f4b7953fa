"""Mock camera: returns a tiny fixed JPEG-ish payload for tests and offline runs."""
from snapscribe.adapters.camera.base import CameraAdapter
from snapscribe.orchestrator.contracts import CapturedImage
from snapscribe.orchestrator.errors import CaptureError

# SOI marker + filler + EOI marker; enough for the pipeline, not a real picture
MOCK_JPEG = b"\xff\xd8\xff\xe0" + b"snapscribe-mock-frame" + b"\xff\xd9"


class MockCamera(CameraAdapter):
    def __init__(self, status_store, frames: list[bytes] | None = None, fail: bool = False):
        self.status = status_store
        self._frames = list(frames) if frames is not None else [MOCK_JPEG]
        self.fail = fail
        self.captures = 0

    def capture_image(self) -> CapturedImage:
        if self.fail:
            self.status.warn("mock_camera: simulated hardware failure")
            raise CaptureError("camera busy")
        data = self._frames[self.captures % len(self._frames)]
        self.captures += 1
        self.status.log(f"mock_camera: frame #{self.captures}")
        return CapturedImage(data=data)
