import time
from snapscribe.orchestrator.contracts import CapturedImage, InferenceResult, SessionState
from snapscribe.orchestrator.encoder import encode
from snapscribe.orchestrator.presenter import render
from snapscribe.orchestrator import errors

S = SessionState


class DescribeSession:
    """
    Client-side capture → describe loop.

      IDLE ──capture──▶ CAPTURED ──describe──▶ UPLOADING ──▶ DESCRIBED | FAILED
      CAPTURED / DESCRIBED / FAILED ──retake──▶ IDLE
      FAILED ──describe (retry)──▶ UPLOADING

    One operation at a time: status.busy is set while a capture or an upload is
    in flight and every other action is rejected until it clears.
    """

    def __init__(self, camera, gateway, status_store):
        self.camera = camera
        self.gateway = gateway
        self.status = status_store
        self.state = S.IDLE
        self.image: CapturedImage | None = None
        self.result: InferenceResult | None = None

    @property
    def busy(self) -> bool:
        return self.status.busy

    def can_describe(self) -> bool:
        return not self.busy and self.state in (S.CAPTURED, S.FAILED)

    def can_retake(self) -> bool:
        return not self.busy and self.state in (S.CAPTURED, S.DESCRIBED, S.FAILED)

    def _reject_if_busy(self, action: str):
        if self.status.busy:
            self.status.log(f"{action} rejected: busy")
            raise errors.SessionError(f"{action} rejected: {errors.ERR_BUSY}")

    def capture(self) -> CapturedImage:
        self._reject_if_busy("capture")
        if self.state is not S.IDLE:
            raise errors.SessionError(f"capture not allowed in state {self.state.value}; retake first")

        self.status.set_busy(True)
        try:
            self.status.log("camera.capture_image")
            try:
                image = self.camera.capture_image()
            except errors.CaptureError as e:
                self.status.last_error = errors.ERR_CAPTURE
                self.status.warn(f"capture failed: {e}")
                raise
            self.image = image
            self.result = None
            self.state = S.CAPTURED
            self.status.last_error = None
            self.status.log(f"captured {len(image.data)} bytes ({image.mime_type})")
            return image
        finally:
            self.status.set_busy(False)

    def describe(self) -> InferenceResult:
        self._reject_if_busy("describe")
        if self.state not in (S.CAPTURED, S.FAILED):
            raise errors.SessionError(f"describe not allowed in state {self.state.value}")

        self.status.set_busy(True)
        self.state = S.UPLOADING
        self.result = None
        t0 = time.time()
        try:
            req = encode(self.image)
            result = self.gateway.upload(req)
        except Exception as e:
            self.status.warn(f"describe: error {type(e).__name__}: {e}")
            result = InferenceResult.failure("transport", str(e) or type(e).__name__)
        finally:
            self.status.set_busy(False)

        dt = int((time.time() - t0) * 1000)
        self.result = result
        if result.ok:
            self.state = S.DESCRIBED
            self.status.last_error = None
            self.status.log(f"describe: done dt={dt}ms")
        else:
            self.state = S.FAILED
            self.status.last_error = errors.ERR_INFERENCE if result.error_kind == "inference" else errors.ERR_UPLOAD
            self.status.log(f"describe: failed kind={result.error_kind} dt={dt}ms")
        return result

    def retake(self):
        self._reject_if_busy("retake")
        if self.state is S.IDLE:
            return
        self.status.log(f"retake from {self.state.value}")
        self.image = None
        self.result = None
        self.state = S.IDLE
        self.status.last_error = None

    def display_text(self) -> str:
        """Text for the result area: empty until a result is held."""
        if self.result is None:
            return ""
        return render(self.result)
