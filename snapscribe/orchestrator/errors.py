# Error codes surfaced through StatusStore.last_error / session results
ERR_BUSY = "BUSY"
ERR_CAPTURE = "CAPTURE_FAILED"
ERR_UPLOAD = "UPLOAD_FAILED"
ERR_INFERENCE = "INFERENCE_FAILED"


class SnapscribeError(Exception):
    """Base class for every error raised by snapscribe."""


class CaptureError(SnapscribeError):
    """Camera or file could not produce an image. Local to the client, retryable."""


class ValidationError(SnapscribeError):
    """Client sent an upload without a usable image part (HTTP 400)."""


class InferenceError(SnapscribeError):
    """Upstream inference call failed or returned a non-success status.

    status_code and body are kept for server-side logging only; they are
    never forwarded to the end client.
    """

    def __init__(self, message: str, status_code: int | None = None, body: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class SessionError(SnapscribeError):
    """Action not allowed in the session's current state."""


class ConfigError(SnapscribeError):
    """Required configuration is missing or invalid. Fatal at startup."""
