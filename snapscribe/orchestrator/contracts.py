from dataclasses import dataclass
from enum import Enum
from typing import Optional

from snapscribe.orchestrator.errors import CaptureError

DEFAULT_MIME_TYPE = "image/jpeg"
IMAGE_FIELD = "image"          # multipart part name agreed with the gateway
IMAGE_FILENAME = "photo.jpg"
FALLBACK_DESCRIPTION = "No description generated"


def image_mime_type(mime_type: str | None) -> str:
    """Keep image/* types; anything else (None, octet-stream, text/plain) becomes image/jpeg."""
    if mime_type:
        mime_type = mime_type.split(";", 1)[0].strip().lower()
        if mime_type.startswith("image/"):
            return mime_type
    return DEFAULT_MIME_TYPE


class SessionState(str, Enum):
    IDLE = "idle"
    CAPTURED = "captured"
    UPLOADING = "uploading"
    DESCRIBED = "described"
    FAILED = "failed"


@dataclass(frozen=True)
class CapturedImage:
    data: bytes
    mime_type: str = DEFAULT_MIME_TYPE

    def __post_init__(self):
        if not self.data:
            raise CaptureError("captured image is empty")


@dataclass(frozen=True)
class UploadRequest:
    body: bytes
    content_type: str          # multipart/form-data; boundary=...
    field_name: str = IMAGE_FIELD
    filename: str = IMAGE_FILENAME
    mime_type: str = DEFAULT_MIME_TYPE


@dataclass(frozen=True)
class InferenceResult:
    description: Optional[str] = None
    error_kind: Optional[str] = None   # e.g. "validation" | "inference" | "transport"
    message: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error_kind is None

    @classmethod
    def success(cls, description: str) -> "InferenceResult":
        return cls(description=description)

    @classmethod
    def failure(cls, error_kind: str, message: str) -> "InferenceResult":
        return cls(error_kind=error_kind, message=message)
