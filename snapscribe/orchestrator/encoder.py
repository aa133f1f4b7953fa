"""
Transfer encoder: CapturedImage -> single-part multipart/form-data body.

The boundary is derived from the image bytes, so encoding is a pure function:
the same image always produces the same body and headers.
"""
import hashlib
import httpx
from snapscribe.orchestrator.contracts import (
    CapturedImage, UploadRequest, IMAGE_FIELD, IMAGE_FILENAME,
)
from snapscribe.orchestrator.errors import CaptureError

# httpx only needs a URL to build the request; the body is sent elsewhere
_PLACEHOLDER_URL = "http://gateway.invalid/upload"


def boundary_for(data: bytes) -> str:
    return "snapscribe-" + hashlib.sha256(data).hexdigest()[:32]


def encode(image: CapturedImage) -> UploadRequest:
    if image is None or not image.data:
        raise CaptureError("nothing to encode: image is empty")

    boundary = boundary_for(image.data)
    request = httpx.Request(
        "POST",
        _PLACEHOLDER_URL,
        files={IMAGE_FIELD: (IMAGE_FILENAME, image.data, image.mime_type)},
        headers={"Content-Type": f"multipart/form-data; boundary={boundary}"},
    )
    body = request.read()
    return UploadRequest(
        body=body,
        content_type=request.headers["Content-Type"],
        field_name=IMAGE_FIELD,
        filename=IMAGE_FILENAME,
        mime_type=image.mime_type,
    )
