"""File-backed camera: serves one photo already on disk (CLI --file)."""
import mimetypes
from pathlib import Path
from snapscribe.adapters.camera.base import CameraAdapter
from snapscribe.orchestrator.contracts import CapturedImage, image_mime_type
from snapscribe.orchestrator.errors import CaptureError


class FileCamera(CameraAdapter):
    def __init__(self, status_store, path: str | Path):
        self.status = status_store
        self.path = Path(path)

    def capture_image(self) -> CapturedImage:
        try:
            data = self.path.read_bytes()
        except OSError as e:
            raise CaptureError(f"cannot read {self.path}: {e}") from e
        guessed, _ = mimetypes.guess_type(self.path.name)
        mime_type = image_mime_type(guessed)
        self.status.log(f"file_camera: serving {self.path.name} ({mime_type})")
        return CapturedImage(data=data, mime_type=mime_type)
