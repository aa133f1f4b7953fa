from abc import ABC, abstractmethod

from snapscribe.orchestrator.contracts import CapturedImage


class CameraAdapter(ABC):
    @abstractmethod
    def capture_image(self) -> CapturedImage:
        """Capture one still image. Raises CaptureError on failure."""
        ...
