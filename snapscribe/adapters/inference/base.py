from abc import ABC, abstractmethod

from snapscribe.orchestrator.contracts import DEFAULT_MIME_TYPE


class InferenceService(ABC):
    @abstractmethod
    def describe(self, image_bytes: bytes, mime_type: str = DEFAULT_MIME_TYPE) -> str:
        """Return a description of the image. Raises InferenceError on upstream failure."""
        ...
