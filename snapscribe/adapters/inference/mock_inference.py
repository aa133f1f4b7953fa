from snapscribe.adapters.inference.base import InferenceService
from snapscribe.orchestrator.contracts import DEFAULT_MIME_TYPE
from snapscribe.orchestrator.errors import InferenceError

MOCK_DESCRIPTION = "A mock description of the captured photo."


class MockInference(InferenceService):
    def __init__(self, status_store, description: str = MOCK_DESCRIPTION, fail: bool = False):
        self.status = status_store
        self.description = description
        self.fail = fail
        self.calls: list[tuple[bytes, str]] = []

    def describe(self, image_bytes: bytes, mime_type: str = DEFAULT_MIME_TYPE) -> str:
        self.calls.append((image_bytes, mime_type))
        if self.fail:
            self.status.warn("mock_inference: simulated upstream failure")
            raise InferenceError("simulated upstream failure", status_code=503, body="upstream says no")
        self.status.log(f"mock_inference: {len(image_bytes)} bytes ({mime_type})")
        return self.description
