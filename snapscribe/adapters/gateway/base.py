from snapscribe.orchestrator.contracts import UploadRequest, InferenceResult


class GatewayAdapter:
    def upload(self, req: UploadRequest) -> InferenceResult:
        """Send one encoded photo to the gateway and return its normalized result."""
        raise NotImplementedError
