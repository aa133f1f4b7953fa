"""
HTTP adapter for the upload gateway (client side).

  Request:  POST /upload  multipart/form-data, part "image"
  Response: 200 {"description": "..."} | 4xx/5xx {"error": "..."}

Every outcome comes back as an InferenceResult; nothing here raises, so the
session can always land in a recoverable state.
"""

import httpx
from snapscribe.adapters.gateway.base import GatewayAdapter
from snapscribe.orchestrator.contracts import UploadRequest, InferenceResult
from snapscribe.orchestrator.presenter import message_from_error_body, TRANSPORT_ERROR, UNKNOWN_ERROR


class HttpGateway(GatewayAdapter):
    def __init__(self, status_store, base_url: str = "http://127.0.0.1:3000", timeout: float = 60.0,
                 client: httpx.Client | None = None):
        self.status = status_store
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client = client or httpx.Client(timeout=timeout)

    def upload(self, req: UploadRequest) -> InferenceResult:
        url = f"{self.base_url}/upload"
        self.status.log(f"http_gateway: POST /upload ({len(req.body)} bytes)")
        try:
            resp = self._client.post(
                url,
                content=req.body,
                headers={"Content-Type": req.content_type},
                timeout=self.timeout,
            )
        except httpx.HTTPError as e:
            self.status.warn(f"http_gateway: transport error: {type(e).__name__}: {e}")
            return InferenceResult.failure("transport", TRANSPORT_ERROR)

        try:
            data = resp.json()
        except ValueError:
            data = None

        if not resp.is_success:
            message = message_from_error_body(data)
            self.status.warn(f"http_gateway: HTTP {resp.status_code}: {message}")
            kind = "validation" if resp.status_code == 400 else "inference"
            return InferenceResult.failure(kind, message)

        description = data.get("description") if isinstance(data, dict) else None
        if not isinstance(description, str):
            self.status.warn("http_gateway: 200 reply without a description")
            return InferenceResult.failure("gateway", UNKNOWN_ERROR)

        self.status.log("http_gateway: /upload done")
        return InferenceResult.success(description)

    def close(self):
        self._client.close()
