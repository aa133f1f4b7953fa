"""
Groq vision inference adapter.
Uses Groq's OpenAI-compatible chat-completions API with multimodal input.

One describe() call is exactly one upstream POST: no retry, no caching.
A non-2xx reply raises InferenceError carrying status + body for the logs.
A 2xx reply whose payload does not have choices[0].message.content degrades
to FALLBACK_DESCRIPTION instead of failing.
"""
import base64
import httpx
from snapscribe.adapters.inference.base import InferenceService
from snapscribe.orchestrator.contracts import DEFAULT_MIME_TYPE, FALLBACK_DESCRIPTION, image_mime_type
from snapscribe.orchestrator.errors import InferenceError

PROMPT = "Describe this image in detail."

_LOG_BODY_CHARS = 300


def to_data_uri(image_bytes: bytes, mime_type: str | None = None) -> str:
    b64 = base64.standard_b64encode(image_bytes).decode("utf-8")
    return f"data:{image_mime_type(mime_type)};base64,{b64}"


def build_payload(model: str, data_uri: str) -> dict:
    return {
        "model": model,
        "messages": [
            {
                "role": "user",
                "content": [
                    {"type": "text", "text": PROMPT},
                    {"type": "image_url", "image_url": {"url": data_uri}},
                ],
            }
        ],
    }


def extract_description(data) -> str | None:
    """Pull choices[0].message.content out of a decoded reply, or None if absent."""
    if not isinstance(data, dict):
        return None
    choices = data.get("choices")
    if not isinstance(choices, list) or not choices:
        return None
    first = choices[0]
    if not isinstance(first, dict):
        return None
    message = first.get("message")
    if not isinstance(message, dict):
        return None
    content = message.get("content")
    if not isinstance(content, str) or not content.strip():
        return None
    return content


class GroqInference(InferenceService):
    def __init__(self, status_store, settings, client: httpx.Client | None = None):
        self.status = status_store
        self._api_key = settings.api_key
        self.model = settings.model
        self.url = f"{settings.base_url.rstrip('/')}/chat/completions"
        self.timeout = settings.timeout_s
        # injectable for tests (httpx.MockTransport); default is a plain client
        self._client = client or httpx.Client(timeout=self.timeout)
        self.status.log(f"groq_inference: ready (model={self.model})")

    def describe(self, image_bytes: bytes, mime_type: str = DEFAULT_MIME_TYPE) -> str:
        payload = build_payload(self.model, to_data_uri(image_bytes, mime_type))
        headers = {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }

        try:
            resp = self._client.post(self.url, json=payload, headers=headers, timeout=self.timeout)
        except httpx.HTTPError as e:
            self.status.warn(f"groq_inference: transport error: {type(e).__name__}: {e}")
            raise InferenceError(f"upstream request failed: {type(e).__name__}") from e

        if not resp.is_success:
            body = resp.text
            self.status.warn(f"groq_inference: HTTP {resp.status_code}: {body[:_LOG_BODY_CHARS]}")
            raise InferenceError(
                f"upstream returned HTTP {resp.status_code}",
                status_code=resp.status_code,
                body=body,
            )

        try:
            data = resp.json()
        except ValueError:
            data = None
        description = extract_description(data)
        if description is None:
            self.status.warn(
                f"groq_inference: malformed reply, using fallback: {resp.text[:_LOG_BODY_CHARS]}"
            )
            return FALLBACK_DESCRIPTION

        self.status.log(f"groq_inference: described ({len(description)} chars)")
        return description

    def close(self):
        self._client.close()
