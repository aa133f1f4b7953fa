"""Turns an InferenceResult (or a raw gateway reply) into the text shown to the user."""
from snapscribe.orchestrator.contracts import InferenceResult

UNKNOWN_ERROR = "Unknown error"
TRANSPORT_ERROR = "Something went wrong"


def message_from_error_body(body) -> str:
    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, str) and error:
            return error
    return UNKNOWN_ERROR


def render(result: InferenceResult) -> str:
    if result.ok:
        return result.description or ""
    return f"Error: {result.message or UNKNOWN_ERROR}"
