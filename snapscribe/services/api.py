"""
Upload gateway: POST /upload (multipart, part "image") → inference → JSON.

  200 {"description": "..."}
  400 {"error": "Image is required."}      adapter never called
  500 {"error": "Internal Server Error"}   upstream detail stays in the server log
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.concurrency import run_in_threadpool
from starlette.datastructures import UploadFile

from snapscribe.adapters.inference.base import InferenceService
from snapscribe.orchestrator.contracts import IMAGE_FIELD, image_mime_type
from snapscribe.orchestrator.errors import InferenceError, ValidationError
from snapscribe.services.models import (
    DescribeResponse, ErrorResponse, HealthResponse, IMAGE_REQUIRED, INTERNAL_ERROR,
)
from snapscribe.services.settings import Settings
from snapscribe.services.status_store import StatusStore


def build_inference(settings: Settings, status: StatusStore) -> InferenceService:
    # INFERENCE_ADAPTER: groq | mock (default: groq)
    if settings.inference_adapter == "mock":
        from snapscribe.adapters.inference.mock_inference import MockInference
        return MockInference(status)
    from snapscribe.adapters.inference.groq_inference import GroqInference
    return GroqInference(status, settings)


async def read_image_part(request: Request) -> tuple[bytes, str]:
    """Pull the bytes + MIME type of the "image" part. Raises ValidationError if absent."""
    try:
        form = await request.form()
    except Exception as e:
        # unparseable or truncated multipart body
        raise ValidationError(f"form parse failed: {type(e).__name__}") from e
    try:
        # Only file parts count. A part without a filename is decoded by Starlette
        # as a text field, which cannot carry the image bytes intact.
        parts = [p for p in form.getlist(IMAGE_FIELD) if isinstance(p, UploadFile)]
        if not parts:
            raise ValidationError("no image part")
        part = parts[0]
        data = await part.read()
        if not data:
            raise ValidationError("image part is empty")
        return data, image_mime_type(part.content_type)
    finally:
        await form.close()


def create_app(settings: Settings, inference: InferenceService | None = None,
               status: StatusStore | None = None) -> FastAPI:
    status = status or StatusStore()
    inference = inference or build_inference(settings, status)
    status.log(f"inference adapter: {type(inference).__name__}")

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        # adapters holding an httpx.Client expose close()
        if hasattr(inference, "close"):
            inference.close()
            status.log(f"inference adapter closed: {type(inference).__name__}")

    app = FastAPI(title="snapscribe gateway", lifespan=lifespan)
    app.state.settings = settings
    app.state.inference = inference
    app.state.status = status

    @app.get("/", response_class=PlainTextResponse)
    def index():
        return "snapscribe gateway: POST a photo to /upload"

    @app.get("/health", response_model=HealthResponse)
    def health():
        return HealthResponse(ok=True, inference=type(inference).__name__, model=settings.model)

    @app.post(
        "/upload",
        response_model=DescribeResponse,
        responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    )
    async def upload(request: Request):
        try:
            image_bytes, mime_type = await read_image_part(request)
        except ValidationError as e:
            status.log(f"UPLOAD rejected: {e}")
            return JSONResponse(status_code=400, content={"error": IMAGE_REQUIRED})

        status.log(f"UPLOAD received {len(image_bytes)} bytes ({mime_type})")
        try:
            # adapter is blocking; one upstream call per request
            description = await run_in_threadpool(inference.describe, image_bytes, mime_type)
        except InferenceError as e:
            status.warn(
                f"UPLOAD inference failed: {e} status={e.status_code} body={(e.body or '')[:300]}"
            )
            return JSONResponse(status_code=500, content={"error": INTERNAL_ERROR})
        except Exception as e:
            status.warn(f"UPLOAD unexpected error: {type(e).__name__}: {e}")
            return JSONResponse(status_code=500, content={"error": INTERNAL_ERROR})

        status.log(f"UPLOAD described ({len(description)} chars)")
        return DescribeResponse(description=description)

    return app
