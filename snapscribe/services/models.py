from pydantic import BaseModel

IMAGE_REQUIRED = "Image is required."
INTERNAL_ERROR = "Internal Server Error"


class DescribeResponse(BaseModel):
    description: str


class ErrorResponse(BaseModel):
    error: str


class HealthResponse(BaseModel):
    ok: bool
    inference: str   # adapter class name
    model: str
