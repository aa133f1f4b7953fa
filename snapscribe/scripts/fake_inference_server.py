"""
Fake chat-completions server for running the gateway without a Groq account.

Simulates the upstream on port 9000. Answers every POST /v1/chat/completions
with a canned description of the image size; FAKE_UPSTREAM_MODE=error returns
503 and FAKE_UPSTREAM_MODE=empty returns an empty choices list.

Usage:
    python -m snapscribe.scripts.fake_inference_server          (terminal 1)
    GROQ_API_KEY=dummy GROQ_BASE_URL=http://127.0.0.1:9000/v1 snapscribe-serve  (terminal 2)
"""

import base64
import os
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

app = FastAPI(title="fake-inference-server")


def _image_size(body: dict) -> int:
    for message in body.get("messages", []):
        for part in message.get("content", []):
            if part.get("type") == "image_url":
                url = part["image_url"]["url"]
                return len(base64.b64decode(url.split(",", 1)[1]))
    return 0


@app.post("/v1/chat/completions")
async def chat_completions(request: Request):
    if not request.headers.get("authorization", "").startswith("Bearer "):
        return JSONResponse(status_code=401, content={"error": {"message": "missing bearer token"}})

    mode = os.getenv("FAKE_UPSTREAM_MODE", "ok")
    body = await request.json()
    size = _image_size(body)
    print(f"[upstream] model={body.get('model')} image={size} bytes mode={mode}")

    if mode == "error":
        return JSONResponse(status_code=503, content={"error": {"message": "model overloaded"}})
    if mode == "empty":
        return {"choices": []}
    return {
        "choices": [
            {"message": {"role": "assistant", "content": f"A photo of {size} bytes, described in detail."}}
        ]
    }


if __name__ == "__main__":
    print("Fake inference server starting on http://localhost:9000")
    uvicorn.run(app, host="0.0.0.0", port=9000)
