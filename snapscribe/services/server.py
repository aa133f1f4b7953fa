"""
Gateway entry point.

Usage:
    GROQ_API_KEY=... snapscribe-serve
    INFERENCE_ADAPTER=mock GROQ_API_KEY=dummy snapscribe-serve   # no upstream calls

Refuses to start (exit 1) when GROQ_API_KEY is missing.
"""
import sys
import uvicorn

from snapscribe.orchestrator.errors import ConfigError
from snapscribe.services.api import create_app
from snapscribe.services.settings import Settings, configure_logging


def main(argv: list[str] | None = None) -> int:
    configure_logging()
    try:
        settings = Settings.from_env()
    except ConfigError as e:
        print(f"[snapscribe] fatal: {e}", file=sys.stderr)
        return 1

    app = create_app(settings)
    print(f"snapscribe gateway listening at http://{settings.host}:{settings.port}")
    uvicorn.run(app, host=settings.host, port=settings.port)
    return 0


if __name__ == "__main__":
    sys.exit(main())
