"""
Process configuration for the gateway and the capture client.

Values come from the environment (optionally a .env file loaded with
python-dotenv). The gateway receives a Settings instance through create_app()
instead of reading os.environ itself, so tests inject a fake credential.

  GROQ_API_KEY          required, upstream bearer credential
  GROQ_BASE_URL         default https://api.groq.com/openai/v1
  GROQ_MODEL            default meta-llama/llama-4-scout-17b-16e-instruct
  INFERENCE_TIMEOUT_S   default 30
  INFERENCE_ADAPTER     groq | mock (default groq)
  HOST / PORT           default 0.0.0.0 / 3000
  LOG_LEVEL             default INFO
  GATEWAY_URL           client side, default http://127.0.0.1:3000
"""
import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from snapscribe.orchestrator.errors import ConfigError

DEFAULT_BASE_URL = "https://api.groq.com/openai/v1"
DEFAULT_MODEL = "meta-llama/llama-4-scout-17b-16e-instruct"
DEFAULT_TIMEOUT_S = 30.0
DEFAULT_GATEWAY_URL = "http://127.0.0.1:3000"


def load_env_file(path: str | Path = ".env"):
    dotenv_path = Path(path)
    if dotenv_path.exists():
        load_dotenv(dotenv_path=dotenv_path, override=False)


def configure_logging(default_level: str = "INFO"):
    level_name = os.getenv("LOG_LEVEL", default_level).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ConfigError(f"{name} must be a number, got {raw!r}")
    if value <= 0:
        raise ConfigError(f"{name} must be positive, got {raw!r}")
    return value


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}")


@dataclass(frozen=True)
class Settings:
    api_key: str
    base_url: str = DEFAULT_BASE_URL
    model: str = DEFAULT_MODEL
    timeout_s: float = DEFAULT_TIMEOUT_S
    inference_adapter: str = "groq"
    host: str = "0.0.0.0"
    port: int = 3000

    def __post_init__(self):
        if not self.api_key:
            raise ConfigError("GROQ_API_KEY is required")

    def __repr__(self):
        # keep the credential out of logs and tracebacks
        return (
            f"Settings(base_url={self.base_url!r}, model={self.model!r}, "
            f"timeout_s={self.timeout_s}, inference_adapter={self.inference_adapter!r})"
        )

    @classmethod
    def from_env(cls, env_file: str | Path | None = ".env") -> "Settings":
        if env_file is not None:
            load_env_file(env_file)
        api_key = os.getenv("GROQ_API_KEY", "").strip()
        if not api_key:
            raise ConfigError("GROQ_API_KEY is not set; refusing to start")
        adapter = os.getenv("INFERENCE_ADAPTER", "groq").strip().lower()
        if adapter not in ("groq", "mock"):
            raise ConfigError(f"INFERENCE_ADAPTER must be 'groq' or 'mock', got {adapter!r}")
        return cls(
            api_key=api_key,
            base_url=os.getenv("GROQ_BASE_URL", DEFAULT_BASE_URL).rstrip("/"),
            model=os.getenv("GROQ_MODEL", DEFAULT_MODEL),
            timeout_s=_float_env("INFERENCE_TIMEOUT_S", DEFAULT_TIMEOUT_S),
            inference_adapter=adapter,
            host=os.getenv("HOST", "0.0.0.0"),
            port=_int_env("PORT", 3000),
        )


def gateway_url_from_env() -> str:
    return os.getenv("GATEWAY_URL", DEFAULT_GATEWAY_URL).rstrip("/")
