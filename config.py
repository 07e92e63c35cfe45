# config.py
# Environment-driven settings for the QA service and its UI.
import os
from dataclasses import dataclass

DEFAULT_MODEL = "all-MiniLM-L6-v2"
DEFAULT_PORT = 3000
DEFAULT_ORIGIN = "http://localhost:3001"


@dataclass(frozen=True)
class Settings:
    model_name: str = DEFAULT_MODEL
    host: str = "127.0.0.1"
    port: int = DEFAULT_PORT
    cors_origin: str = DEFAULT_ORIGIN
    load_timeout: float = 300.0
    log_level: str = "INFO"


def load_settings() -> Settings:
    """Read settings from the environment, falling back to the defaults."""
    return Settings(
        model_name=os.getenv("EMBEDDING_MODEL", DEFAULT_MODEL),
        host=os.getenv("HOST", "127.0.0.1"),
        port=int(os.getenv("PORT", str(DEFAULT_PORT))),
        cors_origin=os.getenv("CORS_ORIGIN", DEFAULT_ORIGIN),
        load_timeout=float(os.getenv("LOAD_TIMEOUT", "300")),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )


def api_url() -> str:
    """Base URL the client and UI talk to."""
    return os.getenv("QA_API_URL", f"http://127.0.0.1:{DEFAULT_PORT}").rstrip("/")
