"""Configuration from .env file."""

from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    LOG_LEVEL: str = "INFO"

    # Where the replay CLI writes per-session decision traces (dashboard reads it too).
    TRACE_PATH: str = "data/hint_traces.json"
    # Optional JSON catalog; the built-in problems are used when unset.
    CATALOG_PATH: Optional[str] = None

    # Deployed hint service (POST /api/signal), used by --remote replays.
    HINT_SERVICE_URL: str = "http://localhost:8080"
    HINT_SERVICE_TIMEOUT: float = 10.0

    PARALLEL: int = 1  # Sessions replayed concurrently (1 = sequential)

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()
