import json
import os

from pydantic_settings import BaseSettings


def _cors_from_env() -> list[str] | None:
    """CORS_ORIGINS may be a JSON list or a comma-separated string."""
    value = os.environ.get("CORS_ORIGINS", "").strip()
    if not value:
        return None
    if value.startswith("["):
        return [str(origin) for origin in json.loads(value)]
    return [origin.strip() for origin in value.split(",") if origin.strip()]


class Settings(BaseSettings):
    gemini_api_key: str = ""
    gemini_models: list[str] = ["gemini-2.5-flash", "gemini-2.5-pro"]
    max_upload_size_mb: int = 5
    cors_origins: list[str] = [
        "http://localhost:5173",
        "http://localhost:3000",
    ]
    debug: bool = False
    log_level: str = "INFO"

    # Batch screening
    max_concurrency: int = 8  # in-flight resume pipelines per batch
    max_batch_files: int = 100

    # Optional language-model collaborator
    collaborator_timeout_seconds: float = 55.0
    collaborator_max_retries: int = 2
    collaborator_backoff_seconds: float = 0.7  # doubled on each retry
    enable_grading: bool = True

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


_origins = _cors_from_env()
settings = Settings(cors_origins=_origins) if _origins else Settings()
