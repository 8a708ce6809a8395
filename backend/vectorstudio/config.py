"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    vectorstudio_env: str = "development"
    vectorstudio_log_level: str = "debug"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Editing defaults
    default_canvas_size: float = 512.0
    paste_offset: float = 10.0
    scale_gain: float = 2.0
    skew_gain: float = 0.5

    # Sessions
    max_sessions: int = 100

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
