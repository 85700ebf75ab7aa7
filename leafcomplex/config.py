"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    leafcomplex_env: str = "development"
    leafcomplex_log_level: str = "info"

    # Batch runner; None lets the executor pick from the CPU count
    max_workers: int | None = None

    # Largest mask side accepted by the HTTP API
    max_mask_side: int = 2048

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
