"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    scopebox_env: str = "development"
    scopebox_log_level: str = "info"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Layout defaults applied when a request leaves them unset
    default_packing_heuristic: str = "best_short_side_fit"
    validate_layouts: bool = False

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
