"""Centralized configuration management for the building analysis service."""
import tempfile
from functools import lru_cache
from pathlib import Path
from typing import List

from pydantic import AnyHttpUrl, Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables or .env file."""

    app_name: str = Field(default="Building Lens")
    environment: str = Field(default="development")

    # Inference provider
    openai_api_key: str = Field(default="", repr=False)
    openai_model: str = Field(default="gpt-4o")
    openai_max_tokens: int = Field(default=500, gt=0)
    openai_api_url: str = Field(default="https://api.openai.com/v1/chat/completions")
    request_timeout_seconds: float = Field(default=30.0, gt=0)

    # Uploaded images, kept for the lifetime of the process only
    upload_dir: Path = Field(default=Path(tempfile.gettempdir()) / "building-lens-uploads")
    max_image_mb: int = Field(default=8, gt=0)

    # Monitoring
    sentry_dsn: str = Field(default="", repr=False)

    allowed_origins: List[AnyHttpUrl] = Field(default_factory=list)

    class Config:
        env_file = Path(__file__).resolve().parent.parent.parent / ".env"
        env_file_encoding = "utf-8"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance to avoid reparsing the .env file."""
    return Settings()


settings = get_settings()
