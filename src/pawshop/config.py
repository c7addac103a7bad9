"""Application settings, read from ``.env`` and ``PAWSHOP_*`` environment variables."""
from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="PAWSHOP_",
        extra="ignore",
    )

    API_BASE_URL: str = "https://backend-dog-a7fu.onrender.com"
    HTTP_TIMEOUT_SECONDS: float = Field(default=30.0, gt=0)
    # Listings per page as served by the backend; only needed when the
    # backend reports a ``total`` instead of ``has_more``.
    PAGE_SIZE: int | None = Field(default=None, gt=0)
    LOG_LEVEL: str = "INFO"


settings = Settings()
