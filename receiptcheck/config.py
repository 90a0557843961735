"""Test-run configuration loaded from environment variables."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings shared by the pytest plugin, the task bridge and the worker."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = "receiptcheck"

    base_url: str = "http://localhost:5173/"
    downloads_folder: str = "e2e/downloads"
    receipt_filename: str = "recibo.pdf"
    download_selector: str = '[data-cy="download"]'
    trash_assets_before_runs: bool = True

    default_command_timeout_ms: int = Field(default=4000, ge=1)
    download_timeout_ms: int = Field(default=10000, ge=1)
    page_load_timeout_ms: int = Field(default=60000, ge=1)
    task_timeout_ms: int = Field(default=60000, ge=1)

    task_broker_url: str | None = None
    task_result_backend: str | None = None

    log_level: str = "INFO"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance."""

    return Settings()
