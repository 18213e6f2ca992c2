from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """Centralised configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_env: Literal["local", "dev", "prod"] = Field(default="local", alias="APP_ENV")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    api_host: str = Field(default="0.0.0.0", alias="API_HOST")
    port: int = Field(default=8000, alias="PORT")

    # Browser editor origin allowed to call the API
    cors_allowed_origin: str = Field(default="http://localhost:3000", alias="CORS_ALLOWED_ORIGIN")

    # Folder holding saved XML documents
    storage_base_dir: str = Field(default="SavedFiles", alias="STORAGE_BASE_DIR")

    @property
    def storage_path(self) -> Path:
        return Path(self.storage_base_dir).expanduser().resolve()

    @property
    def docs_enabled(self) -> bool:
        return self.app_env in ("local", "dev")


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    return AppSettings()
