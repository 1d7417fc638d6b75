"""Central application settings using Pydantic."""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .auth import DRIVE_SCOPE


class Settings(BaseSettings):
    """Gateway configuration loaded from DRIVEGATE_* environment variables."""

    # Server
    host: str = "0.0.0.0"
    port: int = 8082
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    # Google service account
    credentials_path: Path = Path(".info_source.json")
    drive_scopes: list[str] = Field(default_factory=lambda: [DRIVE_SCOPE])

    # Drive calls
    supports_all_drives: bool = True
    http_timeout_seconds: float | None = Field(60.0, gt=0)
    download_chunk_size: int = Field(1024 * 1024, gt=0)
    list_page_size: int | None = Field(None, ge=1, le=1000)
    list_follow_pages: bool = False

    # Upload-with-replace
    replace_scope: Literal["global", "folder"] = "global"
    replace_all_duplicates: bool = False

    model_config = SettingsConfigDict(
        env_prefix="DRIVEGATE_",
        env_file=".env",
        extra="ignore",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def upper_log_level(cls, v: str) -> str:
        return v.upper() if isinstance(v, str) else v

    @field_validator("credentials_path", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path) -> Path:
        return Path(v).expanduser()


@lru_cache
def get_settings() -> Settings:
    """Return application settings loaded from environment variables."""
    return Settings()
