"""Application configuration using environment variables."""

from functools import lru_cache
from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Resolve the project root once so that `.env` is discovered regardless of CWD
PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent


class Settings(BaseSettings):
    """Load configuration from environment variables and `.env`."""

    model_config = SettingsConfigDict(
        env_file=str(PROJECT_ROOT / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    host: str = Field(
        default="0.0.0.0",
        validation_alias=AliasChoices("TOOLKIT_HOST", "host"),
    )
    port: int = Field(
        default=8000,
        ge=1,
        le=65535,
        validation_alias=AliasChoices("TOOLKIT_PORT", "port"),
    )

    upload_dir: Path = Field(
        default_factory=lambda: Path("data/uploads"),
        validation_alias=AliasChoices("UPLOAD_DIR", "upload_dir"),
    )
    # 0 means "use the built-in default of 1 GiB"
    upload_max_total_bytes: int = Field(
        default=0,
        ge=0,
        validation_alias=AliasChoices(
            "UPLOAD_MAX_TOTAL_BYTES",
            "upload_max_total_bytes",
        ),
    )
    upload_allowed_content_types: list[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices(
            "UPLOAD_ALLOWED_CONTENT_TYPES",
            "upload_allowed_content_types",
        ),
        description="Sniffed MIME types accepted for upload. Empty allows every type.",
    )
    upload_rename_files: bool = Field(
        default=True,
        validation_alias=AliasChoices(
            "UPLOAD_RENAME_FILES",
            "upload_rename_files",
        ),
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached `Settings` instance."""

    return Settings()


__all__ = ["Settings", "get_settings"]
