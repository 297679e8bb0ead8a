"""Application configuration settings."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"

DEFAULT_DATE_FORMAT = "%d-%m-%Y %H:%M:%S"


class Settings(BaseSettings):
    """Upload configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE, env_file_encoding=ENV_FILE_ENCODING, extra="ignore"
    )

    database_url: str = Field(
        default="sqlite:///./uploads.db",
        description="Database connection URL used by SQLAlchemy",
        min_length=1,
    )
    upload_directory: str = Field(
        description="Directory where uploaded files are stored",
        min_length=1,
    )
    default_upload_file_class: str = Field(
        description="Dotted import path of the record class hydrated by default",
        min_length=1,
    )
    default_upload_file_field: str = Field(
        description="Record attribute that receives the stored file name",
        min_length=1,
    )
    upload_date_format: str = Field(
        default=DEFAULT_DATE_FORMAT,
        description="strptime format used for datetimes sent as form fields",
    )
    app_timezone: str | None = Field(
        default=None,
        description="IANA name or UTC offset used for record timestamps",
    )

    @field_validator("default_upload_file_class")
    @classmethod
    def _validate_dotted_path(cls, value: str) -> str:
        module_path, _, class_name = value.strip().rpartition(".")
        if not module_path or not class_name:
            raise ValueError(
                "DEFAULT_UPLOAD_FILE_CLASS must be a dotted path such as "
                "'package.module.ClassName'"
            )
        return value.strip()


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["DEFAULT_DATE_FORMAT", "Settings", "get_settings", "reset_settings_cache"]
