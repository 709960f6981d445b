"""Application settings powered by Pydantic BaseSettings."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """Environment defaults for the command line."""

    model_config = SettingsConfigDict(
        env_prefix="STATIC_SITE_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    config_path: Path = Field(default=Path("static_site.yaml"))
    json_logs: bool = False
    verbose: bool = False


def get_settings() -> AppSettings:
    """Get a settings instance."""
    return AppSettings()
