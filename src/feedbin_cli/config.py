"""Configuration management for feedbin-cli.

All configuration comes from environment variables. Uses pydantic-settings
so a malformed value (a non-numeric timeout, say) fails at startup rather
than halfway through a reading session.
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Config(BaseSettings):
    """Client configuration loaded from environment variables."""

    api_url: str = Field(default="https://api.feedbin.com/v2", alias="FEEDBIN_API_URL")
    config_dir: Path = Field(
        default_factory=lambda: Path.home() / ".feedbin-cli", alias="FEEDBIN_CONFIG_DIR"
    )
    request_timeout: float = Field(default=30.0, alias="FEEDBIN_TIMEOUT")
    log_level: str = Field(default="WARNING", alias="FEEDBIN_LOG_LEVEL")
    page_size: int = Field(default=15, ge=1, alias="FEEDBIN_PAGE_SIZE")

    model_config = SettingsConfigDict(
        populate_by_name=True,
        extra="ignore",
    )

    @property
    def credentials_file(self) -> Path:
        return self.config_dir / "config.json"


def load_config() -> Config:
    """Load and validate config from environment."""
    return Config()
