"""Base configuration settings.

Contains foundational settings for paths, logging, and outbound HTTP.
"""

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# =============================================================================
# PROJECT ROOT DETECTION
# =============================================================================

_PROJECT_ROOT = Path(__file__).parent.parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


def get_project_root() -> Path:
    """Get project root directory."""
    return _PROJECT_ROOT


def get_env_file() -> Path:
    """Get .env file path."""
    return _ENV_FILE


# =============================================================================
# PATH SETTINGS
# =============================================================================


class PathsSettings(BaseSettings):
    """Data and logs paths configuration.

    Attributes:
        data_dir_override: Optional data directory (defaults to <root>/data).
    """

    data_dir_override: str | None = Field(default=None, alias="BAKEBOARD_DATA_DIR")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def project_root(self) -> Path:
        """Project root directory."""
        return _PROJECT_ROOT

    @property
    def data_dir(self) -> Path:
        """Directory holding token and dismissal JSON files."""
        if self.data_dir_override:
            return Path(self.data_dir_override)
        return _PROJECT_ROOT / "data"

    @property
    def spotify_tokens_file(self) -> Path:
        """Persisted Spotify OAuth tokens."""
        return self.data_dir / "spotify-tokens.json"

    @property
    def dismissed_file(self) -> Path:
        """Persisted dismissed card ids per category."""
        return self.data_dir / "dismissed-cards.json"

    def ensure_directories(self) -> None:
        """Create the data directory if it doesn't exist."""
        self.data_dir.mkdir(parents=True, exist_ok=True)


# =============================================================================
# LOGGING SETTINGS
# =============================================================================


class LoggingSettings(BaseSettings):
    """Logging configuration.

    Attributes:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_dir: Log files directory.
        to_file: Whether loggers also write a dated log file.
    """

    level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_dir: str = Field(default="logs", alias="LOG_DIR")
    to_file: bool = Field(default=False, alias="LOG_TO_FILE")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is valid."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid LOG_LEVEL. Valid: {valid_levels}")
        return v_upper


# =============================================================================
# HTTP SETTINGS
# =============================================================================


class HTTPSettings(BaseSettings):
    """Outbound HTTP configuration shared by every source client.

    Attributes:
        user_agent: User-Agent header sent upstream.
        item_timeout: Deadline for per-item enrichment calls (seconds).
        list_timeout: Deadline for chart/list calls (seconds).
    """

    user_agent: str = Field(
        default="BakeBoard/1.0 (personal dashboard)",
        alias="USER_AGENT",
    )
    item_timeout: float = Field(default=5.0, gt=0, alias="HTTP_ITEM_TIMEOUT")
    list_timeout: float = Field(default=8.0, gt=0, alias="HTTP_LIST_TIMEOUT")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )
