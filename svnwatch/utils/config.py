"""
svnwatch Configuration Module.

Centralizes environment-driven settings using Pydantic Settings.
Command line flags are handled separately by ``svnwatch.models.WatchConfig``.
Requires Python 3.11+.
"""

from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from svnwatch import __version__

# Load a .env file from the working directory into os.environ at import time
# so the nested BaseSettings classes can read the values
load_dotenv()

DEFAULT_SVN_BIN = "svn"
DEFAULT_INW_BIN = "inotifywait"


class BinarySettings(BaseSettings):
    """Names of the external programs svnwatch drives."""

    model_config = SettingsConfigDict(env_prefix="SW_")

    svn_bin: str = Field(default=DEFAULT_SVN_BIN, description="Subversion client executable")
    inw_bin: str = Field(default=DEFAULT_INW_BIN, description="inotifywait executable")

    @field_validator("svn_bin", mode="before")
    @classmethod
    def default_svn_bin(cls, v: str | None) -> str:
        """Treat an empty override as unset."""
        if v is None or not str(v).strip():
            return DEFAULT_SVN_BIN
        return str(v).strip()

    @field_validator("inw_bin", mode="before")
    @classmethod
    def default_inw_bin(cls, v: str | None) -> str:
        """Treat an empty override as unset."""
        if v is None or not str(v).strip():
            return DEFAULT_INW_BIN
        return str(v).strip()


class LoggingSettings(BaseSettings):
    """Logging configuration settings."""

    model_config = SettingsConfigDict(env_prefix="LOG_")

    level: str = Field(default="INFO")
    format: str = Field(default="console")  # "json" or "console"
    file_path: Path | None = Field(default=None)


class Settings(BaseSettings):
    """Main application settings aggregating all sub-settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application metadata
    app_name: str = Field(default="svnwatch")
    app_version: str = Field(default=__version__)

    # Sub-settings
    binaries: BinarySettings = Field(default_factory=BinarySettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Get cached application settings.

    Returns singleton instance of Settings. Tests that change the
    environment must call ``get_settings.cache_clear()``.
    """
    return Settings()
