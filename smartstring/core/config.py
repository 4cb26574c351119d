"""
Library configuration.

Centralized settings read from environment variables (prefix ``SMARTSTRING_``)
or a local ``.env`` file. Settings only seed the default formatting Context;
chains never read them directly.
"""

from functools import lru_cache
from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Library settings"""

    # Numeric coercion
    NULL_AS_ZERO: bool = False

    # Number formatting
    DECIMAL_SEPARATOR: str = "."
    THOUSANDS_SEPARATOR: str = ","

    # Date formatting (strftime patterns)
    DATE_FORMAT: str = "%Y-%m-%d"
    DATE_TIME_FORMAT: str = "%Y-%m-%d %H:%M:%S"
    TIMEZONE: Optional[str] = None  # None = host local time

    # Logging
    LOG_LEVEL: str = "WARNING"
    LOG_FORMAT: Literal["json", "text"] = "text"
    LOG_FILE: Optional[str] = None

    model_config = SettingsConfigDict(
        env_prefix="SMARTSTRING_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


# Global settings instance
settings = get_settings()
