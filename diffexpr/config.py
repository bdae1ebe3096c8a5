"""
Engine configuration.

Centralized configuration management with environment variables, all
prefixed with DIFFEXPR_ (e.g. DIFFEXPR_LOG_LEVEL=DEBUG).
"""

from functools import lru_cache
from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Engine settings"""

    model_config = SettingsConfigDict(
        env_prefix="DIFFEXPR_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Logging
    LOG_LEVEL: str = "WARNING"
    LOG_FORMAT: Literal["text", "json"] = "text"
    LOG_FILE: Optional[str] = None

    # Parsing
    MAX_EXPRESSION_LENGTH: int = 10000
    DEFAULT_SCALAR: Literal["auto", "real", "complex"] = "auto"
    CONTEXT_FILE: Optional[str] = None


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
