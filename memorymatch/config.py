"""
Centralized configuration management for memorymatch.
"""
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import DEFAULT_DIFFICULTY, DEFAULT_MISMATCH_DELAY_MS
from .models import Difficulty


class Settings(BaseSettings):
    """
    Defines game settings, loaded from environment variables or .env files.
    """

    model_config = SettingsConfigDict(
        env_prefix="MEMORYMATCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Overridden by MEMORYMATCH_DIFFICULTY.
    difficulty: Difficulty = DEFAULT_DIFFICULTY

    # Overridden by MEMORYMATCH_MISMATCH_DELAY_MS.
    mismatch_delay_ms: int = Field(default=DEFAULT_MISMATCH_DELAY_MS, ge=0)

    # Fixed shuffle seed for reproducible layouts. Unset means random.
    seed: Optional[int] = None


def get_settings() -> Settings:
    """Build settings from the current environment."""
    return Settings()
