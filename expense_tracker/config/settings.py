"""
Configuration Management for Expense Tracker

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
The CLI surface stays exactly `<program> <command> [--option value]...`;
anything that is not part of a command (where the store lives, how amounts
are displayed, where logs go) is configured through EXPENSES_* variables
or a .env file instead of extra flags.
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class TrackerSettings(BaseSettings):
    """
    Main application settings.
    
    Loads configuration from environment variables and .env file.
    """
    
    model_config = SettingsConfigDict(
        env_prefix="EXPENSES_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )
    
    # Storage
    data_file: str = Field(
        default="expenses.json",
        min_length=1,
        description="Path to the JSON file holding all expenses"
    )
    json_indent: int = Field(
        default=4,
        ge=0,
        le=8,
        description="Indentation used when writing the store file"
    )
    
    # Presentation
    currency_unit: str = Field(
        default="kr",
        description="Suffix printed after every amount"
    )
    
    # Logging
    log_level: str = Field(
        default="WARNING",
        description="Threshold for the audit log"
    )
    log_file: Optional[str] = Field(
        default=None,
        description="Write the audit log to this file (JSON lines)"
    )
    debug_mode: bool = Field(
        default=False,
        description="Also stream the audit log to stderr"
    )
    
    # Exit status
    strict_exit_codes: bool = Field(
        default=False,
        description="Exit with status 1 whenever an error is reported"
    )
    
    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalise and check the log level name."""
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level


@lru_cache()
def get_settings() -> TrackerSettings:
    """
    Get application settings (cached).
    
    Uses LRU cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload if needed.
    """
    return TrackerSettings()
