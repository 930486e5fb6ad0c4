"""Configuration management for readpace.

Loads configuration from environment variables and provides defaults.
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

# Load .env file if present
load_dotenv()


def _int_env(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


@dataclass
class Config:
    """Application configuration."""

    # Projection
    window_days: int  # trailing days used to average pace
    min_reading_days: int  # distinct days before a pace is trusted
    min_recent_sessions: int  # sessions needed in the window, else whole history

    # Logging
    log_level: str

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        return cls(
            window_days=_int_env("READPACE_WINDOW_DAYS", 30),
            min_reading_days=_int_env("READPACE_MIN_READING_DAYS", 3),
            min_recent_sessions=_int_env("READPACE_MIN_RECENT_SESSIONS", 3),
            log_level=os.environ.get("READPACE_LOG_LEVEL", "WARNING").upper(),
        )

    def validate(self) -> list[str]:
        """Validate configuration, return list of errors."""
        errors = []

        if self.window_days < 1:
            errors.append("READPACE_WINDOW_DAYS must be a positive integer")
        if self.min_reading_days < 1:
            errors.append("READPACE_MIN_READING_DAYS must be a positive integer")
        if self.min_recent_sessions < 1:
            errors.append("READPACE_MIN_RECENT_SESSIONS must be a positive integer")
        if not isinstance(logging.getLevelName(self.log_level), int):
            errors.append(f"Unknown log level: {self.log_level}")

        return errors


# Global config instance
_config: Optional[Config] = None


def get_config() -> Config:
    """Get or create the global config instance."""
    global _config
    if _config is None:
        _config = Config.from_env()
    return _config


def reset_config() -> None:
    """Reset the global config instance. Used for testing."""
    global _config
    _config = None
