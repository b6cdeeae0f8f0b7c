"""Configuration management for feedread."""

import os
from dataclasses import dataclass

DEFAULT_USER_AGENT = "feedread/1.0 (RSS feed reader)"


@dataclass
class FetchConfig:
    """Configuration for the HTTP fetch and XML feed stages."""

    timeout: float = 30.0
    user_agent: str = DEFAULT_USER_AGENT
    chunk_size: int = 64 * 1024


@dataclass
class DisplayConfig:
    """Configuration for the human-readable dump."""

    wrap_width: int = 72
    max_word: int = 20


class Config:
    """Main configuration manager."""

    def __init__(self):
        """Initialize configuration from environment variables."""
        self.timeout = _env_number("FEEDREAD_TIMEOUT", 30.0, float)
        self.user_agent = os.getenv("FEEDREAD_USER_AGENT", DEFAULT_USER_AGENT)
        self.wrap_width = _env_number("FEEDREAD_WRAP_WIDTH", 72, int)
        self.log_level = os.getenv("LOG_LEVEL", "WARNING")

    def get_fetch_config(self) -> FetchConfig:
        """Get fetch configuration."""
        return FetchConfig(timeout=self.timeout, user_agent=self.user_agent)

    def get_display_config(self) -> DisplayConfig:
        """Get display configuration."""
        # Word-break search window must stay narrower than the line.
        return DisplayConfig(
            wrap_width=self.wrap_width, max_word=min(20, self.wrap_width - 1)
        )


def _env_number(name: str, default, convert):
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = convert(raw.strip())
    except ValueError as e:
        raise ValueError(f"Invalid value for {name}: {raw!r}") from e
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {raw!r}")
    return value
