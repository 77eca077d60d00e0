"""Configuration loaded from the environment (and a .env file when present)."""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from .live_view import DISPLAY_LIMIT

load_dotenv()


@dataclass(frozen=True)
class Settings:
    display_limit: int = DISPLAY_LIMIT
    refresh_seconds: float = 1.0  # interval of the watch loop in examples/example.py
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from METROBOARD_* environment variables."""
        display_limit = int(os.getenv("METROBOARD_DISPLAY_LIMIT", str(DISPLAY_LIMIT)))
        refresh_seconds = float(os.getenv("METROBOARD_REFRESH_SECONDS", "1.0"))
        if display_limit < 0:
            raise ValueError(f"METROBOARD_DISPLAY_LIMIT must be non-negative, got {display_limit}")
        if refresh_seconds <= 0:
            raise ValueError(f"METROBOARD_REFRESH_SECONDS must be positive, got {refresh_seconds}")
        return cls(
            display_limit=display_limit,
            refresh_seconds=refresh_seconds,
            log_level=os.getenv("METROBOARD_LOG_LEVEL", "INFO").upper(),
        )


settings = Settings.from_env()
