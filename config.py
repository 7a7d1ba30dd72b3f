# config.py
import os
from dataclasses import dataclass, field, replace
from typing import Tuple

import formatting

@dataclass
class Config:
    """Holds all application configuration."""
    API_BASE_URL: str = "https://api.tvmaze.com"
    PLACEHOLDER_IMAGE_URL: str = formatting.PLACEHOLDER_IMAGE_URL
    FEATURED_QUERIES: Tuple[str, ...] = field(default_factory=lambda: (
        "breaking bad", "friends", "game of thrones", "the office", "stranger things"
    ))
    FEATURED_LIMIT: int = 12
    MAX_CARD_GENRES: int = 3
    LOG_LEVEL: str = "WARNING"

    @classmethod
    def from_env(cls) -> "Config":
        """Builds a Config, letting FLIXFRAME_* environment variables override the defaults."""
        config = cls()
        overrides = {}
        if os.environ.get("FLIXFRAME_API_URL"):
            overrides["API_BASE_URL"] = os.environ["FLIXFRAME_API_URL"].rstrip("/")
        if os.environ.get("FLIXFRAME_LOG_LEVEL"):
            overrides["LOG_LEVEL"] = os.environ["FLIXFRAME_LOG_LEVEL"].upper()
        return replace(config, **overrides)
