"""
Configuration for Recipe Box.

Values come from the environment, with a .env file loaded if present.
Everything reads configuration through get_settings().
"""

import os
from dataclasses import dataclass, field
from functools import lru_cache
from typing import List

from dotenv import load_dotenv

from .errors import MAX_SERVINGS

# Load environment variables from .env file
load_dotenv()


@dataclass
class Settings:
    """Resolved application settings."""

    data_path: str = "data/data.json"
    cache_ttl_seconds: float = 30 * 60  # 30 minutes
    max_servings: int = MAX_SERVINGS
    debug: bool = False
    port: int = 8080
    cors_origins: List[str] = field(default_factory=lambda: ["*"])


@lru_cache
def get_settings() -> Settings:
    """
    Return the cached Settings instance.

    Environment variables:
        RECIPE_DATA_PATH, RECIPE_CACHE_TTL_SECONDS, MAX_SERVINGS,
        DEBUG, PORT, CORS_ORIGINS (comma-separated)

    MAX_SERVINGS can only lower the scaling ceiling; values are clamped to
    [1, 50].
    """
    return Settings(
        data_path=os.getenv("RECIPE_DATA_PATH", "data/data.json"),
        cache_ttl_seconds=float(os.getenv("RECIPE_CACHE_TTL_SECONDS", 30 * 60)),
        max_servings=max(1, min(int(os.getenv("MAX_SERVINGS", MAX_SERVINGS)), MAX_SERVINGS)),
        debug=os.getenv("DEBUG", "false").lower() == "true",
        port=int(os.getenv("PORT", 8080)),
        cors_origins=[
            origin.strip()
            for origin in os.getenv("CORS_ORIGINS", "*").split(",")
            if origin.strip()
        ],
    )
