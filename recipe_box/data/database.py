"""
Dataset access for Recipe Box.

The catalog lives in a single JSON file ({"recipes": [...], "ingredients": [...]}).
RecipeStore reads it through a DatasetCache so the file is re-read at most
once per TTL window.
"""

import json
import logging
import threading
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Dict, Any, Optional

from ..errors import DatasetError
from .models import RecipeData

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 30 * 60


class DatasetCache:
    """Holds one loaded dataset and when it was fetched.

    The clock is injectable so expiry can be tested without sleeping.
    """

    def __init__(
        self,
        loader: Callable[[], RecipeData],
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.time,
    ):
        self.loader = loader
        self.ttl_seconds = ttl_seconds
        self.clock = clock
        self._data: Optional[RecipeData] = None
        self._fetched_at: float = 0.0
        self._lock = threading.Lock()

    def _is_fresh(self, now: float) -> bool:
        return self._data is not None and (now - self._fetched_at) < self.ttl_seconds

    def get(self) -> RecipeData:
        """Return cached data, reloading if missing or expired."""
        with self._lock:
            now = self.clock()
            if self._is_fresh(now):
                logger.debug("Using cached data")
                return self._data

            logger.info("Reading fresh recipe data")
            self._data = self.loader()
            self._fetched_at = now
            logger.info(f"Data cache refreshed, valid for {self.ttl_seconds:.0f}s")
            return self._data

    def invalidate(self):
        """Drop the cached data; the next get() reloads."""
        with self._lock:
            self._data = None
            self._fetched_at = 0.0
        logger.info("Cache cleared manually")

    def status(self) -> Dict[str, Any]:
        """Describe cache state for the status endpoint."""
        with self._lock:
            now = self.clock()
            valid = self._is_fresh(now)
            remaining = self.ttl_seconds - (now - self._fetched_at) if valid else 0
            last_refreshed = (
                datetime.fromtimestamp(self._fetched_at, tz=timezone.utc).isoformat()
                if self._fetched_at
                else None
            )
            return {
                "cached": self._data is not None,
                "valid": valid,
                "timeRemainingSeconds": round(remaining),
                "lastRefreshed": last_refreshed,
            }


def load_recipe_data(path: Path) -> RecipeData:
    """
    Read and parse the dataset file.

    Raises:
        DatasetError: If the file is missing or not valid dataset JSON
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = json.load(f)
        data = RecipeData.from_dict(raw)
    except FileNotFoundError as e:
        raise DatasetError(f"Dataset file not found: {path}") from e
    except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
        raise DatasetError(f"Malformed dataset file {path}: {e}") from e

    logger.info(f"Loaded {len(data.recipes)} recipes and {len(data.ingredients)} ingredients from {path}")
    return data


class RecipeStore:
    """Read-only access to the recipe dataset with time-boxed caching."""

    def __init__(
        self,
        data_path: str = "data/data.json",
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.time,
    ):
        """
        Initialize the store.

        Args:
            data_path: Path to the dataset JSON file
            ttl_seconds: How long a loaded snapshot stays valid
            clock: Time source (seconds), injectable for tests
        """
        self.data_path = Path(data_path)
        self.cache = DatasetCache(
            loader=lambda: load_recipe_data(self.data_path),
            ttl_seconds=ttl_seconds,
            clock=clock,
        )

    def get_data(self) -> RecipeData:
        return self.cache.get()

    def clear_cache(self):
        self.cache.invalidate()

    def cache_status(self) -> Dict[str, Any]:
        return self.cache.status()
