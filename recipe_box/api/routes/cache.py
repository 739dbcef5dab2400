"""
Cache management routes (development use).
"""
import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from ...data.database import RecipeStore
from ..dependencies import get_store

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/cache/clear")
def clear_cache(store: RecipeStore = Depends(get_store)):
    """Drop the cached dataset; the next request re-reads the file."""
    store.clear_cache()
    return {
        "message": "Cache cleared successfully",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.get("/cache/status")
def cache_status(store: RecipeStore = Depends(get_store)):
    """Report whether the dataset is cached and for how long it stays valid."""
    return store.cache_status()
