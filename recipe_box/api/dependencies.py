"""Shared FastAPI dependencies."""

from fastapi import Request

from ..data.database import RecipeStore
from ..service import RecipeService


def get_service(request: Request) -> RecipeService:
    """Dependency to get the recipe service."""
    return request.app.state.service


def get_store(request: Request) -> RecipeStore:
    """Dependency to get the dataset store."""
    return request.app.state.store
