"""
Recipe routes for the FastAPI application.

Provides endpoints for:
- Listing recipes with search/filter and calories per serving
- Getting one recipe (by id or slug) with full ingredient details
- Scaling a recipe to a serving count
- Counting filter options for the current results
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from ...data.models import RecipeQuery
from ...errors import DataIntegrityError, InvalidServingsError, RecipeNotFoundError
from ...service import RecipeService
from ..dependencies import get_service

logger = logging.getLogger(__name__)

router = APIRouter()


def recipe_query(
    search: Optional[str] = None,
    tags: Optional[str] = None,
    ingredients: Optional[str] = None,
    difficulty: Optional[str] = None,
    meal_time: Optional[str] = Query(None, alias="mealTime"),
    dietary: Optional[str] = None,
    sort: Optional[str] = None,
) -> RecipeQuery:
    """Build a RecipeQuery from query parameters."""
    return RecipeQuery(
        search=search,
        tags=tags,
        ingredients=ingredients,
        difficulty=difficulty,
        meal_time=meal_time,
        dietary=dietary,
        sort=sort,
    )


@router.get("/recipes")
def list_recipes(
    query: RecipeQuery = Depends(recipe_query),
    service: RecipeService = Depends(get_service),
):
    """
    List recipes matching the query.

    Returns:
        Recipes with caloriesPerServing attached
    """
    try:
        return [item.to_dict() for item in service.list_recipes(query)]
    except Exception as e:
        logger.exception(f"Error fetching recipes: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch recipes")


@router.get("/filters/counts")
def filter_counts(
    query: RecipeQuery = Depends(recipe_query),
    service: RecipeService = Depends(get_service),
):
    """Count how many current results each filter option would match."""
    try:
        return service.filter_counts(query)
    except Exception as e:
        logger.exception(f"Error counting filters: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch recipes")


@router.get("/recipes/{identifier}")
def get_recipe(identifier: str, service: RecipeService = Depends(get_service)):
    """
    Get a recipe by ID or slug.

    Args:
        identifier: Recipe id or slug

    Returns:
        Recipe with resolved ingredients, totalNutrition and caloriesPerServing
    """
    try:
        return service.get_recipe(identifier).to_dict()
    except RecipeNotFoundError:
        raise HTTPException(status_code=404, detail="Recipe not found")
    except DataIntegrityError as e:
        logger.error(str(e))
        raise HTTPException(status_code=500, detail="Failed to load recipe ingredients")
    except Exception as e:
        logger.exception(f"Error fetching recipe: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch recipe")


@router.get("/recipes/{identifier}/scale/{servings}")
def scale_recipe(
    identifier: str,
    servings: str,
    service: RecipeService = Depends(get_service),
):
    """
    Get a recipe scaled to a new serving count.

    Args:
        identifier: Recipe id or slug
        servings: Target servings (1-50)
    """
    try:
        new_servings = int(servings)
    except ValueError:
        new_servings = None

    try:
        return service.scale_recipe(identifier, new_servings).to_dict()
    except InvalidServingsError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except RecipeNotFoundError:
        raise HTTPException(status_code=404, detail="Recipe not found")
    except DataIntegrityError as e:
        logger.error(str(e))
        raise HTTPException(status_code=500, detail="Failed to load recipe ingredients")
    except Exception as e:
        logger.exception(f"Error scaling recipe: {e}")
        raise HTTPException(status_code=500, detail="Failed to scale recipe")
