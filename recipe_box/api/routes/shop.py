"""
Shop routes for the FastAPI application.

Provides endpoints for:
- Generating a shopping list from selected recipes
"""
import logging
from typing import Annotated, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict, Field

from ...errors import EmptySelectionError
from ...service import RecipeService
from ..dependencies import get_service

logger = logging.getLogger(__name__)

router = APIRouter()

# Per-recipe amount multiplier; 0 means unadjusted
ServingMultiplier = Annotated[float, Field(ge=0, allow_inf_nan=False)]


class CreateShoppingListRequest(BaseModel):
    """Request body for creating a shopping list."""
    model_config = ConfigDict(populate_by_name=True)

    recipe_ids: List[str] = Field(default_factory=list, alias="recipeIds")
    serving_adjustments: Optional[Dict[str, ServingMultiplier]] = Field(None, alias="servingAdjustments")


@router.post("/shopping-list")
def create_shopping_list(
    shop_request: CreateShoppingListRequest,
    service: RecipeService = Depends(get_service),
):
    """
    Create a shopping list from selected recipes.

    Args:
        shop_request: Recipe ids and optional per-recipe multipliers

    Returns:
        Shopping list with items and groupedByCategory
    """
    try:
        shopping_list = service.generate_shopping_list(
            shop_request.recipe_ids,
            serving_adjustments=shop_request.serving_adjustments,
        )
        return shopping_list.to_dict()
    except EmptySelectionError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception(f"Error creating shopping list: {e}")
        raise HTTPException(status_code=500, detail="Failed to generate shopping list")
