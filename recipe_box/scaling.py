"""
Recipe scaling.

Scales a detailed recipe to a new serving count. Ingredient amounts are
re-rendered as cook-friendly fractions; total nutrition scales linearly
while calories per serving stays the same.
"""

import logging
from dataclasses import replace

from .amounts import scale_amount
from .data.models import DetailedRecipe

logger = logging.getLogger(__name__)


def scale_detailed_recipe(recipe: DetailedRecipe, new_servings: int) -> DetailedRecipe:
    """
    Create a new recipe scaled to a serving count.

    Args:
        recipe: Detailed recipe to scale (not modified)
        new_servings: Target servings, already validated by the caller

    Returns:
        New DetailedRecipe with scaled amounts and totals
    """
    scale_factor = new_servings / recipe.servings
    logger.debug(f"Scaling {recipe.id} from {recipe.servings} to {new_servings} (x{scale_factor:.3f})")

    scaled_ingredients = [
        replace(ingredient, amount=scale_amount(ingredient.amount, scale_factor))
        for ingredient in recipe.ingredients
    ]

    # calories_per_serving is per serving, so it carries over unchanged
    return recipe.with_servings(
        servings=new_servings,
        ingredients=scaled_ingredients,
        total_nutrition=recipe.total_nutrition.scale(scale_factor),
    )
