"""
Nutrition calculation for recipes.

Ingredient nutrition is recorded per a category-specific base unit, so each
usage is first turned into a multiplier of that base unit:
- Meat/dairy/seafood/protein: per 100g
- Baking, grain, cereal, pasta: per cup (pounds are treated as per 100g)
- Dairy alternatives: per 100ml
- Oils, condiments, sweeteners, spices: per tablespoon
- Produce: per piece/item
- Legumes: per can

Units outside a category's list, and categories outside the table, use the
parsed amount unchanged.
"""

import logging
import math
from typing import Dict, Optional, Sequence, Set, Tuple

from .amounts import parse_amount
from .data.models import (
    DetailedRecipe,
    DetailedRecipeIngredient,
    Ingredient,
    NutritionTotals,
    Recipe,
    RecipeIngredient,
    RecipeWithNutrition,
)

logger = logging.getLogger(__name__)

GRAMS_PER_POUND = 454
GRAMS_PER_OUNCE = 28.35
ML_PER_CUP = 240
TSP_PER_TBSP = 3

PER_100G_CATEGORIES: Set[str] = {"dairy", "meat", "seafood", "protein"}
PER_CUP_CATEGORIES: Set[str] = {"baking", "grain", "cereal", "pasta"}
PER_100ML_CATEGORIES: Set[str] = {"dairy-alternative"}
PER_TBSP_CATEGORIES: Set[str] = {"oil", "condiment", "sweetener", "spice"}
PER_PIECE_CATEGORIES: Set[str] = {"vegetable", "fruit", "herb", "seaweed"}
PER_CAN_CATEGORIES: Set[str] = {"legume"}

PIECE_UNITS: Set[str] = {"large", "medium", "small", "whole", "head", "leaves", "sheets", "pieces"}


def round_half_up(value: float) -> int:
    """Round x.5 up, as the web client does (Python's round() is banker's)."""
    return int(math.floor(value + 0.5))


def _multiplier(amount: float, unit: str, category: str) -> Tuple[float, str]:
    """Return (multiplier, rule name) for one usage."""
    if category in PER_100G_CATEGORIES:
        if unit in ("g", "grams"):
            return amount / 100, "grams"
        if unit in ("lb", "pound"):
            return amount * GRAMS_PER_POUND / 100, "pounds"
        if unit in ("oz", "ounce"):
            return amount * GRAMS_PER_OUNCE / 100, "ounces"
        return amount, "per-100g passthrough"

    if category in PER_CUP_CATEGORIES:
        if unit in ("cup", "cups"):
            return amount, "cups"
        if unit in ("lb", "pound"):
            # pasta and similar are recorded per 100g when bought by the pound
            return amount * GRAMS_PER_POUND / 100, "pounds-to-grams"
        return amount, "per-cup passthrough"

    if category in PER_100ML_CATEGORIES:
        if unit in ("ml", "milliliter"):
            return amount / 100, "ml"
        if unit in ("cup", "cups"):
            return amount * ML_PER_CUP / 100, "cups-to-ml"
        return amount, "per-100ml passthrough"

    if category in PER_TBSP_CATEGORIES:
        if unit in ("tbsp", "tablespoon"):
            return amount, "tablespoons"
        if unit in ("tsp", "teaspoon"):
            return amount / TSP_PER_TBSP, "teaspoons"
        return amount, "per-tbsp passthrough"

    if category in PER_PIECE_CATEGORIES:
        if unit in PIECE_UNITS:
            return amount, "pieces"
        if unit in ("cup", "cups"):
            return amount, "cups"
        return amount, "per-piece passthrough"

    if category in PER_CAN_CATEGORIES:
        return amount, "cans" if unit == "can" else "per-can passthrough"

    return amount, "default"


def get_nutrition_for_ingredient(
    recipe_ingredient: RecipeIngredient, ingredient: Ingredient
) -> NutritionTotals:
    """
    Compute the nutrition one ingredient usage contributes.

    Args:
        recipe_ingredient: Amount and unit as written in the recipe
        ingredient: Resolved reference ingredient

    Returns:
        NutritionTotals for this usage
    """
    amount = parse_amount(recipe_ingredient.amount)
    unit = recipe_ingredient.unit.lower()

    multiplier, rule = _multiplier(amount, unit, ingredient.category)
    logger.debug(
        f"{ingredient.name}: category={ingredient.category!r} unit={unit!r} "
        f"amount={amount} rule={rule} multiplier={multiplier}"
    )

    return ingredient.nutrition.scale(multiplier)


def calculate_recipe_nutrition(
    recipe: Recipe, ingredients_by_id: Dict[str, Ingredient]
) -> NutritionTotals:
    """
    Sum nutrition over a recipe's ingredients.

    Ingredient ids that do not resolve are skipped; list views prefer a
    partial total over no answer.
    """
    total = NutritionTotals()

    for recipe_ingredient in recipe.ingredients:
        ingredient = ingredients_by_id.get(recipe_ingredient.ingredient_id)
        if ingredient is None:
            logger.debug(
                f"Skipping unknown ingredient {recipe_ingredient.ingredient_id!r} "
                f"in recipe {recipe.id}"
            )
            continue

        nutrition = get_nutrition_for_ingredient(recipe_ingredient, ingredient)
        total = total + nutrition
        logger.debug(
            f"{recipe_ingredient.amount} {recipe_ingredient.unit} {ingredient.name}: "
            f"{round_half_up(nutrition.calories)} calories"
        )

    logger.debug(f"Total calories for {recipe.id}: {round_half_up(total.calories)}")
    return total


def calories_per_serving(total: NutritionTotals, servings: int) -> int:
    return round_half_up(total.calories / servings)


def add_calories_per_serving(
    recipe: Recipe, ingredients_by_id: Dict[str, Ingredient]
) -> RecipeWithNutrition:
    """Attach calories per serving to a recipe for list views."""
    total = calculate_recipe_nutrition(recipe, ingredients_by_id)
    return RecipeWithNutrition(
        recipe=recipe,
        calories_per_serving=calories_per_serving(total, recipe.servings),
    )


def create_detailed_recipe(
    recipe: Recipe, ingredients_by_id: Dict[str, Ingredient]
) -> Optional[DetailedRecipe]:
    """
    Build a recipe with resolved ingredients and nutrition totals.

    Returns:
        DetailedRecipe, or None if any ingredient id does not resolve
    """
    detailed_ingredients = []

    for recipe_ingredient in recipe.ingredients:
        ingredient = ingredients_by_id.get(recipe_ingredient.ingredient_id)
        if ingredient is None:
            logger.warning(
                f"Ingredient not found: {recipe_ingredient.ingredient_id} (recipe {recipe.id})"
            )
            return None

        detailed_ingredients.append(
            DetailedRecipeIngredient(
                ingredient_id=recipe_ingredient.ingredient_id,
                amount=recipe_ingredient.amount,
                unit=recipe_ingredient.unit,
                ingredient=ingredient,
            )
        )

    total = calculate_recipe_nutrition(recipe, ingredients_by_id)

    return DetailedRecipe(
        recipe=recipe,
        ingredients=detailed_ingredients,
        total_nutrition=total,
        calories_per_serving=calories_per_serving(total, recipe.servings),
        servings=recipe.servings,
    )


def index_ingredients(ingredients: Sequence[Ingredient]) -> Dict[str, Ingredient]:
    return {ingredient.id: ingredient for ingredient in ingredients}
