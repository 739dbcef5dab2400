"""
Recipe service: the operations the web API and CLI expose.

Ties the dataset store to the calculation modules and turns missing or
invalid input into RecipeBoxError exceptions.
"""

import logging
from typing import Dict, List, Optional, Sequence

from .data.database import RecipeStore
from .data.models import DetailedRecipe, Recipe, RecipeData, RecipeQuery, RecipeWithNutrition, ShoppingList
from .errors import (
    MAX_SERVINGS,
    DataIntegrityError,
    EmptySelectionError,
    InvalidServingsError,
    RecipeNotFoundError,
)
from .filters import count_filter_options, filter_by_dietary, filter_recipes, sort_recipes
from .nutrition import add_calories_per_serving, create_detailed_recipe
from .scaling import scale_detailed_recipe
from .shopping import generate_shopping_list

logger = logging.getLogger(__name__)

MIN_SERVINGS = 1


class RecipeService:
    """Recipe browsing, scaling and shopping list operations."""

    def __init__(self, store: RecipeStore, max_servings: int = MAX_SERVINGS):
        """
        Initialize the service.

        Args:
            store: Dataset store
            max_servings: Upper bound accepted by scale_recipe, capped at MAX_SERVINGS
        """
        self.store = store
        if max_servings > MAX_SERVINGS:
            logger.warning(f"max_servings {max_servings} exceeds {MAX_SERVINGS}; using {MAX_SERVINGS}")
        self.max_servings = min(max_servings, MAX_SERVINGS)

    def _find(self, data: RecipeData, identifier: str) -> Recipe:
        recipe = data.find_recipe(identifier)
        if recipe is None:
            raise RecipeNotFoundError(identifier)
        return recipe

    def _detail(self, data: RecipeData, recipe: Recipe) -> DetailedRecipe:
        detailed = create_detailed_recipe(recipe, data.ingredients_by_id)
        if detailed is None:
            raise DataIntegrityError(recipe.id)
        return detailed

    def list_recipes(self, query: Optional[RecipeQuery] = None) -> List[RecipeWithNutrition]:
        """
        List recipes matching the query, with calories per serving.

        Ingredients missing from the dataset are left out of the calorie
        count instead of hiding the recipe.
        """
        query = query or RecipeQuery()
        data = self.store.get_data()

        filtered = filter_recipes(data.recipes, query, data.ingredients_by_id)
        with_nutrition = [
            add_calories_per_serving(recipe, data.ingredients_by_id) for recipe in filtered
        ]
        with_nutrition = filter_by_dietary(with_nutrition, query.dietary)

        if query.sort:
            with_nutrition = sort_recipes(with_nutrition, query.sort)

        logger.debug(f"list_recipes matched {len(with_nutrition)} of {len(data.recipes)}")
        return with_nutrition

    def filter_counts(self, query: Optional[RecipeQuery] = None) -> Dict[str, Dict[str, int]]:
        """Option counts over the recipes the query currently returns."""
        return count_filter_options(self.list_recipes(query))

    def get_recipe(self, identifier: str) -> DetailedRecipe:
        """
        Get a recipe with resolved ingredients and nutrition.

        Args:
            identifier: Recipe id or slug

        Raises:
            RecipeNotFoundError: No recipe with this id or slug
            DataIntegrityError: The recipe references an unknown ingredient
        """
        data = self.store.get_data()
        return self._detail(data, self._find(data, identifier))

    def scale_recipe(self, identifier: str, servings: int) -> DetailedRecipe:
        """
        Get a recipe scaled to a serving count.

        Raises:
            InvalidServingsError: servings is not an integer in [1, max_servings]
            RecipeNotFoundError, DataIntegrityError: As for get_recipe
        """
        if (
            isinstance(servings, bool)
            or not isinstance(servings, int)
            or not MIN_SERVINGS <= servings <= self.max_servings
        ):
            raise InvalidServingsError(servings, self.max_servings)

        return scale_detailed_recipe(self.get_recipe(identifier), servings)

    def generate_shopping_list(
        self,
        recipe_ids: Sequence[str],
        serving_adjustments: Optional[Dict[str, float]] = None,
    ) -> ShoppingList:
        """
        Build a shopping list for the selected recipes.

        Args:
            recipe_ids: Recipe ids or slugs; unknown ones are ignored
            serving_adjustments: Optional recipe id -> amount multiplier

        Raises:
            EmptySelectionError: recipe_ids is empty
        """
        if not recipe_ids:
            raise EmptySelectionError()

        data = self.store.get_data()
        recipes = []
        for identifier in recipe_ids:
            recipe = data.find_recipe(identifier)
            if recipe is None:
                logger.warning(f"Shopping list: unknown recipe {identifier}")
                continue
            recipes.append(recipe)

        return generate_shopping_list(recipes, data.ingredients, serving_adjustments)
