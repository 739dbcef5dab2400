"""
Recipe list filtering, sorting and filter-option counts.

Filters combine with AND across filter types; the comma-separated filters
(tags, ingredients) match if any of their tokens match.
"""

from typing import Dict, List, Optional, Sequence

from .data.models import Ingredient, Recipe, RecipeQuery, RecipeWithNutrition

# Options offered by the browse page
TAG_OPTIONS: List[str] = [
    "italian", "asian", "mexican", "greek", "japanese", "indian",
    "healthy", "family", "baking", "salad", "seafood",
]
DIETARY_OPTIONS: List[str] = ["vegetarian", "vegan", "gluten-free"]
MEAL_TIME_OPTIONS: List[str] = ["breakfast", "lunch", "dinner", "dessert"]
DIFFICULTY_ORDER: Dict[str, int] = {"easy": 1, "medium": 2, "hard": 3}
SORT_OPTIONS: List[str] = ["newest", "prep-time", "difficulty", "calories"]


def _split_tokens(value: str) -> List[str]:
    return [token.strip().lower() for token in value.split(",")]


def _resolved_names(recipe: Recipe, ingredients_by_id: Dict[str, Ingredient]) -> List[str]:
    return [
        ingredients_by_id[ri.ingredient_id].name.lower()
        for ri in recipe.ingredients
        if ri.ingredient_id in ingredients_by_id
    ]


def matches_search(recipe: Recipe, search: str, ingredients_by_id: Dict[str, Ingredient]) -> bool:
    search_lower = search.lower()
    return (
        search_lower in recipe.title.lower()
        or search_lower in recipe.description.lower()
        or any(search_lower in name for name in _resolved_names(recipe, ingredients_by_id))
    )


def matches_meal_time(recipe: Recipe, meal_time: str) -> bool:
    meal_time_lower = meal_time.lower()
    return any(tag.lower() == meal_time_lower for tag in recipe.tags)


def matches_tags(recipe: Recipe, tags: str) -> bool:
    recipe_tags = [tag.lower() for tag in recipe.tags]
    return any(
        query_tag in recipe_tag
        for query_tag in _split_tokens(tags)
        for recipe_tag in recipe_tags
    )


def matches_ingredients(
    recipe: Recipe, ingredients: str, ingredients_by_id: Dict[str, Ingredient]
) -> bool:
    for query_ingredient in _split_tokens(ingredients):
        for recipe_ingredient in recipe.ingredients:
            ingredient = ingredients_by_id.get(recipe_ingredient.ingredient_id)
            if ingredient is None:
                continue
            if (
                query_ingredient in recipe_ingredient.ingredient_id.lower()
                or query_ingredient in ingredient.name.lower()
            ):
                return True
    return False


def filter_recipes(
    recipes: Sequence[Recipe],
    query: RecipeQuery,
    ingredients_by_id: Dict[str, Ingredient],
) -> List[Recipe]:
    """
    Filter recipes by search text, difficulty, meal time, tags and ingredients.

    Args:
        recipes: Recipes to filter
        query: Filters; empty fields are ignored
        ingredients_by_id: Ingredient lookup for name matching

    Returns:
        Recipes passing every supplied filter, in input order
    """
    def keep(recipe: Recipe) -> bool:
        if query.search and not matches_search(recipe, query.search, ingredients_by_id):
            return False
        if query.difficulty and recipe.difficulty != query.difficulty:
            return False
        if query.meal_time and not matches_meal_time(recipe, query.meal_time):
            return False
        if query.tags and not matches_tags(recipe, query.tags):
            return False
        if query.ingredients and not matches_ingredients(recipe, query.ingredients, ingredients_by_id):
            return False
        return True

    return [recipe for recipe in recipes if keep(recipe)]


def filter_by_dietary(
    recipes: Sequence[RecipeWithNutrition], dietary: Optional[str]
) -> List[RecipeWithNutrition]:
    """
    Keep recipes matching ALL requested dietary restrictions.

    Vegan recipes also count as vegetarian.
    """
    if not dietary:
        return list(recipes)

    restrictions = [d for d in _split_tokens(dietary) if d]

    def satisfies(recipe: Recipe, restriction: str) -> bool:
        tags = [tag.lower() for tag in recipe.tags]
        if restriction == "vegetarian":
            return any("vegetarian" in tag or "vegan" in tag for tag in tags)
        return any(restriction in tag for tag in tags)

    return [
        item for item in recipes
        if all(satisfies(item.recipe, restriction) for restriction in restrictions)
    ]


def sort_recipes(
    recipes: Sequence[RecipeWithNutrition], sort_by: Optional[str] = None
) -> List[RecipeWithNutrition]:
    """
    Sort list-view recipes.

    Args:
        recipes: Recipes with calories attached
        sort_by: "prep-time", "difficulty", "calories"; anything else sorts newest first

    Returns:
        New sorted list (stable)
    """
    if sort_by == "prep-time":
        return sorted(recipes, key=lambda r: r.recipe.prep_minutes)
    if sort_by == "difficulty":
        return sorted(recipes, key=lambda r: DIFFICULTY_ORDER.get(r.recipe.difficulty, 0))
    if sort_by == "calories":
        return sorted(recipes, key=lambda r: r.calories_per_serving)
    # ISO dates sort lexicographically
    return sorted(recipes, key=lambda r: r.recipe.date_added, reverse=True)


def count_filter_options(recipes: Sequence[RecipeWithNutrition]) -> Dict[str, Dict[str, int]]:
    """Count how many of the current recipes each filter option would match."""
    def tag_count(option: str) -> int:
        return sum(
            1 for item in recipes
            if any(option in tag.lower() for tag in item.recipe.tags)
        )

    return {
        "tags": {option: tag_count(option) for option in TAG_OPTIONS},
        "dietary": {option: tag_count(option) for option in DIETARY_OPTIONS},
        "difficulty": {
            level: sum(1 for item in recipes if item.recipe.difficulty == level)
            for level in DIFFICULTY_ORDER
        },
    }
