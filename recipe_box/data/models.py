"""
Data models for Recipe Box.

These models define the core entities used throughout the system:
- Ingredient: Reference data with per-base-unit nutrition
- Recipe: Catalog recipes referencing ingredients by id
- DetailedRecipe: Recipe with resolved ingredients and nutrition totals
- ShoppingList: Aggregated ingredients across several recipes

JSON uses camelCase keys to match the dataset file (data/data.json).
"""

import re
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import List, Optional, Dict

from ..amounts import format_amount

DIFFICULTY_LEVELS = ("easy", "medium", "hard")

_LEADING_INT = re.compile(r"^\s*(\d+)")


def _leading_minutes(text: str) -> int:
    """Leading integer of a time string ("15 minutes" -> 15), 0 if absent."""
    match = _LEADING_INT.match(text or "")
    return int(match.group(1)) if match else 0


@dataclass
class NutritionTotals:
    """Calories and macronutrients (grams)."""

    calories: float = 0.0
    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0

    def __add__(self, other: "NutritionTotals") -> "NutritionTotals":
        return NutritionTotals(
            calories=self.calories + other.calories,
            protein=self.protein + other.protein,
            carbs=self.carbs + other.carbs,
            fat=self.fat + other.fat,
        )

    def scale(self, factor: float) -> "NutritionTotals":
        """Return a new totals object with every field multiplied by factor."""
        return NutritionTotals(
            calories=self.calories * factor,
            protein=self.protein * factor,
            carbs=self.carbs * factor,
            fat=self.fat * factor,
        )

    def __str__(self) -> str:
        return (
            f"{round(self.calories)} cal, {self.protein:.1f}g protein, "
            f"{self.carbs:.1f}g carbs, {self.fat:.1f}g fat"
        )

    def to_dict(self) -> Dict:
        return {
            "calories": self.calories,
            "protein": self.protein,
            "carbs": self.carbs,
            "fat": self.fat,
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "NutritionTotals":
        return cls(
            calories=data.get("calories", 0),
            protein=data.get("protein", 0),
            carbs=data.get("carbs", 0),
            fat=data.get("fat", 0),
        )


@dataclass
class Ingredient:
    """Reference ingredient.

    Nutrition is recorded per one category-dependent base unit (per 100g for
    meat and dairy, per cup for baking goods, per tablespoon for oils, ...).
    See nutrition.get_nutrition_for_ingredient for the full table.
    """

    id: str
    name: str
    category: str  # "dairy", "meat", "baking", "vegetable", ... (open vocabulary)
    nutrition: NutritionTotals = field(default_factory=NutritionTotals)
    common_allergens: List[str] = field(default_factory=list)
    dietary: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "nutrition": self.nutrition.to_dict(),
            "commonAllergens": list(self.common_allergens),
            "dietary": list(self.dietary),
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "Ingredient":
        """Create Ingredient from dictionary."""
        return cls(
            id=data["id"],
            name=data["name"],
            category=data.get("category", ""),
            nutrition=NutritionTotals.from_dict(data.get("nutrition", {})),
            common_allergens=data.get("commonAllergens", []),
            dietary=data.get("dietary", []),
        )


@dataclass
class RecipeIngredient:
    """One ingredient usage inside a recipe."""

    ingredient_id: str  # may not resolve; callers decide how to handle that
    amount: str  # "2", "0.5", "1/3"
    unit: str  # free-form, matched case-insensitively

    def to_dict(self) -> Dict:
        return {
            "ingredientId": self.ingredient_id,
            "amount": self.amount,
            "unit": self.unit,
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "RecipeIngredient":
        return cls(
            ingredient_id=data["ingredientId"],
            amount=str(data.get("amount", "0")),
            unit=data.get("unit", ""),
        )


@dataclass
class Recipe:
    """Catalog recipe."""

    id: str
    title: str
    slug: str
    description: str
    servings: int
    prep_time: str  # "15 minutes"
    cook_time: str  # "30 minutes"
    difficulty: str  # "easy", "medium", "hard"
    ingredients: List[RecipeIngredient]
    instructions: List[str]
    tags: List[str]
    date_added: str  # ISO format: "2025-01-20"
    image_url: str = ""

    @property
    def prep_minutes(self) -> int:
        return _leading_minutes(self.prep_time)

    @property
    def cook_minutes(self) -> int:
        return _leading_minutes(self.cook_time)

    @property
    def total_minutes(self) -> int:
        return self.prep_minutes + self.cook_minutes

    def _base_dict(self) -> Dict:
        return {
            "id": self.id,
            "title": self.title,
            "slug": self.slug,
            "imageUrl": self.image_url,
            "description": self.description,
            "servings": self.servings,
            "prepTime": self.prep_time,
            "cookTime": self.cook_time,
            "difficulty": self.difficulty,
            "instructions": list(self.instructions),
            "tags": list(self.tags),
            "dateAdded": self.date_added,
        }

    def to_dict(self) -> Dict:
        """Convert to dictionary for JSON serialization."""
        data = self._base_dict()
        data["ingredients"] = [ing.to_dict() for ing in self.ingredients]
        return data

    @classmethod
    def from_dict(cls, data: Dict) -> "Recipe":
        """Create Recipe from dictionary."""
        return cls(
            id=data["id"],
            title=data["title"],
            slug=data.get("slug", ""),
            description=data.get("description", ""),
            servings=int(data.get("servings", 1)),
            prep_time=data.get("prepTime", ""),
            cook_time=data.get("cookTime", ""),
            difficulty=data.get("difficulty", "medium"),
            ingredients=[RecipeIngredient.from_dict(i) for i in data.get("ingredients", [])],
            instructions=data.get("instructions", []),
            tags=data.get("tags", []),
            date_added=data.get("dateAdded", ""),
            image_url=data.get("imageUrl", ""),
        )


@dataclass
class RecipeWithNutrition:
    """Recipe as shown in list views: the recipe plus calories per serving."""

    recipe: Recipe
    calories_per_serving: int

    def to_dict(self) -> Dict:
        data = self.recipe.to_dict()
        data["caloriesPerServing"] = self.calories_per_serving
        return data


@dataclass
class DetailedRecipeIngredient:
    """Ingredient usage with its resolved reference data."""

    ingredient_id: str
    amount: str
    unit: str
    ingredient: Ingredient

    def to_dict(self) -> Dict:
        return {
            "ingredientId": self.ingredient_id,
            "amount": self.amount,
            "unit": self.unit,
            "ingredient": self.ingredient.to_dict(),
        }


@dataclass
class DetailedRecipe:
    """Recipe with every ingredient resolved and nutrition computed."""

    recipe: Recipe
    ingredients: List[DetailedRecipeIngredient]
    total_nutrition: NutritionTotals
    calories_per_serving: int
    servings: int

    @property
    def id(self) -> str:
        return self.recipe.id

    @property
    def title(self) -> str:
        return self.recipe.title

    def with_servings(
        self,
        servings: int,
        ingredients: List[DetailedRecipeIngredient],
        total_nutrition: NutritionTotals,
    ) -> "DetailedRecipe":
        """Copy with a new serving count, ingredients and totals."""
        return replace(
            self,
            servings=servings,
            ingredients=ingredients,
            total_nutrition=total_nutrition,
        )

    def to_dict(self) -> Dict:
        """Convert to dictionary for JSON serialization."""
        data = self.recipe._base_dict()
        data["servings"] = self.servings
        data["ingredients"] = [ing.to_dict() for ing in self.ingredients]
        data["totalNutrition"] = self.total_nutrition.to_dict()
        data["caloriesPerServing"] = self.calories_per_serving
        return data


@dataclass
class RecipeData:
    """Snapshot of the dataset file."""

    recipes: List[Recipe]
    ingredients: List[Ingredient]

    def __post_init__(self):
        self._ingredients_by_id: Dict[str, Ingredient] = {
            ing.id: ing for ing in self.ingredients
        }

    @property
    def ingredients_by_id(self) -> Dict[str, Ingredient]:
        return self._ingredients_by_id

    def find_recipe(self, identifier: str) -> Optional[Recipe]:
        """Find a recipe by id, falling back to slug."""
        for recipe in self.recipes:
            if recipe.id == identifier:
                return recipe
        for recipe in self.recipes:
            if recipe.slug == identifier:
                return recipe
        return None

    @classmethod
    def from_dict(cls, data: Dict) -> "RecipeData":
        return cls(
            recipes=[Recipe.from_dict(r) for r in data.get("recipes", [])],
            ingredients=[Ingredient.from_dict(i) for i in data.get("ingredients", [])],
        )

    def to_dict(self) -> Dict:
        return {
            "recipes": [r.to_dict() for r in self.recipes],
            "ingredients": [i.to_dict() for i in self.ingredients],
        }


@dataclass
class RecipeQuery:
    """List-view filters. Empty/None fields impose no constraint."""

    search: Optional[str] = None
    tags: Optional[str] = None  # comma-separated, OR
    ingredients: Optional[str] = None  # comma-separated ids or names, OR
    difficulty: Optional[str] = None
    meal_time: Optional[str] = None
    dietary: Optional[str] = None  # comma-separated, AND
    sort: Optional[str] = None  # "newest", "prep-time", "difficulty", "calories"


@dataclass
class ShoppingListItem:
    """One merged line on a shopping list."""

    ingredient_id: str
    name: str
    category: str
    total_amount: float  # rounded to 2 decimals
    unit: str  # display unit
    original_unit: str  # first unit seen for this merge group
    recipes: List[str] = field(default_factory=list)  # recipe ids
    recipe_names: List[str] = field(default_factory=list)  # parallel to recipes

    @property
    def quantity(self) -> str:
        """Display quantity, e.g. "1 1/2 cup"."""
        return f"{format_amount(self.total_amount)} {self.unit}".strip()

    def to_dict(self) -> Dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "ingredientId": self.ingredient_id,
            "name": self.name,
            "category": self.category,
            "totalAmount": self.total_amount,
            "unit": self.unit,
            "originalUnit": self.original_unit,
            "recipes": list(self.recipes),
            "recipeNames": list(self.recipe_names),
        }


@dataclass
class ShoppingList:
    """Shopping list generated from a selection of recipes."""

    id: str
    items: List[ShoppingListItem]
    recipe_ids: List[str]
    recipe_names: List[str]
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    grouped_by_category: Dict[str, List[ShoppingListItem]] = field(default_factory=dict)

    def to_dict(self) -> Dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "items": [item.to_dict() for item in self.items],
            "recipeIds": list(self.recipe_ids),
            "recipeNames": list(self.recipe_names),
            "createdAt": self.created_at.isoformat(),
            "groupedByCategory": {
                category: [item.to_dict() for item in items]
                for category, items in self.grouped_by_category.items()
            },
        }
