"""
Pytest configuration and shared fixtures.

Fixtures are reusable test setup that can be injected into tests.
"""

import json
import shutil
import tempfile
from pathlib import Path

import pytest

from recipe_box.data.database import RecipeStore
from recipe_box.data.models import Ingredient, NutritionTotals, Recipe, RecipeData, RecipeIngredient
from recipe_box.service import RecipeService


def make_ingredient(id, category, calories=100.0, protein=10.0, carbs=20.0, fat=5.0, name=None):
    """Build an Ingredient with simple nutrition numbers."""
    return Ingredient(
        id=id,
        name=name or id.replace("-", " ").title(),
        category=category,
        nutrition=NutritionTotals(calories=calories, protein=protein, carbs=carbs, fat=fat),
    )


def make_recipe(id, ingredients, servings=4, title=None, **kwargs):
    """Build a Recipe from (ingredient_id, amount, unit) tuples."""
    defaults = dict(
        slug=f"recipe-{id}",
        description="",
        prep_time="10 minutes",
        cook_time="20 minutes",
        difficulty="easy",
        instructions=["Cook it."],
        tags=[],
        date_added="2024-01-01",
    )
    defaults.update(kwargs)
    return Recipe(
        id=id,
        title=title or f"Recipe {id}",
        servings=servings,
        ingredients=[RecipeIngredient(i, a, u) for i, a, u in ingredients],
        **defaults,
    )


@pytest.fixture
def ingredients():
    """Reference ingredients covering each nutrition category."""
    return [
        make_ingredient("chicken", "protein", calories=165, protein=31, carbs=0, fat=3.6),
        make_ingredient("flour", "baking", calories=455, protein=13, carbs=95, fat=1.2),
        make_ingredient("milk", "dairy", calories=61, protein=3.2, carbs=4.8, fat=3.3),
        make_ingredient("oat-milk", "dairy-alternative", calories=45, protein=1, carbs=6.5, fat=1.5),
        make_ingredient("olive-oil", "oil", calories=119, protein=0, carbs=0, fat=13.5),
        make_ingredient("onion", "vegetable", calories=44, protein=1.2, carbs=10, fat=0.1),
        make_ingredient("black-beans", "legume", calories=385, protein=24, carbs=70, fat=1.5),
        make_ingredient("spaghetti", "pasta", calories=371, protein=13, carbs=75, fat=1.5),
        make_ingredient("saffron", "exotic", calories=10, protein=0, carbs=0, fat=0),
    ]


@pytest.fixture
def ingredients_by_id(ingredients):
    return {ing.id: ing for ing in ingredients}


@pytest.fixture
def sample_recipes():
    """Recipes used by filter, service and API tests."""
    return [
        make_recipe(
            "1",
            [("chicken", "200", "g"), ("olive-oil", "1", "tbsp"), ("onion", "1", "medium")],
            title="Garlic Chicken Skillet",
            slug="garlic-chicken-skillet",
            description="Weeknight chicken with onions",
            difficulty="medium",
            prep_time="15 minutes",
            tags=["dinner", "healthy"],
            date_added="2024-03-01",
        ),
        make_recipe(
            "2",
            [("flour", "1", "cup"), ("milk", "1", "cup")],
            title="Simple Pancakes",
            slug="simple-pancakes",
            description="Fluffy breakfast stack",
            difficulty="easy",
            prep_time="5 minutes",
            tags=["breakfast", "vegetarian"],
            date_added="2024-01-10",
        ),
        make_recipe(
            "3",
            [("spaghetti", "1", "lb"), ("olive-oil", "1/4", "cup"), ("saffron", "1", "pinch")],
            servings=2,
            title="Saffron Spaghetti",
            slug="saffron-spaghetti",
            description="Italian pasta night",
            difficulty="hard",
            prep_time="30 minutes",
            tags=["dinner", "italian", "vegan"],
            date_added="2024-02-15",
        ),
        make_recipe(
            "4",
            [("black-beans", "1", "can"), ("missing-ingredient", "2", "cups")],
            servings=3,
            title="Bean Bowl",
            slug="bean-bowl",
            description="Hearty lunch bowl",
            difficulty="easy",
            prep_time="10 minutes",
            tags=["lunch", "mexican", "vegan", "gluten-free"],
            date_added="2024-04-01",
        ),
    ]


@pytest.fixture
def recipe_data(sample_recipes, ingredients):
    return RecipeData(recipes=sample_recipes, ingredients=ingredients)


@pytest.fixture
def temp_data_dir():
    """
    Create a temporary dataset directory for testing.

    This fixture is automatically cleaned up after each test.
    """
    temp_dir = tempfile.mkdtemp()
    yield temp_dir
    shutil.rmtree(temp_dir)


@pytest.fixture
def data_file(temp_data_dir, recipe_data):
    """Dataset JSON file written from the sample recipes and ingredients."""
    path = Path(temp_data_dir) / "data.json"
    path.write_text(json.dumps(recipe_data.to_dict()), encoding="utf-8")
    return path


class FakeClock:
    """Manually advanced time source."""

    def __init__(self, now=1_000_000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store(data_file, clock):
    """
    RecipeStore over the sample dataset with a fake clock.

    Usage in tests:
        def test_something(store):
            store.get_data()
    """
    return RecipeStore(data_path=str(data_file), ttl_seconds=60, clock=clock)


@pytest.fixture
def service(store):
    return RecipeService(store)


@pytest.fixture
def recipe_factory():
    """Factory for ad-hoc recipes: recipe_factory("r1", [("flour", "1", "cup")])."""
    return make_recipe


@pytest.fixture
def ingredient_factory():
    """Factory for ad-hoc ingredients: ingredient_factory("flour", "baking")."""
    return make_ingredient
