"""
Unit tests for shopping list aggregation.
"""

from datetime import timedelta

import pytest

from recipe_box.shopping import (
    aggregate_ingredients,
    format_shopping_list,
    generate_shopping_list,
    group_by_category,
)


def only_item(items, ingredient_id):
    matches = [item for item in items if item.ingredient_id == ingredient_id]
    assert len(matches) == 1
    return matches[0]


class TestAggregateIngredients:
    """Test merging ingredient usages across recipes."""

    def test_same_unit_merges(self, recipe_factory, ingredients):
        recipes = [
            recipe_factory("r1", [("flour", "1", "cup")]),
            recipe_factory("r2", [("flour", "0.5", "cup")]),
        ]
        item = only_item(aggregate_ingredients(recipes, ingredients), "flour")

        assert item.total_amount == 1.5
        assert item.unit == "cup"
        assert item.original_unit == "cup"
        assert item.recipes == ["r1", "r2"]
        assert item.recipe_names == ["Recipe r1", "Recipe r2"]
        assert item.name == "Flour"
        assert item.category == "baking"

    def test_volume_units_merge_and_prefer_cups(self, recipe_factory, ingredients):
        recipes = [
            recipe_factory("r1", [("olive-oil", "2", "tbsp")]),
            recipe_factory("r2", [("olive-oil", "1/4", "cup")]),
        ]
        item = only_item(aggregate_ingredients(recipes, ingredients), "olive-oil")

        # 2 tbsp + 4 tbsp = 6 tbsp = 0.375 cup
        assert item.total_amount == 0.38
        assert item.unit == "cup"
        assert item.original_unit == "tbsp"

    @pytest.mark.parametrize("order", [("cups", "tbsp"), ("tbsp", "cups")])
    def test_total_independent_of_first_unit(self, recipe_factory, ingredients, order):
        amounts = {"cups": "1", "tbsp": "2"}
        recipes = [
            recipe_factory(f"r{i}", [("flour", amounts[unit], unit)])
            for i, unit in enumerate(order)
        ]
        item = only_item(aggregate_ingredients(recipes, ingredients), "flour")

        assert item.unit == "cups"
        assert item.total_amount == 1.13  # 1 cup + 1/8 cup
        assert item.original_unit == order[0]

    @pytest.mark.parametrize("order", [("lb", "oz"), ("oz", "lb")])
    def test_meat_weights_merge_into_pounds(self, recipe_factory, ingredients, order):
        amounts = {"lb": "1", "oz": "8"}
        recipes = [
            recipe_factory(f"r{i}", [("chicken", amounts[unit], unit)])
            for i, unit in enumerate(order)
        ]
        item = only_item(aggregate_ingredients(recipes, ingredients), "chicken")

        assert item.total_amount == 1.5
        assert item.unit == "lb"

    def test_weight_and_volume_stay_separate_for_baking(self, recipe_factory, ingredients):
        recipes = [
            recipe_factory("r1", [("flour", "1", "cup")]),
            recipe_factory("r2", [("flour", "100", "g")]),
        ]
        items = [i for i in aggregate_ingredients(recipes, ingredients) if i.ingredient_id == "flour"]

        assert len(items) == 2
        by_unit = {item.unit: item for item in items}
        assert by_unit["cup"].total_amount == 1
        assert by_unit["cup"].recipes == ["r1"]
        assert by_unit["g"].total_amount == 100
        assert by_unit["g"].recipes == ["r2"]

    def test_unknown_units_stay_separate(self, recipe_factory, ingredients):
        recipes = [recipe_factory("r1", [("onion", "2", "medium"), ("onion", "1", "large")])]
        items = [i for i in aggregate_ingredients(recipes, ingredients) if i.ingredient_id == "onion"]

        assert sorted((i.unit, i.total_amount) for i in items) == [("large", 1), ("medium", 2)]

    def test_same_recipe_listed_once(self, recipe_factory, ingredients):
        recipes = [recipe_factory("r1", [("onion", "1", "medium"), ("onion", "2", "Medium")])]
        item = only_item(aggregate_ingredients(recipes, ingredients), "onion")

        assert item.total_amount == 3
        assert item.unit == "medium"
        assert item.recipes == ["r1"]

    def test_serving_adjustments(self, recipe_factory, ingredients):
        recipes = [
            recipe_factory("r1", [("flour", "1", "cup")]),
            recipe_factory("r2", [("flour", "1", "cup")]),
        ]
        item = only_item(aggregate_ingredients(recipes, ingredients, {"r1": 2}), "flour")

        assert item.total_amount == 3

    def test_zero_adjustment_means_unadjusted(self, recipe_factory, ingredients):
        recipes = [recipe_factory("r1", [("flour", "1", "cup")])]
        item = only_item(aggregate_ingredients(recipes, ingredients, {"r1": 0}), "flour")

        assert item.total_amount == 1

    def test_unknown_ingredient_skipped(self, recipe_factory, ingredients):
        recipes = [recipe_factory("r1", [("flour", "1", "cup"), ("unicorn", "1", "horn")])]
        items = aggregate_ingredients(recipes, ingredients)

        assert [item.ingredient_id for item in items] == ["flour"]

    def test_sorted_by_name_case_insensitive(self, recipe_factory, ingredient_factory):
        lookup = [
            ingredient_factory("c", "fruit", name="cherry"),
            ingredient_factory("a", "fruit", name="apple"),
            ingredient_factory("b", "fruit", name="Banana"),
        ]
        recipes = [recipe_factory("r1", [("c", "1", "whole"), ("a", "1", "whole"), ("b", "1", "whole")])]

        assert [i.name for i in aggregate_ingredients(recipes, lookup)] == ["apple", "Banana", "cherry"]

    def test_empty_selection(self, ingredients):
        assert aggregate_ingredients([], ingredients) == []


class TestGroupByCategory:
    def test_buckets_and_other(self, recipe_factory, ingredient_factory):
        lookup = [
            ingredient_factory("salt", "", name="Salt"),
            ingredient_factory("pear", "fruit", name="Pear"),
            ingredient_factory("apple", "fruit", name="Apple"),
        ]
        recipes = [recipe_factory("r1", [("salt", "1", "tsp"), ("pear", "1", "whole"), ("apple", "2", "whole")])]
        grouped = group_by_category(aggregate_ingredients(recipes, lookup))

        assert set(grouped) == {"other", "fruit"}
        assert [i.name for i in grouped["fruit"]] == ["Apple", "Pear"]
        assert [i.name for i in grouped["other"]] == ["Salt"]


class TestGenerateShoppingList:
    def test_list_fields(self, sample_recipes, ingredients):
        shopping_list = generate_shopping_list(sample_recipes[:2], ingredients)

        assert shopping_list.id.startswith("shopping-list-")
        assert shopping_list.recipe_ids == ["1", "2"]
        assert shopping_list.recipe_names == ["Garlic Chicken Skillet", "Simple Pancakes"]
        assert len(shopping_list.items) == 5
        assert set(shopping_list.grouped_by_category) == {"protein", "oil", "vegetable", "baking", "dairy"}

    def test_to_dict(self, sample_recipes, ingredients):
        data = generate_shopping_list(sample_recipes[:1], ingredients).to_dict()

        assert set(data) == {"id", "items", "recipeIds", "recipeNames", "createdAt", "groupedByCategory"}
        chicken = next(item for item in data["items"] if item["ingredientId"] == "chicken")
        assert chicken == {
            "ingredientId": "chicken",
            "name": "Chicken",
            "category": "protein",
            "totalAmount": 200,
            "unit": "g",
            "originalUnit": "g",
            "recipes": ["1"],
            "recipeNames": ["Garlic Chicken Skillet"],
        }

    def test_created_at_is_utc(self, sample_recipes, ingredients):
        shopping_list = generate_shopping_list(sample_recipes[:1], ingredients)

        assert shopping_list.created_at.utcoffset() == timedelta(0)
        assert shopping_list.to_dict()["createdAt"].endswith("+00:00")


class TestFormatShoppingList:
    def test_sections_and_lines(self, sample_recipes, ingredients):
        text = format_shopping_list(generate_shopping_list(sample_recipes[:2], ingredients))
        lines = text.splitlines()

        assert lines[0] == "Shopping list for 2 recipes: Garlic Chicken Skillet, Simple Pancakes"
        assert lines[1] == "5 items in 5 sections"
        assert "Baking:" in lines
        assert "  [ ] 1 cup Flour - Simple Pancakes" in lines
        assert "  [ ] 200 g Chicken - Garlic Chicken Skillet" in lines
        assert lines.index("Baking:") < lines.index("Protein:")

    def test_converted_amount_shows_fraction(self, sample_recipes, ingredients):
        # 1 tbsp + 1/4 cup = 5 tbsp = 5/16 cup
        text = format_shopping_list(generate_shopping_list([sample_recipes[0], sample_recipes[2]], ingredients))

        assert (
            "  [ ] 5/16 cup Olive Oil (converted from tbsp) - Garlic Chicken Skillet, Saffron Spaghetti"
            in text.splitlines()
        )

    def test_empty(self, ingredients):
        text = format_shopping_list(generate_shopping_list([], ingredients))

        assert "0 items in 0 sections" in text
        assert text.endswith("Nothing to buy.")
