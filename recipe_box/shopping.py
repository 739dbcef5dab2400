"""
Shopping list generation.

Merges ingredient usages across recipes into one list: amounts for the same
ingredient are summed when their units convert into each other, and each
merged entry is shown in the most useful unit for its category.
"""

import logging
import time
from collections import OrderedDict
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, List, Optional, Sequence

from .amounts import parse_amount
from .data.models import Ingredient, Recipe, ShoppingList, ShoppingListItem
from .nutrition import index_ingredients, round_half_up
from .units import are_units_convertible, choose_best_unit, convert_units, normalize_unit

logger = logging.getLogger(__name__)

DEFAULT_CATEGORY = "other"


@dataclass
class _Usage:
    amount: float
    unit: str
    recipe_id: str
    recipe_name: str


@dataclass
class _UnitGroup:
    unit: str  # representative (first-seen) unit
    amount: float = 0.0
    recipes: List[str] = field(default_factory=list)
    recipe_names: List[str] = field(default_factory=list)

    def add(self, amount: float, recipe_id: str, recipe_name: str):
        self.amount += amount
        if recipe_id not in self.recipes:
            self.recipes.append(recipe_id)
            self.recipe_names.append(recipe_name)


def _sort_key(item: ShoppingListItem) -> str:
    return item.name.lower()


def _collect_usages(
    recipes: Sequence[Recipe],
    ingredients_by_id: Dict[str, Ingredient],
    serving_adjustments: Dict[str, float],
) -> "OrderedDict[str, List[_Usage]]":
    usages: "OrderedDict[str, List[_Usage]]" = OrderedDict()

    for recipe in recipes:
        serving_multiplier = serving_adjustments.get(recipe.id) or 1

        for recipe_ingredient in recipe.ingredients:
            if recipe_ingredient.ingredient_id not in ingredients_by_id:
                continue

            usages.setdefault(recipe_ingredient.ingredient_id, []).append(
                _Usage(
                    amount=parse_amount(recipe_ingredient.amount) * serving_multiplier,
                    unit=recipe_ingredient.unit,
                    recipe_id=recipe.id,
                    recipe_name=recipe.title,
                )
            )

    return usages


def _group_by_unit(usages: List[_Usage], category: str) -> "OrderedDict[str, _UnitGroup]":
    """Partition usages into groups whose units convert into each other."""
    groups: "OrderedDict[str, _UnitGroup]" = OrderedDict()

    for usage in usages:
        group_key = normalize_unit(usage.unit)
        target_unit = usage.unit
        amount = usage.amount

        for existing_key, existing in groups.items():
            if are_units_convertible(usage.unit, existing.unit, category):
                amount, _ = convert_units(usage.amount, usage.unit, existing.unit, category)
                group_key = existing_key
                target_unit = existing.unit
                break

        if group_key not in groups:
            groups[group_key] = _UnitGroup(unit=target_unit)

        groups[group_key].add(amount, usage.recipe_id, usage.recipe_name)

    return groups


def aggregate_ingredients(
    recipes: Sequence[Recipe],
    ingredients: Sequence[Ingredient],
    serving_adjustments: Optional[Dict[str, float]] = None,
) -> List[ShoppingListItem]:
    """
    Aggregate ingredients from multiple recipes.

    Args:
        recipes: Recipes to shop for
        ingredients: Reference ingredients; unknown ids in recipes are skipped
        serving_adjustments: Optional recipe id -> amount multiplier (default 1)

    Returns:
        Shopping list items sorted by name
    """
    ingredients_by_id = index_ingredients(ingredients)
    usages_by_ingredient = _collect_usages(recipes, ingredients_by_id, serving_adjustments or {})

    items: List[ShoppingListItem] = []

    for ingredient_id, usages in usages_by_ingredient.items():
        ingredient = ingredients_by_id[ingredient_id]
        category = ingredient.category

        for group in _group_by_unit(usages, category).values():
            group_units = list(OrderedDict.fromkeys(
                usage.unit for usage in usages
                if are_units_convertible(usage.unit, group.unit, category)
            ))
            best_unit = choose_best_unit(group_units, category)
            amount, unit = convert_units(group.amount, group.unit, best_unit, category)

            items.append(
                ShoppingListItem(
                    ingredient_id=ingredient.id,
                    name=ingredient.name,
                    category=category,
                    total_amount=round_half_up(amount * 100) / 100,
                    unit=unit,
                    original_unit=group.unit,
                    recipes=group.recipes,
                    recipe_names=group.recipe_names,
                )
            )

    logger.debug(f"Aggregated {len(items)} shopping list items from {len(recipes)} recipes")
    return sorted(items, key=_sort_key)


def group_by_category(items: Sequence[ShoppingListItem]) -> Dict[str, List[ShoppingListItem]]:
    """Bucket items by ingredient category ("other" when missing), sorted by name."""
    grouped: Dict[str, List[ShoppingListItem]] = {}

    for item in items:
        grouped.setdefault(item.category or DEFAULT_CATEGORY, []).append(item)

    for category in grouped:
        grouped[category].sort(key=_sort_key)

    return grouped


def generate_shopping_list(
    recipes: Sequence[Recipe],
    ingredients: Sequence[Ingredient],
    serving_adjustments: Optional[Dict[str, float]] = None,
) -> ShoppingList:
    """
    Generate a complete shopping list.

    Args:
        recipes: Recipes to shop for
        ingredients: Reference ingredients
        serving_adjustments: Optional recipe id -> amount multiplier

    Returns:
        ShoppingList with items and a per-category view
    """
    items = aggregate_ingredients(recipes, ingredients, serving_adjustments)

    shopping_list = ShoppingList(
        id=f"shopping-list-{int(time.time() * 1000)}",
        items=items,
        recipe_ids=[r.id for r in recipes],
        recipe_names=[r.title for r in recipes],
        created_at=datetime.now(timezone.utc),
        grouped_by_category=group_by_category(items),
    )

    logger.info(f"Created shopping list {shopping_list.id} with {len(items)} items")
    return shopping_list


def _section_title(category: str) -> str:
    return category.replace("-", " ").title()


def _format_item(item: ShoppingListItem) -> str:
    """One checklist line: "[ ] 3/8 cup Olive Oil (converted from tbsp) - Recipe A, Recipe B"."""
    line = f"[ ] {item.quantity} {item.name}"
    if normalize_unit(item.unit) != normalize_unit(item.original_unit):
        line += f" (converted from {item.original_unit})"
    return f"{line} - {', '.join(item.recipe_names)}"


def format_shopping_list(shopping_list: ShoppingList) -> str:
    """
    Render a shopping list as a plain-text checklist.

    Sections follow ingredient categories in alphabetical order. Each line
    shows a fractional amount and names the recipes that need the item.

    Args:
        shopping_list: Generated shopping list

    Returns:
        Checklist text
    """
    recipe_count = len(shopping_list.recipe_names)
    sections = shopping_list.grouped_by_category
    lines = [
        f"Shopping list for {recipe_count} recipe{'' if recipe_count == 1 else 's'}: "
        f"{', '.join(shopping_list.recipe_names)}",
        f"{len(shopping_list.items)} items in {len(sections)} sections",
    ]

    if not shopping_list.items:
        lines.append("Nothing to buy.")
        return "\n".join(lines)

    for category in sorted(sections):
        lines.append("")
        lines.append(f"{_section_title(category)}:")
        lines.extend(f"  {_format_item(item)}" for item in sections[category])

    return "\n".join(lines)
