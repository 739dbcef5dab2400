"""
Unit vocabulary for shopping list consolidation.

Hand-coded conversion tables for the units that appear in the recipe
dataset. This is not a general unit system: anything missing from these
tables is treated as an opaque label that only merges with itself.

Each table maps a normalized unit name to its size relative to the table's
base unit (fluid ounce for volume, ounce for weight).
"""

import logging
from typing import Dict, List, Set, Tuple

logger = logging.getLogger(__name__)

# =============================================================================
# CONVERSION TABLES
# =============================================================================
# Volume, base = fluid ounce
VOLUME_CONVERSIONS: Dict[str, float] = {
    "cup": 8,
    "cups": 8,
    "c": 8,
    "fl oz": 1,
    "fl. oz": 1,
    "fluid ounce": 1,
    "fluid ounces": 1,
    "oz": 1,  # assume fluid oz for liquids
    "tbsp": 0.5,
    "tablespoon": 0.5,
    "tablespoons": 0.5,
    "tsp": 0.167,
    "teaspoon": 0.167,
    "teaspoons": 0.167,
    "ml": 0.034,
    "l": 33.814,
    "liter": 33.814,
    "liters": 33.814,
    "pint": 16,
    "pints": 16,
    "pt": 16,
    "quart": 32,
    "quarts": 32,
    "qt": 32,
    "gallon": 128,
    "gallons": 128,
    "gal": 128,
}

# Weight, base = ounce
WEIGHT_CONVERSIONS: Dict[str, float] = {
    "oz": 1,
    "ounce": 1,
    "ounces": 1,
    "lb": 16,
    "pound": 16,
    "pounds": 16,
    "lbs": 16,
    "g": 0.035,
    "gram": 0.035,
    "grams": 0.035,
    "kg": 35.274,
    "kilogram": 35.274,
    "kilograms": 35.274,
}

# =============================================================================
# CATEGORY HEURISTICS
# =============================================================================
# Categories measured by volume; weight units never merge for these
LIQUID_CATEGORIES: Set[str] = {"liquid", "oil", "condiment", "sauce", "dairy"}
BAKING_CATEGORIES: Set[str] = {"baking", "flour", "sugar"}
VOLUME_FIRST_CATEGORIES: Set[str] = LIQUID_CATEGORIES | BAKING_CATEGORIES

WEIGHT_FIRST_CATEGORIES: Set[str] = {"protein", "meat"}

# Display preference, most preferred first
VOLUME_PREFERENCE: Tuple[str, ...] = ("cups", "cup", "tbsp", "tsp", "fl oz", "oz")
WEIGHT_PREFERENCE: Tuple[str, ...] = ("lb", "oz", "g")


def normalize_unit(unit: str) -> str:
    """Lowercase, trim, and drop a single trailing period ("Tbsp." -> "tbsp")."""
    normalized = unit.lower().strip()
    if normalized.endswith("."):
        normalized = normalized[:-1]
    return normalized


def is_volume_first(category: str) -> bool:
    return category in VOLUME_FIRST_CATEGORIES


def are_units_convertible(unit1: str, unit2: str, category: str) -> bool:
    """
    Check whether two units can be merged for an ingredient category.

    Args:
        unit1: First unit (raw spelling)
        unit2: Second unit (raw spelling)
        category: Ingredient category

    Returns:
        True if amounts in the two units can be summed after conversion
    """
    norm1 = normalize_unit(unit1)
    norm2 = normalize_unit(unit2)

    if norm1 == norm2:
        return True

    both_volume = norm1 in VOLUME_CONVERSIONS and norm2 in VOLUME_CONVERSIONS
    both_weight = norm1 in WEIGHT_CONVERSIONS and norm2 in WEIGHT_CONVERSIONS

    if is_volume_first(category):
        return both_volume

    return both_volume or both_weight


def _convert_with(table: Dict[str, float], amount: float, norm_from: str, norm_to: str) -> float:
    return amount * table[norm_from] / table[norm_to]


def convert_units(amount: float, from_unit: str, to_unit: str, category: str) -> Tuple[float, str]:
    """
    Convert an amount between compatible units.

    Volume-first categories try the volume table before the weight table;
    other categories try weight first, then volume. When no table holds
    both units the amount and source unit come back unchanged.

    Returns:
        (converted amount, unit label)
    """
    norm_from = normalize_unit(from_unit)
    norm_to = normalize_unit(to_unit)

    if norm_from == norm_to:
        return amount, to_unit

    if (
        is_volume_first(category)
        and norm_from in VOLUME_CONVERSIONS
        and norm_to in VOLUME_CONVERSIONS
    ):
        return _convert_with(VOLUME_CONVERSIONS, amount, norm_from, norm_to), to_unit

    if norm_from in WEIGHT_CONVERSIONS and norm_to in WEIGHT_CONVERSIONS:
        return _convert_with(WEIGHT_CONVERSIONS, amount, norm_from, norm_to), to_unit

    if norm_from in VOLUME_CONVERSIONS and norm_to in VOLUME_CONVERSIONS:
        return _convert_with(VOLUME_CONVERSIONS, amount, norm_from, norm_to), to_unit

    logger.debug(f"No conversion from '{from_unit}' to '{to_unit}' ({category})")
    return amount, from_unit


def choose_best_unit(units: List[str], category: str) -> str:
    """
    Pick the display unit for a merged shopping list entry.

    Args:
        units: Distinct raw unit spellings that fed the entry, in encounter order
        category: Ingredient category

    Returns:
        The raw spelling of the preferred unit, or the first unit if no
        preference applies
    """
    normalized = [normalize_unit(u) for u in units]

    preferences: Tuple[str, ...] = ()
    if is_volume_first(category):
        preferences = VOLUME_PREFERENCE
    elif category in WEIGHT_FIRST_CATEGORIES:
        preferences = WEIGHT_PREFERENCE

    for preferred in preferences:
        if preferred in normalized:
            return units[normalized.index(preferred)]

    return units[0]
