#!/usr/bin/env python3
"""
Command-line interface for Recipe Box.

Browse recipes, scale one, or print a shopping list straight from the
dataset file, without running the web server.
"""

import argparse
import logging
from typing import List, Optional

from .config import get_settings
from .data.database import RecipeStore
from .data.models import DetailedRecipe, RecipeQuery
from .errors import RecipeBoxError
from .service import RecipeService
from .shopping import format_shopping_list

logger = logging.getLogger(__name__)


def format_recipe(recipe: DetailedRecipe) -> str:
    """Format a detailed recipe for the terminal."""
    source = recipe.recipe
    lines = [
        f"{source.title} ({recipe.servings} servings)",
        "=" * 60,
        source.description,
        "",
        f"Prep: {source.prep_time}  Cook: {source.cook_time}  Difficulty: {source.difficulty}",
        f"Nutrition (total): {recipe.total_nutrition}",
        f"Calories per serving: {recipe.calories_per_serving}",
        "",
        "Ingredients:",
    ]
    for ingredient in recipe.ingredients:
        lines.append(f"  - {ingredient.amount} {ingredient.unit} {ingredient.ingredient.name}".rstrip())

    lines.append("")
    lines.append("Instructions:")
    for step_number, step in enumerate(source.instructions, 1):
        lines.append(f"  {step_number}. {step}")

    return "\n".join(lines)


def main(argv: Optional[List[str]] = None):
    """CLI entry point."""
    parser = argparse.ArgumentParser(description="Recipe Box")
    parser.add_argument(
        "command",
        choices=["list", "show", "scale", "shop"],
        help="Command to run",
    )
    parser.add_argument(
        "--recipe-id",
        action="append",
        default=[],
        help="Recipe id or slug (repeat for 'shop')",
    )
    parser.add_argument(
        "--servings",
        type=int,
        help="Target servings for 'scale'",
    )
    parser.add_argument("--search", type=str, help="Search text for 'list'")
    parser.add_argument("--tags", type=str, help="Comma-separated tags for 'list'")
    parser.add_argument("--difficulty", choices=["easy", "medium", "hard"])
    parser.add_argument("--sort", choices=["newest", "prep-time", "difficulty", "calories"])
    parser.add_argument(
        "--data",
        type=str,
        default=None,
        help="Dataset JSON path (default: RECIPE_DATA_PATH or data/data.json)",
    )
    parser.add_argument("--verbose", action="store_true", help="Debug logging")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    settings = get_settings()
    store = RecipeStore(data_path=args.data or settings.data_path)
    service = RecipeService(store, max_servings=settings.max_servings)

    try:
        if args.command == "list":
            query = RecipeQuery(
                search=args.search,
                tags=args.tags,
                difficulty=args.difficulty,
                sort=args.sort,
            )
            for item in service.list_recipes(query):
                recipe = item.recipe
                print(f"{recipe.id:<12} {recipe.title:<40} {item.calories_per_serving:>5} cal/serving")

        elif args.command in ("show", "scale"):
            if not args.recipe_id:
                print(f"Error: --recipe-id required for '{args.command}' command")
                return 2

            if args.command == "show":
                recipe = service.get_recipe(args.recipe_id[0])
            else:
                if args.servings is None:
                    print("Error: --servings required for 'scale' command")
                    return 2
                recipe = service.scale_recipe(args.recipe_id[0], args.servings)
            print(format_recipe(recipe))

        elif args.command == "shop":
            shopping_list = service.generate_shopping_list(args.recipe_id)
            print(format_shopping_list(shopping_list))

    except RecipeBoxError as e:
        print(f"Error: {e}")
        return 1

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
