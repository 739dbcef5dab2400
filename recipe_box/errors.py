"""
Exceptions raised by the recipe service.

The HTTP layer maps each to a status code; nothing here is retried.
"""

# Hard ceiling for scale targets; configuration may lower it, never raise it
MAX_SERVINGS = 50


class RecipeBoxError(Exception):
    """Base class for recipe service errors."""


class RecipeNotFoundError(RecipeBoxError):
    """No recipe matches the given id or slug."""

    def __init__(self, identifier: str):
        super().__init__(f"Recipe not found: {identifier}")
        self.identifier = identifier


class InvalidInputError(RecipeBoxError):
    """Request parameters are out of range."""


class InvalidServingsError(InvalidInputError):
    """Servings outside [1, max_servings] or not an integer."""

    def __init__(self, servings, max_servings: int = MAX_SERVINGS):
        super().__init__(f"Invalid serving size. Must be between 1 and {max_servings}.")
        self.servings = servings


class EmptySelectionError(InvalidInputError):
    def __init__(self):
        super().__init__("At least one recipe id is required")


class DataIntegrityError(RecipeBoxError):
    """A recipe references an ingredient missing from the dataset."""

    def __init__(self, recipe_id: str):
        super().__init__(f"Failed to load recipe ingredients for {recipe_id}")
        self.recipe_id = recipe_id


class DatasetError(RecipeBoxError):
    """The dataset file is missing or malformed."""
