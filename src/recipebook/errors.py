"""Exceptions raised by the recipebook core and data layer."""

from pathlib import Path


class RecipeBookError(Exception):
    """Base class for recipebook errors."""


class InvalidServingsError(RecipeBookError, ValueError):
    """Raised when a serving count cannot be used as a scaling base."""

    def __init__(self, servings: float):
        super().__init__(f"Original servings must be greater than zero, got {servings}")
        self.servings = servings


class RecipeNotFoundError(RecipeBookError, LookupError):
    """Raised when no recipe has the requested slug."""

    def __init__(self, slug: str):
        super().__init__(f"Recipe not found: {slug}")
        self.slug = slug


class RecipeDataError(RecipeBookError):
    """Raised when recipe data cannot be loaded or validated."""

    def __init__(self, path: Path | str, reason: str):
        super().__init__(f"Failed to load recipes from {path}: {reason}")
        self.path = Path(path)
        self.reason = reason
