"""Recipe data access over an in-memory collection."""

import json
from collections.abc import Iterable
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from recipebook.errors import RecipeDataError, RecipeNotFoundError
from recipebook.logging_config import get_logger
from recipebook.query.engine import query_recipes
from recipebook.schemas import Recipe, RecipeFilterSpec, RecipePage, RecipeSortSpec

logger = get_logger(__name__)

_recipe_list_adapter = TypeAdapter(list[Recipe])


def load_recipes(path: Path | str) -> list[Recipe]:
    """
    Load and validate recipes from a JSON file holding a list of recipe objects.

    Raises:
        RecipeDataError: If the file cannot be read, is not JSON, or holds invalid records.
    """
    path = Path(path)
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise RecipeDataError(path, f"cannot read file ({e})") from e
    except json.JSONDecodeError as e:
        raise RecipeDataError(path, f"invalid JSON ({e})") from e

    try:
        recipes = _recipe_list_adapter.validate_python(raw)
    except ValidationError as e:
        raise RecipeDataError(path, f"{e.error_count()} validation error(s)") from e

    logger.info(f"Loaded {len(recipes)} recipes from {path}")
    return recipes


class RecipeRepository:
    """
    Read-only access to a recipe collection.

    The collection is supplied by the caller, so each application or test
    owns its own repository.
    """

    def __init__(self, recipes: Iterable[Recipe]):
        self._recipes: tuple[Recipe, ...] = tuple(recipes)
        self._by_slug: dict[str, Recipe] = {}
        for recipe in self._recipes:
            if recipe.slug in self._by_slug:
                raise ValueError(f"Duplicate recipe slug: {recipe.slug}")
            self._by_slug[recipe.slug] = recipe

    @classmethod
    def from_file(cls, path: Path | str) -> "RecipeRepository":
        """
        Build a repository from a JSON fixture file.

        Raises:
            RecipeDataError: If the file cannot be loaded or repeats a slug.
        """
        recipes = load_recipes(path)
        try:
            return cls(recipes)
        except ValueError as e:
            raise RecipeDataError(Path(path), str(e)) from e

    def __len__(self) -> int:
        return len(self._recipes)

    def all(self) -> list[Recipe]:
        return list(self._recipes)

    def list_recipes(
        self,
        filters: RecipeFilterSpec | None = None,
        sort: RecipeSortSpec | None = None,
        limit: int | None = None,
        offset: int | None = None,
    ) -> RecipePage:
        """Filter, sort and paginate the collection."""
        return query_recipes(self._recipes, filters, sort, limit, offset)

    def get_by_slug(self, slug: str) -> Recipe:
        """
        Get a recipe by slug.

        Raises:
            RecipeNotFoundError: If no recipe has this slug.
        """
        recipe = self._by_slug.get(slug)
        if recipe is None:
            raise RecipeNotFoundError(slug)
        return recipe

    def featured(self, limit: int = 6) -> list[Recipe]:
        """Get featured recipes first, topped up with the rest in collection order."""
        featured = [r for r in self._recipes if r.is_featured]
        others = [r for r in self._recipes if not r.is_featured]
        return (featured + others)[:limit]

    def search(self, query: str, limit: int = 10) -> list[Recipe]:
        """Instant search over titles, descriptions and tags."""
        return self.list_recipes(RecipeFilterSpec(search=query), limit=limit).recipes
