"""In-memory recipe filtering, sorting and pagination."""

from collections.abc import Callable, Sequence
from datetime import date
from typing import Any

from recipebook.logging_config import get_logger
from recipebook.schemas import Recipe, RecipeFilterSpec, RecipePage, RecipeSortSpec

logger = get_logger(__name__)

# Sort key for missing or malformed publication dates
EARLIEST_DATE = date.min


# =============================================================================
# Filtering
# =============================================================================


def _matches_search(recipe: Recipe, term: str) -> bool:
    needle = term.lower()
    return (
        needle in recipe.title.lower()
        or needle in recipe.description.lower()
        or any(needle in tag.lower() for tag in recipe.tags)
    )


def _build_predicates(spec: RecipeFilterSpec) -> list[Callable[[Recipe], bool]]:
    """Build one predicate per constraining field of the filter spec."""
    predicates: list[Callable[[Recipe], bool]] = []

    if spec.search:
        predicates.append(lambda r: _matches_search(r, spec.search))

    if spec.cuisine:
        cuisines = set(spec.cuisine)
        predicates.append(lambda r: r.cuisine in cuisines)

    if spec.tags:
        wanted_tags = set(spec.tags)
        predicates.append(lambda r: any(tag in wanted_tags for tag in r.tags))

    if spec.max_prep_time_mins is not None:
        bound = spec.max_prep_time_mins
        predicates.append(lambda r: r.prep_time_mins <= bound)

    if spec.difficulty:
        difficulties = set(spec.difficulty)
        predicates.append(lambda r: r.difficulty in difficulties)

    return predicates


def filter_recipes(recipes: Sequence[Recipe], spec: RecipeFilterSpec | None) -> list[Recipe]:
    """
    Keep the recipes matching every constraining field of ``spec``.

    Input order is preserved. A ``max_prep_time_mins`` of 0 is a real bound
    that keeps only zero-prep recipes; only None leaves prep time unbounded.
    """
    if spec is None:
        return list(recipes)

    predicates = _build_predicates(spec)
    return [recipe for recipe in recipes if all(p(recipe) for p in predicates)]


# =============================================================================
# Sorting
# =============================================================================


def parse_published_date(value: str | None) -> date:
    """
    Parse a DD/MM/YYYY publication date.

    The tokens are reversed into year/month/day before building the date.
    Values without slashes are read as ISO dates. Missing or unparseable
    values map to ``EARLIEST_DATE``.
    """
    if not value:
        return EARLIEST_DATE

    text = value.strip()
    try:
        if "/" not in text:
            return date.fromisoformat(text)
        year, month, day = (int(token) for token in reversed(text.split("/")))
        return date(year, month, day)
    except (ValueError, OverflowError):
        logger.warning(f"Unparseable publication date '{value}', sorting it as earliest")
        return EARLIEST_DATE


def _sort_key(field: str) -> Callable[[Recipe], Any]:
    if field == "title":
        return lambda r: r.title
    if field == "totalTimeMins":
        return lambda r: r.total_time_mins
    if field == "difficulty":
        # Raw label order (Easy < Hard < Medium), not severity order.
        return lambda r: r.difficulty
    if field == "datePublished":
        return lambda r: parse_published_date(r.date_published)
    raise ValueError(f"Unsupported sort field: {field}")


def sort_recipes(recipes: Sequence[Recipe], spec: RecipeSortSpec | None) -> list[Recipe]:
    """
    Sort recipes by the requested field and direction.

    The sort is stable in both directions: recipes with equal keys keep their
    input order.
    """
    if spec is None:
        return list(recipes)

    return sorted(recipes, key=_sort_key(spec.field), reverse=spec.direction == "desc")


# =============================================================================
# Pagination
# =============================================================================


def paginate(
    recipes: Sequence[Recipe],
    limit: int | None = None,
    offset: int | None = None,
) -> list[Recipe]:
    """Slice ``[offset, offset + limit)``; without a limit the slice runs to the end."""
    if limit is None and offset is None:
        return list(recipes)

    start = offset or 0
    end = start + limit if limit is not None else None
    return list(recipes[start:end])


def query_recipes(
    recipes: Sequence[Recipe],
    filters: RecipeFilterSpec | None = None,
    sort: RecipeSortSpec | None = None,
    limit: int | None = None,
    offset: int | None = None,
) -> RecipePage:
    """
    Filter, sort and paginate a recipe collection, in that order.

    ``total`` on the returned page counts the filtered recipes before
    pagination.
    """
    filtered = filter_recipes(recipes, filters)
    ordered = sort_recipes(filtered, sort)
    page = paginate(ordered, limit, offset)

    logger.debug(
        f"Recipe query: {len(recipes)} candidates, {len(filtered)} matched, "
        f"{len(page)} returned (limit={limit}, offset={offset})"
    )

    return RecipePage(recipes=page, total=len(filtered), limit=limit, offset=offset or 0)
