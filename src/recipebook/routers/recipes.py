"""API routes for browsing recipes and converting ingredient quantities."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from pydantic import BaseModel, ValidationError

from recipebook.config import settings
from recipebook.errors import InvalidServingsError, RecipeNotFoundError
from recipebook.logging_config import LoggingContext, get_logger
from recipebook.normalize.units import convert_units, scale_and_convert
from recipebook.repository import RecipeRepository
from recipebook.schemas import (
    ConvertedQuantity,
    Recipe,
    RecipeFilterSpec,
    RecipePage,
    RecipeSortSpec,
    ScaledIngredient,
    SortDirection,
    SortField,
    UnitSystem,
)

logger = get_logger(__name__)

router = APIRouter(prefix="/api", tags=["recipes"])


# Response schemas
class RecipeListResponse(BaseModel):
    """List of recipes without pagination metadata."""

    recipes: list[Recipe]
    total: int


class IngredientListResponse(BaseModel):
    """Ingredients of a recipe rescaled and converted for display."""

    slug: str
    servings: int
    unit_system: UnitSystem
    ingredients: list[ScaledIngredient]


# Dependency to get the recipe repository
def get_repository(request: Request) -> RecipeRepository:
    """Get the repository owned by the running application."""
    repository = getattr(request.app.state, "repository", None)
    if repository is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Recipe data is not loaded",
        )
    return repository


def _split_csv(value: str | None) -> list[str] | None:
    """Split a comma-separated query value, dropping blanks."""
    if not value:
        return None
    items = [item.strip() for item in value.split(",") if item.strip()]
    return items or None


# =============================================================================
# Recipe Endpoints
# =============================================================================


@router.get("/recipes", response_model=RecipePage)
async def list_recipes(
    search: Annotated[str | None, Query(description="Match title, description or tags")] = None,
    cuisine: Annotated[str | None, Query(description="Comma-separated cuisines")] = None,
    tags: Annotated[str | None, Query(description="Comma-separated tags (any)")] = None,
    difficulty: Annotated[str | None, Query(description="Comma-separated difficulties")] = None,
    max_prep_time: Annotated[
        int | None, Query(alias="maxPrepTime", ge=0, description="Max prep minutes")
    ] = None,
    sort_by: Annotated[SortField | None, Query(alias="sortBy")] = None,
    sort_order: Annotated[SortDirection, Query(alias="sortOrder")] = "asc",
    limit: Annotated[
        int, Query(ge=1, le=settings.max_page_limit, description="Max recipes to return")
    ] = settings.default_page_limit,
    offset: Annotated[int, Query(ge=0, description="Offset for pagination")] = 0,
    repository: RecipeRepository = Depends(get_repository),
) -> RecipePage:
    """
    List recipes with optional filters and sorting.

    Filters are combined with AND; comma-separated values within one filter
    are combined with OR. Results are paginated and ``total`` counts all
    matching recipes.
    """
    logger.info(
        f"Listing recipes: search={search}, cuisine={cuisine}, tags={tags}, "
        f"difficulty={difficulty}, max_prep_time={max_prep_time}, "
        f"sort={sort_by}:{sort_order}, limit={limit}, offset={offset}"
    )

    try:
        filters = RecipeFilterSpec(
            search=search or None,
            cuisine=_split_csv(cuisine),
            tags=_split_csv(tags),
            difficulty=_split_csv(difficulty),
            max_prep_time_mins=max_prep_time,
        )
    except ValidationError as e:
        logger.warning(f"Rejected recipe filters: {e}")
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=[error["msg"] for error in e.errors()],
        )

    sort = RecipeSortSpec(field=sort_by, direction=sort_order) if sort_by else None

    return repository.list_recipes(filters, sort, limit=limit, offset=offset)


@router.get("/recipes/featured", response_model=RecipeListResponse)
async def get_featured_recipes(
    limit: Annotated[
        int, Query(ge=1, le=settings.max_page_limit, description="Max recipes to return")
    ] = settings.featured_limit,
    repository: RecipeRepository = Depends(get_repository),
) -> RecipeListResponse:
    """Get recipes for the homepage, featured recipes first."""
    logger.info(f"Fetching featured recipes: limit={limit}")

    recipes = repository.featured(limit=limit)
    return RecipeListResponse(recipes=recipes, total=len(recipes))


@router.get("/recipes/search", response_model=RecipeListResponse)
async def search_recipes(
    q: Annotated[str, Query(min_length=1, description="Search text")],
    limit: Annotated[
        int, Query(ge=1, le=settings.max_page_limit, description="Max recipes to return")
    ] = settings.search_limit,
    repository: RecipeRepository = Depends(get_repository),
) -> RecipeListResponse:
    """Instant search across recipe titles, descriptions and tags."""
    logger.info(f"Searching recipes: q={q}, limit={limit}")

    recipes = repository.search(q, limit=limit)
    return RecipeListResponse(recipes=recipes, total=len(recipes))


@router.get("/recipes/{slug}", response_model=Recipe)
async def get_recipe(
    slug: str,
    repository: RecipeRepository = Depends(get_repository),
) -> Recipe:
    """Get a single recipe by slug."""
    logger.info(f"Fetching recipe: {slug}")

    try:
        return repository.get_by_slug(slug)
    except RecipeNotFoundError as e:
        logger.warning(str(e))
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Recipe {slug} not found",
        )


@router.get("/recipes/{slug}/ingredients", response_model=IngredientListResponse)
async def get_recipe_ingredients(
    slug: str,
    servings: Annotated[int | None, Query(ge=1, description="Servings to scale to")] = None,
    units: Annotated[UnitSystem | None, Query(description="metric or imperial")] = None,
    repository: RecipeRepository = Depends(get_repository),
) -> IngredientListResponse:
    """
    Get a recipe's ingredients scaled to a serving count and unit system.

    Defaults to the recipe's base servings and the configured unit system.
    """
    try:
        recipe = repository.get_by_slug(slug)
    except RecipeNotFoundError as e:
        logger.warning(str(e))
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Recipe {slug} not found",
        )

    target_servings = servings or recipe.base_servings
    unit_system = units or settings.default_unit_system

    with LoggingContext(recipe_slug=slug):
        logger.info(f"Scaling ingredients: servings={target_servings}, units={unit_system}")
        try:
            ingredients = [
                scale_and_convert(ingredient, recipe.base_servings, target_servings, unit_system)
                for ingredient in recipe.ingredients
            ]
        except InvalidServingsError as e:
            logger.error(f"Cannot scale recipe: {e}")
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail=str(e),
            )

    return IngredientListResponse(
        slug=slug,
        servings=target_servings,
        unit_system=unit_system,
        ingredients=ingredients,
    )


# =============================================================================
# Unit Endpoints
# =============================================================================


@router.get("/units/convert", response_model=ConvertedQuantity, tags=["units"])
async def convert_quantity(
    quantity: Annotated[
        float, Query(ge=0, allow_inf_nan=False, description="Quantity to convert")
    ],
    unit: Annotated[str, Query(min_length=1, description="Unit symbol, e.g. g or °C")],
    system: Annotated[UnitSystem, Query(description="Target unit system")],
) -> ConvertedQuantity:
    """Convert a quantity to the metric or imperial system."""
    logger.info(f"Converting {quantity} {unit} to {system}")
    return convert_units(quantity, unit, system)
