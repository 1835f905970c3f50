"""Recipe data schemas shared by the query engine, unit converter and API."""

import math
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator
from pydantic.alias_generators import to_camel

Difficulty = Literal["Easy", "Medium", "Hard"]
UnitSystem = Literal["metric", "imperial"]
SortField = Literal["title", "totalTimeMins", "datePublished", "difficulty"]
SortDirection = Literal["asc", "desc"]


class CamelModel(BaseModel):
    """Base model accepting camelCase wire names and snake_case attribute names."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Ingredient(CamelModel):
    """A single ingredient line, quantified for the recipe's base servings."""

    model_config = ConfigDict(frozen=True)

    id: str | None = None
    name: str
    quantity: float | None = Field(None, ge=0, allow_inf_nan=False)
    unit: str | None = None
    note: str | None = None

    @model_validator(mode="after")
    def _quantity_and_unit_together(self) -> "Ingredient":
        if (self.quantity is None) != (not self.unit):
            raise ValueError("quantity and unit must both be present or both be absent")
        return self


class RecipeStep(CamelModel):
    """One method step."""

    id: str
    text: str
    duration_mins: int | None = None


class Author(CamelModel):
    name: str
    profile_url: str | None = None


class Nutrition(CamelModel):
    calories: float | None = None
    protein: float | None = None
    carbs: float | None = None
    fat: float | None = None


class Recipe(CamelModel):
    """Published recipe as delivered by the data layer."""

    model_config = ConfigDict(frozen=True)

    id: str
    slug: str
    title: str
    description: str = ""
    image_url: str | None = None
    cuisine: str
    tags: list[str] = Field(default_factory=list)
    prep_time_mins: int = Field(ge=0)
    cook_time_mins: int = Field(ge=0)
    total_time_mins: int | None = Field(None, ge=0)
    difficulty: Difficulty
    base_servings: int = Field(ge=1)
    ingredients: list[Ingredient] = Field(default_factory=list)
    steps: list[RecipeStep] = Field(default_factory=list)
    author: Author | None = None
    date_published: str | None = Field(None, description="Publication date as DD/MM/YYYY")
    nutrition: Nutrition | None = None
    is_featured: bool = False

    @model_validator(mode="before")
    @classmethod
    def _fill_total_time(cls, data: object) -> object:
        if not isinstance(data, dict):
            return data
        prep = data.get("prepTimeMins", data.get("prep_time_mins"))
        cook = data.get("cookTimeMins", data.get("cook_time_mins"))
        has_total = data.get("totalTimeMins", data.get("total_time_mins")) is not None
        if not has_total and isinstance(prep, int) and isinstance(cook, int):
            return {**data, "totalTimeMins": prep + cook}
        return data

    @model_validator(mode="after")
    def _total_time_consistent(self) -> "Recipe":
        if self.total_time_mins != self.prep_time_mins + self.cook_time_mins:
            raise ValueError("totalTimeMins must equal prepTimeMins + cookTimeMins")
        return self


class RecipeFilterSpec(CamelModel):
    """
    Optional predicates narrowing a recipe collection.

    Present fields are combined with AND; values within a list field are
    combined with OR. An absent field or an empty list imposes no constraint,
    but ``max_prep_time_mins=0`` does: it keeps only recipes with no prep time.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    search: str | None = None
    cuisine: list[str] | None = None
    tags: list[str] | None = None
    max_prep_time_mins: int | None = Field(None, ge=0)
    difficulty: list[Difficulty] | None = None


class RecipeSortSpec(CamelModel):
    """Sort field and direction."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    field: SortField
    direction: SortDirection = "asc"


class ConvertedQuantity(BaseModel):
    """A quantity expressed in a display unit."""

    value: float
    unit: str


class ScaledIngredient(CamelModel):
    """An ingredient rescaled to a serving count and converted to a unit system."""

    name: str
    quantity: float | None = None
    unit: str | None = None
    note: str | None = None
    display: str


class RecipePage(CamelModel):
    """One page of query results plus the pre-pagination match count."""

    recipes: list[Recipe]
    total: int
    limit: int | None = None
    offset: int = 0

    @computed_field(alias="totalPages")
    @property
    def total_pages(self) -> int:
        if not self.limit or self.total == 0:
            return 1
        return math.ceil(self.total / self.limit)

    @computed_field(alias="hasNextPage")
    @property
    def has_next_page(self) -> bool:
        return self.offset + len(self.recipes) < self.total

    @computed_field(alias="hasPrevPage")
    @property
    def has_prev_page(self) -> bool:
        return self.offset > 0
