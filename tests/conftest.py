"""Pytest configuration and shared fixtures."""

from collections.abc import Callable
from typing import Any

import pytest

from recipebook.repository import RecipeRepository
from recipebook.schemas import Recipe

# =============================================================================
# Recipe Factories
# =============================================================================


def build_recipe(**overrides: Any) -> Recipe:
    """Build a valid recipe, overriding any field by its snake_case name."""
    data: dict[str, Any] = {
        "id": "recipe-1",
        "slug": "recipe-1",
        "title": "Test Recipe",
        "description": "A recipe used in tests.",
        "cuisine": "British",
        "tags": [],
        "prep_time_mins": 10,
        "cook_time_mins": 20,
        "difficulty": "Easy",
        "base_servings": 4,
        "ingredients": [],
        "date_published": "01/01/2024",
    }
    data.update(overrides)
    if "slug" not in overrides:
        data["slug"] = data["id"]
    return Recipe(**data)


@pytest.fixture
def make_recipe() -> Callable[..., Recipe]:
    """Factory fixture for building recipes."""
    return build_recipe


# =============================================================================
# Recipe Collection Fixtures
# =============================================================================


@pytest.fixture
def cuisine_tag_recipes() -> list[Recipe]:
    """Three recipes sharing cuisines and tags in overlapping ways."""
    return [
        build_recipe(id="a", title="Fish Finger Sandwich", cuisine="British", tags=["quick"]),
        build_recipe(id="b", title="Bubble and Squeak", cuisine="British", tags=["vegan"]),
        build_recipe(id="c", title="Egg Curry", cuisine="Indian", tags=["quick"]),
    ]


@pytest.fixture
def sample_recipes() -> list[Recipe]:
    """A small varied collection for filtering and sorting tests."""
    return [
        build_recipe(
            id="shepherds-pie",
            title="Shepherd's Pie",
            description="Minced lamb topped with mashed potato.",
            cuisine="British",
            tags=["classic", "dinner"],
            prep_time_mins=25,
            cook_time_mins=50,
            difficulty="Medium",
            date_published="01/02/2024",
        ),
        build_recipe(
            id="dal",
            title="Red Lentil Dal",
            description="Spiced lentils simmered with tomato.",
            cuisine="Indian",
            tags=["vegan", "quick"],
            prep_time_mins=10,
            cook_time_mins=25,
            difficulty="Easy",
            date_published="15/01/2024",
        ),
        build_recipe(
            id="wellington",
            title="Beef Wellington",
            description="Beef fillet wrapped in pastry.",
            cuisine="British",
            tags=["special-occasion"],
            prep_time_mins=60,
            cook_time_mins=45,
            difficulty="Hard",
            date_published="24/12/2023",
        ),
        build_recipe(
            id="pad-thai",
            title="Vegetable Pad Thai",
            description="Rice noodles with peanuts.",
            cuisine="Thai",
            tags=["vegan", "dinner"],
            prep_time_mins=15,
            cook_time_mins=10,
            difficulty="Easy",
            date_published="05/09/2024",
        ),
    ]


@pytest.fixture
def ten_recipes() -> list[Recipe]:
    """Recipes r1..r10 in order."""
    return [build_recipe(id=f"r{i}", title=f"Recipe {i}") for i in range(1, 11)]


@pytest.fixture
def repository(sample_recipes) -> RecipeRepository:
    """Repository over the sample collection."""
    return RecipeRepository(sample_recipes)
