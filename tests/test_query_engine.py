"""Unit tests for recipe filtering, sorting and pagination."""

from datetime import date

import pytest

from recipebook.query.engine import (
    EARLIEST_DATE,
    filter_recipes,
    paginate,
    parse_published_date,
    query_recipes,
    sort_recipes,
)
from recipebook.schemas import RecipeFilterSpec, RecipeSortSpec


def ids(recipes):
    return [recipe.id for recipe in recipes]


# =============================================================================
# Filtering
# =============================================================================


class TestFilterRecipes:
    """Tests for filter_recipes."""

    def test_cuisine_and_tags_combine_with_and(self, cuisine_tag_recipes):
        """Test cuisine and tags both have to match."""
        spec = RecipeFilterSpec(cuisine=["British"], tags=["quick"])
        assert ids(filter_recipes(cuisine_tag_recipes, spec)) == ["a"]

    def test_values_within_field_combine_with_or(self, cuisine_tag_recipes):
        spec = RecipeFilterSpec(cuisine=["British", "Indian"])
        assert ids(filter_recipes(cuisine_tag_recipes, spec)) == ["a", "b", "c"]

    def test_tags_match_any(self, cuisine_tag_recipes):
        """Test a recipe needs only one of the requested tags."""
        spec = RecipeFilterSpec(tags=["vegan", "spicy"])
        assert ids(filter_recipes(cuisine_tag_recipes, spec)) == ["b"]

    def test_search_is_case_insensitive(self, sample_recipes):
        spec = RecipeFilterSpec(search="pie")
        assert ids(filter_recipes(sample_recipes, spec)) == ["shepherds-pie"]

    def test_search_matches_description(self, sample_recipes):
        spec = RecipeFilterSpec(search="LENTILS")
        assert ids(filter_recipes(sample_recipes, spec)) == ["dal"]

    def test_search_matches_tag_substring(self, sample_recipes):
        spec = RecipeFilterSpec(search="veg")
        # "Vegetable Pad Thai" by title and tag, the dal by its "vegan" tag
        assert ids(filter_recipes(sample_recipes, spec)) == ["dal", "pad-thai"]

    def test_max_prep_time_is_inclusive(self, sample_recipes):
        spec = RecipeFilterSpec(max_prep_time_mins=15)
        assert ids(filter_recipes(sample_recipes, spec)) == ["dal", "pad-thai"]

    def test_max_prep_time_zero_is_a_real_bound(self, make_recipe):
        recipes = [
            make_recipe(id="no-prep", prep_time_mins=0),
            make_recipe(id="some-prep", prep_time_mins=5),
        ]
        spec = RecipeFilterSpec(max_prep_time_mins=0)
        assert ids(filter_recipes(recipes, spec)) == ["no-prep"]

    def test_difficulty_set(self, sample_recipes):
        spec = RecipeFilterSpec(difficulty=["Hard", "Medium"])
        assert ids(filter_recipes(sample_recipes, spec)) == ["shepherds-pie", "wellington"]

    def test_empty_spec_keeps_everything(self, sample_recipes):
        assert filter_recipes(sample_recipes, RecipeFilterSpec()) == sample_recipes
        assert filter_recipes(sample_recipes, None) == sample_recipes

    def test_empty_lists_impose_no_constraint(self, sample_recipes):
        spec = RecipeFilterSpec(cuisine=[], tags=[], difficulty=[], search="")
        assert filter_recipes(sample_recipes, spec) == sample_recipes

    def test_preserves_input_order(self, sample_recipes):
        reordered = list(reversed(sample_recipes))
        spec = RecipeFilterSpec(cuisine=["British"])
        assert ids(filter_recipes(reordered, spec)) == ["wellington", "shepherds-pie"]

    def test_does_not_mutate_input(self, sample_recipes):
        before = list(sample_recipes)
        filter_recipes(sample_recipes, RecipeFilterSpec(cuisine=["Thai"]))
        assert sample_recipes == before


# =============================================================================
# Sorting
# =============================================================================


class TestParsePublishedDate:
    """Tests for parse_published_date."""

    def test_day_month_year(self):
        assert parse_published_date("01/02/2024") == date(2024, 2, 1)

    def test_iso_date(self):
        assert parse_published_date("2024-03-01") == date(2024, 3, 1)

    @pytest.mark.parametrize(
        "value", [None, "", "not a date", "31/02/2024", "12/2024", "01/01/99999999999999999999"]
    )
    def test_malformed_dates_are_earliest(self, value):
        assert parse_published_date(value) == EARLIEST_DATE


class TestSortRecipes:
    """Tests for sort_recipes."""

    def test_title_ascending(self, sample_recipes):
        result = sort_recipes(sample_recipes, RecipeSortSpec(field="title"))
        assert ids(result) == ["wellington", "dal", "shepherds-pie", "pad-thai"]

    def test_total_time_descending(self, sample_recipes):
        spec = RecipeSortSpec(field="totalTimeMins", direction="desc")
        assert ids(sort_recipes(sample_recipes, spec)) == [
            "wellington",
            "shepherds-pie",
            "dal",
            "pad-thai",
        ]

    def test_date_published_descending(self, make_recipe):
        """Test DD/MM/YYYY dates are compared chronologically."""
        recipes = [
            make_recipe(id="january", date_published="15/01/2024"),
            make_recipe(id="february", date_published="01/02/2024"),
        ]
        spec = RecipeSortSpec(field="datePublished", direction="desc")
        assert ids(sort_recipes(recipes, spec)) == ["february", "january"]

    def test_malformed_dates_sort_first_ascending(self, make_recipe):
        recipes = [
            make_recipe(id="dated", date_published="01/01/2020"),
            make_recipe(id="garbled", date_published="sometime"),
            make_recipe(id="undated", date_published=None),
        ]
        spec = RecipeSortSpec(field="datePublished", direction="asc")
        assert ids(sort_recipes(recipes, spec)) == ["garbled", "undated", "dated"]

    def test_overflowing_year_sorts_as_earliest(self, make_recipe):
        recipes = [
            make_recipe(id="dated", date_published="01/01/2020"),
            make_recipe(id="far-future", date_published="01/01/99999999999999999999"),
        ]
        spec = RecipeSortSpec(field="datePublished", direction="desc")
        assert ids(sort_recipes(recipes, spec)) == ["dated", "far-future"]

    def test_difficulty_uses_label_order(self, sample_recipes):
        """
        Test difficulty sorts by label, giving Easy < Hard < Medium.

        This is alphabetical, not Easy < Medium < Hard severity order.
        """
        ascending = sort_recipes(sample_recipes, RecipeSortSpec(field="difficulty"))
        assert [r.difficulty for r in ascending] == ["Easy", "Easy", "Hard", "Medium"]

        descending = sort_recipes(
            sample_recipes, RecipeSortSpec(field="difficulty", direction="desc")
        )
        assert [r.difficulty for r in descending] == ["Medium", "Hard", "Easy", "Easy"]

    def test_stable_for_equal_keys(self, make_recipe):
        recipes = [make_recipe(id=f"r{i}", prep_time_mins=10, cook_time_mins=20) for i in range(3)]
        for direction in ("asc", "desc"):
            spec = RecipeSortSpec(field="totalTimeMins", direction=direction)
            assert ids(sort_recipes(recipes, spec)) == ["r0", "r1", "r2"]

    def test_no_sort_spec_keeps_order(self, sample_recipes):
        assert sort_recipes(sample_recipes, None) == sample_recipes


# =============================================================================
# Pagination
# =============================================================================


class TestPaginate:
    """Tests for paginate."""

    def test_limit_and_offset(self, ten_recipes):
        assert ids(paginate(ten_recipes, limit=3, offset=3)) == ["r4", "r5", "r6"]

    def test_no_limit_or_offset_returns_everything(self, ten_recipes):
        assert paginate(ten_recipes) == ten_recipes

    def test_offset_only_runs_to_end(self, ten_recipes):
        assert ids(paginate(ten_recipes, offset=8)) == ["r9", "r10"]

    def test_limit_only_starts_at_zero(self, ten_recipes):
        assert ids(paginate(ten_recipes, limit=2)) == ["r1", "r2"]

    def test_offset_past_end(self, ten_recipes):
        assert paginate(ten_recipes, limit=5, offset=20) == []


# =============================================================================
# Composed Query
# =============================================================================


class TestQueryRecipes:
    """Tests for query_recipes."""

    def test_total_counts_before_pagination(self, sample_recipes):
        page = query_recipes(
            sample_recipes,
            filters=RecipeFilterSpec(max_prep_time_mins=30),
            sort=RecipeSortSpec(field="title"),
            limit=2,
            offset=0,
        )
        assert page.total == 3
        assert ids(page.recipes) == ["dal", "shepherds-pie"]
        assert page.total_pages == 2
        assert page.has_next_page is True
        assert page.has_prev_page is False

    def test_sort_applies_before_pagination(self, ten_recipes):
        page = query_recipes(
            ten_recipes,
            sort=RecipeSortSpec(field="title", direction="desc"),
            limit=3,
        )
        # Lexicographic: "Recipe 9" > "Recipe 8" > ... > "Recipe 10" > "Recipe 1"
        assert ids(page.recipes) == ["r9", "r8", "r7"]
        assert page.total == 10
        assert page.total_pages == 4

    def test_last_page(self, ten_recipes):
        page = query_recipes(ten_recipes, limit=3, offset=9)
        assert ids(page.recipes) == ["r10"]
        assert page.has_next_page is False
        assert page.has_prev_page is True

    def test_empty_result(self, sample_recipes):
        page = query_recipes(sample_recipes, filters=RecipeFilterSpec(cuisine=["Peruvian"]), limit=5)
        assert page.recipes == []
        assert page.total == 0
        assert page.total_pages == 1
