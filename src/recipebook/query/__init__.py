"""Recipe query engine."""

from recipebook.query.engine import (
    EARLIEST_DATE,
    filter_recipes,
    paginate,
    parse_published_date,
    query_recipes,
    sort_recipes,
)

__all__ = [
    "EARLIEST_DATE",
    "filter_recipes",
    "paginate",
    "parse_published_date",
    "query_recipes",
    "sort_recipes",
]
