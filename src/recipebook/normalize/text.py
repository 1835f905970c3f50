"""Display helpers for recipe times, dates and slugs."""

import re
from datetime import date, datetime

UK_DATE_PATTERN = re.compile(r"^\d{2}/\d{2}/\d{4}$")


def format_cooking_time(minutes: int) -> str:
    """
    Format a duration in minutes for display.

    Examples:
        45 -> "45 mins"
        60 -> "1 hour"
        135 -> "2h 15m"
    """
    if minutes < 60:
        return f"{minutes} min{'s' if minutes != 1 else ''}"

    hours, remaining = divmod(minutes, 60)
    if remaining == 0:
        return f"{hours} hour{'s' if hours != 1 else ''}"

    return f"{hours}h {remaining}m"


def format_date_uk(value: str | date | None) -> str:
    """
    Format a date as DD/MM/YYYY.

    Strings already in DD/MM/YYYY form are returned as is, ISO dates and
    datetimes are reformatted, anything unparseable is returned unchanged.
    """
    if not value:
        return ""

    if isinstance(value, date):
        return value.strftime("%d/%m/%Y")

    if UK_DATE_PATTERN.match(value):
        return value

    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        return value

    return parsed.strftime("%d/%m/%Y")


def generate_slug(title: str) -> str:
    """Generate a URL-safe slug from a recipe title."""
    slug = title.lower()
    slug = re.sub(r"[^\w\s-]", "", slug, flags=re.ASCII)
    slug = re.sub(r"\s+", "-", slug)
    slug = re.sub(r"-+", "-", slug)
    return slug.strip()
