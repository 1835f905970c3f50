#!/usr/bin/env python
"""
Generate a synthetic recipe fixture file.

Writes a JSON list of recipe records in the same shape the API loads, so the
query engine and unit conversion can be exercised against a larger collection
than the bundled sample data.

Run with: python scripts/generate_sample_recipes.py --count 200 --output recipes.json

Point the API at the result with RECIPES_DATA_PATH=recipes.json.
"""

import argparse
import json
import random
import sys
from pathlib import Path

from faker import Faker

from recipebook.logging_config import configure_logging, get_logger
from recipebook.normalize.text import format_date_uk, generate_slug
from recipebook.repository import load_recipes

configure_logging()
logger = get_logger(__name__)

CUISINES = ["British", "Indian", "Italian", "Thai", "French", "Mexican"]
TAGS = ["quick", "vegan", "vegetarian", "classic", "dinner", "breakfast", "baking", "healthy"]
DIFFICULTIES = ["Easy", "Medium", "Hard"]
DISHES = ["pie", "curry", "soup", "stew", "tart", "salad", "risotto", "bake", "crumble"]

# (unit, typical quantity range)
MEASURED_UNITS = [
    ("g", (50, 800)),
    ("kg", (1, 2)),
    ("ml", (50, 600)),
    ("l", (1, 2)),
    ("tsp", (1, 3)),
    ("tbsp", (1, 4)),
    ("pcs", (1, 6)),
]


def generate_ingredient(fake: Faker, index: int) -> dict:
    """Generate one ingredient, occasionally without a quantity."""
    name = fake.word()
    if random.random() < 0.1:
        return {"id": f"i{index}", "name": name, "note": "to taste"}

    unit, (low, high) = random.choice(MEASURED_UNITS)
    quantity = random.randint(low, high) if unit != "tsp" else random.choice([0.25, 0.5, 1, 2])
    ingredient = {"id": f"i{index}", "name": name, "quantity": quantity, "unit": unit}
    if random.random() < 0.3:
        ingredient["note"] = random.choice(["chopped", "sliced", "softened", "crushed"])
    return ingredient


def generate_recipe(fake: Faker, index: int, used_slugs: set[str]) -> dict:
    """Generate one recipe record with consistent timing fields."""
    title = f"{fake.first_name()}'s {fake.color_name()} {random.choice(DISHES)}".title()
    slug = generate_slug(title)
    if slug in used_slugs:
        slug = f"{slug}-{index}"
    used_slugs.add(slug)

    prep = random.randint(5, 60)
    cook = random.randint(0, 120)

    return {
        "id": f"rcp-{index:05d}",
        "slug": slug,
        "title": title,
        "description": fake.sentence(nb_words=12),
        "imageUrl": f"/images/recipes/{slug}.jpg",
        "cuisine": random.choice(CUISINES),
        "tags": random.sample(TAGS, k=random.randint(1, 3)),
        "prepTimeMins": prep,
        "cookTimeMins": cook,
        "totalTimeMins": prep + cook,
        "difficulty": random.choice(DIFFICULTIES),
        "baseServings": random.choice([2, 4, 6, 8]),
        "ingredients": [generate_ingredient(fake, i) for i in range(1, random.randint(3, 9))],
        "steps": [
            {"id": f"s{i}", "text": fake.sentence(nb_words=10)}
            for i in range(1, random.randint(2, 6))
        ],
        "author": {"name": fake.name()},
        "datePublished": format_date_uk(fake.date_between(start_date="-3y", end_date="today")),
        "isFeatured": random.random() < 0.1,
    }


def main() -> int:
    """Entry point for the generator script."""
    parser = argparse.ArgumentParser(description="Generate synthetic recipe fixtures")
    parser.add_argument("--count", type=int, default=100, help="Number of recipes")
    parser.add_argument("--output", type=Path, default=Path("recipes.json"), help="Output file")
    parser.add_argument("--seed", type=int, default=42, help="Random seed")
    args = parser.parse_args()

    random.seed(args.seed)
    fake = Faker("en_GB")
    Faker.seed(args.seed)

    used_slugs: set[str] = set()
    recipes = [generate_recipe(fake, i, used_slugs) for i in range(1, args.count + 1)]

    args.output.write_text(json.dumps(recipes, indent=2, ensure_ascii=False), encoding="utf-8")
    logger.info(f"Wrote {len(recipes)} recipes to {args.output}")

    # Round-trip through the loader so a bad fixture fails here rather than at API startup
    load_recipes(args.output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
