"""Utilities to ingest meal catalog CSV files into the application's database.

This module provides:
- parse_meals_csv(csv_path): returns a list of meal dicts in seed format
- seed_meals_from_csv(csv_path, session): idempotently seeds the meals table

The CSV needs a `name` (or `meal_name`) column and the macro columns
`calories`, `protein`, `carbs`, `fat`. Optional columns: `category`,
`cuisine`, `prep_time`, `cook_time`, `servings`, `difficulty`, `fiber`,
`sugar`, `sodium`, a `;`-separated `tags` column, and boolean diet columns
(`vegan`, `vegetarian`, `keto`, ...) that are folded into the tags.
"""
from typing import Dict, List, Optional

import pandas as pd

from core.logger import get_logger
from database import models
from database.database import WriteSessionLocal, meal_from_seed
from schemas.enums import Difficulty, MealCategory

logger = get_logger("data.ingest_meals")

DIET_TAG_COLUMNS = (
    "vegan",
    "vegetarian",
    "keto",
    "paleo",
    "mediterranean",
    "gluten_free",
    "dairy_free",
)
MACRO_COLUMNS = ("calories", "protein", "carbs", "fat")
OPTIONAL_NUTRIENTS = ("fiber", "sugar", "sodium")
CATEGORIES = {c.value for c in MealCategory}
DIFFICULTIES = {d.value for d in Difficulty}


def infer_category(name: str) -> str:
    """Heuristic to assign a category from the meal name.

    Args:
        name: The name of the meal.

    Returns:
        One of 'breakfast', 'lunch', 'dinner' or 'snack'.
    """
    n = (name or "").lower()
    if any(k in n for k in ("pancake", "omelette", "oatmeal", "oats", "yogurt", "breakfast", "smoothie")):
        return "breakfast"
    if any(k in n for k in ("snack", "chips", "nuts", "hummus", "edamame", "fruit", "bar")):
        return "snack"
    if any(k in n for k in ("stew", "curry", "steak", "salmon", "dinner", "pizza", "pasta", "roast")):
        return "dinner"
    return "lunch"


def _truthy(val) -> bool:
    """Return True for common truthy CSV cell values (1, true, yes, y, >= 0.5)."""
    if val is None or (isinstance(val, float) and pd.isna(val)):
        return False
    if isinstance(val, (bool, int, float)):
        return float(val) >= 0.5
    v = str(val).strip().lower()
    if v in ("1", "true", "yes", "y"):
        return True
    try:
        return float(v) >= 0.5
    except ValueError:
        return False


def _number(row: pd.Series, column: str, default: Optional[float] = 0.0) -> Optional[float]:
    if column not in row.index:
        return default
    value = pd.to_numeric(row.get(column), errors="coerce")
    if pd.isna(value) or value < 0:
        return default
    return float(value)


def _text(row: pd.Series, column: str) -> Optional[str]:
    value = row.get(column) if column in row.index else None
    if value is None or (isinstance(value, float) and pd.isna(value)):
        return None
    value = str(value).strip()
    return value or None


def parse_meals_csv(csv_path: str) -> List[Dict]:
    """Parse the CSV into seed dictionaries accepted by `meal_from_seed`.

    Rows without a name are skipped. Unknown categories fall back to a
    guess from the meal name; unknown difficulties fall back to 'easy'.

    Args:
        csv_path: Path to the meals CSV file.

    Returns:
        List of dicts with name, category, timing, difficulty, tags and a
        `nutrition` dict.
    """
    logger.info("Parsing meals CSV: %s", csv_path)
    df = pd.read_csv(csv_path, encoding="utf-8", engine="python")
    df = df.rename(columns=lambda s: s.strip().lower())

    meals = []
    for _, row in df.iterrows():
        name = _text(row, "name") or _text(row, "meal_name")
        if not name:
            continue

        category = (_text(row, "category") or "").lower()
        if category not in CATEGORIES:
            category = infer_category(name)
        difficulty = (_text(row, "difficulty") or "").lower()
        if difficulty not in DIFFICULTIES:
            difficulty = Difficulty.EASY.value

        tags = [t.strip().lower() for t in (_text(row, "tags") or "").split(";") if t.strip()]
        for column in DIET_TAG_COLUMNS:
            tag = column.replace("_", "-")
            if column in row.index and _truthy(row.get(column)) and tag not in tags:
                tags.append(tag)

        nutrition = {c: round(_number(row, c), 1) for c in MACRO_COLUMNS}
        for c in OPTIONAL_NUTRIENTS:
            value = _number(row, c, default=None)
            nutrition[c] = round(value, 1) if value is not None else None

        meals.append({
            "name": name,
            "description": _text(row, "description"),
            "category": category,
            "cuisine": _text(row, "cuisine"),
            "prep_time": int(_number(row, "prep_time")),
            "cook_time": int(_number(row, "cook_time")),
            "servings": max(1, int(_number(row, "servings", default=1))),
            "difficulty": difficulty,
            "tags": tags,
            "ingredients": [],
            "nutrition": nutrition,
        })

    logger.info("Parsed %s meals from CSV", len(meals))
    return meals


def seed_meals_from_csv(csv_path: str, session=None) -> int:
    """Idempotently seed the meals table from the CSV file.

    If `session` is not supplied, a `WriteSessionLocal` session is used.
    Existing meals are matched by name and skipped to avoid duplicates.

    Args:
        csv_path: Path to the meals CSV file.
        session: Optional SQLAlchemy session. If None, creates a new one.

    Returns:
        Number of meals added.
    """
    close_session = False
    if session is None:
        session = WriteSessionLocal()
        close_session = True
    try:
        existing = {name for (name,) in session.query(models.Meal.name).all()}
        added = 0
        for item in parse_meals_csv(csv_path):
            if item["name"] in existing:
                continue
            session.add(meal_from_seed(item))
            existing.add(item["name"])
            added += 1
        if added:
            session.commit()
        logger.info("Seeded %s new meals into DB", added)
        return added
    finally:
        if close_session:
            session.close()


if __name__ == "__main__":
    import argparse

    p = argparse.ArgumentParser("Seed meals from CSV into the DB")
    p.add_argument("csv_path", nargs="?", default="data/fixtures/sample_meals.csv")
    args = p.parse_args()
    print(f"Added {seed_meals_from_csv(args.csv_path)} meals")
