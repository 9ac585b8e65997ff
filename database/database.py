"""Database helpers: engines, session factories and DB initialization.

Provides read/write session factories and an `init_db` helper that creates
tables and seeds the meal catalog when the meals table is empty.
"""

import json
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from core.config import settings
from core.logger import get_logger
from .models import Base, Meal
from data.meals_dataset import MEALS_DATA
from services.meal_nutrition import sum_ingredient_nutrition

logger = get_logger("database.database")

# Read/Write partitioning pattern
# In production, set WRITE_DATABASE_URL and READ_DATABASE_URL to different DB instances.
# For SQLite/demo both default to the same file but the interfaces are separated.
WRITE_DATABASE_URL = settings.WRITE_DATABASE_URL
READ_DATABASE_URL = settings.READ_DATABASE_URL


def _connect_args(url: str) -> dict:
    return {"check_same_thread": False} if url.startswith("sqlite") else {}


# Engines
write_engine = create_engine(WRITE_DATABASE_URL, connect_args=_connect_args(WRITE_DATABASE_URL))
read_engine = create_engine(READ_DATABASE_URL, connect_args=_connect_args(READ_DATABASE_URL))

# Session factories
WriteSessionLocal = sessionmaker(bind=write_engine)
ReadSessionLocal = sessionmaker(bind=read_engine)


def meal_from_seed(item: dict) -> Meal:
    """Build a `Meal` row from one seed/CSV dictionary.

    Nutrition is taken from `item["nutrition"]` when present, otherwise
    summed from the ingredient lines.
    """
    nutrition = item.get("nutrition") or sum_ingredient_nutrition(item.get("ingredients", [])).model_dump()
    return Meal(
        name=item["name"],
        description=item.get("description"),
        category=item["category"],
        cuisine=item.get("cuisine"),
        prep_time=item.get("prep_time", 0),
        cook_time=item.get("cook_time", 0),
        servings=item.get("servings", 1),
        difficulty=item.get("difficulty", "easy"),
        ingredients=json.dumps(item.get("ingredients", [])),
        calories=nutrition["calories"],
        protein=nutrition["protein"],
        carbs=nutrition["carbs"],
        fat=nutrition["fat"],
        fiber=nutrition.get("fiber"),
        sugar=nutrition.get("sugar"),
        sodium=nutrition.get("sodium"),
        tags=json.dumps(item.get("tags", [])),
        is_public=item.get("is_public", True),
    )


def init_db(engine=None, session_factory=None):
    """Initialize database schema and seed the meal catalog.

    Creates all tables and, if the meals table is empty, inserts the
    built-in catalog from `data.meals_dataset`.
    """
    engine = engine or write_engine
    session_factory = session_factory or WriteSessionLocal
    Base.metadata.create_all(bind=engine)
    session = session_factory()
    try:
        count = session.query(Meal).count()
        if count == 0:
            session.add_all(meal_from_seed(item) for item in MEALS_DATA)
            session.commit()
            logger.info("Seeded %s catalog meals", len(MEALS_DATA))
    finally:
        session.close()


# Convenience generators for dependency injection
def get_write_session():
    """Yield a write-enabled SQLAlchemy session for the request scope."""
    db = WriteSessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_read_session():
    """Yield a read-only SQLAlchemy session for the request scope.

    Used for read endpoints where routing reads to a replica may be desired.
    """
    db = ReadSessionLocal()
    try:
        yield db
    finally:
        db.close()
