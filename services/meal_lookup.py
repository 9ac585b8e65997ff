"""Meal lookup port used by the plan generator, and its SQLAlchemy adapter."""

import json
from typing import List, Optional, Protocol, Sequence, Tuple

from sqlalchemy.orm import Session

from core.logger import get_logger
from database import models
from schemas.enums import Difficulty, MealCategory
from schemas.meal_schema import MealSummary

logger = get_logger("services.meal_lookup")


class MealLookupPort(Protocol):
    """Anything that can answer "which meals fit this slot?"."""

    def find_candidates(
        self,
        category: MealCategory,
        calorie_range: Tuple[float, float],
        is_public: bool = True,
        diet_tag: Optional[str] = None,
        max_prep_time: Optional[int] = None,
        max_cook_time: Optional[int] = None,
        difficulty: Optional[Difficulty] = None,
        limit: int = 10,
    ) -> Sequence[MealSummary]:
        ...


def parse_tags(raw) -> List[str]:
    """Decode a JSON tag column, tolerating NULL and already-decoded lists."""
    if not raw:
        return []
    if isinstance(raw, (list, tuple)):
        return [str(t) for t in raw]
    try:
        return [str(t) for t in json.loads(raw)]
    except (TypeError, ValueError):
        logger.warning("Unreadable tags column: %r", raw)
        return []


class SqlMealLookup:
    """`MealLookupPort` over the `meals` table."""

    def __init__(self, session: Session):
        self.session = session

    def find_candidates(
        self,
        category: MealCategory,
        calorie_range: Tuple[float, float],
        is_public: bool = True,
        diet_tag: Optional[str] = None,
        max_prep_time: Optional[int] = None,
        max_cook_time: Optional[int] = None,
        difficulty: Optional[Difficulty] = None,
        limit: int = 10,
    ) -> List[MealSummary]:
        low, high = calorie_range
        q = self.session.query(models.Meal).filter(
            models.Meal.category == MealCategory(category).value,
            models.Meal.is_public.is_(is_public),
            models.Meal.calories >= low,
            models.Meal.calories <= high,
        )
        if max_prep_time is not None:
            q = q.filter(models.Meal.prep_time <= max_prep_time)
        if max_cook_time is not None:
            q = q.filter(models.Meal.cook_time <= max_cook_time)
        if difficulty is not None:
            q = q.filter(models.Meal.difficulty == Difficulty(difficulty).value)
        if diet_tag:
            # tags are a JSON array of strings; match the quoted element
            q = q.filter(models.Meal.tags.like(f'%"{diet_tag}"%'))
        rows = q.order_by(models.Meal.id).limit(limit).all()
        return [
            MealSummary(id=m.id, name=m.name, calories_per_base_serving=m.calories, tags=parse_tags(m.tags))
            for m in rows
        ]
