"""Food and water tracking: turning stored entries into nutrition figures.

Stored `FoodEntry` rows are resolved to `ResolvedFoodEntry` values (the
referenced nutrition plus servings) and handed to the aggregator; the stats
summary combines running averages with the streak calculator.
"""

import json
from collections import Counter, defaultdict
from datetime import date, datetime
from typing import Dict, Iterable, List, Union

from core.exceptions import ValidationError
from core.logger import get_logger
from database import models
from schemas.enums import MealCategory
from schemas.nutrition_schema import NutritionInfo, ResolvedFoodEntry
from schemas.tracking_schema import (
    CustomFood,
    FoodEntryCreateRequest,
    FoodEntryResponse,
    MealRef,
    TrackingStatsResponse,
)
from services.meal_service import meal_nutrition
from services.nutrition_aggregator import nutrition_aggregator
from services.streak_calculator import current_streak_from_days, longest_streak

logger = get_logger("services.tracking_service")

SCALED_FIELDS = ("calories", "protein", "carbs", "fat", "fiber", "sugar", "sodium")


def entry_source(entry: models.FoodEntry) -> Union[MealRef, CustomFood]:
    """Rebuild the tagged source of a stored entry.

    Raises:
        ValidationError: the row has both or neither of meal and custom food.
    """
    if (entry.meal_id is None) == (entry.custom_food is None):
        raise ValidationError(
            "Food entry must reference exactly one of a meal or a custom food", field="source"
        )
    if entry.meal_id is not None:
        return MealRef(meal_id=entry.meal_id)
    return CustomFood.model_validate(json.loads(entry.custom_food))


def base_nutrition(entry: models.FoodEntry) -> NutritionInfo:
    source = entry_source(entry)
    if isinstance(source, MealRef):
        return meal_nutrition(entry.meal)
    return source.nutrition


def resolve_entry(entry: models.FoodEntry) -> ResolvedFoodEntry:
    return ResolvedFoodEntry(
        nutrition=base_nutrition(entry),
        servings=entry.servings,
        meal_type=entry.meal_type,
    )


def scaled_nutrition(nutrition: NutritionInfo, servings: float) -> NutritionInfo:
    """Nutrition x servings for the commonly tracked fields."""
    data = {}
    for field in SCALED_FIELDS:
        value = getattr(nutrition, field)
        data[field] = round(value * servings, 1) if value is not None else None
    return NutritionInfo(**data)


def entry_name(entry: models.FoodEntry) -> str:
    source = entry_source(entry)
    if isinstance(source, MealRef):
        return entry.meal.name if entry.meal is not None else f"meal #{entry.meal_id}"
    return source.name


def entry_from_request(payload: FoodEntryCreateRequest, now: datetime) -> models.FoodEntry:
    source = payload.source
    return models.FoodEntry(
        user_id=payload.user_id,
        meal_id=source.meal_id if isinstance(source, MealRef) else None,
        custom_food=source.model_dump_json() if isinstance(source, CustomFood) else None,
        meal_type=payload.meal_type.value,
        servings=payload.servings,
        consumed_at=payload.consumed_at or now,
        notes=payload.notes,
    )


def entry_to_response(entry: models.FoodEntry) -> FoodEntryResponse:
    return FoodEntryResponse(
        id=entry.id,
        user_id=entry.user_id,
        source=entry_source(entry),
        meal_name=entry_name(entry),
        meal_type=entry.meal_type,
        servings=entry.servings,
        consumed_at=entry.consumed_at,
        notes=entry.notes,
        nutrition=scaled_nutrition(base_nutrition(entry), entry.servings),
    )


def group_by_day(entries: Iterable[models.FoodEntry]) -> Dict[date, List[ResolvedFoodEntry]]:
    """Resolved entries keyed by the calendar day they were consumed."""
    grouped = defaultdict(list)
    for entry in entries:
        grouped[entry.consumed_at.date()].append(resolve_entry(entry))
    return dict(grouped)


def tracking_stats(entries: List[models.FoodEntry], today: date) -> TrackingStatsResponse:
    """Lifetime tracking summary for one user's entries."""
    if not entries:
        return TrackingStatsResponse()

    by_day = group_by_day(entries)
    averages = nutrition_aggregator.running_averages(by_day)
    meal_types = Counter(e.meal_type for e in entries)
    names = Counter(entry_name(e) for e in entries)

    stats = TrackingStatsResponse(
        total_entries=len(entries),
        total_days_tracked=averages.days_tracked,
        average_daily_calories=averages.average_daily_calories,
        average_daily_protein=averages.average_daily_protein,
        average_daily_carbs=averages.average_daily_carbs,
        average_daily_fat=averages.average_daily_fat,
        current_streak=current_streak_from_days(by_day.keys(), today),
        longest_streak=longest_streak(by_day.keys()),
        favorite_meal_type=MealCategory(meal_types.most_common(1)[0][0]),
        most_tracked_meal=names.most_common(1)[0][0],
    )
    logger.debug("Tracking stats: %s", stats.model_dump())
    return stats
