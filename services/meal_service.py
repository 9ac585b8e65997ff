"""Conversions between `Meal` rows and meal schemas."""

import json
from typing import Optional

from database import models
from schemas.meal_schema import Ingredient, MealCreateRequest, MealDetail, MealUpdateRequest
from schemas.nutrition_schema import NutritionInfo
from services.meal_lookup import parse_tags
from services.meal_nutrition import sum_ingredient_nutrition

NUTRITION_COLUMNS = ("calories", "protein", "carbs", "fat", "fiber", "sugar", "sodium", "cholesterol")
NULLABLE_FIELDS = ("description", "cuisine")


def meal_nutrition(meal: models.Meal) -> NutritionInfo:
    """Stored nutrition of the whole recipe, as summed from its ingredients."""
    return NutritionInfo(**{c: getattr(meal, c) for c in NUTRITION_COLUMNS})


def meal_ingredients(meal: models.Meal):
    if not meal.ingredients:
        return []
    return [Ingredient(**i) for i in json.loads(meal.ingredients)]


def meal_to_detail(meal: models.Meal) -> MealDetail:
    return MealDetail(
        id=meal.id,
        name=meal.name,
        description=meal.description,
        category=meal.category,
        cuisine=meal.cuisine,
        prep_time=meal.prep_time,
        cook_time=meal.cook_time,
        total_time=meal.prep_time + meal.cook_time,
        servings=meal.servings,
        difficulty=meal.difficulty,
        ingredients=meal_ingredients(meal),
        nutrition=meal_nutrition(meal),
        tags=parse_tags(meal.tags),
        is_public=meal.is_public,
        created_by=meal.created_by,
        created_at=meal.created_at,
    )


def _apply_nutrition(meal: models.Meal, nutrition: NutritionInfo) -> None:
    for c in NUTRITION_COLUMNS:
        setattr(meal, c, getattr(nutrition, c))


def meal_from_request(payload: MealCreateRequest) -> models.Meal:
    """Build a new row; nutrition defaults to the ingredient sum."""
    meal = models.Meal(
        name=payload.name,
        description=payload.description,
        category=payload.category.value,
        cuisine=payload.cuisine,
        prep_time=payload.prep_time,
        cook_time=payload.cook_time,
        servings=payload.servings,
        difficulty=payload.difficulty.value,
        ingredients=json.dumps([i.model_dump() for i in payload.ingredients]),
        tags=json.dumps([t.strip().lower() for t in payload.tags]),
        is_public=payload.is_public,
        created_by=payload.created_by,
    )
    _apply_nutrition(meal, payload.nutrition or sum_ingredient_nutrition(payload.ingredients))
    return meal


def apply_meal_update(meal: models.Meal, payload: MealUpdateRequest) -> models.Meal:
    """Apply the fields present in `payload`.

    New ingredients recompute nutrition unless nutrition is sent too.
    """
    changes = payload.model_dump(exclude_unset=True, exclude={"ingredients", "nutrition", "tags"})
    for key, value in changes.items():
        if value is None and key not in NULLABLE_FIELDS:
            continue
        setattr(meal, key, value.value if hasattr(value, "value") else value)
    if payload.tags is not None:
        meal.tags = json.dumps([t.strip().lower() for t in payload.tags])
    nutrition: Optional[NutritionInfo] = payload.nutrition
    if payload.ingredients is not None:
        meal.ingredients = json.dumps([i.model_dump() for i in payload.ingredients])
        if nutrition is None:
            nutrition = sum_ingredient_nutrition(payload.ingredients)
    if nutrition is not None:
        _apply_nutrition(meal, nutrition)
    return meal
