"""Diet plan assembly: targets, slot generation and the stored plan.

Creating a plan resolves the owner's targets (computed from biometrics,
overlaid with any user-supplied values), runs the generator for `ai` plans
or takes the submitted slots for manual ones, and persists the result as the
owner's only active plan.
"""

import json
import random
from datetime import date
from typing import List, Optional

from sqlalchemy.orm import Session

from core.exceptions import InsufficientDataError, NotFoundError
from core.logger import get_logger
from core.repository import DietPlanRepository
from database import models
from schemas.diet_plan_schema import (
    DietPlanCreateRequest,
    DietPlanMealResponse,
    DietPlanMealSlot,
    DietPlanResponse,
    GenerationPreferences,
)
from schemas.enums import DietType, GeneratedBy
from schemas.nutrition_schema import NutritionalTargets
from services.meal_lookup import SqlMealLookup
from services.meal_plan_generator import MealPlanGenerator
from services.nutrition_calculator import nutrition_calculator

logger = get_logger("services.diet_plan_service")


def resolve_targets(user: models.User, payload: DietPlanCreateRequest, today: date) -> NutritionalTargets:
    """Computed targets with the request's explicit values merged on top.

    Raises:
        InsufficientDataError: the user lacks biometrics and the request does
            not carry a complete set of targets either.
    """
    computed = nutrition_calculator.targets_for_user(user, today)
    overrides = payload.nutritional_targets
    if computed is not None:
        return computed.merged_with(overrides)
    if overrides is not None:
        data = overrides.model_dump(exclude_none=True)
        if set(NutritionalTargets.model_fields) - {"daily_sodium"} <= set(data):
            return NutritionalTargets(**data)
    raise InsufficientDataError(
        "Cannot compute nutritional targets: profile is incomplete",
        missing=nutrition_calculator.missing_biometrics(user),
    )


def slots_to_rows(slots: List[DietPlanMealSlot]) -> List[models.DietPlanMeal]:
    return [
        models.DietPlanMeal(
            position=i,
            meal_id=s.meal_id,
            day_of_week=s.day_of_week,
            meal_type=s.meal_type.value,
            servings=s.servings,
            is_completed=s.is_completed,
            completed_at=s.completed_at,
            notes=s.notes,
        )
        for i, s in enumerate(slots)
    ]


def create_plan(
    db: Session,
    user: models.User,
    payload: DietPlanCreateRequest,
    today: date,
    rng: Optional[random.Random] = None,
) -> models.DietPlan:
    """Build and store a new active plan for `user`."""
    targets = resolve_targets(user, payload, today)

    if payload.generation_type == "ai":
        preferences = (payload.preferences or GenerationPreferences()).model_copy(
            update={"diet_type": DietType(user.diet_type)}
        )
        generator = MealPlanGenerator(rng=rng)
        slots = generator.generate(targets, preferences, SqlMealLookup(db))
        generated_by = GeneratedBy.AI
    else:
        slots = list(payload.meals)
        for slot in slots:
            if db.get(models.Meal, slot.meal_id) is None:
                raise NotFoundError("Meal", slot.meal_id)
        generated_by = GeneratedBy.USER

    plan = models.DietPlan(
        user_id=user.id,
        name=payload.name,
        description=payload.description,
        start_date=payload.start_date,
        end_date=payload.end_date,
        generated_by=generated_by.value,
        nutritional_targets=targets.model_dump_json(),
        meals=slots_to_rows(slots),
    )
    plan = DietPlanRepository(db).create_active(plan)
    logger.info("Created %s plan %s for user %s with %s slots", generated_by.value, plan.id, user.id, len(slots))
    return plan


def plan_to_response(plan: models.DietPlan) -> DietPlanResponse:
    return DietPlanResponse(
        id=plan.id,
        user_id=plan.user_id,
        name=plan.name,
        description=plan.description,
        start_date=plan.start_date,
        end_date=plan.end_date,
        is_active=plan.is_active,
        generated_by=plan.generated_by,
        nutritional_targets=NutritionalTargets(**json.loads(plan.nutritional_targets)),
        meals=[
            DietPlanMealResponse(
                id=m.id,
                meal_id=m.meal_id,
                meal_name=m.meal.name if m.meal is not None else None,
                day_of_week=m.day_of_week,
                meal_type=m.meal_type,
                servings=m.servings,
                is_completed=m.is_completed,
                completed_at=m.completed_at,
                notes=m.notes,
            )
            for m in plan.meals
        ],
        created_at=plan.created_at,
    )
