"""Diet plan API router.

A user has at most one active plan; creating a plan deactivates the previous
one in the same commit. `generation_type="ai"` fills the week from the meal
catalog, otherwise the submitted slots are stored as-is.
"""

from datetime import date, datetime
from typing import Optional

from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.orm import Session

from core.exceptions import NotFoundError
from core.logger import get_logger
from core.repository import BaseRepository, DietPlanRepository
from database import models
from database.deps import get_db_read, get_db_write
from schemas.diet_plan_schema import (
    DietPlanCreateRequest,
    DietPlanListResponse,
    DietPlanResponse,
    MealCompletionRequest,
)
from schemas.nutrition_schema import DailyNutritionSummary, ResolvedFoodEntry
from services.diet_plan_service import create_plan, plan_to_response
from services.meal_service import meal_nutrition
from services.nutrition_aggregator import nutrition_aggregator

logger = get_logger("api.diet_plans")
router = APIRouter(prefix="/api/diet-plans", tags=["diet-plans"])


@router.post("", response_model=DietPlanResponse, status_code=201)
def create_diet_plan(payload: DietPlanCreateRequest, db: Session = Depends(get_db_write)):
    """Create a plan and make it the user's active one.

    Raises:
        NotFoundError: If the user or a referenced meal does not exist.
        InsufficientDataError: If targets cannot be resolved.
    """
    user = BaseRepository(models.User, db).get_or_404(payload.user_id)
    plan = create_plan(db, user, payload, date.today())
    return plan_to_response(plan)


@router.get("", response_model=DietPlanListResponse)
def list_diet_plans(
    user_id: int,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    is_active: Optional[bool] = None,
    db: Session = Depends(get_db_read),
):
    plans, total = DietPlanRepository(db).list_for_user(user_id, page, limit, is_active)
    return DietPlanListResponse(
        total=total, page=page, limit=limit,
        plans=[plan_to_response(p) for p in plans],
    )


@router.get("/active", response_model=DietPlanResponse)
def get_active_diet_plan(user_id: int, db: Session = Depends(get_db_read)):
    """Return the user's active plan.

    Raises:
        NotFoundError: If the user has no active plan.
    """
    plan = DietPlanRepository(db).find_active(user_id)
    if plan is None:
        raise NotFoundError("DietPlan", f"active for user {user_id}")
    return plan_to_response(plan)


@router.get("/{plan_id}", response_model=DietPlanResponse)
def get_diet_plan(plan_id: int, user_id: int, db: Session = Depends(get_db_read)):
    return plan_to_response(DietPlanRepository(db).get_owned(plan_id, user_id))


@router.get("/{plan_id}/nutrition/{day_of_week}", response_model=DailyNutritionSummary)
def get_planned_day_nutrition(
    plan_id: int,
    user_id: int,
    day_of_week: int = Path(..., ge=0, le=6, description="0 = Sunday"),
    db: Session = Depends(get_db_read),
):
    """Nutrition the plan schedules for one weekday, summed across its slots."""
    plan = DietPlanRepository(db).get_owned(plan_id, user_id)
    entries = [
        ResolvedFoodEntry(nutrition=meal_nutrition(slot.meal), servings=slot.servings, meal_type=slot.meal_type)
        for slot in plan.meals
        if slot.day_of_week == day_of_week and slot.meal is not None
    ]
    return nutrition_aggregator.aggregate(entries)


@router.patch("/{plan_id}/meals/{slot_id}/complete", response_model=DietPlanResponse)
def mark_meal_completed(
    plan_id: int,
    slot_id: int,
    payload: MealCompletionRequest,
    db: Session = Depends(get_db_write),
):
    """Mark one planned meal as eaten (or undo it with `completed=false`).

    Raises:
        NotFoundError: If the plan or the slot does not exist.
        ForbiddenError: If the plan belongs to another user.
    """
    repo = DietPlanRepository(db)
    plan = repo.get_owned(plan_id, payload.user_id)
    slot = next((m for m in plan.meals if m.id == slot_id), None)
    if slot is None:
        raise NotFoundError("DietPlanMeal", slot_id)
    slot.is_completed = payload.completed
    slot.completed_at = datetime.utcnow() if payload.completed else None
    plan = repo.update(plan)
    logger.info("Plan %s slot %s completed=%s", plan_id, slot_id, payload.completed)
    return plan_to_response(plan)


@router.delete("/{plan_id}")
def delete_diet_plan(plan_id: int, user_id: int, db: Session = Depends(get_db_write)):
    repo = DietPlanRepository(db)
    plan = repo.get_owned(plan_id, user_id)
    repo.delete(plan)
    logger.info("Plan %s deleted by user %s", plan_id, user_id)
    return {"deleted": True, "id": plan_id}
