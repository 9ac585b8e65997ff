"""Tracking API router: the food log, nutrition summaries and water intake."""

import json
from datetime import date, datetime, timedelta
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from core.config import settings
from core.exceptions import ForbiddenError
from core.logger import get_logger
from core.repository import (
    BaseRepository,
    DietPlanRepository,
    FoodEntryRepository,
    WaterIntakeRepository,
    day_bounds,
    save,
)
from database import models
from database.deps import get_db_read, get_db_write
from schemas.enums import MealCategory
from schemas.nutrition_schema import NutritionalTargets, NutritionWindowSummary
from schemas.tracking_schema import (
    DailyNutritionResponse,
    DailyWaterResponse,
    FoodEntryCreateRequest,
    FoodEntryListResponse,
    FoodEntryResponse,
    MealRef,
    TrackingStatsResponse,
    WaterIntakeCreateRequest,
    WaterIntakeResponse,
)
from services.nutrition_aggregator import nutrition_aggregator
from services.nutrition_calculator import nutrition_calculator, round_half_up
from services.tracking_service import (
    entry_from_request,
    entry_to_response,
    group_by_day,
    resolve_entry,
    tracking_stats,
)

logger = get_logger("api.tracking")
router = APIRouter(prefix="/api/tracking", tags=["tracking"])


def daily_targets(db: Session, user: models.User) -> Optional[NutritionalTargets]:
    """Targets of the active plan, else computed from today's profile, else None."""
    plan = DietPlanRepository(db).find_active(user.id)
    if plan is not None:
        return NutritionalTargets(**json.loads(plan.nutritional_targets))
    return nutrition_calculator.targets_for_user(user, date.today())


@router.post("/food", response_model=FoodEntryResponse, status_code=201)
def create_food_entry(payload: FoodEntryCreateRequest, db: Session = Depends(get_db_write)):
    """Log a catalog meal or a custom food.

    Raises:
        NotFoundError: If the user or the referenced meal does not exist.
        ForbiddenError: If the meal is another user's private meal.
    """
    BaseRepository(models.User, db).get_or_404(payload.user_id)
    if isinstance(payload.source, MealRef):
        meal = BaseRepository(models.Meal, db).get_or_404(payload.source.meal_id)
        if not meal.is_public and meal.created_by != payload.user_id:
            raise ForbiddenError("Meal", meal.id)
    entry = save(db, entry_from_request(payload, datetime.utcnow()))
    logger.info("Food entry %s (%s) logged for user %s", entry.id, payload.source.kind, payload.user_id)
    return entry_to_response(entry)


@router.get("/food", response_model=FoodEntryListResponse)
def list_food_entries(
    user_id: int,
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    start_date: Optional[date] = None,
    end_date: Optional[date] = Query(None, description="Inclusive"),
    meal_type: Optional[MealCategory] = None,
    db: Session = Depends(get_db_read),
):
    """Paginated food log, newest first."""
    start = day_bounds(start_date)[0] if start_date else None
    end = day_bounds(end_date)[1] if end_date else None
    entries, total = FoodEntryRepository(db).search(
        user_id, page, limit, start, end, meal_type.value if meal_type else None
    )
    return FoodEntryListResponse(
        total=total, page=page, limit=limit,
        entries=[entry_to_response(e) for e in entries],
    )


@router.delete("/food/{entry_id}")
def delete_food_entry(entry_id: int, user_id: int, db: Session = Depends(get_db_write)):
    repo = FoodEntryRepository(db)
    entry = repo.get_owned(entry_id, user_id)
    repo.delete(entry)
    logger.info("Food entry %s deleted by user %s", entry_id, user_id)
    return {"deleted": True, "id": entry_id}


@router.get("/nutrition/daily/{day}", response_model=DailyNutritionResponse)
def get_daily_nutrition(day: date, user_id: int, db: Session = Depends(get_db_read)):
    """Totals and per-meal-type breakdown for one day, with target progress.

    Targets come from the active diet plan, falling back to the profile. When
    neither is available the progress figures are all zero.
    """
    user = BaseRepository(models.User, db).get_or_404(user_id)
    entries = FoodEntryRepository(db).on_day(user_id, day)
    summary = nutrition_aggregator.aggregate([resolve_entry(e) for e in entries], day=day)
    targets = daily_targets(db, user)
    response = DailyNutritionResponse(**summary.model_dump(), targets=targets)
    if targets is not None:
        response.target_progress = nutrition_aggregator.target_progress(summary, targets)
    return response


@router.get("/nutrition/weekly/{start}", response_model=NutritionWindowSummary)
def get_weekly_nutrition(start: date, user_id: int, db: Session = Depends(get_db_read)):
    """Seven daily summaries starting at `start`, with window totals and averages."""
    end = start + timedelta(days=6)
    entries = FoodEntryRepository(db).between(user_id, day_bounds(start)[0], day_bounds(end)[1])
    return nutrition_aggregator.aggregate_range(group_by_day(entries), start, end)


@router.get("/stats", response_model=TrackingStatsResponse)
def get_tracking_stats(
    user_id: int,
    as_of: Optional[date] = Query(None, description="Day the current streak ends on, defaults to today"),
    db: Session = Depends(get_db_read),
):
    """Lifetime averages, streaks and favourites for the user's food log."""
    entries = FoodEntryRepository(db).all_for_user(user_id)
    return tracking_stats(entries, as_of or date.today())


@router.post("/water", response_model=WaterIntakeResponse, status_code=201)
def create_water_intake(payload: WaterIntakeCreateRequest, db: Session = Depends(get_db_write)):
    BaseRepository(models.User, db).get_or_404(payload.user_id)
    intake = save(db, models.WaterIntake(
        user_id=payload.user_id,
        amount=payload.amount,
        recorded_at=payload.recorded_at or datetime.utcnow(),
        notes=payload.notes,
    ))
    logger.info("Water intake %sml logged for user %s", payload.amount, payload.user_id)
    return WaterIntakeResponse(
        id=intake.id,
        user_id=intake.user_id,
        amount=intake.amount,
        recorded_at=intake.recorded_at,
        notes=intake.notes,
    )


@router.get("/water/daily/{day}", response_model=DailyWaterResponse)
def get_daily_water(day: date, user_id: int, db: Session = Depends(get_db_read)):
    """Water logged on `day` against the daily target; progress caps at 100."""
    intakes = WaterIntakeRepository(db).on_day(user_id, day)
    total = sum(i.amount for i in intakes)
    target = settings.DAILY_WATER_TARGET_ML
    progress = min(round_half_up(total / target * 100), 100) if target else 0
    return DailyWaterResponse(
        date=day,
        total_amount=total,
        target_amount=target,
        progress=progress,
        entries=[
            WaterIntakeResponse(
                id=i.id, user_id=i.user_id, amount=i.amount, recorded_at=i.recorded_at, notes=i.notes
            )
            for i in intakes
        ],
    )
