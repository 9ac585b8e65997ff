"""Meals API router.

The meal catalog: filtered listing, detail and per-serving nutrition, plus
create/update/delete for user-authored meals. Private meals are visible to
their creator only; only the creator may change or remove a meal.
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional

from core.exceptions import ForbiddenError, ValidationError
from core.logger import get_logger
from core.repository import BaseRepository, MealRepository, page_count, save
from database import models
from database.deps import get_db_read, get_db_write
from schemas import MealDetail
from schemas.enums import Difficulty, MealCategory
from schemas.meal_schema import MealCreateRequest, MealListResponse, MealUpdateRequest
from schemas.nutrition_schema import NutritionInfo
from services.meal_nutrition import nutrition_per_serving
from services.meal_service import apply_meal_update, meal_from_request, meal_nutrition, meal_to_detail

logger = get_logger("api.meals")
router = APIRouter(prefix="/api/meals", tags=["meals"])


def _visible_meal(db: Session, meal_id: int, user_id: Optional[int]) -> models.Meal:
    meal = MealRepository(db).get_or_404(meal_id)
    if not meal.is_public and (user_id is None or meal.created_by != user_id):
        raise ForbiddenError("Meal", meal_id)
    return meal


def _owned_meal(db: Session, meal_id: int, user_id: int) -> models.Meal:
    meal = MealRepository(db).get_or_404(meal_id)
    if meal.created_by != user_id:
        raise ForbiddenError("Meal", meal_id)
    return meal


@router.get("/categories", response_model=List[str])
def list_categories():
    """All meal categories a meal or food entry may use."""
    return [c.value for c in MealCategory]


@router.get("", response_model=MealListResponse)
def list_meals(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    category: Optional[MealCategory] = None,
    difficulty: Optional[Difficulty] = None,
    cuisine: Optional[str] = None,
    diet_tag: Optional[str] = Query(None, description="Tag such as vegetarian or keto"),
    max_prep_time: Optional[int] = Query(None, ge=0),
    max_cook_time: Optional[int] = Query(None, ge=0),
    min_calories: Optional[float] = Query(None, ge=0),
    max_calories: Optional[float] = Query(None, ge=0),
    min_protein: Optional[float] = Query(None, ge=0),
    search: Optional[str] = None,
    is_public: bool = True,
    created_by: Optional[int] = None,
    db: Session = Depends(get_db_read),
):
    """Return one page of meals matching the given filters.

    Args:
        page: 1-based page number.
        limit: Page size.
        search: Case-insensitive match on name, description, cuisine or tags.
        is_public: List public meals (default) or private ones; private
            listings require `created_by`.

    Returns:
        `MealListResponse` with the page and the unpaged total.
    """
    if not is_public and created_by is None:
        raise ValidationError("Private meals can only be listed for their creator", field="created_by")
    meals, total = MealRepository(db).search(
        page,
        limit,
        category=category.value if category else None,
        difficulty=difficulty.value if difficulty else None,
        cuisine=cuisine,
        diet_tag=diet_tag.strip().lower() if diet_tag else None,
        max_prep_time=max_prep_time,
        max_cook_time=max_cook_time,
        min_calories=min_calories,
        max_calories=max_calories,
        min_protein=min_protein,
        search=search,
        is_public=is_public,
        created_by=created_by,
    )
    return MealListResponse(
        total=total,
        page=page,
        limit=limit,
        pages=page_count(total, limit),
        meals=[meal_to_detail(m) for m in meals],
    )


@router.get("/{meal_id}", response_model=MealDetail)
def get_meal(meal_id: int, user_id: Optional[int] = None, db: Session = Depends(get_db_read)):
    """Return one meal.

    Raises:
        NotFoundError: If the meal does not exist.
        ForbiddenError: If the meal is private and `user_id` is not its creator.
    """
    return meal_to_detail(_visible_meal(db, meal_id, user_id))


@router.get("/{meal_id}/nutrition-per-serving", response_model=NutritionInfo)
def get_nutrition_per_serving(meal_id: int, user_id: Optional[int] = None, db: Session = Depends(get_db_read)):
    meal = _visible_meal(db, meal_id, user_id)
    return nutrition_per_serving(meal_nutrition(meal), meal.servings)


@router.post("", response_model=MealDetail, status_code=201)
def create_meal(payload: MealCreateRequest, db: Session = Depends(get_db_write)):
    """Add a meal to the catalog.

    Nutrition defaults to the sum of the ingredients when not supplied.
    """
    if payload.created_by is not None:
        BaseRepository(models.User, db).get_or_404(payload.created_by)
    meal = save(db, meal_from_request(payload))
    logger.info("Meal %s '%s' created by %s", meal.id, meal.name, meal.created_by)
    return meal_to_detail(meal)


@router.put("/{meal_id}", response_model=MealDetail)
def update_meal(meal_id: int, payload: MealUpdateRequest, user_id: int, db: Session = Depends(get_db_write)):
    """Update a meal owned by `user_id`.

    Raises:
        NotFoundError: If the meal does not exist.
        ForbiddenError: If `user_id` did not create the meal.
    """
    meal = _owned_meal(db, meal_id, user_id)
    apply_meal_update(meal, payload)
    meal = save(db, meal)
    logger.info("Meal %s updated by user %s", meal_id, user_id)
    return meal_to_detail(meal)


@router.delete("/{meal_id}")
def delete_meal(meal_id: int, user_id: int, db: Session = Depends(get_db_write)):
    """Remove a meal owned by `user_id`.

    Raises:
        ValidationError: If a diet plan or food entry still references it.
    """
    repo = MealRepository(db)
    meal = _owned_meal(db, meal_id, user_id)
    in_plans = db.query(models.DietPlanMeal).filter(models.DietPlanMeal.meal_id == meal_id).count()
    in_log = db.query(models.FoodEntry).filter(models.FoodEntry.meal_id == meal_id).count()
    if in_plans or in_log:
        raise ValidationError(
            f"Meal is referenced by {in_plans} plan slot(s) and {in_log} food entries", field="meal_id"
        )
    repo.delete(meal)
    logger.info("Meal %s deleted by user %s", meal_id, user_id)
    return {"deleted": True, "id": meal_id}
