"""Tests for diet plan creation, the single-active-plan rule and slot completion."""
import random
from datetime import date

import pytest

from api.diet_plans import (
    create_diet_plan,
    delete_diet_plan,
    get_active_diet_plan,
    get_diet_plan,
    get_planned_day_nutrition,
    list_diet_plans,
    mark_meal_completed,
)
from core.exceptions import ForbiddenError, InsufficientDataError, NotFoundError
from database import models
from schemas.diet_plan_schema import DietPlanCreateRequest, GenerationPreferences, MealCompletionRequest
from schemas.enums import GeneratedBy, MealCategory
from services.diet_plan_service import create_plan

from factories import make_meal, make_user

START = date(2024, 6, 2)
END = date(2024, 6, 9)


def _manual(user_id, meals, name="My week", **extra):
    return DietPlanCreateRequest(
        user_id=user_id, name=name, start_date=START, end_date=END, meals=meals, **extra
    )


def test_manual_plan_stores_slots_and_computed_targets(bare_db):
    user = make_user(bare_db)
    oats = make_meal(bare_db, "Oats", "breakfast", 400)
    plan = create_diet_plan(_manual(user.id, [
        {"meal_id": oats.id, "day_of_week": 0, "meal_type": "breakfast", "servings": 1.5},
        {"meal_id": oats.id, "day_of_week": 1, "meal_type": "breakfast"},
    ]), db=bare_db)

    assert plan.is_active
    assert plan.generated_by == GeneratedBy.USER
    assert plan.nutritional_targets.daily_calories == 2628
    assert [(m.day_of_week, m.servings, m.meal_name) for m in plan.meals] == [(0, 1.5, "Oats"), (1, 1.0, "Oats")]


def test_partial_target_override_is_merged(bare_db):
    user = make_user(bare_db)
    plan = create_diet_plan(_manual(user.id, [], nutritional_targets={"daily_calories": 1800}), db=bare_db)
    assert plan.nutritional_targets.daily_calories == 1800
    assert plan.nutritional_targets.daily_protein == 131


def test_incomplete_profile_needs_full_targets(bare_db):
    user = make_user(bare_db, weight=None)
    with pytest.raises(InsufficientDataError):
        create_diet_plan(_manual(user.id, []), db=bare_db)

    full = {
        "daily_calories": 2000, "daily_protein": 100, "daily_carbs": 250, "daily_fat": 67,
        "daily_fiber": 28, "protein_percentage": 20, "carbs_percentage": 50, "fat_percentage": 30,
    }
    plan = create_diet_plan(_manual(user.id, [], nutritional_targets=full), db=bare_db)
    assert plan.nutritional_targets.daily_calories == 2000


def test_unknown_meal_in_manual_plan(bare_db):
    user = make_user(bare_db)
    with pytest.raises(NotFoundError):
        create_diet_plan(_manual(user.id, [{"meal_id": 999, "day_of_week": 0, "meal_type": "lunch"}]), db=bare_db)


def test_new_plan_deactivates_previous_one(bare_db):
    user = make_user(bare_db)
    first = create_diet_plan(_manual(user.id, []), db=bare_db)
    second = create_diet_plan(_manual(user.id, [], name="Second"), db=bare_db)

    active = bare_db.query(models.DietPlan).filter_by(user_id=user.id, is_active=True).all()
    assert [p.id for p in active] == [second.id]
    assert get_active_diet_plan(user_id=user.id, db=bare_db).id == second.id
    assert get_diet_plan(plan_id=first.id, user_id=user.id, db=bare_db).is_active is False

    listing = list_diet_plans(user_id=user.id, page=1, limit=10, is_active=None, db=bare_db)
    assert listing.total == 2


def test_plans_of_other_users_stay_active(bare_db):
    alice = make_user(bare_db, name="Alice")
    bob = make_user(bare_db, name="Bob")
    create_diet_plan(_manual(alice.id, []), db=bare_db)
    create_diet_plan(_manual(bob.id, []), db=bare_db)
    assert get_active_diet_plan(user_id=alice.id, db=bare_db).user_id == alice.id


def test_ai_plan_uses_catalog_and_diet_type(bare_db):
    user = make_user(bare_db, diet_type="vegan")
    vegan = make_meal(bare_db, "Tofu scramble", "breakfast", 2628, tags=["vegan"])
    make_meal(bare_db, "Bacon and eggs", "breakfast", 2628, tags=["paleo"])
    payload = _manual(user.id, [], generation_type="ai", preferences=GenerationPreferences(include_breakfast=True))

    plan = create_plan(bare_db, user, payload, date.today(), rng=random.Random(0))

    assert plan.generated_by == GeneratedBy.AI.value
    assert len(plan.meals) == 7
    assert {m.meal_id for m in plan.meals} == {vegan.id}
    assert all(m.servings == 1.0 for m in plan.meals)


def test_ai_plan_on_seeded_catalog(db, user):
    payload = _manual(user.id, [], generation_type="ai")
    plan = create_diet_plan(payload, db=db)
    assert 0 < len(plan.meals) <= 21
    assert all(0.25 <= m.servings <= 3.0 for m in plan.meals)
    assert {m.meal_type for m in plan.meals} <= {MealCategory.BREAKFAST, MealCategory.LUNCH, MealCategory.DINNER}


def test_ai_plan_with_empty_catalog_is_stored_without_slots(bare_db):
    user = make_user(bare_db)
    plan = create_diet_plan(_manual(user.id, [], generation_type="ai"), db=bare_db)
    assert plan.is_active
    assert plan.generated_by == GeneratedBy.AI
    assert plan.meals == []
    assert plan.nutritional_targets.daily_calories == 2628


def test_complete_slot_and_undo(bare_db):
    user = make_user(bare_db)
    meal = make_meal(bare_db, "Soup", "lunch", 500)
    plan = create_diet_plan(_manual(user.id, [{"meal_id": meal.id, "day_of_week": 3, "meal_type": "lunch"}]), db=bare_db)
    slot_id = plan.meals[0].id

    done = mark_meal_completed(plan.id, slot_id, MealCompletionRequest(user_id=user.id), db=bare_db)
    assert done.meals[0].is_completed and done.meals[0].completed_at is not None

    undone = mark_meal_completed(plan.id, slot_id, MealCompletionRequest(user_id=user.id, completed=False), db=bare_db)
    assert not undone.meals[0].is_completed and undone.meals[0].completed_at is None

    with pytest.raises(NotFoundError):
        mark_meal_completed(plan.id, 9999, MealCompletionRequest(user_id=user.id), db=bare_db)


def test_other_users_cannot_touch_a_plan(bare_db):
    owner = make_user(bare_db, name="Owner")
    intruder = make_user(bare_db, name="Intruder")
    plan = create_diet_plan(_manual(owner.id, []), db=bare_db)

    with pytest.raises(ForbiddenError) as exc_info:
        get_diet_plan(plan_id=plan.id, user_id=intruder.id, db=bare_db)
    assert exc_info.value.status_code == 403
    with pytest.raises(ForbiddenError):
        delete_diet_plan(plan_id=plan.id, user_id=intruder.id, db=bare_db)

    assert delete_diet_plan(plan_id=plan.id, user_id=owner.id, db=bare_db)["deleted"] is True
    assert bare_db.query(models.DietPlanMeal).count() == 0


def test_planned_day_nutrition(bare_db):
    user = make_user(bare_db)
    soup = make_meal(bare_db, "Soup", "lunch", 500)
    stew = make_meal(bare_db, "Stew", "dinner", 700)
    plan = create_diet_plan(_manual(user.id, [
        {"meal_id": soup.id, "day_of_week": 2, "meal_type": "lunch", "servings": 2},
        {"meal_id": stew.id, "day_of_week": 2, "meal_type": "dinner"},
        {"meal_id": stew.id, "day_of_week": 4, "meal_type": "dinner"},
    ]), db=bare_db)

    summary = get_planned_day_nutrition(plan_id=plan.id, user_id=user.id, day_of_week=2, db=bare_db)
    assert summary.total_calories == 1700
    assert len(summary.meal_breakdown) == 2
