"""Row builders shared by the API and lookup tests."""
import json
from datetime import date

from database import models


def make_user(session, **overrides):
    """Insert a 30-year-old, 70 kg, 175 cm, moderately active man."""
    today = date.today()
    fields = dict(
        name="Test User",
        email=None,
        date_of_birth=date(today.year - 30, 1, 1),
        gender="male",
        height=175.0,
        weight=70.0,
        activity_level="moderately_active",
        goal_type="maintenance",
        weekly_weight_change_goal=0.5,
        diet_type="regular",
        allergies=json.dumps([]),
    )
    fields.update(overrides)
    user = models.User(**fields)
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


def make_meal(session, name, category, calories, tags=(), is_public=True, created_by=None, **extra):
    """Insert a catalog meal with simple macro figures derived from calories."""
    meal = models.Meal(
        name=name,
        category=category,
        prep_time=extra.pop("prep_time", 10),
        cook_time=extra.pop("cook_time", 10),
        servings=extra.pop("servings", 1),
        difficulty=extra.pop("difficulty", "easy"),
        ingredients=json.dumps([]),
        calories=calories,
        protein=extra.pop("protein", round(calories * 0.2 / 4, 1)),
        carbs=extra.pop("carbs", round(calories * 0.5 / 4, 1)),
        fat=extra.pop("fat", round(calories * 0.3 / 9, 1)),
        fiber=extra.pop("fiber", None),
        sodium=extra.pop("sodium", None),
        tags=json.dumps(list(tags)),
        is_public=is_public,
        created_by=created_by,
        **extra,
    )
    session.add(meal)
    session.commit()
    session.refresh(meal)
    return meal
