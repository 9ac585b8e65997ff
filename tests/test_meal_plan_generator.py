"""Tests for the weekly meal plan generator using an in-memory meal lookup."""
import random

import pytest

from schemas.diet_plan_schema import GenerationPreferences
from schemas.enums import DietType, Difficulty, MealCategory
from schemas.meal_schema import MealSummary
from schemas.nutrition_schema import NutritionalTargets
from services.meal_plan_generator import MealPlanGenerator


def _targets(calories):
    return NutritionalTargets(
        daily_calories=calories,
        daily_protein=100,
        daily_carbs=250,
        daily_fat=67,
        daily_fiber=28,
        protein_percentage=20,
        carbs_percentage=50,
        fat_percentage=30,
    )


class StubMealLookup:
    """Serves meals per category and records every query it receives."""

    def __init__(self, meals_by_category, empty_queries=()):
        self.meals_by_category = meals_by_category
        self.empty_queries = set(empty_queries)
        self.calls = []

    def find_candidates(self, category, calorie_range, is_public=True, diet_tag=None,
                        max_prep_time=None, max_cook_time=None, difficulty=None, limit=10):
        self.calls.append(dict(
            category=category, calorie_range=calorie_range, is_public=is_public, diet_tag=diet_tag,
            max_prep_time=max_prep_time, max_cook_time=max_cook_time, difficulty=difficulty, limit=limit,
        ))
        if len(self.calls) - 1 in self.empty_queries:
            return []
        low, high = calorie_range
        meals = [m for m in self.meals_by_category.get(category, []) if low <= m.calories_per_base_serving <= high]
        return meals[:limit]


def _meal(id, calories, tags=()):
    return MealSummary(id=id, name=f"meal {id}", calories_per_base_serving=calories, tags=list(tags))


def test_single_breakfast_slot_fills_every_day_with_one_serving():
    lookup = StubMealLookup({MealCategory.BREAKFAST: [_meal(1, 2000)]})
    prefs = GenerationPreferences(include_breakfast=True)
    slots = MealPlanGenerator(rng=random.Random(7)).generate(_targets(2000), prefs, lookup)

    assert len(slots) == 7
    assert [s.day_of_week for s in slots] == list(range(7))
    assert all(s.meal_id == 1 and s.servings == 1.0 for s in slots)
    assert all(s.meal_type == MealCategory.BREAKFAST and not s.is_completed for s in slots)


def test_empty_candidate_pool_skips_only_that_slot():
    meals = {
        MealCategory.BREAKFAST: [_meal(1, 600)],
        MealCategory.LUNCH: [_meal(2, 600)],
        MealCategory.DINNER: [_meal(3, 600)],
    }
    # queries are day-major: Tuesday (day 2) lunch is the 8th query
    lookup = StubMealLookup(meals, empty_queries=[7])
    slots = MealPlanGenerator(rng=random.Random(1)).generate(_targets(1800), None, lookup)

    assert len(slots) == 20
    keys = [(s.day_of_week, s.meal_type) for s in slots]
    assert (2, MealCategory.LUNCH) not in keys
    assert (2, MealCategory.BREAKFAST) in keys and (2, MealCategory.DINNER) in keys
    order = [MealCategory.BREAKFAST, MealCategory.LUNCH, MealCategory.DINNER]
    assert keys == sorted(keys, key=lambda k: (k[0], order.index(k[1])))


def test_defaults_to_breakfast_lunch_dinner_when_nothing_selected():
    generator = MealPlanGenerator()
    expected = [MealCategory.BREAKFAST, MealCategory.LUNCH, MealCategory.DINNER]
    assert generator.slot_types(None) == expected
    assert generator.slot_types(GenerationPreferences()) == expected
    with_snacks = GenerationPreferences(include_lunch=True, include_snacks=True)
    assert generator.slot_types(with_snacks) == [MealCategory.LUNCH, MealCategory.SNACK]


def test_calorie_window_is_thirty_percent_around_slot_share():
    lookup = StubMealLookup({})
    MealPlanGenerator().generate(_targets(2100), None, lookup)
    assert len(lookup.calls) == 21
    low, high = lookup.calls[0]["calorie_range"]
    assert low == pytest.approx(490)
    assert high == pytest.approx(910)


def test_no_candidates_anywhere_gives_empty_plan():
    assert MealPlanGenerator().generate(_targets(2000), None, StubMealLookup({})) == []


def test_preferences_are_forwarded_and_regular_diet_sends_no_tag():
    lookup = StubMealLookup({})
    prefs = GenerationPreferences(include_dinner=True, max_prep_time=20, max_cook_time=30, difficulty=Difficulty.EASY)
    MealPlanGenerator(candidate_limit=5).generate(_targets(2000), prefs, lookup)
    call = lookup.calls[0]
    assert call["diet_tag"] is None
    assert call["is_public"] is True
    assert (call["max_prep_time"], call["max_cook_time"], call["difficulty"]) == (20, 30, Difficulty.EASY)
    assert call["limit"] == 5


def test_diet_type_becomes_tag_filter():
    lookup = StubMealLookup({})
    prefs = GenerationPreferences(diet_type=DietType.VEGAN)
    MealPlanGenerator().generate(_targets(2000), prefs, lookup)
    assert {c["diet_tag"] for c in lookup.calls} == {"vegan"}


@pytest.mark.parametrize("target, meal, expected", [
    (700, 700, 1.0),
    (700, 350, 2.0),
    (700, 100, 3.0),
    (700, 5000, 0.25),
    (500, 400, 1.3),
    (700, 0, 3.0),
])
def test_portion_rounds_and_clamps(target, meal, expected):
    assert MealPlanGenerator().portion(target, meal) == expected


def test_slot_count_bounded_and_servings_within_clamp():
    meals = {
        c: [_meal(i * 10 + j, 400 + 60 * j) for j in range(6)]
        for i, c in enumerate([MealCategory.BREAKFAST, MealCategory.LUNCH, MealCategory.DINNER, MealCategory.SNACK])
    }
    prefs = GenerationPreferences(include_breakfast=True, include_lunch=True, include_dinner=True, include_snacks=True)
    slots = MealPlanGenerator(rng=random.Random(3)).generate(_targets(2000), prefs, StubMealLookup(meals))
    assert len(slots) <= 28
    assert all(0.25 <= s.servings <= 3.0 for s in slots)
    assert all(0 <= s.day_of_week <= 6 for s in slots)


def test_same_seed_gives_same_plan():
    meals = {c: [_meal(i * 10 + j, 650) for j in range(5)]
             for i, c in enumerate([MealCategory.BREAKFAST, MealCategory.LUNCH, MealCategory.DINNER])}
    first = MealPlanGenerator(rng=random.Random(42)).generate(_targets(2000), None, StubMealLookup(meals))
    second = MealPlanGenerator(rng=random.Random(42)).generate(_targets(2000), None, StubMealLookup(meals))
    assert [s.meal_id for s in first] == [s.meal_id for s in second]
