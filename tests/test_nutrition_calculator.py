"""Tests for the targets calculator and BMI helpers."""
from datetime import date

import pytest

from schemas.enums import ActivityLevel, BMICategory, DietType, Gender, GoalType
from schemas.user_schema import UserBiometrics
from services.nutrition_calculator import (
    MACRO_SPLITS,
    MIN_DAILY_CALORIES,
    nutrition_calculator,
    round_half_up,
)


def _biometrics(**overrides):
    fields = dict(
        height=175,
        weight=70,
        age=30,
        gender=Gender.MALE,
        activity_level=ActivityLevel.MODERATELY_ACTIVE,
        goal_type=GoalType.MAINTENANCE,
        diet_type=DietType.REGULAR,
    )
    fields.update(overrides)
    return UserBiometrics(**fields)


def test_maintenance_targets_for_reference_male():
    targets = nutrition_calculator.compute_targets(_biometrics())
    # BMR 1695.667 x 1.55 = 2628.28
    assert targets.daily_calories == 2628
    assert targets.daily_protein == 131
    assert targets.daily_carbs == 329
    assert targets.daily_fat == 88
    assert targets.daily_fiber == 37
    assert targets.daily_sodium == 2300
    assert (targets.protein_percentage, targets.carbs_percentage, targets.fat_percentage) == (20, 50, 30)


def test_weight_loss_subtracts_500():
    targets = nutrition_calculator.compute_targets(_biometrics(goal_type=GoalType.WEIGHT_LOSS))
    assert targets.daily_calories == 2128


@pytest.mark.parametrize("goal, delta", [
    (GoalType.WEIGHT_GAIN, 500),
    (GoalType.MUSCLE_GAIN, 300),
    (GoalType.MAINTENANCE, 0),
])
def test_goal_adjustments(goal, delta):
    base = nutrition_calculator.compute_targets(_biometrics()).daily_calories
    assert nutrition_calculator.compute_targets(_biometrics(goal_type=goal)).daily_calories == base + delta


def test_calorie_floor_applies_to_small_sedentary_dieter():
    bio = _biometrics(
        height=150, weight=40, age=80, gender=Gender.FEMALE,
        activity_level=ActivityLevel.SEDENTARY, goal_type=GoalType.WEIGHT_LOSS,
    )
    assert nutrition_calculator.compute_targets(bio).daily_calories == MIN_DAILY_CALORIES


def test_female_formula_differs_from_male():
    male = nutrition_calculator.calculate_bmr(30, 165, 60, Gender.MALE)
    female = nutrition_calculator.calculate_bmr(30, 165, 60, Gender.FEMALE)
    assert female == pytest.approx(447.593 + 9.247 * 60 + 3.098 * 165 - 4.330 * 30)
    assert male != female


@pytest.mark.parametrize("diet", list(DietType))
def test_macro_percentages_sum_to_100_and_grams_match(diet):
    targets = nutrition_calculator.compute_targets(_biometrics(diet_type=diet))
    assert targets.protein_percentage + targets.carbs_percentage + targets.fat_percentage == 100
    assert (targets.protein_percentage, targets.carbs_percentage, targets.fat_percentage) == MACRO_SPLITS[diet]
    kcal = 4 * targets.daily_protein + 4 * targets.daily_carbs + 9 * targets.daily_fat
    # each gram figure is rounded independently, so allow a few kcal of drift
    assert abs(kcal - targets.daily_calories) <= 9


def test_compute_targets_is_pure():
    bio = _biometrics(diet_type=DietType.KETO)
    assert nutrition_calculator.compute_targets(bio) == nutrition_calculator.compute_targets(bio)


def test_round_half_up_rounds_halves_away_from_even():
    assert round_half_up(328.5) == 329
    assert round_half_up(2.5) == 3
    assert round_half_up(2.4999) == 2
    assert round_half_up(22.855, 2) == 22.86


@pytest.mark.parametrize("bmi, category", [
    (18.49, BMICategory.UNDERWEIGHT),
    (18.5, BMICategory.NORMAL),
    (24.99, BMICategory.NORMAL),
    (25.0, BMICategory.OVERWEIGHT),
    (29.99, BMICategory.OVERWEIGHT),
    (30.0, BMICategory.OBESE),
])
def test_bmi_category_boundaries(bmi, category):
    assert nutrition_calculator.bmi_category(bmi) == category


def test_calculate_bmi_two_decimals_and_missing_values():
    assert nutrition_calculator.calculate_bmi(175, 70) == 22.86
    assert nutrition_calculator.calculate_bmi(None, 70) is None
    assert nutrition_calculator.bmi_category(None) is None


def test_age_from_birth_date_counts_whole_years():
    assert nutrition_calculator.age_from_birth_date(date(1990, 6, 15), date(2020, 6, 14)) == 29
    assert nutrition_calculator.age_from_birth_date(date(1990, 6, 15), date(2020, 6, 15)) == 30


class _Profile:
    height = 175.0
    weight = 70.0
    gender = "male"
    date_of_birth = date(1990, 1, 1)
    activity_level = "moderately_active"
    goal_type = "maintenance"
    weekly_weight_change_goal = 0.5
    diet_type = "regular"


def test_targets_for_user_matches_snapshot_and_reports_missing_fields():
    targets = nutrition_calculator.targets_for_user(_Profile(), date(2020, 6, 1))
    assert targets.daily_calories == 2628

    incomplete = _Profile()
    incomplete.height = None
    incomplete.date_of_birth = None
    assert nutrition_calculator.targets_for_user(incomplete, date(2020, 6, 1)) is None
    assert nutrition_calculator.missing_biometrics(incomplete) == ["height", "date_of_birth"]
