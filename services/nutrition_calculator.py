"""Nutrition calculation helpers.

Turns a biometric snapshot into daily calorie and macro targets
(Harris-Benedict BMR, activity multiplier, fixed goal adjustment, 1200 kcal
floor, diet-type macro split) and provides the BMI helpers used by the user
and BMI endpoints.
"""

from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Optional, Union

from core.logger import get_logger
from schemas.enums import ActivityLevel, BMICategory, DietType, Gender, GoalType
from schemas.nutrition_schema import NutritionalTargets
from schemas.user_schema import UserBiometrics

logger = get_logger("services.nutrition_calculator")

ACTIVITY_MULTIPLIERS = {
    ActivityLevel.SEDENTARY: 1.2,
    ActivityLevel.LIGHTLY_ACTIVE: 1.375,
    ActivityLevel.MODERATELY_ACTIVE: 1.55,
    ActivityLevel.VERY_ACTIVE: 1.725,
    ActivityLevel.EXTREMELY_ACTIVE: 1.9,
}

GOAL_ADJUSTMENTS = {
    GoalType.WEIGHT_LOSS: -500,
    GoalType.WEIGHT_GAIN: 500,
    GoalType.MUSCLE_GAIN: 300,
    GoalType.MAINTENANCE: 0,
}

# (protein, carbs, fat) percentages; every row sums to 100
MACRO_SPLITS = {
    DietType.REGULAR: (20, 50, 30),
    DietType.KETO: (20, 10, 70),
    DietType.PALEO: (25, 35, 40),
    DietType.MEDITERRANEAN: (18, 45, 37),
    DietType.VEGAN: (15, 60, 25),
    DietType.VEGETARIAN: (15, 60, 25),
}

MIN_DAILY_CALORIES = 1200
DAILY_SODIUM_MG = 2300
FIBER_G_PER_1000_KCAL = 14
KCAL_PER_G_PROTEIN = 4
KCAL_PER_G_CARBS = 4
KCAL_PER_G_FAT = 9


def round_half_up(value: float, ndigits: int = 0) -> Union[int, float]:
    """Round with .5 going up, unlike Python's banker's `round`.

    Returns an int when `ndigits` is 0, otherwise a float.
    """
    quantum = Decimal(1).scaleb(-ndigits)
    rounded = Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP)
    return int(rounded) if ndigits == 0 else float(rounded)


class NutritionCalculator:
    """Class-based nutrition calculator used across the app."""

    def calculate_bmi(self, height_cm: Optional[float], weight_kg: Optional[float]) -> Optional[float]:
        """Body Mass Index to two decimals, or None without height/weight."""
        if not height_cm or not weight_kg or height_cm <= 0 or weight_kg <= 0:
            return None
        h_m = height_cm / 100.0
        return round_half_up(weight_kg / (h_m * h_m), 2)

    def bmi_category(self, bmi: Optional[float]) -> Optional[BMICategory]:
        if bmi is None:
            return None
        if bmi < 18.5:
            return BMICategory.UNDERWEIGHT
        if bmi < 25:
            return BMICategory.NORMAL
        if bmi < 30:
            return BMICategory.OVERWEIGHT
        return BMICategory.OBESE

    def calculate_bmr(self, age: int, height_cm: float, weight_kg: float, gender: str) -> float:
        """Basal Metabolic Rate using the revised Harris-Benedict equation."""
        if gender == Gender.MALE:
            return 88.362 + 13.397 * weight_kg + 4.799 * height_cm - 5.677 * age
        return 447.593 + 9.247 * weight_kg + 3.098 * height_cm - 4.330 * age

    def calculate_tdee(self, bmr: float, activity_level: str) -> float:
        """Total daily energy expenditure: BMR times the activity multiplier."""
        val = bmr * ACTIVITY_MULTIPLIERS[ActivityLevel(activity_level)]
        logger.debug("TDEE calculated: %s", val)
        return val

    def calculate_target_calories(self, tdee: float, goal_type: str) -> int:
        """Apply the goal adjustment, round, and clamp at the 1200 kcal floor."""
        adjusted = round_half_up(tdee + GOAL_ADJUSTMENTS[GoalType(goal_type)])
        val = max(MIN_DAILY_CALORIES, adjusted)
        logger.debug("Target calories for goal %s: %s", goal_type, val)
        return val

    def calculate_macros(self, target_calories: int, diet_type: str) -> Dict[str, int]:
        """Gram targets and percentages for the diet type's macro split."""
        protein_pct, carbs_pct, fat_pct = MACRO_SPLITS.get(DietType(diet_type), MACRO_SPLITS[DietType.REGULAR])
        macros = {
            "protein": round_half_up(target_calories * protein_pct / 100 / KCAL_PER_G_PROTEIN),
            "carbs": round_half_up(target_calories * carbs_pct / 100 / KCAL_PER_G_CARBS),
            "fat": round_half_up(target_calories * fat_pct / 100 / KCAL_PER_G_FAT),
            "protein_percentage": protein_pct,
            "carbs_percentage": carbs_pct,
            "fat_percentage": fat_pct,
        }
        logger.debug("Macros calculated: %s", macros)
        return macros

    def compute_targets(self, biometrics: UserBiometrics) -> NutritionalTargets:
        """Derive daily nutritional targets from a biometric snapshot.

        Pure: the same snapshot always yields the same targets.
        """
        bmr = self.calculate_bmr(biometrics.age, biometrics.height, biometrics.weight, biometrics.gender)
        tdee = self.calculate_tdee(bmr, biometrics.activity_level)
        calories = self.calculate_target_calories(tdee, biometrics.goal_type)
        macros = self.calculate_macros(calories, biometrics.diet_type)
        return NutritionalTargets(
            daily_calories=calories,
            daily_protein=macros["protein"],
            daily_carbs=macros["carbs"],
            daily_fat=macros["fat"],
            daily_fiber=round_half_up(calories / 1000 * FIBER_G_PER_1000_KCAL),
            daily_sodium=DAILY_SODIUM_MG,
            protein_percentage=macros["protein_percentage"],
            carbs_percentage=macros["carbs_percentage"],
            fat_percentage=macros["fat_percentage"],
        )

    def age_from_birth_date(self, date_of_birth: date, today: date) -> int:
        """Whole years between `date_of_birth` and `today`."""
        years = today.year - date_of_birth.year
        if (today.month, today.day) < (date_of_birth.month, date_of_birth.day):
            years -= 1
        return max(0, years)

    def biometrics_for_user(self, user, today: date) -> Optional[UserBiometrics]:
        """Snapshot a stored user's biometrics, or None if any are missing."""
        if not user.height or not user.weight or not user.gender or not user.date_of_birth:
            return None
        return UserBiometrics(
            height=user.height,
            weight=user.weight,
            age=self.age_from_birth_date(user.date_of_birth, today),
            gender=user.gender,
            activity_level=user.activity_level,
            goal_type=user.goal_type,
            weekly_weight_change_goal=user.weekly_weight_change_goal,
            diet_type=user.diet_type,
        )

    def missing_biometrics(self, user) -> list:
        return [f for f in ("height", "weight", "gender", "date_of_birth") if not getattr(user, f)]

    def targets_for_user(self, user, today: date) -> Optional[NutritionalTargets]:
        biometrics = self.biometrics_for_user(user, today)
        if biometrics is None:
            return None
        return self.compute_targets(biometrics)


# export singleton
nutrition_calculator = NutritionCalculator()
__all__ = ["NutritionCalculator", "nutrition_calculator", "round_half_up"]
