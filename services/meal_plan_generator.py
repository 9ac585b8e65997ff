"""Weekly meal plan generator.

Fills a 7-day x N-slot grid: each slot gets one randomly chosen meal from
the candidates whose base-serving calories fall within +/-30% of the slot's
calorie share, portioned to hit that share. There is no cross-slot balancing
and no backtracking; a slot with no candidates is simply left out.
"""

import random
from typing import List, Optional

from core.config import settings
from core.logger import get_logger
from schemas.diet_plan_schema import DietPlanMealSlot, GenerationPreferences
from schemas.enums import DietType, MealCategory
from schemas.nutrition_schema import NutritionalTargets
from services.meal_lookup import MealLookupPort
from services.nutrition_calculator import round_half_up

logger = get_logger("services.meal_plan_generator")

DAYS_PER_WEEK = 7
DEFAULT_SLOT_TYPES = (MealCategory.BREAKFAST, MealCategory.LUNCH, MealCategory.DINNER)
CALORIE_TOLERANCE = 0.3
MIN_SERVINGS = 0.25
MAX_SERVINGS = 3.0


class MealPlanGenerator:
    """Randomized, per-slot greedy plan assembly.

    Parameters
    ----------
    rng: random.Random, optional
        Source of randomness for candidate picks. Pass a seeded instance to
        make generation reproducible.
    candidate_limit: int, optional
        Maximum number of candidates fetched per slot.
    """

    def __init__(self, rng: Optional[random.Random] = None, candidate_limit: Optional[int] = None):
        self.rng = rng or random.Random()
        self.candidate_limit = candidate_limit or settings.MEAL_CANDIDATE_LIMIT

    def slot_types(self, preferences: Optional[GenerationPreferences]) -> List[MealCategory]:
        """Opted-in slot types in fixed order, or breakfast/lunch/dinner if none."""
        if preferences is None:
            return list(DEFAULT_SLOT_TYPES)
        selected = [
            category
            for flag, category in (
                (preferences.include_breakfast, MealCategory.BREAKFAST),
                (preferences.include_lunch, MealCategory.LUNCH),
                (preferences.include_dinner, MealCategory.DINNER),
                (preferences.include_snacks, MealCategory.SNACK),
            )
            if flag
        ]
        return selected or list(DEFAULT_SLOT_TYPES)

    def portion(self, target_calories: float, meal_calories: float) -> float:
        """Servings of a meal that best hit `target_calories`.

        Rounded half-up to one decimal, then clamped to [0.25, 3.0].
        """
        if meal_calories <= 0:
            return MAX_SERVINGS
        servings = round_half_up(target_calories / meal_calories * 10) / 10
        return max(MIN_SERVINGS, min(servings, MAX_SERVINGS))

    def generate(
        self,
        targets: NutritionalTargets,
        preferences: Optional[GenerationPreferences],
        meal_lookup: MealLookupPort,
    ) -> List[DietPlanMealSlot]:
        """Build the weekly slot list in day-major, slot-type-minor order."""
        prefs = preferences or GenerationPreferences()
        slot_types = self.slot_types(prefs)
        calories_per_slot = round_half_up(targets.daily_calories / len(slot_types))
        calorie_range = (calories_per_slot * (1 - CALORIE_TOLERANCE), calories_per_slot * (1 + CALORIE_TOLERANCE))
        diet_tag = None if prefs.diet_type == DietType.REGULAR else DietType(prefs.diet_type).value

        slots = []
        for day_of_week in range(DAYS_PER_WEEK):
            for meal_type in slot_types:
                candidates = meal_lookup.find_candidates(
                    category=meal_type,
                    calorie_range=calorie_range,
                    is_public=True,
                    diet_tag=diet_tag,
                    max_prep_time=prefs.max_prep_time,
                    max_cook_time=prefs.max_cook_time,
                    difficulty=prefs.difficulty,
                    limit=self.candidate_limit,
                )
                if not candidates:
                    logger.debug("No candidates for day %s %s, skipping slot", day_of_week, meal_type.value)
                    continue
                meal = self.rng.choice(list(candidates))
                slots.append(DietPlanMealSlot(
                    meal_id=meal.id,
                    day_of_week=day_of_week,
                    meal_type=meal_type,
                    servings=self.portion(calories_per_slot, meal.calories_per_base_serving),
                    is_completed=False,
                ))

        logger.info(
            "Generated %s of %s slots (%s kcal/slot, diet=%s)",
            len(slots), DAYS_PER_WEEK * len(slot_types), calories_per_slot, diet_tag or DietType.REGULAR.value,
        )
        return slots
