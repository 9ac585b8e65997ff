"""Pydantic schema package for request/response models and domain value objects."""

from .enums import (
    ActivityLevel,
    BMICategory,
    DietType,
    Difficulty,
    Gender,
    GeneratedBy,
    GoalType,
    MealCategory,
)
from .nutrition_schema import (
    DailyNutritionSummary,
    MealTypeBreakdown,
    NutritionalTargets,
    NutritionalTargetsOverride,
    NutritionInfo,
    NutritionWindowSummary,
    ResolvedFoodEntry,
    RunningAverages,
    TargetProgress,
)
from .user_schema import UserBiometrics, UserCreateRequest, UserResponse, UserUpdateRequest, UserTargetsResponse
from .meal_schema import Ingredient, MealCreateRequest, MealDetail, MealListResponse, MealSummary, MealUpdateRequest
from .diet_plan_schema import DietPlanCreateRequest, DietPlanMealSlot, DietPlanResponse, GenerationPreferences

__all__ = [
    "ActivityLevel",
    "BMICategory",
    "DietType",
    "Difficulty",
    "Gender",
    "GeneratedBy",
    "GoalType",
    "MealCategory",
    "DailyNutritionSummary",
    "MealTypeBreakdown",
    "NutritionalTargets",
    "NutritionalTargetsOverride",
    "NutritionInfo",
    "NutritionWindowSummary",
    "ResolvedFoodEntry",
    "RunningAverages",
    "TargetProgress",
    "UserBiometrics",
    "UserCreateRequest",
    "UserResponse",
    "UserUpdateRequest",
    "UserTargetsResponse",
    "Ingredient",
    "MealCreateRequest",
    "MealDetail",
    "MealListResponse",
    "MealSummary",
    "MealUpdateRequest",
    "DietPlanCreateRequest",
    "DietPlanMealSlot",
    "DietPlanResponse",
    "GenerationPreferences",
]
