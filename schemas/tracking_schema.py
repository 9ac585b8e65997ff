"""Schemas for food logging, water intake and tracking statistics.

A food log entry's source is a tagged union: it either references a catalog
meal or embeds a custom food, never both and never neither.
"""

from datetime import date as Date, datetime
from pydantic import BaseModel, Field
from typing import Annotated, List, Literal, Optional, Union

from .enums import MealCategory
from .nutrition_schema import DailyNutritionSummary, NutritionalTargets, NutritionInfo, TargetProgress


class MealRef(BaseModel):
    kind: Literal["meal"] = "meal"
    meal_id: int


class CustomFood(BaseModel):
    kind: Literal["custom"] = "custom"
    name: str = Field(..., min_length=1, max_length=100)
    brand: Optional[str] = Field(None, max_length=100)
    nutrition: NutritionInfo
    serving_amount: Optional[float] = Field(None, ge=0.1)
    serving_unit: Optional[str] = Field(None, max_length=20)


FoodSource = Annotated[Union[MealRef, CustomFood], Field(discriminator="kind")]


class FoodEntryCreateRequest(BaseModel):
    user_id: int = Field(..., examples=[1])
    source: FoodSource
    meal_type: MealCategory
    servings: float = Field(..., ge=0.1, le=20)
    consumed_at: Optional[datetime] = Field(None, description="Defaults to now")
    notes: Optional[str] = Field(None, max_length=500)


class FoodEntryResponse(BaseModel):
    """A logged entry plus the nutrition it contributes (nutrition x servings)."""

    id: int
    user_id: int
    source: FoodSource
    meal_name: Optional[str] = None
    meal_type: MealCategory
    servings: float
    consumed_at: datetime
    notes: Optional[str] = None
    nutrition: NutritionInfo


class FoodEntryListResponse(BaseModel):
    total: int
    page: int
    limit: int
    entries: List[FoodEntryResponse]


class DailyNutritionResponse(DailyNutritionSummary):
    targets: Optional[NutritionalTargets] = None
    target_progress: TargetProgress = TargetProgress()


class TrackingStatsResponse(BaseModel):
    total_entries: int = 0
    total_days_tracked: int = 0
    average_daily_calories: int = 0
    average_daily_protein: int = 0
    average_daily_carbs: int = 0
    average_daily_fat: int = 0
    current_streak: int = 0
    longest_streak: int = 0
    favorite_meal_type: Optional[MealCategory] = None
    most_tracked_meal: Optional[str] = None


class WaterIntakeCreateRequest(BaseModel):
    user_id: int = Field(..., examples=[1])
    amount: int = Field(..., ge=1, le=5000, description="Milliliters")
    recorded_at: Optional[datetime] = None
    notes: Optional[str] = Field(None, max_length=500)


class WaterIntakeResponse(BaseModel):
    id: int
    user_id: int
    amount: int
    recorded_at: datetime
    notes: Optional[str] = None


class DailyWaterResponse(BaseModel):
    date: Date
    total_amount: int
    target_amount: int
    progress: int = Field(..., ge=0, le=100)
    entries: List[WaterIntakeResponse]
