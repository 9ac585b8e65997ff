"""Nutrition value objects: per-food nutrition facts, daily targets and
the summaries produced by the aggregator."""

from datetime import date as Date
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .enums import MealCategory


class NutritionInfo(BaseModel):
    """Nutrition facts for one base serving of a meal or custom food."""

    model_config = ConfigDict(from_attributes=True)

    calories: float = Field(..., ge=0, examples=[420])
    protein: float = Field(..., ge=0, examples=[28])
    carbs: float = Field(..., ge=0, examples=[45])
    fat: float = Field(..., ge=0, examples=[12])
    fiber: Optional[float] = Field(None, ge=0)
    sugar: Optional[float] = Field(None, ge=0)
    sodium: Optional[float] = Field(None, ge=0, description="Milligrams")
    cholesterol: Optional[float] = Field(None, ge=0, description="Milligrams")
    saturated_fat: Optional[float] = Field(None, ge=0)
    potassium: Optional[float] = Field(None, ge=0)
    calcium: Optional[float] = Field(None, ge=0)
    iron: Optional[float] = Field(None, ge=0)
    vitamin_a: Optional[float] = Field(None, ge=0)
    vitamin_c: Optional[float] = Field(None, ge=0)
    vitamin_d: Optional[float] = Field(None, ge=0)


class NutritionalTargets(BaseModel):
    """Daily calorie and macro targets derived from a user's biometrics."""

    daily_calories: int = Field(..., ge=1200, examples=[2200])
    daily_protein: int = Field(..., ge=0, description="Grams")
    daily_carbs: int = Field(..., ge=0, description="Grams")
    daily_fat: int = Field(..., ge=0, description="Grams")
    daily_fiber: int = Field(..., ge=0, description="Grams")
    daily_sodium: int = Field(2300, ge=0, description="Milligrams")
    protein_percentage: int = Field(..., ge=0, le=100)
    carbs_percentage: int = Field(..., ge=0, le=100)
    fat_percentage: int = Field(..., ge=0, le=100)

    @model_validator(mode="after")
    def _percentages_sum_to_100(self):
        total = self.protein_percentage + self.carbs_percentage + self.fat_percentage
        if total != 100:
            raise ValueError(f"macro percentages must sum to 100, got {total}")
        return self

    def merged_with(self, overrides: Optional["NutritionalTargetsOverride"]) -> "NutritionalTargets":
        """Return a copy with every field the user explicitly set replaced."""
        if overrides is None:
            return self
        data = self.model_dump()
        data.update(overrides.model_dump(exclude_none=True))
        return NutritionalTargets(**data)


class NutritionalTargetsOverride(BaseModel):
    """Partial targets supplied by a user; unset fields keep computed values."""

    daily_calories: Optional[int] = Field(None, ge=1200)
    daily_protein: Optional[int] = Field(None, ge=0)
    daily_carbs: Optional[int] = Field(None, ge=0)
    daily_fat: Optional[int] = Field(None, ge=0)
    daily_fiber: Optional[int] = Field(None, ge=0)
    daily_sodium: Optional[int] = Field(None, ge=0)
    protein_percentage: Optional[int] = Field(None, ge=0, le=100)
    carbs_percentage: Optional[int] = Field(None, ge=0, le=100)
    fat_percentage: Optional[int] = Field(None, ge=0, le=100)


class ResolvedFoodEntry(BaseModel):
    """A consumed item with its nutrition already looked up."""

    model_config = ConfigDict(frozen=True)

    nutrition: NutritionInfo
    servings: float = Field(..., gt=0)
    meal_type: MealCategory


class MealTypeBreakdown(BaseModel):
    meal_type: MealCategory
    calories: int
    protein: int
    carbs: int
    fat: int
    entry_count: int


class DailyNutritionSummary(BaseModel):
    date: Optional[Date] = None
    total_calories: int = 0
    total_protein: int = 0
    total_carbs: int = 0
    total_fat: int = 0
    total_fiber: int = 0
    total_sodium: int = 0
    meal_breakdown: List[MealTypeBreakdown] = []


class TargetProgress(BaseModel):
    """Consumed totals as a percentage of targets. Values may exceed 100."""

    calories: int = 0
    protein: int = 0
    carbs: int = 0
    fat: int = 0


class NutritionWindowSummary(BaseModel):
    """Nutrition over a range of calendar days (e.g. a week)."""

    start_date: Date
    end_date: Date
    days: List[DailyNutritionSummary]
    days_tracked: int
    total_calories: int
    total_protein: int
    total_carbs: int
    total_fat: int
    average_daily_calories: int
    average_daily_protein: int
    average_daily_carbs: int
    average_daily_fat: int


class RunningAverages(BaseModel):
    days_tracked: int = 0
    average_daily_calories: int = 0
    average_daily_protein: int = 0
    average_daily_carbs: int = 0
    average_daily_fat: int = 0
