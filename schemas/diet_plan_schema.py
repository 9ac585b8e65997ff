"""Schemas for diet plans and their weekly meal slots."""

from datetime import date, datetime
from pydantic import BaseModel, Field, model_validator
from typing import List, Literal, Optional

from .enums import DietType, Difficulty, GeneratedBy, MealCategory
from .nutrition_schema import NutritionalTargets, NutritionalTargetsOverride


class GenerationPreferences(BaseModel):
    """Knobs for automatic plan generation.

    If any `include_*` flag is set only those slots are planned; with none
    set the plan covers breakfast, lunch and dinner. `diet_type` is filled
    from the owner's profile by the API layer.
    """

    include_breakfast: bool = False
    include_lunch: bool = False
    include_dinner: bool = False
    include_snacks: bool = False
    max_prep_time: Optional[int] = Field(None, ge=0, description="Minutes")
    max_cook_time: Optional[int] = Field(None, ge=0, description="Minutes")
    difficulty: Optional[Difficulty] = None
    diet_type: DietType = DietType.REGULAR


class DietPlanMealSlot(BaseModel):
    """One (day, meal type) cell of a weekly plan."""

    meal_id: int
    day_of_week: int = Field(..., ge=0, le=6, description="0 = Sunday")
    meal_type: MealCategory
    servings: float = Field(1.0, ge=0.25, le=10)
    is_completed: bool = False
    completed_at: Optional[datetime] = None
    notes: Optional[str] = Field(None, max_length=500)


class DietPlanCreateRequest(BaseModel):
    """Create a plan by hand (`meals`) or let the generator fill it (`ai`)."""

    user_id: int = Field(..., examples=[1])
    name: str = Field(..., min_length=1, max_length=100, examples=["Spring cut"])
    description: Optional[str] = Field(None, max_length=500)
    start_date: date
    end_date: date
    generation_type: Literal["manual", "ai"] = "manual"
    nutritional_targets: Optional[NutritionalTargetsOverride] = None
    preferences: Optional[GenerationPreferences] = None
    meals: List[DietPlanMealSlot] = []

    @model_validator(mode="after")
    def _end_after_start(self):
        if self.end_date <= self.start_date:
            raise ValueError("end_date must be after start_date")
        return self


class MealCompletionRequest(BaseModel):
    user_id: int
    completed: bool = True


class DietPlanMealResponse(BaseModel):
    id: int
    meal_id: int
    meal_name: Optional[str] = None
    day_of_week: int
    meal_type: MealCategory
    servings: float
    is_completed: bool
    completed_at: Optional[datetime] = None
    notes: Optional[str] = None


class DietPlanResponse(BaseModel):
    id: int
    user_id: int
    name: str
    description: Optional[str] = None
    start_date: date
    end_date: date
    is_active: bool
    generated_by: GeneratedBy
    nutritional_targets: NutritionalTargets
    meals: List[DietPlanMealResponse]
    created_at: datetime


class DietPlanListResponse(BaseModel):
    total: int
    page: int
    limit: int
    plans: List[DietPlanResponse]
