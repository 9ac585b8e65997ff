"""Schemas for the meal catalog."""

from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional

from .enums import Difficulty, MealCategory
from .nutrition_schema import NutritionInfo


class Ingredient(BaseModel):
    """One ingredient line with the nutrition it contributes to the recipe."""

    name: str = Field(..., min_length=1, max_length=100, examples=["rolled oats"])
    amount: float = Field(..., ge=0, examples=[80])
    unit: str = Field(..., min_length=1, max_length=20, examples=["g"])
    calories: float = Field(..., ge=0)
    protein: float = Field(..., ge=0)
    carbs: float = Field(..., ge=0)
    fat: float = Field(..., ge=0)
    fiber: Optional[float] = Field(None, ge=0)
    sugar: Optional[float] = Field(None, ge=0)
    sodium: Optional[float] = Field(None, ge=0)


class MealCreateRequest(BaseModel):
    """Payload for adding a meal to the catalog.

    When `nutrition` is omitted the meal's nutrition is the sum of its
    ingredients.
    """

    name: str = Field(..., min_length=1, max_length=100, examples=["Overnight Oats"])
    description: Optional[str] = Field(None, max_length=500)
    category: MealCategory = Field(..., examples=["breakfast"])
    cuisine: Optional[str] = Field(None, max_length=50)
    prep_time: int = Field(0, ge=0, description="Minutes")
    cook_time: int = Field(0, ge=0, description="Minutes")
    servings: int = Field(1, ge=1, le=20)
    difficulty: Difficulty = Difficulty.EASY
    ingredients: List[Ingredient] = Field(..., min_length=1)
    nutrition: Optional[NutritionInfo] = None
    tags: List[str] = Field(default=[], examples=[["vegetarian", "high-fiber"]])
    is_public: bool = True
    created_by: Optional[int] = Field(None, description="ID of the creating user")


class MealUpdateRequest(BaseModel):
    """Partial update. Replacing `ingredients` recomputes nutrition unless
    `nutrition` is sent alongside."""

    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    category: Optional[MealCategory] = None
    cuisine: Optional[str] = Field(None, max_length=50)
    prep_time: Optional[int] = Field(None, ge=0)
    cook_time: Optional[int] = Field(None, ge=0)
    servings: Optional[int] = Field(None, ge=1, le=20)
    difficulty: Optional[Difficulty] = None
    ingredients: Optional[List[Ingredient]] = Field(None, min_length=1)
    nutrition: Optional[NutritionInfo] = None
    tags: Optional[List[str]] = None
    is_public: Optional[bool] = None


class MealDetail(BaseModel):
    """Representation of a meal in responses."""

    id: int
    name: str
    description: Optional[str] = None
    category: MealCategory
    cuisine: Optional[str] = None
    prep_time: int
    cook_time: int
    total_time: int
    servings: int
    difficulty: Difficulty
    ingredients: List[Ingredient]
    nutrition: NutritionInfo
    tags: List[str] = []
    is_public: bool
    created_by: Optional[int] = None
    created_at: datetime


class MealListResponse(BaseModel):
    total: int
    page: int
    limit: int
    pages: int
    meals: List[MealDetail]


class MealSummary(BaseModel):
    """The slice of a meal the plan generator needs to pick and portion it."""

    model_config = ConfigDict(frozen=True)

    id: int
    name: str = ""
    calories_per_base_serving: float = Field(..., ge=0)
    tags: List[str] = []
