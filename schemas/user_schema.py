"""Schemas for user profiles and the biometric snapshot used by the calculator."""

from datetime import date, datetime
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional

from .enums import ActivityLevel, BMICategory, DietType, Gender, GoalType
from .nutrition_schema import NutritionalTargets


class UserBiometrics(BaseModel):
    """Immutable snapshot of the inputs to the targets calculator."""

    model_config = ConfigDict(frozen=True)

    height: float = Field(..., gt=0, description="Height in centimeters")
    weight: float = Field(..., gt=0, description="Weight in kilograms")
    age: int = Field(..., ge=0, description="Age in whole years")
    gender: Gender
    activity_level: ActivityLevel = ActivityLevel.SEDENTARY
    goal_type: GoalType = GoalType.MAINTENANCE
    weekly_weight_change_goal: float = Field(0.5, ge=0, description="kg per week")
    diet_type: DietType = DietType.REGULAR


class UserCreateRequest(BaseModel):
    """Request payload for creating a user profile.

    Biometrics are optional at sign-up; targets cannot be computed until
    height, weight, gender and date of birth are all present.
    """

    name: str = Field(..., min_length=1, max_length=100, examples=["Jane Doe"])
    email: Optional[str] = Field(None, max_length=254, examples=["jane@example.com"])
    date_of_birth: Optional[date] = Field(None, examples=["1994-05-17"])
    gender: Optional[Gender] = Field(None, examples=["female"])
    height: Optional[float] = Field(None, ge=50, le=300, examples=[168.0], description="Height in centimeters")
    weight: Optional[float] = Field(None, ge=20, le=500, examples=[64.0], description="Weight in kilograms")
    activity_level: ActivityLevel = Field(ActivityLevel.SEDENTARY, examples=["moderately_active"])
    goal_type: GoalType = Field(GoalType.MAINTENANCE, examples=["weight_loss"])
    weekly_weight_change_goal: float = Field(0.5, ge=0.25, le=1.0, description="kg per week")
    diet_type: DietType = Field(DietType.REGULAR, examples=["mediterranean"])
    allergies: List[str] = Field(default=[], examples=[["peanuts"]])


class UserUpdateRequest(BaseModel):
    """Partial profile update; only fields present in the body are applied."""

    name: Optional[str] = Field(None, min_length=1, max_length=100)
    email: Optional[str] = Field(None, max_length=254)
    date_of_birth: Optional[date] = None
    gender: Optional[Gender] = None
    height: Optional[float] = Field(None, ge=50, le=300)
    weight: Optional[float] = Field(None, ge=20, le=500)
    activity_level: Optional[ActivityLevel] = None
    goal_type: Optional[GoalType] = None
    weekly_weight_change_goal: Optional[float] = Field(None, ge=0.25, le=1.0)
    diet_type: Optional[DietType] = None
    allergies: Optional[List[str]] = None


class UserResponse(BaseModel):
    id: int
    name: str
    email: Optional[str] = None
    date_of_birth: Optional[date] = None
    age: Optional[int] = None
    gender: Optional[Gender] = None
    height: Optional[float] = None
    weight: Optional[float] = None
    bmi: Optional[float] = None
    bmi_category: Optional[BMICategory] = None
    activity_level: ActivityLevel
    goal_type: GoalType
    weekly_weight_change_goal: float
    diet_type: DietType
    allergies: List[str] = []
    created_at: datetime


class UserTargetsResponse(BaseModel):
    """Calculator output for a stored user, with the intermediate figures."""

    user_id: int
    biometrics: UserBiometrics
    bmr: float
    tdee: float
    targets: NutritionalTargets
