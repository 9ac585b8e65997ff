"""Schemas for BMI calculation and the per-user BMI history."""

from datetime import datetime
from pydantic import BaseModel, Field
from typing import Dict, List, Optional

from .enums import BMICategory


class BMICalculateRequest(BaseModel):
    height: float = Field(..., ge=50, le=300, examples=[175.0], description="Height in centimeters")
    weight: float = Field(..., ge=20, le=500, examples=[70.0], description="Weight in kilograms")


class BMICalculateResponse(BaseModel):
    bmi: float
    category: BMICategory
    height: float
    weight: float


class BMIRecordRequest(BaseModel):
    """Store a measurement; BMI and category are derived server-side."""

    user_id: int = Field(..., examples=[1])
    height: float = Field(..., ge=50, le=300)
    weight: float = Field(..., ge=20, le=500)
    date: Optional[datetime] = Field(None, description="Measurement time, defaults to now")
    body_fat: Optional[float] = Field(None, ge=0, le=100, description="Body fat percentage")
    muscle_mass: Optional[float] = Field(None, ge=0, description="Muscle mass in kilograms")


class BMIRecordResponse(BaseModel):
    id: int
    user_id: int
    date: datetime
    height: float
    weight: float
    bmi: float
    category: BMICategory
    body_fat: Optional[float] = None
    muscle_mass: Optional[float] = None
    created_at: datetime


class BMIHistoryResponse(BaseModel):
    total: int
    page: int
    limit: int
    records: List[BMIRecordResponse]


class BMIStatsResponse(BaseModel):
    """Trend over the user's recorded measurements, oldest to newest."""

    total_records: int
    bmi_change: float
    weight_change: float
    category_distribution: Dict[str, int]
    latest_bmi: Optional[float] = None
    latest_category: Optional[BMICategory] = None
