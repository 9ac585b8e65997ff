"""BMI endpoints: one-off calculation and per-user measurement history."""

from collections import Counter
from datetime import datetime

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from core.exceptions import NotFoundError
from core.logger import get_logger
from core.repository import BaseRepository, BMIRecordRepository, save
from database import models
from database.deps import get_db_read, get_db_write
from schemas.bmi_schema import (
    BMICalculateRequest,
    BMICalculateResponse,
    BMIHistoryResponse,
    BMIRecordRequest,
    BMIRecordResponse,
    BMIStatsResponse,
)
from services.nutrition_calculator import nutrition_calculator, round_half_up

logger = get_logger("api.bmi")
router = APIRouter(prefix="/api/bmi", tags=["bmi"])


def record_to_response(record: models.BMIRecord) -> BMIRecordResponse:
    return BMIRecordResponse(
        id=record.id,
        user_id=record.user_id,
        date=record.date,
        height=record.height,
        weight=record.weight,
        bmi=record.bmi,
        category=record.category,
        body_fat=record.body_fat,
        muscle_mass=record.muscle_mass,
        created_at=record.created_at,
    )


@router.post("/calculate", response_model=BMICalculateResponse)
def calculate_bmi(payload: BMICalculateRequest):
    """Calculate BMI and its category without storing anything."""
    bmi = nutrition_calculator.calculate_bmi(payload.height, payload.weight)
    return BMICalculateResponse(
        bmi=bmi,
        category=nutrition_calculator.bmi_category(bmi),
        height=payload.height,
        weight=payload.weight,
    )


@router.post("/record", response_model=BMIRecordResponse, status_code=201)
def record_bmi(payload: BMIRecordRequest, db: Session = Depends(get_db_write)):
    """Store a measurement. The user's current height and weight are updated
    to match so later target calculations use the latest figures.

    Raises:
        NotFoundError: If the user does not exist.
    """
    user = BaseRepository(models.User, db).get_or_404(payload.user_id)
    bmi = nutrition_calculator.calculate_bmi(payload.height, payload.weight)
    record = models.BMIRecord(
        user_id=user.id,
        date=payload.date or datetime.utcnow(),
        height=payload.height,
        weight=payload.weight,
        bmi=bmi,
        category=nutrition_calculator.bmi_category(bmi).value,
        body_fat=payload.body_fat,
        muscle_mass=payload.muscle_mass,
    )
    user.height = payload.height
    user.weight = payload.weight
    record = save(db, record)
    logger.info("BMI %.2f recorded for user %s", bmi, user.id)
    return record_to_response(record)


@router.get("/history", response_model=BMIHistoryResponse)
def get_bmi_history(
    user_id: int,
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    db: Session = Depends(get_db_read),
):
    """Paginated measurements, newest first."""
    records, total = BMIRecordRepository(db).history(user_id, page, limit)
    return BMIHistoryResponse(
        total=total, page=page, limit=limit,
        records=[record_to_response(r) for r in records],
    )


@router.get("/latest", response_model=BMIRecordResponse)
def get_latest_bmi(user_id: int, db: Session = Depends(get_db_read)):
    """Most recent measurement.

    Raises:
        NotFoundError: If the user has no records.
    """
    records, _ = BMIRecordRepository(db).history(user_id, 1, 1)
    if not records:
        raise NotFoundError("BMIRecord", f"latest for user {user_id}")
    return record_to_response(records[0])


@router.get("/stats", response_model=BMIStatsResponse)
def get_bmi_stats(user_id: int, db: Session = Depends(get_db_read)):
    """Change between first and last measurement and category counts."""
    records = BMIRecordRepository(db).chronological(user_id)
    if not records:
        return BMIStatsResponse(total_records=0, bmi_change=0.0, weight_change=0.0, category_distribution={})
    first, last = records[0], records[-1]
    return BMIStatsResponse(
        total_records=len(records),
        bmi_change=round_half_up(last.bmi - first.bmi, 2),
        weight_change=round_half_up(last.weight - first.weight, 2),
        category_distribution=dict(Counter(r.category for r in records)),
        latest_bmi=last.bmi,
        latest_category=last.category,
    )


@router.delete("/record/{record_id}")
def delete_bmi_record(record_id: int, user_id: int, db: Session = Depends(get_db_write)):
    """Delete one of the caller's measurements.

    Raises:
        NotFoundError: If the record does not exist.
        ForbiddenError: If the record belongs to another user.
    """
    repo = BMIRecordRepository(db)
    record = repo.get_owned(record_id, user_id)
    repo.delete(record)
    logger.info("BMI record %s deleted by user %s", record_id, user_id)
    return {"deleted": True, "id": record_id}
