"""User API router.

Profile CRUD and the targets endpoint that runs the nutrition calculator on
a stored profile. Authentication is handled upstream; routes take the user
id directly.
"""

import json
from datetime import date

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from core.exceptions import InsufficientDataError, ValidationError
from core.logger import get_logger
from core.repository import BaseRepository, save
from database import models
from database.deps import get_db_read, get_db_write
from schemas import UserCreateRequest, UserResponse, UserTargetsResponse, UserUpdateRequest
from services.nutrition_calculator import nutrition_calculator

logger = get_logger("api.users")
router = APIRouter(prefix="/api/users", tags=["users"])

NULLABLE_FIELDS = ("email", "gender", "height", "weight")


def user_to_response(user: models.User, today: date = None) -> UserResponse:
    """Serialize a user with the derived age and BMI figures."""
    today = today or date.today()
    bmi = nutrition_calculator.calculate_bmi(user.height, user.weight)
    return UserResponse(
        id=user.id,
        name=user.name,
        email=user.email,
        date_of_birth=user.date_of_birth,
        age=nutrition_calculator.age_from_birth_date(user.date_of_birth, today) if user.date_of_birth else None,
        gender=user.gender,
        height=user.height,
        weight=user.weight,
        bmi=bmi,
        bmi_category=nutrition_calculator.bmi_category(bmi),
        activity_level=user.activity_level,
        goal_type=user.goal_type,
        weekly_weight_change_goal=user.weekly_weight_change_goal,
        diet_type=user.diet_type,
        allergies=json.loads(user.allergies) if user.allergies else [],
        created_at=user.created_at,
    )


def _ensure_email_free(db: Session, email: str, user_id: int = None) -> None:
    if not email:
        return
    q = db.query(models.User).filter(models.User.email == email)
    if user_id is not None:
        q = q.filter(models.User.id != user_id)
    if q.first() is not None:
        raise ValidationError("Email is already registered", field="email")


@router.post("", response_model=UserResponse, status_code=201)
def create_user(payload: UserCreateRequest, db: Session = Depends(get_db_write)):
    """Create a user profile.

    Raises:
        ValidationError: If the email is already registered.
    """
    _ensure_email_free(db, payload.email)
    data = payload.model_dump(mode="json", exclude={"allergies", "date_of_birth"})
    user = models.User(
        **data,
        date_of_birth=payload.date_of_birth,
        allergies=json.dumps(payload.allergies),
    )
    user = save(db, user)
    logger.info("User created id=%s", user.id)
    return user_to_response(user)


@router.get("/{user_id}", response_model=UserResponse)
def get_user(user_id: int, db: Session = Depends(get_db_read)):
    """Return one user profile.

    Raises:
        NotFoundError: If the user does not exist.
    """
    user = BaseRepository(models.User, db).get_or_404(user_id)
    return user_to_response(user)


@router.patch("/{user_id}", response_model=UserResponse)
def update_user(user_id: int, payload: UserUpdateRequest, db: Session = Depends(get_db_write)):
    """Apply a partial profile update.

    An explicit null clears an optional field; on required fields it is
    ignored.
    """
    repo = BaseRepository(models.User, db)
    user = repo.get_or_404(user_id)
    changes = payload.model_dump(mode="json", exclude_unset=True, exclude={"allergies", "date_of_birth"})
    changes = {k: v for k, v in changes.items() if v is not None or k in NULLABLE_FIELDS}
    if "email" in changes:
        _ensure_email_free(db, changes["email"], user_id)
    if "date_of_birth" in payload.model_fields_set:
        changes["date_of_birth"] = payload.date_of_birth
    if payload.allergies is not None:
        changes["allergies"] = json.dumps(payload.allergies)
    user = repo.update(user, changes)
    logger.info("User %s updated: %s", user_id, sorted(changes))
    return user_to_response(user)


@router.get("/{user_id}/targets", response_model=UserTargetsResponse)
def get_user_targets(user_id: int, db: Session = Depends(get_db_read)):
    """Compute daily calorie and macro targets from the stored profile.

    Raises:
        NotFoundError: If the user does not exist.
        InsufficientDataError: If height, weight, gender or birth date is missing.
    """
    user = BaseRepository(models.User, db).get_or_404(user_id)
    biometrics = nutrition_calculator.biometrics_for_user(user, date.today())
    if biometrics is None:
        raise InsufficientDataError(
            "Cannot compute nutritional targets: profile is incomplete",
            missing=nutrition_calculator.missing_biometrics(user),
        )
    bmr = nutrition_calculator.calculate_bmr(biometrics.age, biometrics.height, biometrics.weight, biometrics.gender)
    tdee = nutrition_calculator.calculate_tdee(bmr, biometrics.activity_level)
    return UserTargetsResponse(
        user_id=user.id,
        biometrics=biometrics,
        bmr=round(bmr, 1),
        tdee=round(tdee, 1),
        targets=nutrition_calculator.compute_targets(biometrics),
    )
