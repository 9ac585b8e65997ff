"""Tests for the user and BMI endpoints."""
from datetime import date, datetime

import pytest

from api.bmi import calculate_bmi, delete_bmi_record, get_bmi_history, get_bmi_stats, record_bmi
from api.users import create_user, get_user, get_user_targets, update_user
from core.exceptions import ForbiddenError, InsufficientDataError, NotFoundError, ValidationError
from schemas import UserCreateRequest, UserUpdateRequest
from schemas.bmi_schema import BMICalculateRequest, BMIRecordRequest
from schemas.enums import BMICategory

from factories import make_user


def test_create_user_and_derived_fields(db):
    payload = UserCreateRequest(
        name="Ada", email="ada@example.com", date_of_birth=date(1990, 1, 1),
        gender="female", height=165, weight=60, allergies=["peanuts"],
    )
    res = create_user(payload=payload, db=db)
    assert res.id > 0
    assert res.bmi == 22.04
    assert res.bmi_category == BMICategory.NORMAL
    assert res.allergies == ["peanuts"]
    assert res.age == date.today().year - 1990


def test_duplicate_email_is_rejected(db):
    create_user(payload=UserCreateRequest(name="A", email="a@example.com"), db=db)
    with pytest.raises(ValidationError) as exc_info:
        create_user(payload=UserCreateRequest(name="B", email="a@example.com"), db=db)
    assert exc_info.value.status_code == 400


def test_get_missing_user_raises_404(db):
    with pytest.raises(NotFoundError):
        get_user(user_id=424242, db=db)


def test_partial_update_only_touches_sent_fields(db, user):
    res = update_user(user_id=user.id, payload=UserUpdateRequest(weight=80, goal_type="weight_loss"), db=db)
    assert res.weight == 80
    assert res.goal_type.value == "weight_loss"
    assert res.height == 175
    assert res.name == "Test User"


def test_null_on_required_field_is_ignored(db, user):
    payload = UserUpdateRequest.model_validate({"activity_level": None, "name": None, "weight": None})
    res = update_user(user_id=user.id, payload=payload, db=db)
    assert res.activity_level.value == "moderately_active"
    assert res.name == "Test User"
    assert res.weight is None


def test_null_update_over_http(client, user):
    res = client.patch(f"/api/users/{user.id}", json={"activity_level": None, "goal_type": None, "height": None})
    assert res.status_code == 200
    body = res.json()
    assert body["activity_level"] == "moderately_active"
    assert body["goal_type"] == "maintenance"
    assert body["height"] is None


def test_targets_for_reference_user(db, user):
    res = get_user_targets(user_id=user.id, db=db)
    assert res.biometrics.age == 30
    assert res.bmr == pytest.approx(1695.7, abs=0.05)
    assert res.targets.daily_calories == 2628


def test_targets_without_biometrics_raise_insufficient_data(db):
    incomplete = make_user(db, height=None, gender=None)
    with pytest.raises(InsufficientDataError) as exc_info:
        get_user_targets(user_id=incomplete.id, db=db)
    assert exc_info.value.status_code == 400
    assert exc_info.value.details["missing"] == ["height", "gender"]


def test_bmi_calculate():
    res = calculate_bmi(BMICalculateRequest(height=180, weight=100))
    assert res.bmi == 30.86
    assert res.category == BMICategory.OBESE


def test_bmi_record_updates_profile_and_stats(db, user):
    record_bmi(BMIRecordRequest(user_id=user.id, height=175, weight=80, date=datetime(2024, 1, 1)), db=db)
    record_bmi(BMIRecordRequest(user_id=user.id, height=175, weight=75, date=datetime(2024, 2, 1)), db=db)
    db.refresh(user)
    assert user.weight == 75

    history = get_bmi_history(user_id=user.id, page=1, limit=10, db=db)
    assert history.total == 2
    assert history.records[0].weight == 75

    stats = get_bmi_stats(user_id=user.id, db=db)
    assert stats.total_records == 2
    assert stats.weight_change == -5
    assert stats.bmi_change == pytest.approx(24.49 - 26.12)
    assert stats.category_distribution == {"overweight": 1, "normal": 1}
    assert stats.latest_category == BMICategory.NORMAL


def test_bmi_record_delete_requires_owner(db, user):
    other = make_user(db, name="Other")
    rec = record_bmi(BMIRecordRequest(user_id=user.id, height=175, weight=70), db=db)
    with pytest.raises(ForbiddenError):
        delete_bmi_record(record_id=rec.id, user_id=other.id, db=db)
    assert delete_bmi_record(record_id=rec.id, user_id=user.id, db=db)["deleted"] is True


def test_user_routes_over_http(client):
    res = client.post("/api/users", json={"name": "Http User", "gender": "male", "height": 175, "weight": 70,
                                          "date_of_birth": f"{date.today().year - 30}-01-01",
                                          "activity_level": "moderately_active"})
    assert res.status_code == 201
    user_id = res.json()["id"]
    targets = client.get(f"/api/users/{user_id}/targets").json()
    assert targets["targets"]["daily_calories"] == 2628
