"""Test error handling functionality.

Verifies that custom exceptions carry the right status codes and that the
API renders them (and request validation failures) in the shared envelope.
"""
import json

import pytest

from api.meals import get_meal
from api.users import get_user
from core.error_handlers import create_error_response
from core.exceptions import (
    DatabaseError,
    ForbiddenError,
    InsufficientDataError,
    NotFoundError,
    ValidationError,
)


def test_user_not_found_raises_404(db):
    """Test that requesting non-existent user raises NotFoundError."""
    with pytest.raises(NotFoundError) as exc_info:
        get_user(user_id=99999, db=db)
    assert "User" in exc_info.value.message
    assert exc_info.value.status_code == 404


def test_meal_not_found_raises_404(db):
    with pytest.raises(NotFoundError) as exc_info:
        get_meal(meal_id=99999, user_id=None, db=db)
    assert exc_info.value.details == {"resource": "Meal", "id": 99999}


def test_exception_classes_have_proper_attributes():
    """Test that custom exception classes have expected attributes."""
    exc = NotFoundError("User", 123)
    assert exc.status_code == 404
    assert "123" in exc.message

    exc = ValidationError("Invalid input", field="age")
    assert exc.status_code == 400
    assert exc.message == "Invalid input"
    assert exc.details == {"field": "age"}
    assert ValidationError("Invalid input").details == {}

    exc = ForbiddenError("DietPlan", 7)
    assert exc.status_code == 403
    assert exc.details == {"resource": "DietPlan", "id": 7}

    exc = InsufficientDataError("Profile incomplete", missing=["height"])
    assert exc.status_code == 400
    assert exc.details == {"missing": ["height"]}

    exc = DatabaseError("boom", operation="health", details={"error": "down"})
    assert exc.status_code == 500
    assert exc.details == {"error": "down", "operation": "health"}


def test_error_response_omits_empty_details():
    body = json.loads(create_error_response("Nope", status_code=404).body)
    assert body == {"error": {"message": "Nope", "status_code": 404}}


def test_not_found_envelope_over_http(client):
    res = client.get("/api/users/999", headers={"X-Request-ID": "req-42"})
    assert res.status_code == 404
    error = res.json()["error"]
    assert error["message"] == "User with id '999' not found"
    assert error["status_code"] == 404
    assert error["request_id"] == "req-42"


def test_bad_body_returns_422(client):
    res = client.post("/api/users", json={"height": -5})
    assert res.status_code == 422
    fields = [e["field"] for e in res.json()["error"]["details"]["validation_errors"]]
    assert "body.name" in fields


def test_health(client):
    res = client.get("/health")
    assert res.status_code == 200
    assert res.json() == {"status": "healthy", "database": "connected"}
