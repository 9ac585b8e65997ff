"""SQLAlchemy ORM models for the diet planner.

Tables: users, meals, diet_plans, diet_plan_meals, food_entries,
water_intakes and bmi_records. List-valued columns (tags, ingredients,
allergies, targets snapshot, custom food) are stored as JSON-encoded text.
Models carry no business logic; derived figures are computed in `services`.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import declarative_base, relationship
from datetime import datetime

Base = declarative_base()


class User(Base):
    """Application user and the biometrics the calculator reads."""

    __tablename__ = "users"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    email = Column(String(254), unique=True, nullable=True)
    date_of_birth = Column(Date, nullable=True)
    gender = Column(String(10), nullable=True)
    height = Column(Float, nullable=True)
    weight = Column(Float, nullable=True)
    activity_level = Column(String(30), nullable=False, default="sedentary")
    goal_type = Column(String(30), nullable=False, default="maintenance")
    weekly_weight_change_goal = Column(Float, nullable=False, default=0.5)
    diet_type = Column(String(30), nullable=False, default="regular")
    allergies = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class Meal(Base):
    """Catalog meal. Nutrition columns describe the whole recipe (the
    ingredient sum unless set explicitly); divide by `servings` for a portion.
    """

    __tablename__ = "meals"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False, index=True)
    description = Column(Text, nullable=True)
    category = Column(String(20), nullable=False, index=True)
    cuisine = Column(String(50), nullable=True)
    prep_time = Column(Integer, nullable=False, default=0)
    cook_time = Column(Integer, nullable=False, default=0)
    servings = Column(Integer, nullable=False, default=1)
    difficulty = Column(String(10), nullable=False, default="easy")
    ingredients = Column(Text, nullable=True)
    calories = Column(Float, nullable=False, index=True)
    protein = Column(Float, nullable=False)
    carbs = Column(Float, nullable=False)
    fat = Column(Float, nullable=False)
    fiber = Column(Float, nullable=True)
    sugar = Column(Float, nullable=True)
    sodium = Column(Float, nullable=True)
    cholesterol = Column(Float, nullable=True)
    tags = Column(Text, nullable=True)
    is_public = Column(Boolean, nullable=False, default=True)
    created_by = Column(Integer, ForeignKey("users.id"), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    __table_args__ = (
        Index("ix_meals_category_public_calories", "category", "is_public", "calories"),
    )


class DietPlan(Base):
    """A dated plan owned by one user. At most one is active per user."""

    __tablename__ = "diet_plans"
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    generated_by = Column(String(20), nullable=False, default="user")
    nutritional_targets = Column(Text, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    meals = relationship(
        "DietPlanMeal",
        back_populates="diet_plan",
        cascade="all, delete-orphan",
        order_by="DietPlanMeal.position",
    )


class DietPlanMeal(Base):
    """A (day, meal type) slot of a plan pointing at a catalog meal."""

    __tablename__ = "diet_plan_meals"
    id = Column(Integer, primary_key=True, index=True)
    diet_plan_id = Column(Integer, ForeignKey("diet_plans.id"), nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0)
    meal_id = Column(Integer, ForeignKey("meals.id"), nullable=False)
    day_of_week = Column(Integer, nullable=False)  # 0 = Sunday
    meal_type = Column(String(20), nullable=False)
    servings = Column(Float, nullable=False, default=1.0)
    is_completed = Column(Boolean, nullable=False, default=False)
    completed_at = Column(DateTime, nullable=True)
    notes = Column(Text, nullable=True)

    diet_plan = relationship("DietPlan", back_populates="meals")
    meal = relationship("Meal")

    __table_args__ = (
        CheckConstraint("day_of_week BETWEEN 0 AND 6", name="ck_diet_plan_meals_day"),
    )


class FoodEntry(Base):
    """A logged food: exactly one of `meal_id` / `custom_food` is set."""

    __tablename__ = "food_entries"
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    meal_id = Column(Integer, ForeignKey("meals.id"), nullable=True)
    custom_food = Column(Text, nullable=True)
    meal_type = Column(String(20), nullable=False)
    servings = Column(Float, nullable=False)
    consumed_at = Column(DateTime, nullable=False, index=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    meal = relationship("Meal")

    __table_args__ = (
        CheckConstraint(
            "(meal_id IS NULL) <> (custom_food IS NULL)",
            name="ck_food_entries_single_source",
        ),
        Index("ix_food_entries_user_consumed", "user_id", "consumed_at"),
    )


class WaterIntake(Base):
    __tablename__ = "water_intakes"
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    amount = Column(Integer, nullable=False)  # ml
    recorded_at = Column(DateTime, nullable=False, index=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)


class BMIRecord(Base):
    __tablename__ = "bmi_records"
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    date = Column(DateTime, nullable=False, default=datetime.utcnow)
    height = Column(Float, nullable=False)
    weight = Column(Float, nullable=False)
    bmi = Column(Float, nullable=False)
    category = Column(String(20), nullable=False)
    body_fat = Column(Float, nullable=True)
    muscle_mass = Column(Float, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
