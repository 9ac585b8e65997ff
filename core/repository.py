"""Repository classes for database operations.

`BaseRepository` wraps the common CRUD calls; the subclasses add the
per-user queries the routers need, including the two-phase "deactivate
current plan, then store the new active one" switch for diet plans.
"""

from datetime import date, datetime, time, timedelta
from math import ceil
from typing import Any, Dict, Generic, List, Optional, Tuple, Type, TypeVar

from sqlalchemy import or_
from sqlalchemy.orm import Query, Session

from core.exceptions import ForbiddenError, NotFoundError
from core.logger import get_logger
from database.models import Base, BMIRecord, DietPlan, FoodEntry, Meal, WaterIntake

logger = get_logger("core.repository")

T = TypeVar('T', bound=Base)


def day_bounds(day: date) -> Tuple[datetime, datetime]:
    """Half-open [start, end) datetimes covering one calendar day."""
    start = datetime.combine(day, time.min)
    return start, start + timedelta(days=1)


def paginate(query: Query, page: int, limit: int) -> Tuple[List[Any], int]:
    """Return one page of `query` and the unpaged total."""
    total = query.order_by(None).count()
    items = query.offset((page - 1) * limit).limit(limit).all()
    return items, total


def page_count(total: int, limit: int) -> int:
    return ceil(total / limit) if limit else 0


class BaseRepository(Generic[T]):
    """Generic repository for common database operations.

    Attributes:
        model: SQLAlchemy model class to operate on.
        session: Database session for executing queries.
    """

    def __init__(self, model: Type[T], session: Session):
        self.model = model
        self.session = session

    def get_by_id(self, id: Any) -> Optional[T]:
        return self.session.get(self.model, id)

    def get_or_404(self, id: Any) -> T:
        """Fetch by primary key or raise `NotFoundError`."""
        obj = self.get_by_id(id)
        if obj is None:
            raise NotFoundError(self.model.__name__, id)
        return obj

    def get_owned(self, id: Any, user_id: int) -> T:
        """Fetch a row that must belong to `user_id`.

        Raises:
            NotFoundError: no row with that id.
            ForbiddenError: the row belongs to another user.
        """
        obj = self.get_or_404(id)
        if obj.user_id != user_id:
            raise ForbiddenError(self.model.__name__, id)
        return obj

    def update(self, obj: T, changes: Optional[Dict[str, Any]] = None) -> T:
        """Apply `changes` (if any), commit and refresh."""
        for key, value in (changes or {}).items():
            setattr(obj, key, value)
        self.session.commit()
        self.session.refresh(obj)
        return obj

    def delete(self, obj: T) -> None:
        self.session.delete(obj)
        self.session.commit()


class DietPlanRepository(BaseRepository[DietPlan]):
    """Diet plan persistence with the single-active-plan rule."""

    def __init__(self, session: Session):
        super().__init__(DietPlan, session)

    def find_active(self, user_id: int) -> Optional[DietPlan]:
        return (
            self.session.query(DietPlan)
            .filter(DietPlan.user_id == user_id, DietPlan.is_active.is_(True))
            .order_by(DietPlan.created_at.desc(), DietPlan.id.desc())
            .first()
        )

    def list_for_user(self, user_id: int, page: int, limit: int, is_active: Optional[bool] = None):
        q = self.session.query(DietPlan).filter(DietPlan.user_id == user_id)
        if is_active is not None:
            q = q.filter(DietPlan.is_active.is_(is_active))
        return paginate(q.order_by(DietPlan.created_at.desc(), DietPlan.id.desc()), page, limit)

    def deactivate_active_plans(self, user_id: int) -> int:
        """Phase one: flag every active plan of the user inactive (no commit)."""
        return (
            self.session.query(DietPlan)
            .filter(DietPlan.user_id == user_id, DietPlan.is_active.is_(True))
            .update({DietPlan.is_active: False}, synchronize_session="fetch")
        )

    def create_active(self, plan: DietPlan) -> DietPlan:
        """Deactivate the owner's plans and store `plan` as the active one.

        Both phases commit together. Two concurrent calls for the same user
        are not serialized against each other; the later commit wins.
        """
        try:
            deactivated = self.deactivate_active_plans(plan.user_id)
            plan.is_active = True
            self.session.add(plan)
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise
        self.session.refresh(plan)
        logger.info("Plan %s active for user %s (%s deactivated)", plan.id, plan.user_id, deactivated)
        return plan


class MealRepository(BaseRepository[Meal]):
    """Catalog queries behind the meal listing endpoint."""

    def __init__(self, session: Session):
        super().__init__(Meal, session)

    def search(
        self,
        page: int,
        limit: int,
        category: Optional[str] = None,
        difficulty: Optional[str] = None,
        cuisine: Optional[str] = None,
        diet_tag: Optional[str] = None,
        max_prep_time: Optional[int] = None,
        max_cook_time: Optional[int] = None,
        min_calories: Optional[float] = None,
        max_calories: Optional[float] = None,
        min_protein: Optional[float] = None,
        search: Optional[str] = None,
        is_public: bool = True,
        created_by: Optional[int] = None,
    ):
        q = self.session.query(Meal).filter(Meal.is_public.is_(is_public))
        if category is not None:
            q = q.filter(Meal.category == category)
        if difficulty is not None:
            q = q.filter(Meal.difficulty == difficulty)
        if cuisine:
            q = q.filter(Meal.cuisine.ilike(f"%{cuisine}%"))
        if diet_tag:
            q = q.filter(Meal.tags.like(f'%"{diet_tag}"%'))
        if max_prep_time is not None:
            q = q.filter(Meal.prep_time <= max_prep_time)
        if max_cook_time is not None:
            q = q.filter(Meal.cook_time <= max_cook_time)
        if min_calories is not None:
            q = q.filter(Meal.calories >= min_calories)
        if max_calories is not None:
            q = q.filter(Meal.calories <= max_calories)
        if min_protein is not None:
            q = q.filter(Meal.protein >= min_protein)
        if created_by is not None:
            q = q.filter(Meal.created_by == created_by)
        if search:
            pattern = f"%{search}%"
            q = q.filter(or_(
                Meal.name.ilike(pattern),
                Meal.description.ilike(pattern),
                Meal.cuisine.ilike(pattern),
                Meal.tags.ilike(pattern),
            ))
        return paginate(q.order_by(Meal.created_at.desc(), Meal.id.desc()), page, limit)


class FoodEntryRepository(BaseRepository[FoodEntry]):
    def __init__(self, session: Session):
        super().__init__(FoodEntry, session)

    def between(self, user_id: int, start: datetime, end: datetime) -> List[FoodEntry]:
        """Entries with start <= consumed_at < end, newest first."""
        return (
            self.session.query(FoodEntry)
            .filter(FoodEntry.user_id == user_id, FoodEntry.consumed_at >= start, FoodEntry.consumed_at < end)
            .order_by(FoodEntry.consumed_at.desc())
            .all()
        )

    def on_day(self, user_id: int, day: date) -> List[FoodEntry]:
        return self.between(user_id, *day_bounds(day))

    def all_for_user(self, user_id: int) -> List[FoodEntry]:
        return self.session.query(FoodEntry).filter(FoodEntry.user_id == user_id).all()

    def search(self, user_id: int, page: int, limit: int, start: Optional[datetime] = None,
               end: Optional[datetime] = None, meal_type: Optional[str] = None):
        q = self.session.query(FoodEntry).filter(FoodEntry.user_id == user_id)
        if start is not None:
            q = q.filter(FoodEntry.consumed_at >= start)
        if end is not None:
            q = q.filter(FoodEntry.consumed_at < end)
        if meal_type is not None:
            q = q.filter(FoodEntry.meal_type == meal_type)
        return paginate(q.order_by(FoodEntry.consumed_at.desc()), page, limit)


class WaterIntakeRepository(BaseRepository[WaterIntake]):
    def __init__(self, session: Session):
        super().__init__(WaterIntake, session)

    def on_day(self, user_id: int, day: date) -> List[WaterIntake]:
        start, end = day_bounds(day)
        return (
            self.session.query(WaterIntake)
            .filter(WaterIntake.user_id == user_id, WaterIntake.recorded_at >= start, WaterIntake.recorded_at < end)
            .order_by(WaterIntake.recorded_at.desc())
            .all()
        )


class BMIRecordRepository(BaseRepository[BMIRecord]):
    def __init__(self, session: Session):
        super().__init__(BMIRecord, session)

    def history(self, user_id: int, page: int, limit: int):
        q = self.session.query(BMIRecord).filter(BMIRecord.user_id == user_id)
        return paginate(q.order_by(BMIRecord.date.desc(), BMIRecord.id.desc()), page, limit)

    def chronological(self, user_id: int) -> List[BMIRecord]:
        return (
            self.session.query(BMIRecord)
            .filter(BMIRecord.user_id == user_id)
            .order_by(BMIRecord.date.asc(), BMIRecord.id.asc())
            .all()
        )


def save(session: Session, obj: Base) -> Base:
    """Add, commit and refresh a single object."""
    session.add(obj)
    session.commit()
    session.refresh(obj)
    return obj
