"""Tracking streaks: runs of consecutive calendar days with logged food."""

from datetime import date, timedelta
from typing import Callable, Iterable, Optional

from core.config import settings
from core.logger import get_logger

logger = get_logger("services.streak_calculator")


def current_streak(
    has_entry_on_day: Callable[[date], bool],
    today: date,
    max_lookback: Optional[int] = None,
) -> int:
    """Count consecutive tracked days ending at `today` (inclusive).

    Stops at the first untracked day, or after `max_lookback` days so the
    walk always terminates. A day without entries today means a streak of 0.
    """
    limit = settings.STREAK_MAX_LOOKBACK_DAYS if max_lookback is None else max_lookback
    streak = 0
    day = today
    while streak < limit and has_entry_on_day(day):
        streak += 1
        day -= timedelta(days=1)
    if limit and streak == limit:
        logger.debug("Streak walk hit the %s-day lookback cap", limit)
    return streak


def current_streak_from_days(tracked_days: Iterable[date], today: date, max_lookback: Optional[int] = None) -> int:
    """`current_streak` over an already-fetched set of tracked dates."""
    days = set(tracked_days)
    return current_streak(days.__contains__, today, max_lookback)


def longest_streak(tracked_days: Iterable[date]) -> int:
    """Length of the longest run of consecutive dates anywhere in history."""
    days = sorted(set(tracked_days))
    best = run = 0
    previous = None
    for day in days:
        if previous is not None and day - previous == timedelta(days=1):
            run += 1
        else:
            run = 1
        best = max(best, run)
        previous = day
    return best
