"""Nutrition aggregation over logged food.

Sums resolved entries (nutrition x servings) into daily totals with a
per-meal-type breakdown, compares totals with targets, and rolls daily
summaries up into windows (a week) and running averages for tracking stats.
"""

from collections import OrderedDict
from datetime import date, timedelta
from typing import Dict, Iterable, Mapping, Optional, Sequence

from core.logger import get_logger
from schemas.nutrition_schema import (
    DailyNutritionSummary,
    MealTypeBreakdown,
    NutritionalTargets,
    NutritionWindowSummary,
    ResolvedFoodEntry,
    RunningAverages,
    TargetProgress,
)
from services.nutrition_calculator import round_half_up

logger = get_logger("services.nutrition_aggregator")

TOTAL_FIELDS = ("calories", "protein", "carbs", "fat", "fiber", "sodium")
BREAKDOWN_FIELDS = ("calories", "protein", "carbs", "fat")


def _contribution(entry: ResolvedFoodEntry) -> Dict[str, float]:
    nutrition = entry.nutrition
    return {f: (getattr(nutrition, f) or 0.0) * entry.servings for f in TOTAL_FIELDS}


class NutritionAggregator:
    """Stateless aggregation helpers; safe to share across requests."""

    def aggregate(self, entries: Iterable[ResolvedFoodEntry], day: Optional[date] = None) -> DailyNutritionSummary:
        """Sum entries into grand totals and per-meal-type buckets.

        Totals are kept unrounded while accumulating and rounded half-up at
        the end. An empty input gives all-zero totals and no breakdown.
        """
        totals = {f: 0.0 for f in TOTAL_FIELDS}
        buckets = OrderedDict()
        count = 0
        for entry in entries:
            contribution = _contribution(entry)
            for f in TOTAL_FIELDS:
                totals[f] += contribution[f]
            bucket = buckets.setdefault(entry.meal_type, {**{f: 0.0 for f in BREAKDOWN_FIELDS}, "entry_count": 0})
            for f in BREAKDOWN_FIELDS:
                bucket[f] += contribution[f]
            bucket["entry_count"] += 1
            count += 1

        breakdown = [
            MealTypeBreakdown(
                meal_type=meal_type,
                calories=round_half_up(b["calories"]),
                protein=round_half_up(b["protein"]),
                carbs=round_half_up(b["carbs"]),
                fat=round_half_up(b["fat"]),
                entry_count=b["entry_count"],
            )
            for meal_type, b in buckets.items()
        ]
        logger.debug("Aggregated %s entries into %s meal types", count, len(breakdown))
        return DailyNutritionSummary(
            date=day,
            total_calories=round_half_up(totals["calories"]),
            total_protein=round_half_up(totals["protein"]),
            total_carbs=round_half_up(totals["carbs"]),
            total_fat=round_half_up(totals["fat"]),
            total_fiber=round_half_up(totals["fiber"]),
            total_sodium=round_half_up(totals["sodium"]),
            meal_breakdown=breakdown,
        )

    def target_progress(self, summary: DailyNutritionSummary, targets: NutritionalTargets) -> TargetProgress:
        """Each total as a rounded percentage of its target; not clamped."""

        def pct(consumed, target):
            if not target:
                return 0
            return round_half_up(consumed / target * 100)

        return TargetProgress(
            calories=pct(summary.total_calories, targets.daily_calories),
            protein=pct(summary.total_protein, targets.daily_protein),
            carbs=pct(summary.total_carbs, targets.daily_carbs),
            fat=pct(summary.total_fat, targets.daily_fat),
        )

    def aggregate_range(
        self,
        entries_by_day: Mapping[date, Sequence[ResolvedFoodEntry]],
        start: date,
        end: date,
    ) -> NutritionWindowSummary:
        """Summarize every calendar day in [start, end], empty days included.

        Averages divide by the number of days that have entries, so untracked
        days do not drag the average down.
        """
        days = []
        current = start
        while current <= end:
            days.append(self.aggregate(entries_by_day.get(current, ()), day=current))
            current += timedelta(days=1)

        tracked = [d for d in days if d.meal_breakdown]
        totals = {f: sum(getattr(d, f"total_{f}") for d in days) for f in BREAKDOWN_FIELDS}
        divisor = len(tracked) or 1
        return NutritionWindowSummary(
            start_date=start,
            end_date=end,
            days=days,
            days_tracked=len(tracked),
            total_calories=totals["calories"],
            total_protein=totals["protein"],
            total_carbs=totals["carbs"],
            total_fat=totals["fat"],
            average_daily_calories=round_half_up(totals["calories"] / divisor),
            average_daily_protein=round_half_up(totals["protein"] / divisor),
            average_daily_carbs=round_half_up(totals["carbs"] / divisor),
            average_daily_fat=round_half_up(totals["fat"] / divisor),
        )

    def running_averages(self, entries_by_day: Mapping[date, Sequence[ResolvedFoodEntry]]) -> RunningAverages:
        """Average daily intake over all days that have at least one entry."""
        tracked = {d: e for d, e in entries_by_day.items() if e}
        if not tracked:
            return RunningAverages()
        summaries = [self.aggregate(e) for e in tracked.values()]
        n = len(summaries)
        return RunningAverages(
            days_tracked=n,
            average_daily_calories=round_half_up(sum(s.total_calories for s in summaries) / n),
            average_daily_protein=round_half_up(sum(s.total_protein for s in summaries) / n),
            average_daily_carbs=round_half_up(sum(s.total_carbs for s in summaries) / n),
            average_daily_fat=round_half_up(sum(s.total_fat for s in summaries) / n),
        )


# export a default instance
nutrition_aggregator = NutritionAggregator()
