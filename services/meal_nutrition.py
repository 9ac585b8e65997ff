"""Meal-level nutrition helpers.

A meal's nutrition is the sum of its ingredients unless set explicitly, and
per-serving figures divide that by the recipe's serving count.
"""

from typing import Iterable, Mapping, Union

from schemas.meal_schema import Ingredient
from schemas.nutrition_schema import NutritionInfo

_REQUIRED = ("calories", "protein", "carbs", "fat")
_OPTIONAL = ("fiber", "sugar", "sodium")


def _value(item, field):
    if isinstance(item, Mapping):
        return item.get(field)
    return getattr(item, field, None)


def sum_ingredient_nutrition(ingredients: Iterable[Union[Ingredient, Mapping]]) -> NutritionInfo:
    """Add up ingredient nutrition; missing optional fields count as 0."""
    totals = {f: 0.0 for f in _REQUIRED + _OPTIONAL}
    for ing in ingredients:
        for f in totals:
            totals[f] += _value(ing, f) or 0.0
    return NutritionInfo(**{f: round(v, 1) for f, v in totals.items()})


def nutrition_per_serving(nutrition: NutritionInfo, servings: int) -> NutritionInfo:
    """Divide every present nutrition field by the recipe's serving count."""
    servings = max(1, servings)
    data = {
        k: (round(v / servings, 1) if v is not None else None)
        for k, v in nutrition.model_dump().items()
    }
    return NutritionInfo(**data)
