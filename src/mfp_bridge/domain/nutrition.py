"""Nutrition domain models."""

import math
from dataclasses import dataclass

MEAL_NAMES: tuple[str, ...] = ("Breakfast", "Lunch", "Dinner", "Snacks")

_OPTIONAL_FIELDS = ("sodium", "sugar", "fiber", "saturated_fat", "cholesterol")


def round_half_up(value: float) -> int:
    """Round to the nearest whole number, with halves going up."""
    return math.floor(value + 0.5)


@dataclass(frozen=True)
class NutritionTotals:
    """Calories and macros for an entry, meal, or day."""

    calories: float
    carbs: float
    fat: float
    protein: float
    sodium: float | None = None
    sugar: float | None = None
    fiber: float | None = None
    saturated_fat: float | None = None
    cholesterol: float | None = None

    @classmethod
    def zero(cls) -> "NutritionTotals":
        """Return totals with only the four required macros, all zero."""
        return cls(calories=0.0, carbs=0.0, fat=0.0, protein=0.0)

    def plus(self, other: "NutritionTotals") -> "NutritionTotals":
        """Add two totals element-wise."""
        optional: dict[str, float | None] = {}
        for name in _OPTIONAL_FIELDS:
            left = getattr(self, name)
            right = getattr(other, name)
            if left is None and right is None:
                optional[name] = None
            else:
                optional[name] = (left or 0.0) + (right or 0.0)
        return NutritionTotals(
            calories=self.calories + other.calories,
            carbs=self.carbs + other.carbs,
            fat=self.fat + other.fat,
            protein=self.protein + other.protein,
            **optional,
        )
