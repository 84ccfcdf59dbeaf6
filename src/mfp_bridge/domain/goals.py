"""Nutrition goal models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class MacroGoal:
    """Daily grams of a macro and its share of macro calories."""

    grams: float
    percentage: int


@dataclass(frozen=True)
class GoalsResponse:
    """Daily calorie and macro goals."""

    calories: float
    carbs: MacroGoal
    fat: MacroGoal
    protein: MacroGoal
    sodium: float | None = None
    sugar: float | None = None
    fiber: float | None = None
