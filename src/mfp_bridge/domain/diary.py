"""Domain models for the food diary."""

from dataclasses import dataclass

from mfp_bridge.domain.nutrition import NutritionTotals


@dataclass(frozen=True)
class DiaryEntry:
    """One food row inside a meal section."""

    name: str
    brand: str | None
    amount: str
    calories: float
    carbs: float
    fat: float
    protein: float
    sodium: float | None = None
    sugar: float | None = None
    fiber: float | None = None

    def totals(self) -> NutritionTotals:
        """Return the entry's nutrition as totals."""
        return NutritionTotals(
            calories=self.calories,
            carbs=self.carbs,
            fat=self.fat,
            protein=self.protein,
            sodium=self.sodium,
            sugar=self.sugar,
            fiber=self.fiber,
        )


@dataclass(frozen=True)
class Meal:
    """A meal section with its entries in page order."""

    name: str
    entries: list[DiaryEntry]
    totals: NutritionTotals


@dataclass(frozen=True)
class WaterIntake:
    """Water consumed against the daily goal, in cups."""

    cups: float
    goal: float


@dataclass(frozen=True)
class DiaryResponse:
    """A single day of the food diary."""

    date: str
    meals: list[Meal]
    totals: NutritionTotals
    goals: NutritionTotals
    remaining: NutritionTotals
    water: WaterIntake | None = None

    @property
    def has_entries(self) -> bool:
        """Return whether any meal has at least one entry."""
        return any(meal.entries for meal in self.meals)
