"""Food search and logging models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class FoodSearchResult:
    """A single food returned by the search page."""

    id: str
    name: str
    brand: str | None
    calories: float
    serving_size: str
    verified: bool


@dataclass(frozen=True)
class FoodSearchResponse:
    """One page of food search results."""

    results: list[FoodSearchResult]
    total_results: int
    page: int
    has_more: bool


@dataclass(frozen=True)
class FoodItemForm:
    """Fields scraped from a food item page before adding it to the diary."""

    token: str
    name: str
    serving: str


@dataclass(frozen=True)
class LogFoodEntry:
    """The entry reported back after a diary submission."""

    id: str
    name: str
    calories: float
    serving: str


@dataclass(frozen=True)
class LogFoodResponse:
    """Outcome of a log-food request."""

    success: bool
    entry: LogFoodEntry | None = None
    error: str | None = None
