"""Goal extraction from the diary summary rows and the goals page."""

from dataclasses import dataclass

from mfp_bridge.domain.goals import GoalsResponse, MacroGoal
from mfp_bridge.domain.nutrition import round_half_up
from mfp_bridge.parsers.diary import find_summary_row, read_nutrition_row
from mfp_bridge.parsers.fallbacks import (
    ExtractionReport,
    parse_document,
    xpath_chain,
)
from mfp_bridge.parsers.text import clean_text, parse_number

CARB_KCAL_PER_G = 4
FAT_KCAL_PER_G = 9
PROTEIN_KCAL_PER_G = 4

GOALS_PAGE_CALORIE_ROW = xpath_chain(
    "goals_page_calories",
    "//tr[td[contains(normalize-space(.), 'Calories')]]",
    "//tr[th[contains(normalize-space(.), 'Calories')]]",
)


@dataclass(frozen=True)
class GoalFigures:
    """Raw goal figures read from the diary's goal row."""

    calories: float
    carbs: float
    fat: float
    protein: float
    sodium: float | None = None
    sugar: float | None = None
    fiber: float | None = None


def parse_goal_figures(
    html: str, report: ExtractionReport | None = None
) -> GoalFigures:
    """Read calories and macro grams from the diary's goal row."""
    doc = parse_document(html)
    row = find_summary_row(doc, "goals", report)
    if row is None:
        return GoalFigures(calories=0.0, carbs=0.0, fat=0.0, protein=0.0)
    totals = read_nutrition_row(row)
    return GoalFigures(
        calories=totals.calories,
        carbs=totals.carbs,
        fat=totals.fat,
        protein=totals.protein,
        sodium=totals.sodium,
        sugar=totals.sugar,
        fiber=totals.fiber,
    )


def parse_goals_page_calories(
    html: str, report: ExtractionReport | None = None
) -> float:
    """Read the calorie goal from the last cell of the goals page's calorie row."""
    doc = parse_document(html)
    rows = GOALS_PAGE_CALORIE_ROW.first(doc, report)
    if not rows:
        return 0.0
    cells = rows[0].xpath("./td")
    if not cells:
        return 0.0
    return parse_number(clean_text(cells[-1]))


def build_goals(figures: GoalFigures) -> GoalsResponse:
    """Attach macro percentages computed from grams at 4/9/4 kcal per gram."""
    carb_kcal = figures.carbs * CARB_KCAL_PER_G
    fat_kcal = figures.fat * FAT_KCAL_PER_G
    protein_kcal = figures.protein * PROTEIN_KCAL_PER_G
    macro_kcal = carb_kcal + fat_kcal + protein_kcal
    return GoalsResponse(
        calories=figures.calories,
        carbs=MacroGoal(figures.carbs, _percentage(carb_kcal, macro_kcal)),
        fat=MacroGoal(figures.fat, _percentage(fat_kcal, macro_kcal)),
        protein=MacroGoal(figures.protein, _percentage(protein_kcal, macro_kcal)),
        sodium=figures.sodium,
        sugar=figures.sugar,
        fiber=figures.fiber,
    )


def _percentage(part: float, whole: float) -> int:
    if whole <= 0:
        return 0
    return round_half_up(part / whole * 100)
