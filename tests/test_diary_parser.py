"""Tests for the food diary parser."""

from mfp_bridge.domain.nutrition import NutritionTotals
from mfp_bridge.parsers.diary import parse_diary
from mfp_bridge.parsers.fallbacks import ExtractionReport
from tests.conftest import DIARY_HTML

LEGACY_DIARY_HTML = """
<html><body><table>
  <tr class="meal_row"><td class="first">Breakfast</td></tr>
  <tr class="entry">
    <td class="first"><a href="/food/item/1">Kellogg's - Corn Flakes</a></td>
    <td>1 cup</td>
    <td>100</td><td>24</td><td>0</td><td>2</td><td>200</td><td>3</td>
  </tr>
  <tr class="meal_row"><td class="first">Snacks</td></tr>
  <tr class="entry">
    <td class="first"><a href="/food/item/2">Almonds</a></td>
    <td>28 g</td>
    <td>164</td><td>6</td><td>14</td><td>6</td><td>0</td><td>1</td>
  </tr>
  <tr class="total">
    <td class="first">Totals</td>
    <td>264</td><td>30</td><td>14</td><td>8</td><td>200</td><td>4</td>
  </tr>
</table></body></html>
"""


def test_parse_diary_reads_meals_in_fixed_order() -> None:
    diary = parse_diary(DIARY_HTML, "2024-01-01")

    assert diary.date == "2024-01-01"
    assert [meal.name for meal in diary.meals] == ["Breakfast", "Lunch", "Dinner"]


def test_parse_diary_splits_entry_labels() -> None:
    diary = parse_diary(DIARY_HTML, "2024-01-01")
    breakfast = diary.meals[0]

    assert len(breakfast.entries) == 2
    bread, banana = breakfast.entries
    assert bread.brand == "Nature's Own"
    assert bread.name == "Wheat Bread"
    assert bread.amount == "2 slices"
    assert banana.brand is None
    assert banana.name == "Banana"
    assert banana.amount == "1 medium"


def test_parse_diary_prefers_nested_macro_value() -> None:
    diary = parse_diary(DIARY_HTML, "2024-01-01")

    assert diary.meals[0].entries[0].carbs == 10


def test_parse_diary_skips_add_food_prompts() -> None:
    diary = parse_diary(DIARY_HTML, "2024-01-01")

    assert diary.meals[1].entries == []
    assert [entry.name for entry in diary.meals[2].entries] == ["Water"]


def test_meal_totals_are_summed_from_entries() -> None:
    diary = parse_diary(DIARY_HTML, "2024-01-01")
    totals = diary.meals[0].totals

    assert (totals.calories, totals.carbs, totals.fat, totals.protein) == (
        150,
        15,
        7,
        8,
    )
    assert totals.sodium == 121
    assert totals.sugar == 16


def test_empty_meal_totals_are_zero() -> None:
    diary = parse_diary(DIARY_HTML, "2024-01-01")

    assert diary.meals[1].totals == NutritionTotals.zero()


def test_summary_rows_are_found_by_label() -> None:
    diary = parse_diary(DIARY_HTML, "2024-01-01")

    assert diary.totals.calories == 150
    assert diary.goals.calories == 2000
    assert diary.goals.sodium == 2300
    assert diary.remaining.calories == 1850
    assert diary.remaining.protein == 92


def test_water_counter_is_read() -> None:
    diary = parse_diary(DIARY_HTML, "2024-01-01")

    assert diary.water is not None
    assert diary.water.cups == 3
    assert diary.water.goal == 8


def test_missing_sections_are_reported() -> None:
    report = ExtractionReport()

    diary = parse_diary(DIARY_HTML, "2024-01-01", report)

    assert "meal:Snacks" in report.missed
    assert "meal:Breakfast" not in report.missed
    assert diary.has_entries


def test_legacy_layout_reads_separate_amount_cell() -> None:
    report = ExtractionReport()

    diary = parse_diary(LEGACY_DIARY_HTML, "2024-01-02", report)

    assert [meal.name for meal in diary.meals] == ["Breakfast", "Snacks"]
    flakes = diary.meals[0].entries[0]
    assert flakes.brand == "Kellogg's"
    assert flakes.name == "Corn Flakes"
    assert flakes.amount == "1 cup"
    assert flakes.calories == 100
    assert flakes.carbs == 24
    assert flakes.sodium == 200
    assert flakes.sugar == 3
    almonds = diary.meals[1].entries[0]
    assert almonds.brand is None
    assert almonds.amount == "28 g"
    assert diary.totals.calories == 264
    assert diary.goals == NutritionTotals.zero()
    assert "summary:goals" in report.missed
    assert "summary:remaining" in report.missed
    assert diary.water is None


def test_unrecognized_page_yields_empty_diary() -> None:
    report = ExtractionReport()

    diary = parse_diary("<html><body><p>Maintenance</p></body></html>", "x", report)

    assert diary.meals == []
    assert diary.totals == NutritionTotals.zero()
    assert not diary.has_entries
    assert "section_headers" in report.missed


def test_blank_page_does_not_raise() -> None:
    diary = parse_diary("", "2024-01-01")

    assert diary.meals == []


def test_spacer_rows_inside_a_meal_do_not_end_it() -> None:
    html = """
<html><body><table>
  <tr class="meal_header"><td class="first alt">Breakfast</td></tr>
  <tr>
    <td class="first alt"><a href="/food/edit_entry/1">Eggs, 2 large</a></td>
    <td>140</td><td>1</td><td>10</td><td>12</td>
  </tr>
  <tr class="spacer"><td class="first alt"></td></tr>
  <tr>
    <td class="first alt"><a href="/food/edit_entry/2">Toast, 1 slice</a></td>
    <td>80</td><td>15</td><td>1</td><td>3</td>
  </tr>
  <tr class="meal_header"><td class="first alt">Lunch</td></tr>
</table></body></html>
"""

    diary = parse_diary(html, "2024-01-01")

    assert [entry.name for entry in diary.meals[0].entries] == ["Eggs", "Toast"]
    assert diary.meals[0].totals.calories == 220


def test_legacy_layout_accepts_bare_numeric_amount() -> None:
    html = """
<html><body><table>
  <tr class="meal_row"><td class="first">Breakfast</td></tr>
  <tr class="entry">
    <td class="first"><a>Eggs</a></td>
    <td>2</td><td>140</td><td>1</td><td>10</td><td>12</td><td>140</td><td>0</td>
  </tr>
</table></body></html>
"""

    eggs = parse_diary(html, "2024-01-01").meals[0].entries[0]

    assert eggs.name == "Eggs"
    assert eggs.amount == "2"
    assert (eggs.calories, eggs.carbs, eggs.fat, eggs.protein) == (140, 1, 10, 12)
    assert eggs.sodium == 140
    assert eggs.sugar == 0


def test_fiber_column_is_read_when_present() -> None:
    html = """
<html><body><table>
  <tr class="meal_header"><td class="first alt">Lunch</td></tr>
  <tr>
    <td class="first alt"><a href="/food/edit_entry/5">Lentil Soup, 1 bowl</a></td>
    <td>230</td><td>40</td><td>1</td><td>18</td><td>480</td><td>4</td><td>15</td>
  </tr>
  <tr class="total">
    <td class="first">Totals</td>
    <td>230</td><td>40</td><td>1</td><td>18</td><td>480</td><td>4</td><td>15</td>
  </tr>
</table></body></html>
"""

    diary = parse_diary(html, "2024-01-01")

    soup = diary.meals[0].entries[0]
    assert soup.amount == "1 bowl"
    assert soup.calories == 230
    assert soup.fiber == 15
    assert diary.meals[0].totals.fiber == 15
    assert diary.totals.fiber == 15


def test_delete_link_cell_is_not_read_as_fiber() -> None:
    diary = parse_diary(DIARY_HTML, "2024-01-01")

    assert diary.meals[0].entries[0].fiber is None
    assert diary.totals.fiber is None
