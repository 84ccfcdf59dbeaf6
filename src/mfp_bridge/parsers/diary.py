"""Food diary page parser.

The diary is one large table. Each meal starts with a header row naming the
meal, followed by food rows, spacer rows and an "Add Food" prompt. The day
ends with labeled summary rows (totals, daily goal, remaining). Two header
and entry layouts have been observed and both are supported:

* older pages: ``tr.meal_row`` headers and entries with a separate amount
  cell followed by calories, carbs, fat, protein, sodium and sugar;
* current pages: ``tr.meal_header`` headers (or a ``td.first.alt`` label)
  and entries whose name cell reads ``"Brand - Name, amount"``.
"""

from lxml.html import HtmlElement

from mfp_bridge.domain.diary import DiaryEntry, DiaryResponse, Meal, WaterIntake
from mfp_bridge.domain.nutrition import MEAL_NAMES, NutritionTotals
from mfp_bridge.parsers.fallbacks import (
    ExtractionReport,
    FallbackChain,
    class_tokens,
    has_class,
    parse_document,
    xpath_chain,
)
from mfp_bridge.parsers.text import (
    clean_text,
    looks_numeric,
    parse_number,
    split_brand,
    split_food_label,
)

_STOP_CLASSES = {"total", "remaining"}
_ENTRY_CLASSES = {"entry", "food-entry", "food_entry"}
_PROMPT_CLASSES = {"bottom", "spacer"}

SECTION_HEADERS = xpath_chain(
    "section_headers",
    f"//tr[{has_class('meal_header')}]",
    f"//tr[{has_class('meal_row')}]",
    f"//tr[td[1][{has_class('first')} and {has_class('alt')}] and not(.//a)]",
)

SUMMARY_ROWS = xpath_chain(
    "summary_rows",
    f"//tr[{has_class('total')} or {has_class('remaining')}]",
)

NAME_CELL = xpath_chain(
    "name_cell",
    f"./td[{has_class('first')}]",
    "./td[1]",
)

WATER_COUNTER = xpath_chain(
    "water",
    f"//*[{has_class('water-counter')}]",
)

WATER_CUPS = xpath_chain(
    "water_cups",
    f".//*[{has_class('cups')}]",
    f".//*[{has_class('consumed')}]",
)

WATER_GOAL = xpath_chain("water_goal", f".//*[{has_class('goal')}]")


def figure_text(cell: HtmlElement) -> str:
    """Return a macro cell's text, preferring a nested value-only span."""
    nested = cell.xpath(f".//span[{has_class('macro-value')}]")
    return clean_text(nested[0] if nested else cell)


def cell_value(cell: HtmlElement) -> float:
    """Read a macro cell as a number."""
    return parse_number(figure_text(cell))


def value_cells(row: HtmlElement) -> list[HtmlElement]:
    """Return a summary row's figure cells, dropping a leading label cell."""
    cells = row.xpath("./td")
    if cells and not looks_numeric(clean_text(cells[0])):
        return cells[1:]
    return cells


def read_nutrition_row(row: HtmlElement) -> NutritionTotals:
    """Read calories, carbs, fat, protein, sodium, sugar and fiber from a row."""
    cells = value_cells(row)
    values = [cell_value(cell) for cell in cells]
    return NutritionTotals(
        calories=_at(values, 0),
        carbs=_at(values, 1),
        fat=_at(values, 2),
        protein=_at(values, 3),
        sodium=_optional(cells, 4),
        sugar=_optional(cells, 5),
        fiber=_optional(cells, 6),
    )


def find_summary_row(
    doc: HtmlElement, kind: str, report: ExtractionReport | None = None
) -> HtmlElement | None:
    """Find the ``totals``, ``goals`` or ``remaining`` row by its label text."""
    rows = SUMMARY_ROWS.first(doc) or []
    for row in rows:
        if _summary_kind(row) == kind:
            return row
    if report is not None:
        report.missing(f"summary:{kind}")
    return None


def parse_diary(
    html: str, date: str, report: ExtractionReport | None = None
) -> DiaryResponse:
    """Parse a diary page into meals, day summaries and water intake."""
    doc = parse_document(html)
    headers = SECTION_HEADERS.first(doc, report) or []
    header_rows = set(headers)

    meals: list[Meal] = []
    for meal_name in MEAL_NAMES:
        header = _find_header(headers, meal_name)
        if header is None:
            if report is not None:
                report.missing(f"meal:{meal_name}")
            continue
        entries = _collect_entries(header, header_rows)
        totals = NutritionTotals.zero()
        for entry in entries:
            totals = totals.plus(entry.totals())
        meals.append(Meal(name=meal_name, entries=entries, totals=totals))

    summaries = {}
    for kind in ("totals", "goals", "remaining"):
        row = find_summary_row(doc, kind, report)
        summaries[kind] = (
            read_nutrition_row(row) if row is not None else NutritionTotals.zero()
        )

    return DiaryResponse(
        date=date,
        meals=meals,
        totals=summaries["totals"],
        goals=summaries["goals"],
        remaining=summaries["remaining"],
        water=_parse_water(doc),
    )


def _at(values: list[float], index: int) -> float:
    return values[index] if len(values) > index else 0.0


def _optional(cells: list[HtmlElement], index: int) -> float | None:
    """Read an optional figure, or ``None`` when the cell is absent or blank."""
    if len(cells) <= index:
        return None
    text = figure_text(cells[index])
    if not any(char.isdigit() for char in text):
        return None
    return parse_number(text)


def _summary_kind(row: HtmlElement) -> str | None:
    cells = row.xpath("./td")
    label = clean_text(cells[0]) if cells else ""
    if not label or looks_numeric(label):
        label = clean_text(row)
    label = label.lower()
    if "remaining" in label:
        return "remaining"
    if "goal" in label:
        return "goals"
    if "total" in label:
        return "totals"
    return None


def _find_header(headers: list[HtmlElement], meal_name: str) -> HtmlElement | None:
    needle = meal_name.lower()
    for row in headers:
        if needle in clean_text(row).lower():
            return row
    return None


def _collect_entries(
    header: HtmlElement, header_rows: set[HtmlElement]
) -> list[DiaryEntry]:
    entries: list[DiaryEntry] = []
    for row in header.itersiblings():
        if not isinstance(row.tag, str) or row.tag != "tr":
            continue
        if row in header_rows or class_tokens(row) & _STOP_CLASSES:
            break
        if not _is_entry_row(row):
            continue
        entry = ENTRY_LAYOUTS.first(row)
        if isinstance(entry, DiaryEntry):
            entries.append(entry)
    return entries


def _is_entry_row(row: HtmlElement) -> bool:
    tokens = class_tokens(row)
    if tokens & _ENTRY_CLASSES:
        return True
    if tokens & _PROMPT_CLASSES:
        return False
    cells = NAME_CELL.first(row)
    if not cells:
        return False
    links = cells[0].xpath(".//a")
    if not links:
        return False
    link = links[0]
    if "add_to_diary" in (link.get("href") or ""):
        return False
    return not clean_text(link).lower().startswith("add food")


def _name_text(cell: HtmlElement) -> str:
    links = cell.xpath(".//a")
    text = clean_text(links[0]) if links else ""
    return text or clean_text(cell)


def _entry_from_cells(
    brand: str | None, name: str, amount: str, figures: list[HtmlElement]
) -> DiaryEntry:
    values = [cell_value(cell) for cell in figures]
    return DiaryEntry(
        name=name,
        brand=brand,
        amount=amount,
        calories=_at(values, 0),
        carbs=_at(values, 1),
        fat=_at(values, 2),
        protein=_at(values, 3),
        sodium=_optional(figures, 4),
        sugar=_optional(figures, 5),
        fiber=_optional(figures, 6),
    )


def _separate_amount_layout(row: HtmlElement) -> DiaryEntry | None:
    """Name cell, amount cell, then six or seven figure cells."""
    name_cells = NAME_CELL.first(row)
    if not name_cells:
        return None
    name_cell = name_cells[0]
    others = [cell for cell in row.xpath("./td") if cell is not name_cell]
    if len(others) < 7:
        return None
    figures = others[1:8]
    if not all(looks_numeric(figure_text(cell)) for cell in figures[:6]):
        return None
    amount = clean_text(others[0])
    label = _name_text(name_cell)
    if (not amount or looks_numeric(amount)) and split_food_label(label)[2]:
        # The label carries its own amount, so the first cell is calories.
        return None
    brand, name = split_brand(label)
    return _entry_from_cells(brand, name, amount, figures)


def _inline_amount_layout(row: HtmlElement) -> DiaryEntry | None:
    """Name cell reading ``"Brand - Name, amount"``, then figure cells."""
    name_cells = NAME_CELL.first(row)
    if not name_cells:
        return None
    name_cell = name_cells[0]
    label = _name_text(name_cell)
    if not label:
        return None
    brand, name, amount = split_food_label(label)
    others = [cell for cell in row.xpath("./td") if cell is not name_cell]
    return _entry_from_cells(brand, name, amount, others)


ENTRY_LAYOUTS = FallbackChain(
    "entry_layout", (_separate_amount_layout, _inline_amount_layout)
)


def _parse_water(doc: HtmlElement) -> WaterIntake | None:
    counters = WATER_COUNTER.first(doc)
    if not counters:
        return None
    counter = counters[0]
    cups = WATER_CUPS.first(counter) or []
    goal = WATER_GOAL.first(counter) or []
    return WaterIntake(
        cups=parse_number(clean_text(cups[0])) if cups else 0.0,
        goal=parse_number(clean_text(goal[0])) if goal else 0.0,
    )
