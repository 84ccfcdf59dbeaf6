"""Weight progress report parser."""

import re

from lxml.html import HtmlElement

from mfp_bridge.domain.weight import WeightEntry, WeightHistoryResponse, WeightUnit
from mfp_bridge.parsers.fallbacks import (
    ExtractionReport,
    FallbackChain,
    has_class,
    parse_document,
    xpath_chain,
)
from mfp_bridge.parsers.text import clean_text, parse_loose_date, parse_number

DEFAULT_UNIT: WeightUnit = "lb"

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_KG = re.compile(r"\bkgs?\b")

UNIT_LABEL = xpath_chain(
    "weight_unit",
    f"//*[{has_class('weight-unit')}]",
    f"//*[{has_class('unit-label')}]",
    "//th[contains(translate(., 'KG', 'kg'), 'kg')]",
)

WEIGHT_ROWS = xpath_chain(
    "weight_rows",
    f"//table[{has_class('weight-table')}]//tr",
    f"//*[{has_class('weight-history')}]//tr",
    f"//*[{has_class('weight-entries')}]//li",
)

DATE_CELL = xpath_chain("weight_date", f".//*[{has_class('date')}]", "./td[1]")

WEIGHT_CELL = xpath_chain("weight_value", f".//*[{has_class('weight')}]", "./td[2]")

CURRENT_WEIGHT = xpath_chain(
    "current_weight",
    f"//*[{has_class('current-weight')}]",
    f"//*[{has_class('weight-current')}]",
)

GOAL_WEIGHT = xpath_chain(
    "goal_weight",
    f"//*[{has_class('goal-weight')}]",
    f"//*[{has_class('weight-goal')}]",
)

START_WEIGHT = xpath_chain(
    "start_weight",
    f"//*[{has_class('start-weight')}]",
    f"//*[{has_class('weight-start')}]",
)


def parse_weight_history(
    html: str,
    limit: int = 30,
    start_date: str | None = None,
    end_date: str | None = None,
    report: ExtractionReport | None = None,
) -> WeightHistoryResponse:
    """Parse weigh-ins and summary weights from the progress report page."""
    doc = parse_document(html)
    unit = detect_unit(doc)

    entries: list[WeightEntry] = []
    for row in WEIGHT_ROWS.first(doc, report) or []:
        if len(entries) >= limit:
            break
        if row.xpath("./th"):
            continue
        entry = _parse_row(row, unit)
        if entry is None or not _in_range(entry.date, start_date, end_date):
            continue
        entries.append(entry)

    current = _figure(doc, CURRENT_WEIGHT)
    if current is None and entries:
        current = entries[0].weight
    start_weight = _figure(doc, START_WEIGHT)
    if start_weight is None and entries:
        start_weight = entries[-1].weight

    return WeightHistoryResponse(
        entries=entries,
        unit=unit,
        current=current,
        goal=_figure(doc, GOAL_WEIGHT),
        start_weight=start_weight,
    )


def detect_unit(doc: HtmlElement) -> WeightUnit:
    """Return the page-wide weight unit, defaulting to pounds."""
    labels = UNIT_LABEL.first(doc)
    if not labels:
        return DEFAULT_UNIT
    text = " ".join(clean_text(label) for label in labels).lower()
    return "kg" if _KG.search(text) else DEFAULT_UNIT


def _parse_row(row: HtmlElement, unit: WeightUnit) -> WeightEntry | None:
    dates = DATE_CELL.first(row)
    weights = WEIGHT_CELL.first(row)
    date_text = clean_text(dates[0]) if dates else ""
    weight_text = clean_text(weights[0]) if weights else ""
    if not date_text or not weight_text:
        return None
    return WeightEntry(
        date=parse_loose_date(date_text),
        weight=parse_number(weight_text),
        unit=unit,
    )


def _in_range(day: str, start_date: str | None, end_date: str | None) -> bool:
    if not _ISO_DATE.match(day):
        return True
    if start_date and day < start_date:
        return False
    return not (end_date and day > end_date)


def _figure(doc: HtmlElement, chain: FallbackChain) -> float | None:
    nodes = chain.first(doc)
    if not nodes:
        return None
    text = clean_text(nodes[0])
    if not text:
        return None
    return parse_number(text)
