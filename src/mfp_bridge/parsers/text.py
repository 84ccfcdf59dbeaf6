"""Text and number normalization for scraped cells."""

import re
from datetime import datetime

from lxml.html import HtmlElement

_NON_NUMERIC = re.compile(r"[^0-9.\-]")
_LEADING_NUMBER = re.compile(r"-?(?:\d+\.?\d*|\.\d+)")
_CALORIES = re.compile(r"(\d[\d,]*)\s*cal", re.IGNORECASE)
_BRAND_NAME_AMOUNT = re.compile(r"^(?P<brand>.+?) - (?P<name>.+), (?P<amount>[^,]+)$")
_NAME_AMOUNT = re.compile(r"^(?P<name>.+), (?P<amount>[^,]+)$")
_BRAND_SEPARATOR = " - "

_DATE_FORMATS = (
    "%Y-%m-%d",
    "%m/%d/%Y",
    "%m/%d/%y",
    "%b %d, %Y",
    "%B %d, %Y",
    "%d %b %Y",
    "%d %B %Y",
    "%a, %b %d, %Y",
    "%A, %B %d, %Y",
)


def parse_number(text: str | None) -> float:
    """Parse cell text like ``"1,234 cal"`` into a float, or 0.0."""
    if not text:
        return 0.0
    cleaned = _NON_NUMERIC.sub("", text)
    match = _LEADING_NUMBER.match(cleaned)
    if match is None:
        return 0.0
    return float(match.group(0))


def looks_numeric(text: str) -> bool:
    """Return whether text reads as a bare figure such as ``1,234`` or ``12%``."""
    stripped = text.strip().replace(",", "").rstrip("%").strip()
    if not stripped:
        return False
    return _LEADING_NUMBER.fullmatch(stripped) is not None


def split_brand(text: str) -> tuple[str | None, str]:
    """Split ``"Brand - Name"`` into brand and name."""
    if _BRAND_SEPARATOR not in text:
        return None, text.strip()
    brand, *rest = text.split(_BRAND_SEPARATOR)
    name = _BRAND_SEPARATOR.join(rest).strip()
    if not brand.strip() or not name:
        return None, text.strip()
    return brand.strip(), name


def split_food_label(text: str) -> tuple[str | None, str, str]:
    """Split a diary label into brand, name and serving amount.

    Tried in order: ``"Brand - Name, amount"``, ``"Name, amount"``, then the
    whole label as the name with an empty amount.
    """
    label = " ".join(text.split())
    match = _BRAND_NAME_AMOUNT.match(label)
    if match:
        return (
            match.group("brand").strip(),
            match.group("name").strip(),
            match.group("amount").strip(),
        )
    match = _NAME_AMOUNT.match(label)
    if match:
        brand, name = split_brand(match.group("name"))
        return brand, name, match.group("amount").strip()
    brand, name = split_brand(label)
    return brand, name, ""


def parse_calories(text: str) -> float:
    """Find the first ``<number> cal`` figure in free text."""
    match = _CALORIES.search(text)
    if match is None:
        return 0.0
    return float(match.group(1).replace(",", ""))


def parse_loose_date(text: str) -> str:
    """Normalize a date to ``YYYY-MM-DD``, returning the input when unparseable."""
    cleaned = " ".join(text.split())
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(cleaned, fmt).date().isoformat()
        except ValueError:
            continue
    return text


def clean_text(node: HtmlElement | None) -> str:
    """Return whitespace-collapsed text content of a node."""
    if node is None:
        return ""
    return " ".join(node.text_content().split())
