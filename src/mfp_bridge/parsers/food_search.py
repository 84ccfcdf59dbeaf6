"""Food search results page parser."""

import re
from urllib.parse import urlsplit

from lxml.html import HtmlElement

from mfp_bridge.domain.foods import FoodSearchResponse, FoodSearchResult
from mfp_bridge.parsers.fallbacks import (
    ExtractionReport,
    FallbackChain,
    has_class,
    parse_document,
    xpath_chain,
)
from mfp_bridge.parsers.text import clean_text, parse_calories, split_brand

DEFAULT_SERVING = "1 serving"

_CALORIE_SUFFIX = re.compile(r"\d[\d,]*\s*cal.*$", re.IGNORECASE | re.DOTALL)
_RESULT_COUNT = re.compile(r"([\d,]+)\s+(?:results|foods|matches)\b", re.IGNORECASE)

# Link shapes, most specific first. Each pattern captures the segment that
# names the food.
_LINK_SHAPES = (
    re.compile(r"^/food/calories/([^/?#]+)"),
    re.compile(r"^/food/item/([^/?#]+)"),
    re.compile(r"^/food/calories-nutrition/[^/?#]+/([^/?#]+)"),
    re.compile(r"^/food/[^/?#]+/([^/?#]+)"),
)


def _search_link_items(doc: HtmlElement) -> list[HtmlElement]:
    links = doc.xpath(f"//a[{has_class('search')} and @data-external-id]")
    items = []
    for link in links:
        parents = link.xpath("./ancestor::li[1]")
        items.append(parents[0] if parents else link)
    return items


RESULT_ITEMS = xpath_chain(
    "search_results",
    f"//li[{has_class('matched-food')}]",
    f"//*[{has_class('search-result')}]",
).then(_search_link_items)

RESULT_LINK = xpath_chain(
    "result_link",
    "self::a[@href]",
    f".//a[{has_class('search')}]",
    ".//a[@href]",
)

RESULT_TITLE = xpath_chain(
    "result_title",
    f".//*[{has_class('food-title')}]",
    f".//*[{has_class('title')}]",
)

NUTRITION_INFO = xpath_chain(
    "nutrition_info",
    f".//*[{has_class('nutritional-info')}]",
    f".//*[{has_class('nutrition')}]",
    f".//*[{has_class('search-nutritional-info')}]",
)

SERVING = xpath_chain(
    "serving",
    f".//*[{has_class('serving-size')}]",
    f".//*[{has_class('serving')}]",
)

VERIFIED_BADGE = xpath_chain(
    "verified",
    f".//*[{has_class('verified')}]",
    f".//*[{has_class('checkmark')}]",
    f".//*[{has_class('mfp-verified')}]",
    ".//a[@data-verified='true']",
    "self::a[@data-verified='true']",
)

NEXT_PAGE = xpath_chain(
    "next_page",
    f"//a[{has_class('next')}]",
    f"//*[{has_class('pagination')}]//*[{has_class('next')}]",
    "//a[@rel='next']",
)

RESULT_COUNT = xpath_chain(
    "result_count",
    f"//*[{has_class('search-results-count')}]",
    f"//*[{has_class('results-count')}]",
    f"//*[{has_class('result-count')}]",
)


def _id_from_data_attribute(link: HtmlElement) -> str | None:
    return link.get("data-external-id") or None


def _id_from_href(link: HtmlElement) -> str | None:
    href = link.get("href") or ""
    path = urlsplit(href).path
    for shape in _LINK_SHAPES:
        match = shape.match(path)
        if match:
            return match.group(1)
    return None


FOOD_ID = FallbackChain("food_id", (_id_from_data_attribute, _id_from_href))


def parse_search_results(
    html: str, page: int = 1, report: ExtractionReport | None = None
) -> FoodSearchResponse:
    """Parse a food search page into results and pagination."""
    doc = parse_document(html)
    items = RESULT_ITEMS.first(doc, report) or []

    results: list[FoodSearchResult] = []
    for item in items:
        result = _parse_item(item, report)
        if result is not None:
            results.append(result)

    return FoodSearchResponse(
        results=results,
        total_results=_total_results(doc, len(results)),
        page=page,
        has_more=NEXT_PAGE.first(doc) is not None,
    )


def _parse_item(
    item: HtmlElement, report: ExtractionReport | None
) -> FoodSearchResult | None:
    links = RESULT_LINK.first(item)
    if not links:
        if report is not None:
            report.missing("result_link")
        return None
    link = links[0]
    food_id = FOOD_ID.first(link, report)
    if not food_id:
        return None

    titles = RESULT_TITLE.first(item)
    title = clean_text(titles[0]) if titles else clean_text(link)
    brand, name = split_brand(title)

    info_nodes = NUTRITION_INFO.first(item)
    info = clean_text(info_nodes[0]) if info_nodes else ""

    return FoodSearchResult(
        id=str(food_id),
        name=name or title,
        brand=brand,
        calories=parse_calories(info),
        serving_size=_serving(item, info),
        verified=VERIFIED_BADGE.first(item) is not None,
    )


def _serving(item: HtmlElement, info: str) -> str:
    nodes = SERVING.first(item)
    if nodes:
        text = clean_text(nodes[0])
        if text:
            return text
    stripped = _CALORIE_SUFFIX.sub("", info).strip(" ,")
    return stripped or DEFAULT_SERVING


def _total_results(doc: HtmlElement, fallback: int) -> int:
    nodes = RESULT_COUNT.first(doc)
    if nodes:
        match = _RESULT_COUNT.search(clean_text(nodes[0]))
        if match:
            return int(match.group(1).replace(",", ""))
    return fallback
