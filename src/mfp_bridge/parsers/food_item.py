"""Food item page parser used before adding a food to the diary."""

from mfp_bridge.domain.foods import FoodItemForm
from mfp_bridge.parsers.fallbacks import (
    ExtractionReport,
    has_class,
    parse_document,
    xpath_chain,
)
from mfp_bridge.parsers.text import clean_text

DEFAULT_SERVING = "1 serving"

FORM_TOKEN = xpath_chain(
    "authenticity_token",
    "//input[@name='authenticity_token'][normalize-space(@value)]/@value",
    "//meta[@name='csrf-token'][normalize-space(@content)]/@content",
)

FOOD_NAME = xpath_chain(
    "food_name",
    "//h1",
    f"//*[{has_class('food-name')}]",
)

SERVING = xpath_chain(
    "serving",
    "//select[@name='serving']/option[@selected]",
    f"//*[{has_class('serving-size')}]",
)


def parse_food_item(
    html: str, report: ExtractionReport | None = None
) -> FoodItemForm:
    """Extract the form token, display name and default serving."""
    doc = parse_document(html)

    tokens = FORM_TOKEN.first(doc, report) or []
    names = FOOD_NAME.first(doc, report) or []
    servings = SERVING.first(doc) or []

    return FoodItemForm(
        token=str(tokens[0]).strip() if tokens else "",
        name=clean_text(names[0]) if names else "",
        serving=(clean_text(servings[0]) if servings else "") or DEFAULT_SERVING,
    )
