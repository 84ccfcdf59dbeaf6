"""Ordered selector fallbacks for pages whose markup drifts over time.

A field is located by a :class:`FallbackChain`: a named, ordered tuple of
strategies. Each strategy receives a node and returns a value; the first
non-empty value wins. Support for a new page variant is added by appending a
strategy, never by editing the existing ones.

Misses never raise. Callers that want to know what was not found pass an
:class:`ExtractionReport`, which collects the names of chains (and other
labels) that came up empty.
"""

from collections.abc import Callable
from dataclasses import dataclass, field

import lxml.html
from lxml import etree
from lxml.html import HtmlElement

Strategy = Callable[[HtmlElement], object]


def has_class(name: str) -> str:
    """Return an XPath predicate matching a whole class token."""
    return f"contains(concat(' ', normalize-space(@class), ' '), ' {name} ')"


def class_tokens(node: HtmlElement) -> set[str]:
    """Return the set of class tokens on a node."""
    return set((node.get("class") or "").split())


def parse_document(html: str) -> HtmlElement:
    """Parse an HTML page, yielding an empty document for blank input."""
    try:
        return lxml.html.document_fromstring(html)
    except (etree.ParserError, ValueError):
        return lxml.html.document_fromstring("<html><body></body></html>")


def xpath_strategy(expression: str) -> Strategy:
    """Build a strategy returning the nodes (or strings) an XPath matches."""

    def strategy(node: HtmlElement) -> object:
        return node.xpath(expression)

    return strategy


def _is_present(value: object) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    if isinstance(value, (list, tuple)):
        return len(value) > 0
    return True


@dataclass
class ExtractionReport:
    """Collects the sections, rows and elements a parser could not find."""

    missed: list[str] = field(default_factory=list)

    def missing(self, label: str) -> None:
        """Record a label that was expected but not found."""
        self.missed.append(label)


@dataclass(frozen=True)
class FallbackChain:
    """Named, ordered extraction strategies for a single field."""

    name: str
    strategies: tuple[Strategy, ...]

    def first(
        self, node: HtmlElement, report: ExtractionReport | None = None
    ) -> object | None:
        """Return the first non-empty strategy result, or ``None``."""
        for strategy in self.strategies:
            value = strategy(node)
            if _is_present(value):
                return value
        if report is not None:
            report.missing(self.name)
        return None

    def then(self, *strategies: Strategy) -> "FallbackChain":
        """Return a copy with extra strategies appended."""
        return FallbackChain(self.name, self.strategies + strategies)


def xpath_chain(name: str, *expressions: str) -> FallbackChain:
    """Build a chain of XPath strategies tried in order."""
    return FallbackChain(name, tuple(xpath_strategy(expr) for expr in expressions))
