"""
Selector cascades.

A cascade is an ordered tuple of strategies for one logical field, from the
most specific (test attributes) to the most generic (substring-matched class
names). Strategies are tried strictly in order and the first one that finds
something wins; later strategies are never queried.

Query failures from the DOM capability are not caught here: a scope that
cannot be queried is a broken collaborator, not missing markup.
"""

import logging
from dataclasses import dataclass
from typing import List, Sequence

from farewatch.scrapers.dom import DomScope
from farewatch.scrapers.records import NOT_AVAILABLE

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SelectorStrategy:
    """One way of locating a field. Lower level means more specific."""
    name: str
    selector: str
    level: int = 0


Cascade = Sequence[SelectorStrategy]


def resolve_text(
    scope: DomScope,
    strategies: Cascade,
    default: str = NOT_AVAILABLE,
) -> str:
    """
    Return the trimmed text of the first element found by the cascade.

    A strategy succeeds when it matches at least one element with non-empty
    text; the first such element's text is returned. Falls back to `default`.
    """
    for strategy in strategies:
        for element in scope.select(strategy.selector):
            text = element.text.strip()
            if text:
                logger.debug(
                    f"Resolved {text[:40]!r} via {strategy.name} (level {strategy.level})"
                )
                return text
    return default


def resolve_all(scope: DomScope, strategies: Cascade) -> List[DomScope]:
    """Return every element matched by the first strategy that matches any."""
    for strategy in strategies:
        elements = scope.select(strategy.selector)
        if elements:
            logger.debug(
                f"Matched {len(elements)} elements via {strategy.name} (level {strategy.level})"
            )
            return list(elements)
    return []
