"""
Record extractors for the Ryanair flight selection page.

Each extractor is a pure function of a DOM scope built from the selector
cascades in ``selectors.py`` and the text parsers in ``parsers.py``.

Principles:
1. Try specific selectors first, fall back to broader patterns
2. Scope per-offer fields to their own card so they belong to the same flight
3. Never fail on missing markup - every field has a placeholder
"""

import logging
from typing import List, Optional

from farewatch.schemas.fare import FareQuery
from farewatch.scrapers import selectors
from farewatch.scrapers.cascade import resolve_all, resolve_text
from farewatch.scrapers.dom import DomScope
from farewatch.scrapers.parsers import parse_money, parse_time_of_day
from farewatch.scrapers.records import (
    DateFarePoint,
    FlightOffer,
    Money,
    NOT_AVAILABLE,
    PageSummary,
)

logger = logging.getLogger(__name__)


def _normalize_time(text: str) -> str:
    """HH:MM when text carries a clock time, otherwise text unchanged."""
    return parse_time_of_day(text) or text


# =============================================================================
# Date strip
# =============================================================================

def extract_date_fare_points(scope: DomScope) -> List[DateFarePoint]:
    """One DateFarePoint per date-strip item, in calendar order."""
    items = resolve_all(scope, selectors.DATE_ITEM)
    points = [_extract_date_fare_point(item) for item in items]

    if points:
        logger.info(
            f"Extracted {len(points)} date fare points "
            f"({sum(1 for p in points if p.is_selected)} selected)"
        )
    return points


def _extract_date_fare_point(item: DomScope) -> DateFarePoint:
    label = resolve_text(item, selectors.DATE_LABEL, default="")
    if not label:
        day = resolve_text(item, selectors.DATE_DAY_OF_MONTH, default="")
        month = resolve_text(item, selectors.DATE_MONTH, default="")
        label = " ".join(part for part in (day, month) if part)

    return DateFarePoint(
        calendar_label=label,
        weekday=resolve_text(item, selectors.DATE_WEEKDAY, default=""),
        price=parse_money(resolve_text(item, selectors.DATE_PRICE)),
        is_selected=any(item.has_class(name) for name in selectors.SELECTED_DATE_CLASSES),
    )


# =============================================================================
# Flight cards
# =============================================================================

def extract_flight_offers(scope: DomScope, query: FareQuery) -> List[FlightOffer]:
    """
    Extract one FlightOffer per flight card.

    Strategy 1 (primary): the FLIGHT_CARD cascade.
    Strategy 2 (fallback): heuristic scan for flight/card/journey-like
    elements carrying both a time-like and a price-like child.
    """
    cards = resolve_all(scope, selectors.FLIGHT_CARD)
    method = "flight_card"

    if not cards:
        cards = find_heuristic_cards(scope)
        method = "heuristic_card"
        if cards:
            logger.warning(
                f"Card selectors matched nothing, heuristic scan found {len(cards)} cards"
            )

    offers = [_extract_offer_from_card(card, query, method) for card in cards]
    if offers:
        logger.info(f"Extracted {len(offers)} flight offers via {method}")
    return offers


def find_heuristic_cards(scope: DomScope) -> List[DomScope]:
    """
    Classify elements as flight cards by a two-feature presence test.

    Candidates are elements whose class attribute contains a flight-like
    token; a candidate qualifies only when it contains both a time-like and
    a price-like sub-element.

    When qualifying elements nest, an element holding two or more others is a
    list wrapper and is dropped. Of the rest, the outermost is the card, so
    an inner time-and-price block does not cut the card's other fields off.
    """
    candidates = [
        element
        for element in scope.select(selectors.HEURISTIC_CANDIDATES)
        if any(token in element.class_name.lower() for token in selectors.HEURISTIC_CLASS_TOKENS)
    ]

    qualifying = [
        element
        for element in candidates
        if resolve_all(element, selectors.TIME_LIKE) and resolve_all(element, selectors.PRICE_LIKE)
    ]

    cards = [
        element
        for element in qualifying
        if sum(1 for other in qualifying if element.contains(other)) < 2
    ]

    return [
        element
        for element in cards
        if not any(other.contains(element) for other in cards)
    ]


def _extract_offer_from_card(card: DomScope, query: FareQuery, method: str) -> FlightOffer:
    departure = resolve_text(card, selectors.DEPARTURE_TIME)
    arrival = resolve_text(card, selectors.ARRIVAL_TIME)

    if departure == NOT_AVAILABLE or arrival == NOT_AVAILABLE:
        paired = [t.text for t in resolve_all(card, selectors.PAIRED_TIMES) if t.text]
        if departure == NOT_AVAILABLE and len(paired) > 0:
            departure = paired[0]
        if arrival == NOT_AVAILABLE and len(paired) > 1:
            arrival = paired[1]

    return FlightOffer(
        flight_number=resolve_text(card, selectors.FLIGHT_NUMBER),
        departure_time=_normalize_time(departure),
        arrival_time=_normalize_time(arrival),
        price=_extract_card_price(card),
        duration=resolve_text(card, selectors.DURATION),
        origin_code=query.origin,
        destination_code=query.destination,
        extraction_method=method,
    )


def _extract_card_price(card: DomScope) -> Money:
    price = parse_money(resolve_text(card, selectors.CARD_PRICE))
    if price.is_available and not price.currency_symbol:
        currency = resolve_text(card, selectors.CARD_CURRENCY, default="")
        if currency:
            price = Money(amount=price.amount, currency_symbol=currency, raw=price.raw)
    return price


# =============================================================================
# Page-level time slots
# =============================================================================

def extract_time_slot_offers(
    scope: DomScope,
    query: FareQuery,
    fallback_price: Optional[Money] = None,
) -> List[FlightOffer]:
    """
    One offer per page-level time slot.

    A slot without its own price inherits `fallback_price` (the selected
    date's fare), since the date strip price applies to every slot that day.
    """
    slots = resolve_all(scope, selectors.TIME_SLOT)
    offers = []

    for slot in slots:
        departure = resolve_text(slot, selectors.SLOT_DEPARTURE_TIME, default="")
        if not departure:
            departure = parse_time_of_day(slot.text) or NOT_AVAILABLE

        price = parse_money(resolve_text(slot, selectors.SLOT_PRICE))
        if not price.is_available and fallback_price is not None:
            price = fallback_price

        offers.append(FlightOffer(
            flight_number=resolve_text(slot, selectors.FLIGHT_NUMBER),
            departure_time=_normalize_time(departure),
            arrival_time=_normalize_time(resolve_text(slot, selectors.SLOT_ARRIVAL_TIME)),
            price=price,
            duration=resolve_text(slot, selectors.DURATION),
            origin_code=query.origin,
            destination_code=query.destination,
            extraction_method="time_slot",
        ))

    if offers:
        logger.info(f"Extracted {len(offers)} time slot offers")
    return offers


# =============================================================================
# Page-level summary
# =============================================================================

def extract_page_summary(scope: DomScope) -> PageSummary:
    """Route, date, passengers and minimum price from the results header."""
    return PageSummary(
        route=resolve_text(scope, selectors.SUMMARY_ROUTE),
        date=resolve_text(scope, selectors.SUMMARY_DATE),
        passenger_summary=resolve_text(scope, selectors.SUMMARY_PASSENGERS),
        min_price=parse_money(resolve_text(scope, selectors.SUMMARY_MIN_PRICE)),
    )
