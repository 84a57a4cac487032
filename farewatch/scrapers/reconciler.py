"""
Result reconciliation.

Merges the record extractors' output into one FareResult. Offers come from
the highest-fidelity tier that produced anything:

1. Flight cards (per-offer fields, highest fidelity)
2. Selected date-strip fare (one synthetic offer, times unresolved)
3. Page-level time slots (replace the tier 2 offer when present)
4. Page header summary (last resort)
"""

import logging
from typing import List, Optional, Sequence

from farewatch.schemas.fare import FareQuery
from farewatch.scrapers.dom import DomScope
from farewatch.scrapers.extractors import (
    extract_date_fare_points,
    extract_flight_offers,
    extract_page_summary,
    extract_time_slot_offers,
)
from farewatch.scrapers.parsers import parse_route_codes, to_numeric
from farewatch.scrapers.records import (
    DateFarePoint,
    FareResult,
    FlightOffer,
    NOT_AVAILABLE,
    PageSummary,
)

logger = logging.getLogger(__name__)


def select_cheapest(offers: Sequence[FlightOffer]) -> Optional[FlightOffer]:
    """Offer with the lowest numeric price; the first one wins a tie."""
    cheapest = None
    cheapest_value = None
    for offer in offers:
        value = to_numeric(offer.price)
        if cheapest is None or value < cheapest_value:
            cheapest, cheapest_value = offer, value
    return cheapest


class ResultReconciler:
    """Applies fallback precedence across extractor outputs for one snapshot."""

    def __init__(self, scope: DomScope, query: FareQuery):
        self.scope = scope
        self.query = query
        self.warnings: List[str] = []

    def reconcile(self) -> FareResult:
        nearby_dates = extract_date_fare_points(self.scope)
        selected = self._selected_point(nearby_dates)

        offers = extract_flight_offers(self.scope, self.query)
        summary = extract_page_summary(self.scope)

        if not offers:
            offers = self._selected_date_offer(selected)

            slot_offers = extract_time_slot_offers(
                self.scope,
                self.query,
                fallback_price=selected.price if selected else None,
            )
            if slot_offers:
                if offers:
                    logger.info("Time slots found, discarding selected-date offer")
                offers = slot_offers

        if not offers:
            offers = self._summary_offer(summary)

        logger.info(
            f"Reconciled {len(offers)} offers and {len(nearby_dates)} nearby dates "
            f"for {self.query.display_name}"
        )

        return FareResult(
            offers=tuple(offers),
            nearby_dates=tuple(nearby_dates),
            summary=None if summary.is_empty else summary,
            warnings=tuple(self.warnings),
        )

    def _selected_point(self, points: Sequence[DateFarePoint]) -> Optional[DateFarePoint]:
        selected = [point for point in points if point.is_selected]
        if len(selected) > 1:
            labels = ", ".join(point.calendar_label or "?" for point in selected)
            message = f"{len(selected)} date items marked selected ({labels})"
            logger.warning(f"Date strip anomaly: {message}")
            self.warnings.append(message)
            return None
        return selected[0] if selected else None

    def _selected_date_offer(self, selected: Optional[DateFarePoint]) -> List[FlightOffer]:
        if selected is None:
            return []

        logger.info(
            f"No flight cards found, using selected date price {selected.price.raw}"
        )
        return [FlightOffer(
            flight_number=NOT_AVAILABLE,
            departure_time=NOT_AVAILABLE,
            arrival_time=NOT_AVAILABLE,
            price=selected.price,
            duration=NOT_AVAILABLE,
            origin_code=self.query.origin,
            destination_code=self.query.destination,
            extraction_method="selected_date",
        )]

    def _summary_offer(self, summary: PageSummary) -> List[FlightOffer]:
        if not summary.min_price.is_available:
            return []

        origin, destination = parse_route_codes(summary.route) or (
            self.query.origin, self.query.destination
        )
        logger.warning(
            f"Falling back to page summary price {summary.min_price.raw} "
            f"for {origin}->{destination}"
        )
        return [FlightOffer(
            flight_number=NOT_AVAILABLE,
            departure_time=NOT_AVAILABLE,
            arrival_time=NOT_AVAILABLE,
            price=summary.min_price,
            duration=NOT_AVAILABLE,
            origin_code=origin,
            destination_code=destination,
            extraction_method="page_summary",
        )]


def extract_fares(scope: DomScope, query: FareQuery) -> FareResult:
    """Run the whole extraction pipeline against one DOM snapshot."""
    return ResultReconciler(scope, query).reconcile()
