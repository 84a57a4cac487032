"""Value objects produced by the fare extraction pipeline."""

from dataclasses import dataclass
from typing import Optional, Tuple

NOT_AVAILABLE = "N/A"


@dataclass(frozen=True)
class Money:
    """A price as shown on the page, split into amount and currency symbol."""
    amount: str
    currency_symbol: str = ""
    raw: str = NOT_AVAILABLE

    @property
    def is_available(self) -> bool:
        return self.amount != NOT_AVAILABLE

    def __str__(self) -> str:
        return self.raw


UNKNOWN_PRICE = Money(amount=NOT_AVAILABLE, currency_symbol="", raw=NOT_AVAILABLE)


@dataclass(frozen=True)
class DateFarePoint:
    """Lowest fare for one day of the date strip."""
    calendar_label: str
    weekday: str
    price: Money
    is_selected: bool = False


@dataclass(frozen=True)
class FlightOffer:
    """One priced flight option."""
    flight_number: str
    departure_time: str
    arrival_time: str
    price: Money
    duration: str
    origin_code: str
    destination_code: str
    extraction_method: str = "flight_card"  # flight_card, heuristic_card, time_slot, selected_date, page_summary


@dataclass(frozen=True)
class PageSummary:
    """Page-wide header information used as a last-resort fare source."""
    route: str = NOT_AVAILABLE
    date: str = NOT_AVAILABLE
    passenger_summary: str = NOT_AVAILABLE
    min_price: Money = UNKNOWN_PRICE

    @property
    def is_empty(self) -> bool:
        return (
            self.route == NOT_AVAILABLE
            and self.date == NOT_AVAILABLE
            and self.passenger_summary == NOT_AVAILABLE
            and not self.min_price.is_available
        )


@dataclass(frozen=True)
class FareResult:
    """Everything extracted from one rendered results page."""
    offers: Tuple[FlightOffer, ...] = ()
    nearby_dates: Tuple[DateFarePoint, ...] = ()
    summary: Optional[PageSummary] = None
    warnings: Tuple[str, ...] = ()

    @property
    def selected_dates(self) -> Tuple[DateFarePoint, ...]:
        return tuple(point for point in self.nearby_dates if point.is_selected)
