from pydantic import BaseModel, Field, field_validator, model_validator
from datetime import date
from typing import List, Optional

from farewatch.scrapers.parsers import parse_duration_minutes
from farewatch.scrapers.records import DateFarePoint, FlightOffer, Money


class PartyComposition(BaseModel):
    adults: int = Field(default=1, ge=1, le=25)
    teens: int = Field(default=0, ge=0, le=25)
    children: int = Field(default=0, ge=0, le=25)
    infants: int = Field(default=0, ge=0, le=25)

    @model_validator(mode="after")
    def infants_need_adults(self):
        if self.infants > self.adults:
            raise ValueError("Each infant must travel with an adult")
        return self

    @property
    def total(self) -> int:
        return self.adults + self.teens + self.children + self.infants

    class Config:
        frozen = True


class FareQuery(BaseModel):
    """Immutable search input, validated once at the orchestration boundary."""
    origin: str
    destination: str
    departure_date: date
    party: PartyComposition = Field(default_factory=PartyComposition)

    @field_validator("origin", "destination")
    @classmethod
    def iata_code(cls, value: str) -> str:
        code = value.strip().upper()
        if len(code) != 3 or not code.isalpha():
            raise ValueError(f"'{value}' is not a three-letter IATA code")
        return code

    @model_validator(mode="after")
    def distinct_airports(self):
        if self.origin == self.destination:
            raise ValueError("Origin and destination must differ")
        return self

    @property
    def display_name(self) -> str:
        return f"{self.origin}->{self.destination} on {self.departure_date.isoformat()}"

    class Config:
        frozen = True


class FareSearchRequest(BaseModel):
    origin: str
    destination: str
    departure_date: date
    adults: int = 1
    teens: int = 0
    children: int = 0
    infants: int = 0

    def to_query(self) -> FareQuery:
        return FareQuery(
            origin=self.origin,
            destination=self.destination,
            departure_date=self.departure_date,
            party=PartyComposition(
                adults=self.adults,
                teens=self.teens,
                children=self.children,
                infants=self.infants,
            ),
        )


class MoneyResponse(BaseModel):
    amount: str
    currency_symbol: str
    display: str


class FlightOfferResponse(BaseModel):
    flight_number: str
    departure_time: str
    arrival_time: str
    price: MoneyResponse
    duration: str
    duration_minutes: Optional[int] = None
    origin_code: str
    destination_code: str
    extraction_method: str


class DateFarePointResponse(BaseModel):
    calendar_label: str
    weekday: str
    price: MoneyResponse
    is_selected: bool


class FareSearchResponse(BaseModel):
    status: str
    query: FareQuery
    offers: List[FlightOfferResponse] = []
    nearby_dates: List[DateFarePointResponse] = []
    cheapest: Optional[FlightOfferResponse] = None
    warnings: List[str] = []
    error_message: Optional[str] = None
    duration_ms: int = 0


def money_response(money: Money) -> MoneyResponse:
    return MoneyResponse(
        amount=money.amount,
        currency_symbol=money.currency_symbol,
        display=money.raw,
    )


def offer_response(offer: FlightOffer) -> FlightOfferResponse:
    return FlightOfferResponse(
        flight_number=offer.flight_number,
        departure_time=offer.departure_time,
        arrival_time=offer.arrival_time,
        price=money_response(offer.price),
        duration=offer.duration,
        duration_minutes=parse_duration_minutes(offer.duration),
        origin_code=offer.origin_code,
        destination_code=offer.destination_code,
        extraction_method=offer.extraction_method,
    )


def date_fare_point_response(point: DateFarePoint) -> DateFarePointResponse:
    return DateFarePointResponse(
        calendar_label=point.calendar_label,
        weekday=point.weekday,
        price=money_response(point.price),
        is_selected=point.is_selected,
    )
