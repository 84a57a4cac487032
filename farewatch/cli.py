from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from typing import List, Sequence

import click
from pydantic import ValidationError
from tabulate import tabulate

from farewatch.config import get_settings
from farewatch.schemas.fare import FareQuery, PartyComposition
from farewatch.scrapers.reconciler import select_cheapest
from farewatch.scrapers.records import DateFarePoint, FlightOffer
from farewatch.scrapers.ryanair import RyanairScraper

logger = logging.getLogger(__name__)


OFFER_HEADERS = ["Flight", "Departure", "Arrival", "Price", "Duration"]
DATE_HEADERS = ["Date", "Day", "Price", "Selected"]


def offer_rows(offers: Sequence[FlightOffer]) -> List[List[str]]:
    return [
        [o.flight_number, o.departure_time, o.arrival_time, o.price.raw, o.duration]
        for o in offers
    ]


def date_rows(points: Sequence[DateFarePoint]) -> List[List[str]]:
    return [
        [p.calendar_label, p.weekday, p.price.raw, "*" if p.is_selected else ""]
        for p in points
    ]


@click.group()
def cli() -> None:
    """Ryanair fare lookup."""
    logging.basicConfig(
        level=get_settings().log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


@cli.command()
@click.argument("origin")
@click.argument("destination")
@click.argument("date", type=click.DateTime(formats=["%Y-%m-%d"]))
@click.option("--adults", default=1, show_default=True, help="Number of adults")
@click.option("--teens", default=0, show_default=True, help="Number of teens")
@click.option("--children", default=0, show_default=True, help="Number of children")
@click.option("--infants", default=0, show_default=True, help="Number of infants")
def search(
    origin: str,
    destination: str,
    date: datetime,
    adults: int,
    teens: int,
    children: int,
    infants: int,
) -> None:
    """Show flights and nearby date prices for ORIGIN to DESTINATION on DATE."""
    try:
        query = FareQuery(
            origin=origin,
            destination=destination,
            departure_date=date.date(),
            party=PartyComposition(
                adults=adults, teens=teens, children=children, infants=infants
            ),
        )
    except ValidationError as exc:
        raise click.UsageError("; ".join(err["msg"] for err in exc.errors()))

    party = query.party
    click.echo(
        f"Checking flights from {query.origin} to {query.destination} on "
        f"{query.departure_date.isoformat()} for {party.adults} adults, {party.teens} teens, "
        f"{party.children} children, and {party.infants} infants"
    )

    result = asyncio.run(RyanairScraper().scrape_fares(query))
    fares = result.fares

    if result.error_message:
        logger.warning(f"Scrape finished with {result.status}: {result.error_message}")

    click.echo("\nFlight Prices:")
    click.echo(tabulate(offer_rows(fares.offers), headers=OFFER_HEADERS, disable_numparse=True))

    click.echo("\nPrices for nearby dates:")
    click.echo(tabulate(date_rows(fares.nearby_dates), headers=DATE_HEADERS, disable_numparse=True))

    for warning in fares.warnings:
        click.echo(f"\nWarning: {warning}")

    cheapest = select_cheapest(fares.offers)
    if cheapest is None:
        click.echo("\nNo flights found for this date.")
        return

    click.echo(f"\nCheapest flight: {cheapest.flight_number}")
    click.echo(f"Price: {cheapest.price.raw}")
    click.echo(f"Departure: {cheapest.departure_time}, Arrival: {cheapest.arrival_time}")
    click.echo(f"Duration: {cheapest.duration}")


if __name__ == "__main__":
    cli()
