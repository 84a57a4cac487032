"""
Tests for the command line interface.
"""
from unittest.mock import AsyncMock, patch

from click.testing import CliRunner
from tabulate import tabulate

from html_pages import DATE_STRIP_HTML, E2E_CARDS_HTML
from farewatch.cli import OFFER_HEADERS, cli, offer_rows
from farewatch.scrapers.parsers import parse_money
from farewatch.scrapers.records import FlightOffer
from farewatch.scrapers.reconciler import extract_fares
from farewatch.scrapers.ryanair import ScrapeResult


def run_search(args, result=None):
    with patch("farewatch.cli.RyanairScraper") as scraper_cls:
        scraper_cls.return_value.scrape_fares = AsyncMock(return_value=result)
        return CliRunner().invoke(cli, ["search", *args]), scraper_cls


class TestSearch:
    """Tests for the search command."""

    def test_prints_tables_and_cheapest(self, scope_from, query):
        result = ScrapeResult(
            status="success",
            fares=extract_fares(scope_from(DATE_STRIP_HTML, E2E_CARDS_HTML), query),
        )

        outcome, scraper_cls = run_search(
            ["BUD", "MAN", "2025-08-22", "--adults", "2", "--teens", "2"], result
        )

        assert outcome.exit_code == 0, outcome.output
        assert "Flight Prices:" in outcome.output
        assert "Prices for nearby dates:" in outcome.output
        assert "Cheapest flight: FR 3125" in outcome.output
        assert "Price: €45.50" in outcome.output
        assert "Departure: 18:05, Arrival: 19:30" in outcome.output

        sent = scraper_cls.return_value.scrape_fares.await_args.args[0]
        assert sent.party.adults == 2
        assert sent.party.teens == 2

    def test_no_flights(self):
        outcome, _ = run_search(["BUD", "MAN", "2025-08-22"], ScrapeResult(status="layout_change"))
        assert outcome.exit_code == 0
        assert "No flights found for this date." in outcome.output

    def test_same_airports_rejected(self):
        outcome, scraper_cls = run_search(["BUD", "bud", "2025-08-22"])
        assert outcome.exit_code == 2
        assert "must differ" in outcome.output
        scraper_cls.return_value.scrape_fares.assert_not_called()

    def test_bad_date_rejected(self):
        outcome, _ = run_search(["BUD", "MAN", "22/08/2025"])
        assert outcome.exit_code == 2


class TestTables:
    """Tests for the offer and nearby-date tables."""

    def test_offer_rows_share_a_line(self, scope_from, query):
        result = ScrapeResult(
            status="success",
            fares=extract_fares(scope_from(DATE_STRIP_HTML, E2E_CARDS_HTML), query),
        )

        outcome, _ = run_search(["BUD", "MAN", "2025-08-22"], result)

        lines = outcome.output.splitlines()
        header = next(line for line in lines if line.split()[:2] == ["Flight", "Departure"])
        assert header.split() == ["Flight", "Departure", "Arrival", "Price", "Duration"]
        row = next(line for line in lines if line.startswith("FR 3125"))
        assert row.split() == ["FR", "3125", "18:05", "19:30", "€45.50", "2h", "25m"]

    def test_selected_date_marked(self, scope_from, query):
        result = ScrapeResult(
            status="success",
            fares=extract_fares(scope_from(DATE_STRIP_HTML), query),
        )

        outcome, _ = run_search(["BUD", "MAN", "2025-08-22"], result)

        row = next(line for line in outcome.output.splitlines() if line.startswith("22 Aug"))
        assert row.split() == ["22", "Aug", "Fri", "45", "Ft", "*"]

    def test_prices_kept_as_text(self):
        rows = offer_rows([
            FlightOffer(
                flight_number="FR 1",
                departure_time="06:25",
                arrival_time="07:50",
                price=parse_money("1,234.50"),
                duration="2h 25m",
                origin_code="BUD",
                destination_code="MAN",
            )
        ])
        table = tabulate(rows, headers=OFFER_HEADERS, disable_numparse=True)
        assert "1,234.50" in table
