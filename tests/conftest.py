"""
Test fixtures for farewatch tests.
"""
from datetime import date

import pytest
from httpx import AsyncClient, ASGITransport

from farewatch.schemas.fare import FareQuery, PartyComposition
from farewatch.scrapers.dom import SoupScope


@pytest.fixture
def query():
    return FareQuery(
        origin="BUD",
        destination="MAN",
        departure_date=date(2025, 8, 22),
        party=PartyComposition(adults=2, teens=2),
    )


@pytest.fixture
def scope_from():
    """Build a SoupScope from one or more HTML fragments."""
    def _scope_from(*fragments: str) -> SoupScope:
        return SoupScope.from_html("<html><body>" + "".join(fragments) + "</body></html>")

    return _scope_from


@pytest.fixture(scope="function")
def scraper_override():
    """Holder for the scraper instance the API should use."""
    return {}


@pytest.fixture(scope="function")
async def client(scraper_override):
    """
    Create an async test client with the scraper dependency overridden.
    """
    from farewatch.api.fares import get_scraper
    from farewatch.main import app

    app.dependency_overrides[get_scraper] = lambda: scraper_override["scraper"]

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    # Clear overrides after test
    app.dependency_overrides.clear()
