"""
Tests for the Playwright scraper orchestration.

The browser is replaced with mocks; the page serves fixture HTML so the
real extraction pipeline runs against it.
"""
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from playwright.async_api import TimeoutError as PlaywrightTimeout

from html_pages import DATE_STRIP_HTML, E2E_CARDS_HTML
from farewatch.config import Settings
from farewatch.scrapers.records import FareResult
from farewatch.scrapers.ryanair import RyanairScraper, ScrapeResult


@pytest.fixture
def settings(tmp_path):
    return Settings(
        settle_delay_seconds=0,
        screenshots_dir=str(tmp_path / "screenshots"),
        html_snapshots_dir=str(tmp_path / "html"),
    )


def make_page(html: str) -> MagicMock:
    page = MagicMock()
    page.goto = AsyncMock()
    page.wait_for_selector = AsyncMock()
    page.click = AsyncMock()
    page.screenshot = AsyncMock()
    page.content = AsyncMock(return_value=f"<html><body>{html}</body></html>")
    return page


@pytest.fixture
def browser_for():
    """Patch async_playwright so a scrape lands on the given page mock."""
    patchers = []

    def _browser_for(page):
        context = MagicMock()
        context.new_page = AsyncMock(return_value=page)
        context.close = AsyncMock()

        browser = MagicMock()
        browser.new_context = AsyncMock(return_value=context)
        browser.close = AsyncMock()

        pw = MagicMock()
        pw.chromium.launch = AsyncMock(return_value=browser)
        pw.stop = AsyncMock()

        starter = MagicMock()
        starter.start = AsyncMock(return_value=pw)

        patcher = patch("farewatch.scrapers.ryanair.async_playwright", return_value=starter)
        patcher.start()
        patchers.append(patcher)
        return browser

    yield _browser_for

    for patcher in patchers:
        patcher.stop()


class TestScrapeResult:
    """Tests for ScrapeResult defaults."""

    def test_defaults(self):
        result = ScrapeResult(status="timeout")
        assert result.fares == FareResult()
        assert result.is_success is False
        assert result.has_offers is False
        assert result.duration_ms == 0


class TestExtractFromPage:
    """Tests for the single-snapshot extraction hand-off."""

    async def test_snapshots_page_once(self, settings, query):
        page = make_page(E2E_CARDS_HTML)
        fares = await RyanairScraper(settings).extract_from_page(page, query)
        assert len(fares.offers) == 2
        page.content.assert_awaited_once()


class TestScrapeFares:
    """Tests for scrape_fares() outcome classification."""

    async def test_success(self, settings, query, browser_for):
        page = make_page(DATE_STRIP_HTML + E2E_CARDS_HTML)
        browser = browser_for(page)

        result = await RyanairScraper(settings).scrape_fares(query)

        assert result.status == "success"
        assert result.is_success
        assert len(result.fares.offers) == 2
        assert len(result.fares.nearby_dates) == 3
        assert result.screenshot_path is None
        browser.close.assert_awaited_once()

    async def test_navigates_to_results_url(self, settings, query, browser_for):
        page = make_page(E2E_CARDS_HTML)
        browser_for(page)

        await RyanairScraper(settings).scrape_fares(query)

        url = page.goto.await_args.args[0]
        assert "/trip/flights/select?" in url
        assert "originIata=BUD" in url
        assert page.goto.await_args.kwargs["wait_until"] == "networkidle"

    async def test_layout_change_saves_artifacts(self, settings, query, browser_for, tmp_path):
        page = make_page("<div></div>")
        browser_for(page)

        result = await RyanairScraper(settings).scrape_fares(query)

        assert result.status == "layout_change"
        assert result.has_offers is False
        assert result.html_snapshot_path is not None
        assert result.html_snapshot_path.startswith(str(tmp_path))
        assert "layout_change" in result.html_snapshot_path
        page.screenshot.assert_awaited_once()

    async def test_timeout(self, settings, query, browser_for):
        page = make_page("")
        page.goto = AsyncMock(side_effect=PlaywrightTimeout("t"))
        browser = browser_for(page)

        result = await RyanairScraper(settings).scrape_fares(query)

        assert result.status == "timeout"
        assert result.fares == FareResult()
        assert "timed out" in result.error_message
        browser.close.assert_awaited_once()

    async def test_missing_cookie_dialog_is_not_fatal(self, settings, query, browser_for):
        page = make_page(E2E_CARDS_HTML)
        page.wait_for_selector = AsyncMock(side_effect=PlaywrightTimeout("t"))
        browser_for(page)

        result = await RyanairScraper(settings).scrape_fares(query)

        assert result.status == "success"
        page.click.assert_not_awaited()

    async def test_unexpected_error(self, settings, query, browser_for):
        page = make_page("")
        page.goto = AsyncMock(side_effect=RuntimeError("net::ERR_NAME_NOT_RESOLVED"))
        browser = browser_for(page)

        result = await RyanairScraper(settings).scrape_fares(query)

        assert result.status == "unknown"
        assert "ERR_NAME_NOT_RESOLVED" in result.error_message
        browser.close.assert_awaited_once()

    async def test_browser_launch_failure(self, settings, query):
        pw = MagicMock()
        pw.chromium.launch = AsyncMock(
            side_effect=RuntimeError("Executable doesn't exist at /ms-playwright/chromium")
        )
        pw.stop = AsyncMock()
        starter = MagicMock()
        starter.start = AsyncMock(return_value=pw)

        with patch("farewatch.scrapers.ryanair.async_playwright", return_value=starter):
            result = await RyanairScraper(settings).scrape_fares(query)

        assert result.status == "unknown"
        assert "Executable doesn't exist" in result.error_message
        assert result.screenshot_path is None
        assert result.html_snapshot_path is None
        pw.stop.assert_awaited_once()
