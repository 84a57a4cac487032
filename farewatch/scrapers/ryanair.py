import asyncio
import logging
from datetime import datetime, timezone
from dataclasses import dataclass, field
from typing import Optional, Literal
from pathlib import Path
from playwright.async_api import async_playwright, Page, TimeoutError as PlaywrightTimeout

from farewatch.config import Settings, get_settings
from farewatch.schemas.fare import FareQuery
from farewatch.scrapers import selectors
from farewatch.scrapers.dom import SoupScope
from farewatch.scrapers.reconciler import extract_fares
from farewatch.scrapers.records import FareResult
from farewatch.utils.url_builder import build_ryanair_url

logger = logging.getLogger(__name__)


# Failure reason classification
FailureReason = Literal[
    "success",
    "timeout",
    "layout_change",
    "no_results",
    "unknown"
]


@dataclass
class ScrapeResult:
    """Complete result of a scrape attempt with failure classification."""
    status: FailureReason
    fares: FareResult = field(default_factory=FareResult)
    screenshot_path: Optional[str] = None
    html_snapshot_path: Optional[str] = None
    error_message: Optional[str] = None
    duration_ms: int = 0

    @property
    def is_success(self) -> bool:
        return self.status == "success"

    @property
    def has_offers(self) -> bool:
        return len(self.fares.offers) > 0


class RyanairScraper:
    """
    Ryanair fare scraper.

    Drives a fresh Chromium instance per scrape to the flight selection page,
    dismisses the cookie dialog, waits for fares to render and hands a single
    HTML snapshot to the extraction pipeline.
    """

    # Browser launch arguments for headless operation
    BROWSER_ARGS = [
        "--disable-notifications",
        "--no-sandbox",
        "--disable-dev-shm-usage",
        "--disable-gpu",
        "--disable-setuid-sandbox",
    ]

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self.screenshots_dir = Path(self.settings.screenshots_dir)
        self.html_dir = Path(self.settings.html_snapshots_dir)

        self._playwright = None
        self._browser = None

    def _elapsed_ms(self, start_time: datetime) -> int:
        return int((datetime.now(timezone.utc) - start_time).total_seconds() * 1000)

    async def _accept_cookies(self, page: Page) -> None:
        try:
            await page.wait_for_selector(
                selectors.COOKIE_ACCEPT, timeout=self.settings.cookie_timeout_ms
            )
            await page.click(selectors.COOKIE_ACCEPT)
            logger.info("Accepted cookies")
        except PlaywrightTimeout:
            logger.info("No cookie dialog found or already accepted")

    async def _wait_for_fares(self, page: Page) -> bool:
        """Wait until any fare-bearing element renders. Returns False on timeout."""
        try:
            await page.wait_for_selector(
                ", ".join(selectors.READY_SELECTORS),
                timeout=self.settings.results_timeout_ms,
            )
            return True
        except PlaywrightTimeout:
            return False

    async def _save_artifacts(
        self,
        page: Page,
        query: FareQuery,
        reason: str
    ) -> tuple[Optional[str], Optional[str]]:
        """
        Save screenshot and HTML snapshot for debugging.

        Returns: (screenshot_path, html_path)
        """
        timestamp = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")
        prefix = f"{query.origin}_{query.destination}_{query.departure_date.isoformat()}_{timestamp}_{reason}"

        screenshot_path: Optional[str] = None
        html_path: Optional[str] = None

        try:
            self.screenshots_dir.mkdir(parents=True, exist_ok=True)
            screenshot_file = self.screenshots_dir / f"{prefix}.png"
            await page.screenshot(path=str(screenshot_file), full_page=True)
            screenshot_path = str(screenshot_file)
        except Exception as e:
            logger.warning(f"Failed to save screenshot: {e}")

        try:
            self.html_dir.mkdir(parents=True, exist_ok=True)
            html_file = self.html_dir / f"{prefix}.html"
            html_file.write_text(await page.content(), encoding="utf-8")
            html_path = str(html_file)
        except Exception as e:
            logger.warning(f"Failed to save HTML snapshot: {e}")

        return screenshot_path, html_path

    async def extract_from_page(self, page: Page, query: FareQuery) -> FareResult:
        """Snapshot the rendered page once and run the extraction pipeline on it."""
        html = await page.content()
        return extract_fares(SoupScope.from_html(html), query)

    async def scrape_fares(self, query: FareQuery) -> ScrapeResult:
        """
        Scrape fares for one query with failure classification.

        Returns ScrapeResult with:
        - status: success/timeout/layout_change/no_results/unknown
        - fares: FareResult (empty on failure)
        - screenshot_path/html_snapshot_path: artifacts on failure or in debug mode
        - error_message: Human-readable error description
        """
        start_time = datetime.now(timezone.utc)
        context = None
        page = None

        try:
            self._playwright = await async_playwright().start()
            self._browser = await self._playwright.chromium.launch(
                headless=self.settings.headless,
                args=self.BROWSER_ARGS
            )

            context = await self._browser.new_context(
                viewport={"width": 1366, "height": 768},
                user_agent=self.settings.user_agent,
            )

            page = await context.new_page()
            page.set_default_navigation_timeout(self.settings.navigation_timeout_ms)

            url = build_ryanair_url(query, self.settings.base_url, self.settings.market)
            logger.info(f"Navigating to flight selection page for {query.display_name}")

            try:
                await page.goto(url, wait_until="networkidle")
            except PlaywrightTimeout:
                screenshot_path, html_path = await self._save_artifacts(page, query, "timeout")
                return ScrapeResult(
                    status="timeout",
                    error_message=(
                        f"Page load timed out after "
                        f"{self.settings.navigation_timeout_ms // 1000} seconds"
                    ),
                    screenshot_path=screenshot_path,
                    html_snapshot_path=html_path,
                    duration_ms=self._elapsed_ms(start_time),
                )

            await self._accept_cookies(page)

            if not await self._wait_for_fares(page):
                logger.warning(f"No fare elements rendered for {query.display_name}")

            await asyncio.sleep(self.settings.settle_delay_seconds)

            fares = await self.extract_from_page(page, query)

            screenshot_path = html_path = None
            if self.settings.debug_screenshots:
                screenshot_path, html_path = await self._save_artifacts(page, query, "debug")

            if fares.offers:
                logger.info(
                    f"Found {len(fares.offers)} flights for {query.display_name}, "
                    f"{len(fares.nearby_dates)} nearby dates"
                )
                return ScrapeResult(
                    status="success",
                    fares=fares,
                    screenshot_path=screenshot_path,
                    html_snapshot_path=html_path,
                    duration_ms=self._elapsed_ms(start_time),
                )

            if not screenshot_path:
                screenshot_path, html_path = await self._save_artifacts(
                    page, query, "no_results" if fares.nearby_dates else "layout_change"
                )

            if fares.nearby_dates:
                return ScrapeResult(
                    status="no_results",
                    fares=fares,
                    error_message="No flights found for this date",
                    screenshot_path=screenshot_path,
                    html_snapshot_path=html_path,
                    duration_ms=self._elapsed_ms(start_time),
                )

            return ScrapeResult(
                status="layout_change",
                fares=fares,
                error_message="No fare elements matched any selector - page structure may have changed",
                screenshot_path=screenshot_path,
                html_snapshot_path=html_path,
                duration_ms=self._elapsed_ms(start_time),
            )

        except Exception as e:
            logger.error(f"Scrape failed for {query.display_name}: {e}")
            screenshot_path = html_path = None
            if page is not None:
                screenshot_path, html_path = await self._save_artifacts(page, query, "unknown")
            return ScrapeResult(
                status="unknown",
                error_message=f"Unexpected error: {str(e)}",
                screenshot_path=screenshot_path,
                html_snapshot_path=html_path,
                duration_ms=self._elapsed_ms(start_time),
            )

        finally:
            if context is not None:
                try:
                    await context.close()
                except Exception as e:
                    logger.debug(f"Context close failed: {e}")

            await self._cleanup_browser()

    async def _cleanup_browser(self):
        """Clean up browser and playwright instances."""
        if self._browser:
            try:
                await self._browser.close()
            except Exception as e:
                logger.debug(f"Browser close failed: {e}")
            self._browser = None

        if self._playwright:
            try:
                await self._playwright.stop()
            except Exception as e:
                logger.debug(f"Playwright stop failed: {e}")
            self._playwright = None
        logger.info("Browser closed")
