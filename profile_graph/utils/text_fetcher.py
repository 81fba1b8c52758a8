"""Headless browser text fetching.

One browser per session (local Chromium, or Browserless when a key is
configured); one page per URL. Page failures never propagate: fetch_text
degrades to empty text and fetch_page to a failed ScrapeResult.
"""

import asyncio
from types import TracebackType
from typing import Any, Optional

from playwright.async_api import Browser, Playwright, async_playwright

from profile_graph.models.config import ScraperSettings
from profile_graph.models.scrape import ScrapeResult
from profile_graph.utils.logger import get_logger

CHROMIUM_ARGS = [
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
    "--disable-accelerated-2d-canvas",
    "--no-first-run",
    "--no-zygote",
    "--disable-gpu",
]


class TextFetcherError(Exception):
    """Raised when the browser session cannot be started."""

    pass


class TextFetcher:
    """Loads pages in a headless browser and extracts their visible text.

    Usage:
        async with TextFetcher(settings) as fetcher:
            texts = await fetcher.fetch_texts(urls)
    """

    def __init__(self, settings: ScraperSettings, correlation_id: Optional[str] = None):
        """Initialize text fetcher.

        Args:
            settings: Browser, viewport and timeout configuration
            correlation_id: Unique ID for tracing the scraping session
        """
        self.settings = settings
        self.correlation_id = correlation_id
        self.logger: Any = get_logger(
            correlation_id=correlation_id,
            phase="scraping",
            component="text_fetcher",
        )
        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None

    async def __aenter__(self) -> "TextFetcher":
        await self.start()
        return self

    async def __aexit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        await self.close()

    async def start(self) -> None:
        """Launch a local browser or connect to Browserless.

        Raises:
            TextFetcherError: If no browser could be started
        """
        try:
            self._playwright = await async_playwright().start()
            if self.settings.use_browserless:
                self.logger.info("Connecting to Browserless")
                endpoint = (
                    f"{self.settings.browserless_endpoint}"
                    f"?token={self.settings.browserless_api_key}"
                )
                self._browser = await self._playwright.chromium.connect_over_cdp(endpoint)
            else:
                self.logger.info(
                    "Browserless API key not configured, launching local browser"
                )
                self._browser = await self._playwright.chromium.launch(
                    headless=True, args=CHROMIUM_ARGS
                )
        except Exception as e:
            self.logger.error(
                "Browser start failed", error_type=type(e).__name__, error=str(e)
            )
            await self.close()
            raise TextFetcherError(f"Could not start browser: {e}") from e

    async def close(self) -> None:
        """Close the browser and stop Playwright."""
        if self._browser is not None:
            await self._browser.close()
            self._browser = None
        if self._playwright is not None:
            await self._playwright.stop()
            self._playwright = None

    async def _load(self, url: str) -> tuple[str, str]:
        """Load a page and return its (title, visible text)."""
        if self._browser is None:
            raise TextFetcherError("TextFetcher used outside of its session")

        page = await self._browser.new_page(
            viewport={
                "width": self.settings.viewport_width,
                "height": self.settings.viewport_height,
            },
            user_agent=self.settings.user_agent,
        )
        try:
            await page.goto(
                url,
                wait_until="networkidle",
                timeout=self.settings.timeout * 1000,
            )
            title = await page.title()
            text = await page.evaluate("() => document.body.innerText")
            return title, text or ""
        finally:
            await page.close()

    async def fetch_text(self, url: str) -> tuple[str, bool]:
        """Fetch the visible text of a page.

        Args:
            url: URL to load

        Returns:
            Tuple of (text, ok); failures yield ("", False)
        """
        self.logger.info("Scraping source", url=url)
        try:
            _, text = await self._load(url)
        except Exception as e:
            self.logger.error(
                "Source scraping failed",
                url=url,
                error_type=type(e).__name__,
                error=str(e),
            )
            return "", False

        self.logger.info("Source scraped", url=url, content_length=len(text))
        return text, True

    async def fetch_page(self, url: str) -> ScrapeResult:
        """Fetch a page's title and a preview of its text.

        Args:
            url: URL to load

        Returns:
            ScrapeResult; success=False with the error message on failure
        """
        self.logger.info("Scraping URL", url=url)
        try:
            title, text = await self._load(url)
        except Exception as e:
            self.logger.error(
                "URL scraping failed",
                url=url,
                error_type=type(e).__name__,
                error=str(e),
            )
            return ScrapeResult(url=url, success=False, error=str(e) or type(e).__name__)

        preview = text[: self.settings.preview_chars] + "..."
        return ScrapeResult(url=url, success=True, title=title, text_content=preview)

    async def fetch_texts(self, urls: list[str]) -> list[str]:
        """Fetch all URLs concurrently; results keep the input order."""
        results = await asyncio.gather(*(self.fetch_text(url) for url in urls))
        return [text for text, _ in results]

    async def fetch_pages(self, urls: list[str]) -> list[ScrapeResult]:
        """Fetch all URLs concurrently; results keep the input order."""
        return list(await asyncio.gather(*(self.fetch_page(url) for url in urls)))
