"""Scrape result model for the URL scraping command."""

from typing import Optional

from pydantic import BaseModel, Field


class ScrapeResult(BaseModel):
    """Outcome of loading a single URL in the headless browser.

    Attributes:
        url: URL that was requested
        success: True if the page loaded and its text was extracted
        title: Page title (successful loads only)
        text_content: Preview of the page's visible text (successful loads only)
        error: Error message (failed loads only)
    """

    url: str
    success: bool
    title: Optional[str] = None
    text_content: Optional[str] = Field(
        default=None, description="First characters of the visible text"
    )
    error: Optional[str] = None
