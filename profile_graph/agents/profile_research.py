"""
Profile Research Agent

Scrapes a fixed set of search pages about a role and feeds the text to the
knowledge graph generator. Also hosts the plain URL scraping operation.
"""

import uuid
from typing import Any, Optional
from urllib.parse import quote

from profile_graph.agents.knowledge_graph_generator import KnowledgeGraphGenerator
from profile_graph.models.config import AppSettings
from profile_graph.models.knowledge_graph import KnowledgeGraph
from profile_graph.models.profile import ProfileInput
from profile_graph.models.scrape import ScrapeResult
from profile_graph.utils.logger import get_logger
from profile_graph.utils.text_fetcher import TextFetcher


def build_source_urls(profile: ProfileInput) -> list[str]:
    """
    Build the search pages scraped for a profile.

    LinkedIn and Reddit only; Google search pages answer headless browsers
    with a CAPTCHA.

    Args:
        profile: Profile to research

    Returns:
        URLs in a fixed order: LinkedIn search for title and company, Reddit
        search for the role's tools, Reddit search for its challenges,
        LinkedIn Learning search for the title
    """
    return [
        "https://www.linkedin.com/search/results/all/?keywords="
        + quote(f"{profile.title} {profile.company}", safe=""),
        "https://www.reddit.com/search/?q=" + quote(f"{profile.title} tools", safe=""),
        "https://www.reddit.com/search/?q="
        + quote(f"{profile.title} challenges problems", safe=""),
        "https://www.linkedin.com/learning/search?keywords="
        + quote(profile.title, safe=""),
    ]


async def research_profile(
    profile: ProfileInput,
    settings: AppSettings,
    fetcher: Optional[TextFetcher] = None,
    generator: Optional[KnowledgeGraphGenerator] = None,
    skip_scraping: bool = False,
    correlation_id: Optional[str] = None,
) -> KnowledgeGraph:
    """
    Scrape sources for a profile and generate its knowledge graph.

    Args:
        profile: Validated professional profile
        settings: Application settings
        fetcher: Optional open TextFetcher (a session is opened if None)
        generator: Optional generator (built from settings if None)
        skip_scraping: Generate from the profile alone, without loading any page
        correlation_id: Optional correlation ID for logging

    Returns:
        Generated KnowledgeGraph

    Raises:
        TextFetcherError: If a browser session is needed and cannot be started
    """
    if correlation_id is None:
        correlation_id = f"research-{uuid.uuid4().hex[:8]}"

    logger: Any = get_logger(
        correlation_id=correlation_id,
        phase="research",
        component="profile_research",
    )
    generator = generator or KnowledgeGraphGenerator(settings.completion)

    if skip_scraping:
        logger.info("Scraping skipped", title=profile.title)
        source_texts: list[str] = []
    else:
        urls = build_source_urls(profile)
        logger.info("Scraping profile sources", title=profile.title, source_count=len(urls))
        if fetcher is not None:
            source_texts = await fetcher.fetch_texts(urls)
        else:
            async with TextFetcher(settings.scraper, correlation_id) as session:
                source_texts = await session.fetch_texts(urls)
        logger.info(
            "Profile sources scraped",
            succeeded=sum(1 for text in source_texts if text),
            total=len(source_texts),
        )

    return await generator.generate(profile, source_texts, correlation_id=correlation_id)


async def scrape_urls(
    urls: list[str],
    settings: AppSettings,
    fetcher: Optional[TextFetcher] = None,
) -> list[ScrapeResult]:
    """
    Scrape a list of URLs concurrently.

    Args:
        urls: URLs to scrape
        settings: Application settings
        fetcher: Optional open TextFetcher (a session is opened if None)

    Returns:
        One ScrapeResult per URL, in input order

    Raises:
        ValueError: If urls is empty
        TextFetcherError: If the browser session cannot be started
    """
    if not urls:
        raise ValueError("Please provide an array of URLs")

    if fetcher is not None:
        return await fetcher.fetch_pages(urls)

    async with TextFetcher(settings.scraper) as session:
        return await session.fetch_pages(urls)
