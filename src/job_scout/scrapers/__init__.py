"""Job board scrapers.

This module provides one adapter per source and the immutable registry the
orchestrator resolves sources against.
"""

from functools import lru_cache
from types import MappingProxyType
from typing import Iterable, Mapping, Optional

from job_scout.exceptions import ScraperError
from job_scout.scrapers.base import BaseScraper
from job_scout.scrapers.indeed_scraper import IndeedScraper
from job_scout.scrapers.linkedin_scraper import LinkedInScraper
from job_scout.scrapers.welcometothejungle_scraper import WelcomeToTheJungleScraper
from job_scout.settings import ScraperSettings

SCRAPER_CLASSES = (LinkedInScraper, IndeedScraper, WelcomeToTheJungleScraper)


def build_scraper_registry(
    settings: Optional[ScraperSettings] = None,
    scrapers: Optional[Iterable[BaseScraper]] = None,
) -> Mapping[str, BaseScraper]:
    """
    Build a read-only {source: scraper} mapping.

    Args:
        settings: Settings passed to the default adapters
        scrapers: Explicit adapter instances (replaces the defaults)

    Returns:
        Immutable mapping keyed by each adapter's source identifier
    """
    if scrapers is None:
        scrapers = [cls(settings) for cls in SCRAPER_CLASSES]

    registry = {}
    for scraper in scrapers:
        if not scraper.source:
            raise ScraperError(f"{type(scraper).__name__} has no source identifier")
        if scraper.source in registry:
            raise ScraperError(f"Duplicate scraper for source '{scraper.source}'")
        registry[scraper.source] = scraper

    return MappingProxyType(registry)


@lru_cache(maxsize=1)
def default_registry() -> Mapping[str, BaseScraper]:
    """Process-wide registry, constructed once with default settings."""
    return build_scraper_registry()


__all__ = [
    "BaseScraper",
    "IndeedScraper",
    "LinkedInScraper",
    "WelcomeToTheJungleScraper",
    "build_scraper_registry",
    "default_registry",
]
