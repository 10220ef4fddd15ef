"""Main job search orchestrator that fans a query out across job boards."""

import logging
import re
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

import requests

from job_scout.exceptions import ScrapeBlockedError
from job_scout.logging_config import get_structured_logger
from job_scout.models import JobListing, JobSearchQuery, PartialJobListing
from job_scout.scrapers import build_scraper_registry, default_registry
from job_scout.scrapers.base import BaseScraper
from job_scout.settings import ScraperSettings, get_settings

logger = logging.getLogger(__name__)
slogger = get_structured_logger(__name__)


@dataclass
class SearchStats:
    """Counters for one search invocation."""

    sources_scraped: int = 0
    sources_skipped: int = 0
    sources_failed: int = 0
    candidates_found: int = 0
    details_fetched: int = 0
    duplicates_removed: int = 0
    excluded_by_terms: int = 0
    excluded_by_salary: int = 0
    errors: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class JobSearchOrchestrator:
    """Orchestrates one search across the requested job boards.

    Sources are processed sequentially with a pause between them; the detail
    pages of one source are fetched concurrently on a bounded thread pool.
    Nothing raised while scraping a source escapes ``search_jobs``.
    """

    def __init__(
        self,
        registry: Optional[Mapping[str, BaseScraper]] = None,
        settings: Optional[ScraperSettings] = None,
    ):
        """
        Initialize job search orchestrator.

        Args:
            registry: Read-only {source: scraper} mapping. When omitted, adapters
                are built from ``settings`` if given, else the process default
                registry is used.
            settings: Scraping settings (process default if omitted)
        """
        if registry is None:
            registry = build_scraper_registry(settings) if settings else default_registry()
        self.registry = registry
        self.settings = settings or get_settings()

    def search_jobs(self, query: JobSearchQuery) -> List[JobListing]:
        """
        Run a search and return deduplicated, filtered listings.

        Args:
            query: Validated search query

        Returns:
            Listings in source order, first occurrence of each URL kept
        """
        listings, _ = self.search_with_stats(query)
        return listings

    def search_with_stats(self, query: JobSearchQuery) -> Tuple[List[JobListing], SearchStats]:
        """Run a search and also return its statistics."""
        stats = SearchStats()
        slogger.search_status(
            "started", {"sources": list(query.sources), "keywords": query.keywords()}
        )

        all_jobs: List[JobListing] = []
        attempted = False

        for source in query.sources:
            scraper = self.registry.get(source)
            if scraper is None:
                logger.warning(f"No scraper registered for source '{source}', skipping")
                stats.sources_skipped += 1
                continue

            # Considerate-crawling pause between boards
            if attempted and self.settings.delay_between_sources > 0:
                time.sleep(self.settings.delay_between_sources)
            attempted = True

            try:
                jobs = self._scrape_source(scraper, query, stats)
                all_jobs.extend(jobs)
                stats.sources_scraped += 1
                slogger.scrape_activity(source, "completed", {"jobs": len(jobs)})

            except ScrapeBlockedError as e:
                stats.sources_failed += 1
                stats.errors.append(f"{source}: blocked ({e.reason})")
                slogger.scrape_activity(
                    source, "blocked", {"url": e.source_url, "reason": e.reason}, level="warning"
                )
            except requests.RequestException as e:
                stats.sources_failed += 1
                stats.errors.append(f"{source}: {e}")
                logger.error(f"Failed to fetch search results from {source}: {e}")
            except Exception as e:
                stats.sources_failed += 1
                stats.errors.append(f"{source}: {e}")
                logger.error(f"Unexpected error scraping {source}: {e}", exc_info=True)

        unique_jobs = deduplicate_by_url(all_jobs)
        stats.duplicates_removed = len(all_jobs) - len(unique_jobs)

        results = self._apply_filters(unique_jobs, query, stats)

        slogger.search_status("completed", {"results": len(results), **stats.to_dict()})
        if stats.errors:
            logger.warning(f"Errors encountered: {len(stats.errors)}")
            for error in stats.errors:
                logger.warning(f"  - {error}")

        return results, stats

    def _scrape_source(
        self, scraper: BaseScraper, query: JobSearchQuery, stats: SearchStats
    ) -> List[JobListing]:
        """Fetch one board's results page and the details of its first candidates."""
        url = scraper.build_search_url(query)
        slogger.scrape_activity(scraper.source, "started", {"url": url})

        html = scraper.fetch_page(url, timeout=self.settings.search_timeout)
        listings = scraper.extract_job_listings(html)
        candidates = [c for c in listings if c.is_complete()][: self.settings.max_jobs_per_source]
        stats.candidates_found += len(candidates)

        logger.info(
            f"Found {len(listings)} listings on {scraper.source}, "
            f"fetching details for {len(candidates)}"
        )

        jobs = self._fetch_details(scraper, candidates)
        stats.details_fetched += len(jobs)
        return jobs

    def _fetch_details(
        self, scraper: BaseScraper, candidates: List[PartialJobListing]
    ) -> List[JobListing]:
        """Fetch detail pages concurrently; order follows the candidates."""
        if not candidates:
            return []

        workers = min(self.settings.max_concurrent_details, len(candidates))
        with ThreadPoolExecutor(
            max_workers=workers, thread_name_prefix=f"{scraper.source}-details"
        ) as executor:
            results = list(executor.map(scraper.get_job_details, candidates))

        return [job for job in results if job is not None]

    def _apply_filters(
        self, jobs: List[JobListing], query: JobSearchQuery, stats: SearchStats
    ) -> List[JobListing]:
        """Drop listings matching exclude terms or paying below the salary floor."""
        patterns = [_term_pattern(term) for term in query.exclude_terms if term.strip()]
        results = []

        for job in jobs:
            if patterns and _matches_any(job, patterns):
                stats.excluded_by_terms += 1
                continue
            if (
                query.salary_min is not None
                and job.salary_max is not None
                and job.salary_max < query.salary_min
            ):
                stats.excluded_by_salary += 1
                continue
            results.append(job)

        return results


def deduplicate_by_url(jobs: List[JobListing]) -> List[JobListing]:
    """Keep the first listing seen for each URL, preserving order."""
    seen = set()
    unique = []
    for job in jobs:
        if job.url in seen:
            continue
        seen.add(job.url)
        unique.append(job)
    return unique


def _term_pattern(term: str) -> "re.Pattern[str]":
    # Whole words only: "stage" must not hit "backstage"
    return re.compile(rf"(?<!\w){re.escape(term.strip())}(?!\w)", re.IGNORECASE)


def _matches_any(job: JobListing, patterns: List["re.Pattern[str]"]) -> bool:
    text = f"{job.title} {job.description}"
    return any(pattern.search(text) for pattern in patterns)


def search_jobs(
    query: Union[JobSearchQuery, Dict[str, Any]],
    orchestrator: Optional[JobSearchOrchestrator] = None,
) -> List[JobListing]:
    """
    Search the requested job boards with the process-wide registry.

    Args:
        query: JobSearchQuery or its camelCase JSON form
        orchestrator: Optional pre-built orchestrator

    Returns:
        Deduplicated listings
    """
    if isinstance(query, dict):
        query = JobSearchQuery.from_dict(query)

    orchestrator = orchestrator or JobSearchOrchestrator()
    return orchestrator.search_jobs(query)
