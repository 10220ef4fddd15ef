"""Base scraper class for all job board adapters."""

import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Dict, List, Optional

import requests

from job_scout.constants import (
    BLOCKED_STATUS_CODES,
    COMPANY_NOT_FOUND,
    DEFAULT_COUNTRY,
    DEFAULT_LOCATION,
    DESCRIPTION_NOT_AVAILABLE,
    LOCATION_NOT_SPECIFIED,
    SENTINEL_VALUES,
)
from job_scout.exceptions import ScrapeBlockedError
from job_scout.models import JobListing, JobSearchQuery, PartialJobListing
from job_scout.scrapers.field_extractors import (
    extract_contract_type,
    extract_salary,
    extract_technologies,
    generate_id,
    is_remote,
)
from job_scout.scrapers.text_sanitizer import build_full_url, clean_text
from job_scout.settings import ScraperSettings, get_settings

logger = logging.getLogger(__name__)


class BaseScraper(ABC):
    """Abstract base class for job board adapters.

    Subclasses implement the three site-specific operations:

    - ``build_search_url(query)``: search page URL in the site's own
      query-string contract
    - ``extract_job_listings(html)``: PartialJobListing stubs from a results page
    - ``extract_job_details(html)``: company/description/location from a job
      page, with sentinel strings when a field cannot be found

    ``get_job_details`` is the shared fetch-and-assemble pipeline and is not
    meant to be overridden. Adapters hold no per-request state, so one
    instance per source is shared across searches and threads.

    Detail dictionary returned by ``extract_job_details``:
    {
        "company": str,       # or "Company not found"
        "description": str,   # or "Description not available"
        "location": str,      # or "Location not specified"
    }
    """

    source: str = ""
    base_url: str = ""

    def __init__(self, settings: Optional[ScraperSettings] = None):
        """Initialize the scraper with scraping settings (process defaults if omitted)."""
        self.settings = settings or get_settings()

    @abstractmethod
    def build_search_url(self, query: JobSearchQuery) -> str:
        """
        Build the search results URL for a query.

        Returns:
            Absolute URL including keyword, location, recency and (when
            ``query.remote_only``) remote filter parameters.
        """
        pass

    @abstractmethod
    def extract_job_listings(self, html: str) -> List[PartialJobListing]:
        """
        Parse job cards from a search results page.

        Returns:
            One stub per card that has both a title and a URL, in page order.
            Cards missing either are skipped.
        """
        pass

    @abstractmethod
    def extract_job_details(self, html: str) -> Dict[str, str]:
        """
        Parse a single job detail page.

        Returns:
            Detail dictionary (see class docstring).
        """
        pass

    def _make_listing(
        self, url: str, title: str, company: str = "", location: str = ""
    ) -> Optional[PartialJobListing]:
        """Build a stub from card values, or None when title or URL is missing."""
        title = clean_text(title)
        if not title or not url:
            return None

        return PartialJobListing(
            url=build_full_url(url, self.base_url),
            title=title,
            source=self.source,
            company=clean_text(company) or None,
            location=clean_text(location) or None,
        )

    @staticmethod
    def _with_sentinels(company: str, description: str, location: str) -> Dict[str, str]:
        return {
            "company": clean_text(company) or COMPANY_NOT_FOUND,
            "description": clean_text(description) or DESCRIPTION_NOT_AVAILABLE,
            "location": clean_text(location) or LOCATION_NOT_SPECIFIED,
        }

    def fetch_page(self, url: str, timeout: float) -> str:
        """
        Fetch a page with browser headers.

        Args:
            url: Page URL
            timeout: Request timeout in seconds

        Returns:
            Response body

        Raises:
            ScrapeBlockedError: If the site answered with a bot-wall status
            requests.RequestException: On network errors or other non-2xx responses
        """
        response = requests.get(url, headers=self.settings.headers(), timeout=timeout)
        if response.status_code in BLOCKED_STATUS_CODES:
            raise ScrapeBlockedError(url, f"HTTP {response.status_code}: {response.reason}")
        response.raise_for_status()
        return response.text

    def get_job_details(self, partial_job: PartialJobListing) -> Optional[JobListing]:
        """
        Fetch a job's detail page and assemble the complete listing.

        Never raises: incomplete stubs and every fetch or parse failure give None
        so one broken job page cannot abort a batch.

        Args:
            partial_job: Stub from ``extract_job_listings``

        Returns:
            Assembled JobListing, or None
        """
        if not partial_job.is_complete():
            return None

        try:
            html = self.fetch_page(partial_job.url, timeout=self.settings.detail_timeout)
            details = self.extract_job_details(html)
        except ScrapeBlockedError as e:
            logger.warning(f"Detail page blocked for {self.source}: {e.reason} ({partial_job.url})")
            return None
        except requests.RequestException as e:
            logger.warning(f"Failed to get job details for {self.source} ({partial_job.url}): {e}")
            return None
        except Exception as e:
            logger.error(
                f"Unexpected error parsing job details for {self.source} ({partial_job.url}): {e}",
                exc_info=True,
            )
            return None

        return self._assemble(partial_job, details)

    def _assemble(self, partial_job: PartialJobListing, details: Dict[str, str]) -> JobListing:
        """Combine a stub and its detail fields into a JobListing."""
        company = _known(details.get("company"))
        description = _known(details.get("description"))
        location = _known(details.get("location"))

        title = clean_text(partial_job.title)
        salary = extract_salary(description)
        now = datetime.now(timezone.utc).isoformat()

        return JobListing(
            id=generate_id(partial_job.url),
            title=title,
            company=company or clean_text(partial_job.company) or COMPANY_NOT_FOUND,
            description=description or DESCRIPTION_NOT_AVAILABLE,
            url=partial_job.url,
            location=location or clean_text(partial_job.location) or DEFAULT_LOCATION,
            country=DEFAULT_COUNTRY,
            source=partial_job.source,
            technologies=extract_technologies(description, title),
            remote=is_remote(description),
            contract_type=extract_contract_type(description),
            salary_min=salary.get("min"),
            salary_max=salary.get("max"),
            salary_range=salary.get("range"),
            posted_at=now,
            scraped_at=now,
        )


def _known(value: Optional[str]) -> str:
    """Clean a detail field, mapping sentinel strings to ""."""
    value = clean_text(value)
    return "" if value in SENTINEL_VALUES else value
