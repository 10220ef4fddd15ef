"""Indeed (France) job search adapter."""

import logging
from typing import Dict, List
from urllib.parse import urlencode

from job_scout.constants import DEFAULT_LOCATION, INDEED
from job_scout.models import JobSearchQuery, PartialJobListing
from job_scout.scrapers.base import BaseScraper
from job_scout.scrapers.selectors import first_match, parse_html, select_cards

logger = logging.getLogger(__name__)

# Indeed's "Télétravail" attribute filter
REMOTE_FILTER = "0kf:attr(DSQF7);"

CARD_SELECTORS = (
    ".job_seen_beacon",
    '[data-testid="job-card"]',
    ".jobsearch-ResultsList > li",
)
TITLE_SELECTORS = (
    ".jobTitle",
    '[data-testid="job-title"]',
    "h2 a span[title]",
)
URL_SELECTORS = (
    ".jcs-JobTitle@href",
    '[data-testid="job-title"]@href',
    '[data-testid="job-title"] a@href',
    "h2 a@href",
)
COMPANY_SELECTORS = (
    ".companyName",
    '[data-testid="company-name"]',
)
LOCATION_SELECTORS = (
    ".companyLocation",
    '[data-testid="text-location"]',
    '[data-testid="job-location"]',
)

DETAIL_COMPANY_SELECTORS = (
    '[data-testid="inlineHeader-companyName"]',
    ".jobsearch-CompanyInfoWithoutHeaderImage",
    ".job-company-name",
)
DETAIL_DESCRIPTION_SELECTORS = (
    "#jobDescriptionText",
    "#jobDescription",
    ".job-description",
)
DETAIL_LOCATION_SELECTORS = (
    '[data-testid="job-location"]',
    '[data-testid="inlineHeader-companyLocation"]',
    ".jobsearch-JobInfoHeader-item",
    ".job-location",
)


class IndeedScraper(BaseScraper):
    """Scraper for indeed.fr search results (newest first, last 24 hours)."""

    source = INDEED
    base_url = "https://www.indeed.fr"

    def build_search_url(self, query: JobSearchQuery) -> str:
        params = {
            "q": query.keywords(),
            "l": query.location or DEFAULT_LOCATION,
            "sort": "date",
            "fromage": "1",
        }
        if query.remote_only:
            params["sc"] = REMOTE_FILTER

        return f"{self.base_url}/jobs?{urlencode(params)}"

    def extract_job_listings(self, html: str) -> List[PartialJobListing]:
        soup = parse_html(html)
        results = []

        for card in select_cards(soup, CARD_SELECTORS):
            listing = self._make_listing(
                url=first_match(card, URL_SELECTORS),
                title=first_match(card, TITLE_SELECTORS),
                company=first_match(card, COMPANY_SELECTORS),
                location=first_match(card, LOCATION_SELECTORS),
            )
            if listing:
                results.append(listing)

        logger.debug(f"Extracted {len(results)} Indeed listings")
        return results

    def extract_job_details(self, html: str) -> Dict[str, str]:
        soup = parse_html(html)
        return self._with_sentinels(
            company=first_match(soup, DETAIL_COMPANY_SELECTORS),
            description=first_match(soup, DETAIL_DESCRIPTION_SELECTORS),
            location=first_match(soup, DETAIL_LOCATION_SELECTORS),
        )
