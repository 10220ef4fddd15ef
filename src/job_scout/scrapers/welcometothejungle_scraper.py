"""Welcome to the Jungle job search adapter.

WTTJ ships generated class names (``wh-jx-*``, ``sc-*``) that change with
every front-end release, so the chains below fall back to ``data-testid``
attributes and plain structural selectors.
"""

import logging
from typing import Dict, List
from urllib.parse import urlencode

from job_scout.constants import DEFAULT_LOCATION, WELCOME_TO_THE_JUNGLE
from job_scout.models import JobSearchQuery, PartialJobListing
from job_scout.scrapers.base import BaseScraper
from job_scout.scrapers.selectors import first_match, parse_html, select_cards

logger = logging.getLogger(__name__)

REMOTE_CONTRACT_TYPE = "FULL_TIME_REMOTE"

CARD_SELECTORS = (
    ".wui-grid .wui-grid-item",
    '[data-testid="job-card"]',
    '[data-testid="search-results-list-item-wrapper"]',
    ".job-card",
    "article",
    ".sc-1g0y0qj-0",
)
TITLE_SELECTORS = (
    ".wh-jx-iboGJB",
    '[data-testid="job-title"]',
    "h3",
    "h4",
    ".sc-1b9rrsc-0",
)
URL_SELECTORS = (
    "a@href",
    '[href*="/fr/companies/"]@href',
    'a[href*="/jobs/"]@href',
)
COMPANY_SELECTORS = (
    ".wh-jx-hfjyAG",
    '[data-testid="company-name"]',
    ".company-name",
    ".sc-1g0y0qj-1",
)
LOCATION_SELECTORS = (
    ".location",
    '[data-testid="location"]',
    ".job-location",
)

DETAIL_COMPANY_SELECTORS = (
    ".wh-jx-hlXceE",
    '[data-testid="company-name"]',
    ".company-info h3",
    ".sc-1b9rrsc-2",
    ".sc-1f14bvs-3",
)
DETAIL_DESCRIPTION_SELECTORS = (
    ".wh-jx-jkMRMX",
    '[data-testid="job-description"]',
    ".description-section",
    ".sc-1b9rrsc-4",
    'section[class*="description"]',
)
DETAIL_LOCATION_SELECTORS = (
    ".wh-jx-ehQYlW",
    '[data-testid="location"]',
    ".location-section",
    ".sc-1b9rrsc-5",
    'div[class*="location"]',
)


class WelcomeToTheJungleScraper(BaseScraper):
    """Scraper for welcometothejungle.com (French site)."""

    source = WELCOME_TO_THE_JUNGLE
    base_url = "https://www.welcometothejungle.com"

    def build_search_url(self, query: JobSearchQuery) -> str:
        params = {
            "query": query.keywords(),
            "location": query.location or DEFAULT_LOCATION,
            "sortBy": "mostRecent",
        }
        if query.remote_only:
            params["contract_type"] = REMOTE_CONTRACT_TYPE
        params["page"] = "1"

        return f"{self.base_url}/fr/jobs?{urlencode(params)}"

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

        logger.debug(f"Extracted {len(results)} Welcome to the Jungle listings")
        return results

    def extract_job_details(self, html: str) -> Dict[str, str]:
        soup = parse_html(html)
        return self._with_sentinels(
            company=first_match(soup, DETAIL_COMPANY_SELECTORS),
            description=first_match(soup, DETAIL_DESCRIPTION_SELECTORS),
            location=first_match(soup, DETAIL_LOCATION_SELECTORS),
        )
