"""LinkedIn job search adapter.

Targets the logged-out (guest) job search pages, which render results
server-side as ``ul.jobs-search__results-list > li`` cards.
"""

import logging
from typing import Dict, List
from urllib.parse import urlencode

from job_scout.constants import DEFAULT_LOCATION, LINKEDIN
from job_scout.models import JobSearchQuery, PartialJobListing
from job_scout.scrapers.base import BaseScraper
from job_scout.scrapers.selectors import first_match, parse_html, select_cards

logger = logging.getLogger(__name__)

PAST_24_HOURS = "r86400"
REMOTE_WORKPLACE_TYPE = "2"

CARD_SELECTORS = (
    ".jobs-search__results-list li",
    '[data-automation-id="job-card"]',
    ".job-search-card",
)
TITLE_SELECTORS = (
    ".base-search-card__title",
    ".base-card__full-link",
    '[data-automation-id="job-title"]',
)
URL_SELECTORS = (
    ".base-card__full-link@href",
    '[data-automation-id="job-title"]@href',
    'a[href*="/jobs/view/"]@href',
)
COMPANY_SELECTORS = (
    ".base-search-card__subtitle a",
    ".base-search-card__subtitle",
    '[data-automation-id="company-name"]',
)
LOCATION_SELECTORS = (
    ".job-search-card__location",
    ".job-card-container__metadata-item",
    '[data-automation-id="location"]',
)

DETAIL_COMPANY_SELECTORS = (
    ".topcard__org-name-link",
    ".top-card-layout__card",
    '[data-automation-id="companyName"]',
    ".job-details-jobs-unified-top-card__company-name a",
)
DETAIL_DESCRIPTION_SELECTORS = (
    ".description__text",
    ".show-more-less-html__markup",
    ".jobs-description__content",
)
DETAIL_LOCATION_SELECTORS = (
    ".topcard__flavor--bullet",
    ".top-card-layout__secondary-text",
    '[data-automation-id="location"]',
    ".job-details-jobs-unified-top-card__bullet-item-v2",
)


class LinkedInScraper(BaseScraper):
    """Scraper for LinkedIn job search.

    Usage:
        scraper = LinkedInScraper()
        url = scraper.build_search_url(query)
        listings = scraper.extract_job_listings(html)
        job = scraper.get_job_details(listings[0])
    """

    source = LINKEDIN
    base_url = "https://www.linkedin.com"

    def build_search_url(self, query: JobSearchQuery) -> str:
        params = {
            "keywords": query.keywords(),
            "location": query.location or DEFAULT_LOCATION,
            "f_TPR": PAST_24_HOURS,
        }
        if query.remote_only:
            params["f_WT"] = REMOTE_WORKPLACE_TYPE

        return f"{self.base_url}/jobs/search/?{urlencode(params)}"

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

        logger.debug(f"Extracted {len(results)} LinkedIn listings")
        return results

    def extract_job_details(self, html: str) -> Dict[str, str]:
        soup = parse_html(html)
        return self._with_sentinels(
            company=first_match(soup, DETAIL_COMPANY_SELECTORS),
            description=first_match(soup, DETAIL_DESCRIPTION_SELECTORS),
            location=first_match(soup, DETAIL_LOCATION_SELECTORS),
        )
