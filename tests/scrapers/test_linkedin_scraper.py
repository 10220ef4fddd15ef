"""Tests for the LinkedIn adapter."""

from urllib.parse import parse_qs, urlparse

import pytest

from job_scout.models import JobSearchQuery, PartialJobListing
from job_scout.scrapers.linkedin_scraper import LinkedInScraper
from job_scout.settings import ScraperSettings


@pytest.fixture
def scraper():
    return LinkedInScraper(ScraperSettings())


def _query(**overrides):
    values = {"sources": ["linkedin"], "poste": "React Developer"}
    values.update(overrides)
    return JobSearchQuery(**values)


def _params(url):
    return {key: values[0] for key, values in parse_qs(urlparse(url).query).items()}


class TestBuildSearchUrl:
    """Test LinkedIn search URL construction."""

    def test_basic_query(self, scraper):
        url = scraper.build_search_url(_query())
        parsed = urlparse(url)
        params = _params(url)

        assert f"{parsed.scheme}://{parsed.netloc}" == "https://www.linkedin.com"
        assert parsed.path == "/jobs/search/"
        assert params["keywords"] == "React Developer"
        assert params["location"] == "France"
        assert params["f_TPR"] == "r86400"
        assert "f_WT" not in params

    def test_technologies_in_keywords(self, scraper):
        url = scraper.build_search_url(_query(poste="Developer", technologies=["React", "TypeScript"]))

        assert _params(url)["keywords"] == "Developer React TypeScript"

    def test_remote_filter(self, scraper):
        url = scraper.build_search_url(_query(remote_only=True))

        assert _params(url)["f_WT"] == "2"

    def test_custom_location(self, scraper):
        url = scraper.build_search_url(_query(location="Paris"))

        assert _params(url)["location"] == "Paris"

    def test_accented_keywords_encoded(self, scraper):
        url = scraper.build_search_url(_query(poste="Développeur"))

        assert " " not in url
        assert _params(url)["keywords"] == "Développeur"


class TestExtractJobListings:
    """Test LinkedIn results page parsing."""

    def test_results_list_cards(self, scraper):
        html = """
        <div class="jobs-search__results-list">
          <li>
            <h3 class="base-card__full-link">Senior React Developer</h3>
            <a class="base-card__full-link" href="/jobs/view/12345/"></a>
            <span class="base-search-card__subtitle">
              <a>Tech Corp</a>
            </span>
            <span class="job-card-container__metadata-item">Paris, France</span>
          </li>
          <li>
            <h3 class="base-card__full-link">Frontend Developer</h3>
            <a class="base-card__full-link" href="/jobs/view/67890/"></a>
            <span class="base-search-card__subtitle">
              <a>StartupXYZ</a>
            </span>
            <span class="job-card-container__metadata-item">Remote</span>
          </li>
        </div>
        """

        results = scraper.extract_job_listings(html)

        assert results == [
            PartialJobListing(
                url="https://www.linkedin.com/jobs/view/12345/",
                title="Senior React Developer",
                source="linkedin",
                company="Tech Corp",
                location="Paris, France",
            ),
            PartialJobListing(
                url="https://www.linkedin.com/jobs/view/67890/",
                title="Frontend Developer",
                source="linkedin",
                company="StartupXYZ",
                location="Remote",
            ),
        ]

    def test_guest_search_card_markup(self, scraper):
        html = """
        <ul class="jobs-search__results-list">
          <li>
            <div class="base-search-card">
              <a class="base-card__full-link" href="https://fr.linkedin.com/jobs/view/999?refId=x">
                <span class="sr-only">Data Engineer</span>
              </a>
              <h3 class="base-search-card__title">
                Data Engineer
              </h3>
              <h4 class="base-search-card__subtitle"><a>DataCo</a></h4>
              <span class="job-search-card__location">Nantes, Pays de la Loire, France</span>
            </div>
          </li>
        </ul>
        """

        results = scraper.extract_job_listings(html)

        assert len(results) == 1
        assert results[0].url == "https://fr.linkedin.com/jobs/view/999?refId=x"
        assert results[0].title == "Data Engineer"
        assert results[0].company == "DataCo"
        assert results[0].location == "Nantes, Pays de la Loire, France"

    def test_alternative_selectors(self, scraper):
        html = """
        <div>
          <div data-automation-id="job-card">
            <h3 data-automation-id="job-title">Backend Developer</h3>
            <a data-automation-id="job-title" href="/jobs/view/11111/"></a>
            <span data-automation-id="company-name">DevInc</span>
            <span data-automation-id="location">Lyon</span>
          </div>
        </div>
        """

        results = scraper.extract_job_listings(html)

        assert len(results) == 1
        assert results[0].to_dict() == {
            "url": "https://www.linkedin.com/jobs/view/11111/",
            "title": "Backend Developer",
            "source": "linkedin",
            "company": "DevInc",
            "location": "Lyon",
        }

    def test_skips_cards_without_title_or_url(self, scraper):
        html = """
        <div class="jobs-search__results-list">
          <li>
            <span class="base-search-card__subtitle"><a>Tech Corp</a></span>
          </li>
          <li>
            <h3 class="base-card__full-link">Some Job</h3>
          </li>
        </div>
        """

        assert scraper.extract_job_listings(html) == []

    def test_empty_html(self, scraper):
        assert scraper.extract_job_listings("") == []

    def test_malformed_html(self, scraper):
        assert scraper.extract_job_listings("<div>Invalid HTML content</div>") == []


class TestExtractJobDetails:
    """Test LinkedIn job page parsing."""

    def test_primary_selectors(self, scraper):
        html = """
        <div class="top-card-layout__card">
          <h2>Tech Company</h2>
        </div>
        <div class="description__text">
          <p>We are looking for a skilled React developer with experience in TypeScript and Node.js.</p>
          <p>This is a full-time position offering competitive salary.</p>
        </div>
        <div class="top-card-layout__secondary-text">
          <span>Paris, Île-de-France, France</span>
        </div>
        """

        details = scraper.extract_job_details(html)

        assert details["company"] == "Tech Company"
        assert "skilled React developer" in details["description"]
        assert "TypeScript and Node.js" in details["description"]
        assert details["location"] == "Paris, Île-de-France, France"

    def test_alternative_selectors(self, scraper):
        html = """
        <div>
          <div data-automation-id="companyName">Alternate Company</div>
          <div class="show-more-less-html__markup">
            Job description with React skills required
          </div>
          <div data-automation-id="location">Marseille, France</div>
        </div>
        """

        details = scraper.extract_job_details(html)

        assert details["company"] == "Alternate Company"
        assert details["description"] == "Job description with React skills required"
        assert details["location"] == "Marseille, France"

    def test_fallback_values(self, scraper):
        details = scraper.extract_job_details("<div>No job details here</div>")

        assert details == {
            "company": "Company not found",
            "description": "Description not available",
            "location": "Location not specified",
        }

    def test_empty_html(self, scraper):
        details = scraper.extract_job_details("")

        assert details["company"] == "Company not found"
        assert details["description"] == "Description not available"
        assert details["location"] == "Location not specified"

    def test_partial_information(self, scraper):
        html = '<div><div class="top-card-layout__card">Available Company</div></div>'

        details = scraper.extract_job_details(html)

        assert details["company"] == "Available Company"
        assert details["description"] == "Description not available"
        assert details["location"] == "Location not specified"


def test_source_identifier(scraper):
    assert scraper.source == "linkedin"
