"""Tests for the Indeed adapter."""

from urllib.parse import parse_qs, urlparse

import pytest

from job_scout.models import JobSearchQuery
from job_scout.scrapers.indeed_scraper import IndeedScraper
from job_scout.settings import ScraperSettings


@pytest.fixture
def scraper():
    return IndeedScraper(ScraperSettings())


def _query(**overrides):
    values = {"sources": ["indeed"], "poste": "React Developer"}
    values.update(overrides)
    return JobSearchQuery(**values)


def _params(url):
    return {key: values[0] for key, values in parse_qs(urlparse(url).query).items()}


class TestBuildSearchUrl:
    """Test Indeed search URL construction."""

    def test_basic_query(self, scraper):
        url = scraper.build_search_url(_query())
        parsed = urlparse(url)
        params = _params(url)

        assert f"{parsed.scheme}://{parsed.netloc}" == "https://www.indeed.fr"
        assert parsed.path == "/jobs"
        assert params["q"] == "React Developer"
        assert params["l"] == "France"
        assert params["sort"] == "date"
        assert params["fromage"] == "1"
        assert "sc" not in params

    def test_technologies_in_keywords(self, scraper):
        url = scraper.build_search_url(_query(poste="Developer", technologies=["React", "TypeScript"]))

        assert _params(url)["q"] == "Developer React TypeScript"

    def test_remote_filter(self, scraper):
        url = scraper.build_search_url(_query(remote_only=True))

        assert _params(url)["sc"] == "0kf:attr(DSQF7);"

    def test_custom_location(self, scraper):
        url = scraper.build_search_url(_query(location="Lyon"))

        assert _params(url)["l"] == "Lyon"


class TestExtractJobListings:
    """Test Indeed results page parsing."""

    def test_job_seen_beacon_cards(self, scraper):
        html = """
        <div>
          <div class="job_seen_beacon">
            <h2 class="jobTitle">Senior React Developer</h2>
            <a class="jcs-JobTitle" href="/rc/clk?jk=12345"></a>
            <span class="companyName">Tech Corp</span>
            <span class="companyLocation">Paris, France</span>
          </div>
          <div class="job_seen_beacon">
            <h2 class="jobTitle">Frontend Developer</h2>
            <a class="jcs-JobTitle" href="/rc/clk?jk=67890"></a>
            <span class="companyName">StartupXYZ</span>
            <span class="companyLocation">Remote</span>
          </div>
        </div>
        """

        results = scraper.extract_job_listings(html)

        assert [r.to_dict() for r in results] == [
            {
                "url": "https://www.indeed.fr/rc/clk?jk=12345",
                "title": "Senior React Developer",
                "source": "indeed",
                "company": "Tech Corp",
                "location": "Paris, France",
            },
            {
                "url": "https://www.indeed.fr/rc/clk?jk=67890",
                "title": "Frontend Developer",
                "source": "indeed",
                "company": "StartupXYZ",
                "location": "Remote",
            },
        ]

    def test_alternative_selectors(self, scraper):
        html = """
        <div>
          <div data-testid="job-card">
            <h2 data-testid="job-title">Backend Developer</h2>
            <a data-testid="job-title" href="/viewjob?jk=11111"></a>
            <span data-testid="company-name">DevInc</span>
            <span data-testid="job-location">Lyon</span>
          </div>
        </div>
        """

        results = scraper.extract_job_listings(html)

        assert len(results) == 1
        assert results[0].url == "https://www.indeed.fr/viewjob?jk=11111"
        assert results[0].title == "Backend Developer"
        assert results[0].company == "DevInc"
        assert results[0].location == "Lyon"

    def test_card_without_company(self, scraper):
        html = """
        <div class="job_seen_beacon">
          <h2 class="jobTitle">Data Analyst</h2>
          <a class="jcs-JobTitle" href="https://www.indeed.fr/viewjob?jk=1"></a>
        </div>
        """

        results = scraper.extract_job_listings(html)

        assert len(results) == 1
        assert results[0].company is None
        assert results[0].location is None
        assert results[0].is_complete()

    def test_skips_cards_without_title_or_url(self, scraper):
        html = """
        <div class="job_seen_beacon">
          <span class="companyName">Tech Corp</span>
        </div>
        <div class="job_seen_beacon">
          <h2 class="jobTitle">Some Job</h2>
        </div>
        """

        assert scraper.extract_job_listings(html) == []

    def test_empty_html(self, scraper):
        assert scraper.extract_job_listings("") == []


class TestExtractJobDetails:
    """Test Indeed job page parsing."""

    def test_primary_selectors(self, scraper):
        html = """
        <div>
          <div data-testid="inlineHeader-companyName">Tech Company</div>
          <div id="jobDescriptionText">
            <p>We are looking for a skilled React developer with experience in TypeScript and Node.js.</p>
            <p>This is a full-time position offering competitive salary.</p>
          </div>
          <div data-testid="job-location">Paris, Île-de-France, France</div>
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
          <div class="jobsearch-CompanyInfoWithoutHeaderImage">Alternate Company</div>
          <div id="jobDescription">Job description with React skills required</div>
          <div class="jobsearch-JobInfoHeader-item">Marseille, France</div>
        </div>
        """

        details = scraper.extract_job_details(html)

        assert details["company"] == "Alternate Company"
        assert "Job description with React skills" in details["description"]
        assert details["location"] == "Marseille, France"

    def test_fallback_values(self, scraper):
        details = scraper.extract_job_details("<div>No job details here</div>")

        assert details["company"] == "Company not found"
        assert details["description"] == "Description not available"
        assert details["location"] == "Location not specified"

    def test_empty_html(self, scraper):
        details = scraper.extract_job_details("")

        assert details["company"] == "Company not found"
        assert details["description"] == "Description not available"
        assert details["location"] == "Location not specified"


def test_source_identifier(scraper):
    assert scraper.source == "indeed"
