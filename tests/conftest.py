"""Shared pytest fixtures for all tests."""

from datetime import datetime, timezone
from unittest.mock import Mock

import pytest

from job_scout.models import JobListing, JobSearchQuery, PartialJobListing
from job_scout.settings import ScraperSettings, clear_settings_cache


@pytest.fixture(autouse=True)
def set_test_environment(monkeypatch):
    """
    Automatically set ENVIRONMENT for all tests and isolate settings.

    Settings are cached per process, so every test starts from a clean cache
    without JOB_SCOUT_* overrides leaking in from the developer's shell.
    """
    monkeypatch.setenv("ENVIRONMENT", "development")
    for key in [
        "JOB_SCOUT_CONFIG",
        "JOB_SCOUT_SEARCH_TIMEOUT",
        "JOB_SCOUT_DETAIL_TIMEOUT",
        "JOB_SCOUT_MAX_JOBS_PER_SOURCE",
        "JOB_SCOUT_DELAY_BETWEEN_SOURCES",
        "JOB_SCOUT_MAX_CONCURRENT_DETAILS",
        "JOB_SCOUT_USER_AGENT",
    ]:
        monkeypatch.delenv(key, raising=False)
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def fast_settings():
    """Settings with no inter-source delay."""
    return ScraperSettings(delay_between_sources=0)


@pytest.fixture
def sample_query():
    return JobSearchQuery(
        sources=["linkedin", "indeed", "welcometothejungle"],
        poste="Développeur Python",
        technologies=["django", "docker"],
        location="Paris",
    )


@pytest.fixture
def partial_job():
    return PartialJobListing(
        url="https://www.linkedin.com/jobs/view/123",
        title="Développeur Python",
        source="linkedin",
        company="Acme",
        location="Paris",
    )


@pytest.fixture
def make_job():
    """
    Factory for JobListing records.

    Usage:
        job = make_job(url="https://example.com/1", salary_max=40000)
    """

    def _make(**overrides):
        now = datetime.now(timezone.utc).isoformat()
        values = {
            "id": "abc123",
            "title": "Développeur Python",
            "company": "Acme",
            "description": "Python et Django, CDI, télétravail partiel",
            "url": "https://www.linkedin.com/jobs/view/123",
            "location": "Paris",
            "source": "linkedin",
            "posted_at": now,
            "scraped_at": now,
        }
        values.update(overrides)
        return JobListing(**values)

    return _make


@pytest.fixture
def mock_response():
    """Factory for requests.Response-like mocks."""

    def _make(text="", status_code=200, reason="OK"):
        response = Mock()
        response.text = text
        response.status_code = status_code
        response.reason = reason
        response.raise_for_status = Mock()
        return response

    return _make
