"""Tests for the job search data model."""

import dataclasses

import pytest

from job_scout.exceptions import QueryValidationError, SavedJobValidationError
from job_scout.models import JobListing, JobSearchQuery, PartialJobListing, SavedJob


class TestJobSearchQuery:
    """Test query parsing and validation."""

    def test_from_dict_full(self):
        query = JobSearchQuery.from_dict(
            {
                "sources": ["linkedin", "indeed"],
                "poste": " Développeur ",
                "technologies": ["React", "TypeScript"],
                "location": "Lyon",
                "excludeTerms": ["stage"],
                "remoteOnly": True,
                "salaryMin": "45000",
            }
        )

        assert query.sources == ["linkedin", "indeed"]
        assert query.poste == "Développeur"
        assert query.technologies == ["React", "TypeScript"]
        assert query.location == "Lyon"
        assert query.exclude_terms == ["stage"]
        assert query.remote_only is True
        assert query.salary_min == 45000

    def test_from_dict_defaults(self):
        query = JobSearchQuery.from_dict({"sources": ["linkedin"], "poste": "Dev"})

        assert query.technologies == []
        assert query.location is None
        assert query.exclude_terms == []
        assert query.remote_only is False
        assert query.salary_min is None

    def test_unknown_sources_accepted(self):
        query = JobSearchQuery.from_dict({"sources": ["monster"], "poste": "Dev"})

        assert query.sources == ["monster"]

    @pytest.mark.parametrize(
        "data",
        [
            None,
            [],
            {"poste": "Dev"},
            {"sources": [], "poste": "Dev"},
            {"sources": "linkedin", "poste": "Dev"},
            {"sources": ["linkedin"]},
            {"sources": ["linkedin"], "poste": "   "},
            {"sources": ["linkedin"], "poste": "Dev", "salaryMin": "beaucoup"},
            {"sources": ["linkedin"], "poste": "Dev", "remoteOnly": "false"},
            {"sources": ["linkedin"], "poste": "Dev", "remoteOnly": 1},
        ],
    )
    def test_invalid_payloads(self, data):
        with pytest.raises(QueryValidationError):
            JobSearchQuery.from_dict(data)

    def test_remote_only_null_means_false(self):
        query = JobSearchQuery.from_dict({"sources": ["linkedin"], "poste": "Dev", "remoteOnly": None})

        assert query.remote_only is False

    def test_keywords(self):
        query = JobSearchQuery(sources=["linkedin"], poste="Developer", technologies=["React", "Node"])

        assert query.keywords() == "Developer React Node"

    def test_keywords_without_technologies(self):
        assert JobSearchQuery(sources=["linkedin"], poste="Developer").keywords() == "Developer"

    def test_to_dict_round_trip(self):
        data = {
            "sources": ["welcometothejungle"],
            "poste": "Data Engineer",
            "technologies": ["python"],
            "excludeTerms": [],
            "remoteOnly": False,
            "location": "Nantes",
            "salaryMin": 50000,
        }

        assert JobSearchQuery.from_dict(data).to_dict() == data


class TestPartialJobListing:
    """Test listing stubs."""

    def test_complete(self, partial_job):
        assert partial_job.is_complete() is True

    @pytest.mark.parametrize("missing", ["url", "title", "source"])
    def test_incomplete(self, partial_job, missing):
        stub = dataclasses.replace(partial_job, **{missing: ""})

        assert stub.is_complete() is False

    def test_to_dict_omits_empty_optional_fields(self):
        stub = PartialJobListing(url="https://x", title="Dev", source="indeed")

        assert stub.to_dict() == {"url": "https://x", "title": "Dev", "source": "indeed"}


class TestJobListing:
    """Test assembled listings."""

    def test_to_dict_camel_case(self, make_job):
        data = make_job(contract_type="CDI", remote=True, technologies=["python"]).to_dict()

        assert data["contractType"] == "CDI"
        assert data["remote"] is True
        assert data["technologies"] == ["python"]
        assert data["country"] == "France"
        assert "postedAt" in data
        assert "scrapedAt" in data

    def test_salary_keys_only_when_present(self, make_job):
        without = make_job().to_dict()
        with_salary = make_job(salary_min=50000, salary_max=70000, salary_range="50k-70k€").to_dict()

        assert "salaryMin" not in without
        assert "salaryMax" not in without
        assert "salaryRange" not in without
        assert with_salary["salaryMin"] == 50000
        assert with_salary["salaryMax"] == 70000
        assert with_salary["salaryRange"] == "50k-70k€"

    def test_from_dict_inverse(self, make_job):
        job = make_job(salary_min=50000, salary_max=70000, salary_range="50k-70k€", remote=True)

        assert JobListing.from_dict(job.to_dict()) == job

    def test_immutable(self, make_job):
        job = make_job()

        with pytest.raises(dataclasses.FrozenInstanceError):
            job.title = "Changed"


class TestSavedJob:
    """Test saved job parsing."""

    def test_from_dict(self, make_job):
        job = make_job()

        saved = SavedJob.from_dict(
            {
                "userId": "alice",
                "job": job.to_dict(),
                "status": "envoyé",
                "notes": "  CV envoyé  ",
                "tags": ["python", " ", "paris"],
                "rating": 5,
            }
        )

        assert saved.user_id == "alice"
        assert saved.job == job
        assert saved.status == "envoyé"
        assert saved.notes == "CV envoyé"
        assert saved.tags == ["python", "paris"]
        assert saved.rating == 5

    def test_defaults(self, make_job):
        saved = SavedJob.from_dict({"userId": "alice", "job": make_job().to_dict()})

        assert saved.status == "à postuler"
        assert saved.notes is None
        assert saved.tags == []
        assert saved.rating is None

    @pytest.mark.parametrize(
        "overrides",
        [
            {"userId": ""},
            {"job": None},
            {"job": {"title": "No id or url"}},
            {"status": "oublié"},
            {"tags": "python"},
            {"rating": 0},
            {"rating": 6},
            {"rating": "5"},
            {"rating": True},
        ],
    )
    def test_invalid_payloads(self, make_job, overrides):
        data = {"userId": "alice", "job": make_job().to_dict(), **overrides}

        with pytest.raises(SavedJobValidationError):
            SavedJob.from_dict(data)

    def test_not_a_dict(self):
        with pytest.raises(SavedJobValidationError):
            SavedJob.from_dict(["alice"])

    def test_to_dict_extends_listing(self, make_job):
        job = make_job()
        saved = SavedJob(user_id="alice", job=job, tags=["python"], saved_at="2024-01-01T00:00:00")

        data = saved.to_dict()

        assert data["url"] == job.url
        assert data["userId"] == "alice"
        assert data["status"] == "à postuler"
        assert data["tags"] == ["python"]
        assert data["savedAt"] == "2024-01-01T00:00:00"
        assert "notes" not in data
        assert "rating" not in data
