"""Job scout: recent job postings from LinkedIn, Indeed and Welcome to the Jungle."""

__version__ = "0.1.0"

from job_scout.models import JobListing, JobSearchQuery, PartialJobListing, SavedJob
from job_scout.search_orchestrator import JobSearchOrchestrator, search_jobs

__all__ = [
    "JobListing",
    "JobSearchOrchestrator",
    "JobSearchQuery",
    "PartialJobListing",
    "SavedJob",
    "search_jobs",
]
