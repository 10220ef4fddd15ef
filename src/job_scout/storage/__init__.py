"""SQLite persistence for listings, search history and saved jobs."""

from job_scout.storage.job_listing_storage import JobListingStorage
from job_scout.storage.saved_job_storage import SavedJobStorage
from job_scout.storage.search_history_storage import SearchHistoryStorage
from job_scout.storage.sqlite_client import sqlite_connection

__all__ = ["JobListingStorage", "SavedJobStorage", "SearchHistoryStorage", "sqlite_connection"]
