"""SQLite-backed storage for job listings.

Listings are keyed by their URL-derived id, so saving the same posting found
by a later search refreshes the row instead of duplicating it.
"""

from __future__ import annotations

import json
import logging
import sqlite3
from datetime import datetime, timezone
from typing import Any, Iterable, List, Optional

from job_scout.constants import DEFAULT_LISTING_LIMIT
from job_scout.exceptions import StorageError
from job_scout.logging_config import get_structured_logger
from job_scout.models import JobListing
from job_scout.storage.sqlite_client import sqlite_connection

logger = logging.getLogger(__name__)
slogger = get_structured_logger(__name__)


def _utcnow() -> str:
    return datetime.now(timezone.utc).isoformat()


def _row_to_listing(row: sqlite3.Row) -> JobListing:
    return JobListing(
        id=row["id"],
        title=row["title"],
        company=row["company"],
        description=row["description"] or "",
        url=row["url"],
        location=row["location"] or "",
        source=row["source"],
        posted_at=row["posted_at"] or "",
        scraped_at=row["scraped_at"] or "",
        country=row["country"] or "",
        technologies=json.loads(row["technologies"] or "[]"),
        remote=bool(row["remote"]),
        contract_type=row["contract_type"] or "",
        salary_min=row["salary_min"],
        salary_max=row["salary_max"],
        salary_range=row["salary_range"],
    )


class JobListingStorage:
    """Persist job listings to SQLite."""

    def __init__(self, db_path: Optional[str] = None):
        self.db_path = db_path

    def save_listing(self, job: JobListing) -> str:
        """
        Insert or refresh a job listing.

        Returns the listing id. Raises StorageError on database failure.
        """
        now = _utcnow()

        try:
            with sqlite_connection(self.db_path) as conn:
                conn.execute(
                    """
                    INSERT INTO job_listings (
                        id, url, source, title, company, location, country,
                        description, technologies, remote, contract_type,
                        salary_min, salary_max, salary_range, posted_at,
                        scraped_at, created_at, updated_at
                    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                    ON CONFLICT(id) DO UPDATE SET
                        title = excluded.title,
                        company = excluded.company,
                        location = excluded.location,
                        country = excluded.country,
                        description = excluded.description,
                        technologies = excluded.technologies,
                        remote = excluded.remote,
                        contract_type = excluded.contract_type,
                        salary_min = excluded.salary_min,
                        salary_max = excluded.salary_max,
                        salary_range = excluded.salary_range,
                        scraped_at = excluded.scraped_at,
                        updated_at = excluded.updated_at
                    """,
                    (
                        job.id,
                        job.url,
                        job.source,
                        job.title,
                        job.company,
                        job.location,
                        job.country,
                        job.description,
                        json.dumps(list(job.technologies)),
                        int(job.remote),
                        job.contract_type,
                        job.salary_min,
                        job.salary_max,
                        job.salary_range,
                        job.posted_at,
                        job.scraped_at,
                        now,
                        now,
                    ),
                )
        except sqlite3.Error as exc:
            raise StorageError(f"Failed to save job listing {job.id}: {exc}") from exc

        logger.debug(f"Saved job listing {job.id}: {job.title} at {job.company}")
        return job.id

    def save_listings(self, jobs: Iterable[JobListing]) -> int:
        """
        Save a batch of listings.

        Failures are logged per listing and do not stop the batch.

        Returns:
            Number of listings saved
        """
        saved = 0
        failed = 0
        for job in jobs:
            try:
                self.save_listing(job)
                saved += 1
            except StorageError as e:
                failed += 1
                logger.error(str(e))

        slogger.database_activity(
            "upsert", "job_listings", "completed", {"saved": saved, "failed": failed}
        )
        return saved

    def get_listing(self, listing_id: str) -> Optional[JobListing]:
        """Get a job listing by ID. Raises StorageError on database failure."""
        try:
            with sqlite_connection(self.db_path) as conn:
                row = conn.execute(
                    "SELECT * FROM job_listings WHERE id = ?", (listing_id,)
                ).fetchone()
        except sqlite3.Error as exc:
            raise StorageError(f"Failed to read job listing {listing_id}: {exc}") from exc

        return _row_to_listing(row) if row else None

    def list_listings(
        self, source: Optional[str] = None, limit: int = DEFAULT_LISTING_LIMIT
    ) -> List[JobListing]:
        """List stored listings, most recently scraped first."""
        query = "SELECT * FROM job_listings"
        params: List[Any] = []
        if source:
            query += " WHERE source = ?"
            params.append(source)
        query += " ORDER BY scraped_at DESC, rowid DESC LIMIT ?"
        params.append(limit)

        try:
            with sqlite_connection(self.db_path) as conn:
                rows = conn.execute(query, tuple(params)).fetchall()
        except sqlite3.Error as exc:
            raise StorageError(f"Failed to list job listings: {exc}") from exc

        return [_row_to_listing(row) for row in rows]
