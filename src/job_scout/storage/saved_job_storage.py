"""Saved jobs: per-user bookmarks with application tracking."""

from __future__ import annotations

import json
import logging
import sqlite3
from dataclasses import replace
from datetime import datetime, timezone
from typing import List, Optional

from job_scout.exceptions import StorageError
from job_scout.models import JobListing, SavedJob
from job_scout.storage.sqlite_client import sqlite_connection

logger = logging.getLogger(__name__)


def _row_to_saved_job(row: sqlite3.Row) -> SavedJob:
    return SavedJob(
        user_id=row["user_id"],
        job=JobListing.from_dict(json.loads(row["job"])),
        status=row["status"],
        notes=row["notes"],
        tags=json.loads(row["tags"] or "[]"),
        rating=row["rating"],
        saved_at=row["saved_at"],
    )


class SavedJobStorage:
    """Persist saved jobs to SQLite, keyed by (user id, job id)."""

    def __init__(self, db_path: Optional[str] = None):
        self.db_path = db_path

    def save_job(self, saved_job: SavedJob) -> SavedJob:
        """
        Save a job for a user, or update the tracking fields if already saved.

        Saving again keeps the original ``saved_at``.

        Returns:
            The saved job with ``saved_at`` set

        Raises:
            StorageError: On database failure
        """
        now = datetime.now(timezone.utc).isoformat()

        try:
            with sqlite_connection(self.db_path) as conn:
                conn.execute(
                    """
                    INSERT INTO saved_jobs (
                        user_id, job_id, job, status, notes, tags, rating,
                        saved_at, updated_at
                    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                    ON CONFLICT(user_id, job_id) DO UPDATE SET
                        job = excluded.job,
                        status = excluded.status,
                        notes = excluded.notes,
                        tags = excluded.tags,
                        rating = excluded.rating,
                        updated_at = excluded.updated_at
                    """,
                    (
                        saved_job.user_id,
                        saved_job.job.id,
                        json.dumps(saved_job.job.to_dict()),
                        saved_job.status,
                        saved_job.notes,
                        json.dumps(list(saved_job.tags)),
                        saved_job.rating,
                        now,
                        now,
                    ),
                )
                row = conn.execute(
                    "SELECT saved_at FROM saved_jobs WHERE user_id = ? AND job_id = ?",
                    (saved_job.user_id, saved_job.job.id),
                ).fetchone()
        except sqlite3.Error as exc:
            raise StorageError(
                f"Failed to save job {saved_job.job.id} for {saved_job.user_id}: {exc}"
            ) from exc

        logger.debug(f"Saved job {saved_job.job.id} for user {saved_job.user_id}")
        return replace(saved_job, saved_at=row["saved_at"])

    def unsave_job(self, user_id: str, job_id: str) -> bool:
        """
        Remove a saved job.

        Returns:
            True if the job was saved for this user, False otherwise

        Raises:
            StorageError: On database failure
        """
        try:
            with sqlite_connection(self.db_path) as conn:
                cursor = conn.execute(
                    "DELETE FROM saved_jobs WHERE user_id = ? AND job_id = ?",
                    (user_id, job_id),
                )
                removed = cursor.rowcount > 0
        except sqlite3.Error as exc:
            raise StorageError(f"Failed to unsave job {job_id} for {user_id}: {exc}") from exc

        if removed:
            logger.debug(f"Unsaved job {job_id} for user {user_id}")
        return removed

    def get_saved_jobs(self, user_id: str) -> List[SavedJob]:
        """A user's saved jobs, most recently saved first."""
        try:
            with sqlite_connection(self.db_path) as conn:
                rows = conn.execute(
                    """
                    SELECT * FROM saved_jobs
                    WHERE user_id = ?
                    ORDER BY saved_at DESC, rowid DESC
                    """,
                    (user_id,),
                ).fetchall()
        except sqlite3.Error as exc:
            raise StorageError(f"Failed to read saved jobs for {user_id}: {exc}") from exc

        return [_row_to_saved_job(row) for row in rows]
