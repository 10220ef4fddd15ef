"""Search history persistence."""

from __future__ import annotations

import json
import logging
import sqlite3
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from job_scout.constants import DEFAULT_HISTORY_LIMIT
from job_scout.exceptions import StorageError
from job_scout.models import JobSearchQuery
from job_scout.storage.sqlite_client import sqlite_connection

logger = logging.getLogger(__name__)


class SearchHistoryStorage:
    """Record past searches so users can re-run them."""

    def __init__(self, db_path: Optional[str] = None):
        self.db_path = db_path

    def record_search(
        self, query: JobSearchQuery, results_count: int, user_id: Optional[str] = None
    ) -> int:
        """
        Record one executed search.

        Returns:
            Row id of the history entry

        Raises:
            StorageError: On database failure
        """
        try:
            with sqlite_connection(self.db_path) as conn:
                cursor = conn.execute(
                    """
                    INSERT INTO search_history (user_id, query, results_count, created_at)
                    VALUES (?, ?, ?, ?)
                    """,
                    (
                        user_id,
                        json.dumps(query.to_dict()),
                        results_count,
                        datetime.now(timezone.utc).isoformat(),
                    ),
                )
                entry_id = cursor.lastrowid
        except sqlite3.Error as exc:
            raise StorageError(f"Failed to record search: {exc}") from exc

        logger.debug(f"Recorded search {entry_id} ({results_count} results)")
        return entry_id

    def get_search_history(
        self, user_id: Optional[str] = None, limit: int = DEFAULT_HISTORY_LIMIT
    ) -> List[Dict[str, Any]]:
        """
        Recent searches, newest first.

        Each entry: {"id", "userId", "query" (camelCase dict), "resultsCount", "createdAt"}
        """
        sql = "SELECT * FROM search_history"
        params: List[Any] = []
        if user_id is not None:
            sql += " WHERE user_id = ?"
            params.append(user_id)
        sql += " ORDER BY id DESC LIMIT ?"
        params.append(limit)

        try:
            with sqlite_connection(self.db_path) as conn:
                rows = conn.execute(sql, tuple(params)).fetchall()
        except sqlite3.Error as exc:
            raise StorageError(f"Failed to read search history: {exc}") from exc

        return [
            {
                "id": row["id"],
                "userId": row["user_id"],
                "query": json.loads(row["query"]),
                "resultsCount": row["results_count"],
                "createdAt": row["created_at"],
            }
            for row in rows
        ]
