"""SQLite connection utilities."""

from __future__ import annotations

import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

DEFAULT_DB_PATH = Path("data") / "job_scout.db"

SCHEMA = """
CREATE TABLE IF NOT EXISTS job_listings (
    id TEXT PRIMARY KEY,
    url TEXT NOT NULL,
    source TEXT NOT NULL,
    title TEXT NOT NULL,
    company TEXT NOT NULL,
    location TEXT,
    country TEXT,
    description TEXT,
    technologies TEXT,
    remote INTEGER NOT NULL DEFAULT 0,
    contract_type TEXT,
    salary_min INTEGER,
    salary_max INTEGER,
    salary_range TEXT,
    posted_at TEXT,
    scraped_at TEXT,
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_job_listings_source ON job_listings (source);
CREATE INDEX IF NOT EXISTS idx_job_listings_scraped_at ON job_listings (scraped_at);

CREATE TABLE IF NOT EXISTS search_history (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    user_id TEXT,
    query TEXT NOT NULL,
    results_count INTEGER NOT NULL DEFAULT 0,
    created_at TEXT NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_search_history_user ON search_history (user_id, created_at);

CREATE TABLE IF NOT EXISTS saved_jobs (
    user_id TEXT NOT NULL,
    job_id TEXT NOT NULL,
    job TEXT NOT NULL,
    status TEXT NOT NULL,
    notes TEXT,
    tags TEXT,
    rating INTEGER,
    saved_at TEXT NOT NULL,
    updated_at TEXT NOT NULL,
    PRIMARY KEY (user_id, job_id)
);
CREATE INDEX IF NOT EXISTS idx_saved_jobs_user ON saved_jobs (user_id, saved_at);
"""


def _resolve_db_path(db_path: Optional[str] = None) -> Path:
    """
    Resolve the SQLite database path.

    Order of precedence:
        1. Explicit db_path argument
        2. JOB_SCOUT_SQLITE_PATH env var
        3. data/job_scout.db relative to the working directory
    """
    path = db_path or os.getenv("JOB_SCOUT_SQLITE_PATH") or str(DEFAULT_DB_PATH)
    resolved = Path(path).expanduser().resolve()
    resolved.parent.mkdir(parents=True, exist_ok=True)
    return resolved


def _create_connection(resolved_path: Path) -> sqlite3.Connection:
    """Create a configured sqlite3 connection with the schema in place."""
    conn = sqlite3.connect(resolved_path, check_same_thread=False)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA busy_timeout = 5000;")
    conn.executescript(SCHEMA)
    return conn


@contextmanager
def sqlite_connection(db_path: Optional[str] = None) -> Iterator[sqlite3.Connection]:
    """
    Context manager that yields a configured sqlite3 connection.

    Each call opens a fresh connection to avoid cross-thread issues.
    """
    resolved_path = _resolve_db_path(db_path)
    conn = _create_connection(resolved_path)
    try:
        yield conn
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()

