#!/usr/bin/env python3
"""
Flask HTTP boundary for job searches.

Endpoints:
- POST /search: run a search, respond with the {success, data, count} envelope
- GET /jobs, GET /jobs/<id>: stored listings
- GET /history: recent searches
- GET /saved?userId=, POST /saved, DELETE /saved: a user's saved jobs
- GET /health: liveness probe
"""
import os
import sys
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify, request

from job_scout.constants import DEFAULT_HISTORY_LIMIT, DEFAULT_LISTING_LIMIT, MAX_RESULTS_LIMIT
from job_scout.exceptions import QueryValidationError, SavedJobValidationError, StorageError
from job_scout.logging_config import get_structured_logger, setup_logging
from job_scout.models import JobSearchQuery, SavedJob
from job_scout.search_orchestrator import JobSearchOrchestrator
from job_scout.storage import JobListingStorage, SavedJobStorage, SearchHistoryStorage

slogger = get_structured_logger(__name__)

SEARCH_FAILED_MESSAGE = "Failed to search jobs"


def _limit_arg(default: int) -> int:
    """?limit= clamped to 1..MAX_RESULTS_LIMIT; SQLite treats negatives as unlimited."""
    limit = request.args.get("limit", default=default, type=int)
    return max(1, min(limit, MAX_RESULTS_LIMIT))


def _empty_envelope():
    return jsonify({"success": True, "data": [], "count": 0})


def _error(message: str, status: int):
    return jsonify({"success": False, "error": message}), status


def create_app(
    orchestrator: Optional[JobSearchOrchestrator] = None,
    listing_storage: Optional[JobListingStorage] = None,
    history_storage: Optional[SearchHistoryStorage] = None,
    saved_job_storage: Optional[SavedJobStorage] = None,
) -> Flask:
    """
    Build the Flask application.

    Args:
        orchestrator: Search orchestrator (default registry and settings if omitted)
        listing_storage: Where found listings are saved; None disables saving
        history_storage: Where searches are recorded; None disables history
        saved_job_storage: Where users' saved jobs live; None disables saving jobs

    Returns:
        Configured Flask app
    """
    app = Flask(__name__)

    def get_orchestrator() -> JobSearchOrchestrator:
        # Built lazily so /health works without touching settings
        nonlocal orchestrator
        if orchestrator is None:
            orchestrator = JobSearchOrchestrator()
        return orchestrator

    @app.route("/health")
    def health():
        """Health check endpoint."""
        return jsonify({"status": "healthy"})

    @app.route("/search", methods=["POST"])
    def search():
        """Run a job search for the posted query."""
        payload = request.get_json(silent=True)

        try:
            query = JobSearchQuery.from_dict(payload)
        except QueryValidationError as e:
            return _error(str(e), 400)

        try:
            jobs = get_orchestrator().search_jobs(query)
        except Exception as e:
            slogger.search_status("failed", {"error": str(e)})
            return _error(SEARCH_FAILED_MESSAGE, 500)

        _persist(query, jobs, payload.get("userId"))

        return jsonify(
            {
                "success": True,
                "data": [job.to_dict() for job in jobs],
                "count": len(jobs),
            }
        )

    @app.route("/jobs")
    def list_jobs():
        """Stored listings, most recently scraped first."""
        if listing_storage is None:
            return _empty_envelope()

        source = request.args.get("source")
        limit = _limit_arg(DEFAULT_LISTING_LIMIT)

        try:
            jobs = listing_storage.list_listings(source=source, limit=limit)
        except StorageError as e:
            slogger.logger.error(f"Failed to list job listings: {e}")
            return _error("Failed to list job listings", 500)

        return jsonify(
            {"success": True, "data": [job.to_dict() for job in jobs], "count": len(jobs)}
        )

    @app.route("/jobs/<job_id>")
    def get_job(job_id):
        """One stored listing."""
        job = None
        if listing_storage is not None:
            try:
                job = listing_storage.get_listing(job_id)
            except StorageError as e:
                slogger.logger.error(f"Failed to read job listing {job_id}: {e}")
                return _error("Failed to read job listing", 500)

        if job is None:
            return _error(f"Job listing not found: {job_id}", 404)
        return jsonify({"success": True, "data": job.to_dict()})

    @app.route("/history")
    def history():
        """Recent searches, newest first."""
        if history_storage is None:
            return _empty_envelope()

        user_id = request.args.get("userId")
        limit = _limit_arg(DEFAULT_HISTORY_LIMIT)

        try:
            entries = history_storage.get_search_history(user_id=user_id, limit=limit)
        except StorageError as e:
            slogger.logger.error(f"Failed to read search history: {e}")
            return _error("Failed to read search history", 500)

        return jsonify({"success": True, "data": entries, "count": len(entries)})

    @app.route("/saved", methods=["GET"])
    def saved_jobs():
        """A user's saved jobs, most recently saved first."""
        user_id = (request.args.get("userId") or "").strip()
        if not user_id:
            return _error("userId is required", 400)
        if saved_job_storage is None:
            return _empty_envelope()

        try:
            entries = saved_job_storage.get_saved_jobs(user_id)
        except StorageError as e:
            slogger.logger.error(f"Failed to read saved jobs: {e}")
            return _error("Failed to get saved jobs", 500)

        return jsonify(
            {"success": True, "data": [entry.to_dict() for entry in entries], "count": len(entries)}
        )

    @app.route("/saved", methods=["POST"])
    def save_job():
        """Save a job for a user, or update its tracking fields."""
        if saved_job_storage is None:
            return _error("Saved jobs are not enabled", 503)

        try:
            saved_job = SavedJob.from_dict(request.get_json(silent=True))
        except SavedJobValidationError as e:
            return _error(str(e), 400)

        try:
            saved_job = saved_job_storage.save_job(saved_job)
        except StorageError as e:
            slogger.logger.error(f"Failed to save job: {e}")
            return _error("Failed to save job", 500)

        slogger.database_activity(
            "upsert",
            "saved_jobs",
            "completed",
            {"user_id": saved_job.user_id, "job_id": saved_job.job.id},
        )
        return jsonify({"success": True, "data": saved_job.to_dict()}), 201

    @app.route("/saved", methods=["DELETE"])
    def unsave_job():
        """Remove a saved job; body is {"userId", "jobId"}."""
        if saved_job_storage is None:
            return _error("Saved jobs are not enabled", 503)

        payload = request.get_json(silent=True)
        if not isinstance(payload, dict):
            payload = {}
        user_id = str(payload.get("userId") or "").strip()
        job_id = str(payload.get("jobId") or "").strip()
        if not user_id or not job_id:
            return _error("userId and jobId are required", 400)

        try:
            removed = saved_job_storage.unsave_job(user_id, job_id)
        except StorageError as e:
            slogger.logger.error(f"Failed to unsave job: {e}")
            return _error("Failed to unsave job", 500)

        if not removed:
            return _error(f"Job {job_id} is not saved", 404)
        return jsonify({"success": True})

    def _persist(query, jobs, user_id) -> None:
        """Save results and record the search; never affects the response."""
        if listing_storage is not None:
            try:
                listing_storage.save_listings(jobs)
            except Exception as e:
                slogger.logger.error(f"Failed to save job listings: {e}")

        if history_storage is not None:
            try:
                history_storage.record_search(query, len(jobs), user_id=user_id)
            except Exception as e:
                slogger.logger.error(f"Failed to record search history: {e}")

    return app


def main():
    """Main entry point."""
    load_dotenv()
    setup_logging(log_file=os.getenv("JOB_SCOUT_LOG_FILE"))

    try:
        db_path = os.getenv("JOB_SCOUT_SQLITE_PATH")
        storage_enabled = os.getenv("JOB_SCOUT_STORAGE", "true").lower() != "false"
        app = create_app(
            listing_storage=JobListingStorage(db_path) if storage_enabled else None,
            history_storage=SearchHistoryStorage(db_path) if storage_enabled else None,
            saved_job_storage=SavedJobStorage(db_path) if storage_enabled else None,
        )

        port = int(os.getenv("JOB_SCOUT_PORT", "5555"))
        host = os.getenv("JOB_SCOUT_HOST", "0.0.0.0")

        slogger.search_status("flask_server_starting", {"host": host, "port": port})
        app.run(host=host, port=port, debug=False, use_reloader=False)

    except Exception as e:
        slogger.logger.error(f"Fatal error in job search server: {e}", exc_info=True)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
