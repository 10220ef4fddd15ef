#!/usr/bin/env python3
"""Command-line job search across LinkedIn, Indeed and Welcome to the Jungle."""

import argparse
import json
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

# Add src to path
sys.path.insert(0, str(Path(__file__).parent / "src"))

from job_scout.constants import SOURCES
from job_scout.exceptions import JobScoutError
from job_scout.logging_config import setup_logging
from job_scout.models import JobSearchQuery
from job_scout.scrapers import build_scraper_registry
from job_scout.search_orchestrator import JobSearchOrchestrator
from job_scout.settings import load_settings
from job_scout.storage import JobListingStorage, SearchHistoryStorage


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Search job boards for recent postings")
    parser.add_argument(
        "--source",
        action="append",
        dest="sources",
        help=f"Source to search, repeatable (default: all of {', '.join(SOURCES)})",
    )
    parser.add_argument("--poste", required=True, help="Role to search for")
    parser.add_argument(
        "--tech",
        action="append",
        dest="technologies",
        default=[],
        help="Technology keyword appended to the query, repeatable",
    )
    parser.add_argument("--location", help="Search location (default: France)")
    parser.add_argument(
        "--exclude",
        action="append",
        dest="exclude_terms",
        default=[],
        help="Drop listings mentioning this term, repeatable",
    )
    parser.add_argument("--remote-only", action="store_true", help="Remote postings only")
    parser.add_argument("--salary-min", type=int, help="Minimum annual salary in euros")
    parser.add_argument("--config", help="Path to a YAML configuration file")
    parser.add_argument("--save", action="store_true", help="Save results to SQLite")
    parser.add_argument("--db-path", help="SQLite database path (with --save)")
    parser.add_argument("--json", action="store_true", help="Print results as JSON")
    parser.add_argument("--no-env", action="store_true", help="Skip loading .env file")
    return parser


def main(argv=None) -> int:
    """Run a job search with command-line options."""
    args = build_parser().parse_args(argv)

    # Load environment variables (unless --no-env)
    if not args.no_env:
        load_dotenv()

    os.environ.setdefault("ENVIRONMENT", "development")
    setup_logging(log_level="WARNING" if args.json else "INFO")

    try:
        query = JobSearchQuery(
            sources=args.sources or list(SOURCES),
            poste=args.poste.strip(),
            technologies=args.technologies,
            location=args.location,
            exclude_terms=args.exclude_terms,
            remote_only=args.remote_only,
            salary_min=args.salary_min,
        )
        query.validate()

        settings = load_settings(args.config)
        orchestrator = JobSearchOrchestrator(build_scraper_registry(settings), settings)
        jobs, stats = orchestrator.search_with_stats(query)

        if args.save:
            saved = JobListingStorage(args.db_path).save_listings(jobs)
            SearchHistoryStorage(args.db_path).record_search(query, len(jobs))
            if not args.json:
                print(f"Saved {saved} listings")

    except JobScoutError as e:
        print(f"\n❌ Error during job search: {e}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps([job.to_dict() for job in jobs], ensure_ascii=False, indent=2))
        return 0

    print("=" * 70)
    print(f"JOB SEARCH: {query.keywords()} ({', '.join(query.sources)})")
    print("=" * 70)
    for job in jobs:
        salary = f" | {job.salary_range}" if job.salary_range else ""
        print(f"[{job.source}] {job.title} - {job.company} ({job.location}){salary}")
        print(f"    {job.url}")
    print("=" * 70)
    print(f"Listings: {len(jobs)}")
    print(f"Sources scraped: {stats.sources_scraped}, failed: {stats.sources_failed}")
    print(f"Duplicates removed: {stats.duplicates_removed}")
    print(f"Excluded: {stats.excluded_by_terms + stats.excluded_by_salary}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
