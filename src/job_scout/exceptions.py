"""Custom exceptions for the job scout application.

This module defines domain-specific exceptions that provide clearer error
handling and better context than generic Python exceptions.
"""


class JobScoutError(Exception):
    """Base exception for all job scout errors.

    All custom exceptions in this module inherit from this base class,
    making it easy to catch all job-scout-specific errors.
    """

    pass


class ConfigurationError(JobScoutError):
    """Raised when there's an error in configuration.

    Examples:
    - Settings file is not valid YAML
    - Invalid setting values (negative timeouts, zero workers)
    - Environment override that cannot be parsed
    """

    pass


class QueryValidationError(JobScoutError):
    """Raised when a job search query is malformed.

    Examples:
    - Empty or missing sources list
    - Missing role (poste) text
    - Non-numeric salary minimum
    """

    pass


class SavedJobValidationError(JobScoutError):
    """Raised when a saved-job payload is malformed.

    Examples:
    - Missing user id
    - Job without an id or URL
    - Status outside the application pipeline
    """

    pass


class ScraperError(JobScoutError):
    """Raised when scraping operations fail.

    Examples:
    - Search page could not be fetched
    - Adapter registered under the wrong source identifier
    """

    pass


class ScrapeBlockedError(ScraperError):
    """Raised when a search page is refused by anti-bot protection.

    The job boards answer non-browser or too-frequent clients with
    HTTP 403/429 (LinkedIn uses a non-standard 999) instead of results.
    The orchestrator reports the source as blocked and moves on.

    Attributes:
        source_url: The URL that was blocked
        reason: Description of why the response appears to be blocked
    """

    def __init__(self, source_url: str, reason: str):
        self.source_url = source_url
        self.reason = reason
        super().__init__(f"Scrape blocked at {source_url}: {reason}")


class StorageError(JobScoutError):
    """Raised when storage operations fail.

    Examples:
    - Failed to save record
    - Failed to query table
    - Connection error
    """

    pass
