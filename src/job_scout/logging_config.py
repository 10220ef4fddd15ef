"""Logging configuration with JSON output to stdout and optional file."""

import json
import logging
import os
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

DEFAULT_ENVIRONMENT = "development"
SERVICE_NAME = "job-scout"


class JSONFormatter(logging.Formatter):
    """
    JSON formatter for structured logging.

    Every record becomes one JSON object per line with severity, timestamp,
    environment and either the structured fields attached by StructuredLogger
    or a plain message.
    """

    def __init__(self, environment: str = DEFAULT_ENVIRONMENT):
        """
        Initialize JSON formatter.

        Args:
            environment: Environment name (staging, production, development)
        """
        super().__init__()
        self.environment = environment

    def format(self, record: logging.LogRecord) -> str:
        """
        Format log record as JSON.

        Args:
            record: Log record to format

        Returns:
            JSON string
        """
        severity_map = {
            logging.DEBUG: "DEBUG",
            logging.INFO: "INFO",
            logging.WARNING: "WARNING",
            logging.ERROR: "ERROR",
            logging.CRITICAL: "ERROR",
        }
        severity = severity_map.get(record.levelno, "INFO")

        log_entry: Dict[str, Any] = {
            "severity": severity,
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "environment": self.environment,
            "service": SERVICE_NAME,
            "logger": record.name,
        }

        if hasattr(record, "structured_fields"):
            log_entry.update(record.structured_fields)
        else:
            log_entry.update(
                {
                    "category": "system",
                    "action": "log",
                    "message": record.getMessage(),
                }
            )

        if record.exc_info:
            exc_type, exc_value, exc_tb = record.exc_info
            log_entry["error"] = {
                "type": exc_type.__name__ if exc_type else "Exception",
                "message": str(exc_value),
                "stack": self.formatException(record.exc_info) if exc_tb else None,
            }

        return json.dumps(log_entry, ensure_ascii=False, default=str)


def setup_logging(
    log_level: str = "INFO",
    log_file: Optional[str] = None,
) -> None:
    """
    Configure logging with JSON output to stdout and, optionally, a file.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Path to log file. If None, LOG_FILE is used when set.

    Environment Variables:
        LOG_LEVEL: Override log level.
        LOG_FILE: Log file path.
        ENVIRONMENT: Environment name (staging, production, development).
    """
    log_level = os.getenv("LOG_LEVEL", log_level).upper()
    level = getattr(logging, log_level, logging.INFO)
    log_file = os.getenv("LOG_FILE", log_file)

    environment = os.getenv("ENVIRONMENT")
    if not environment:
        environment = DEFAULT_ENVIRONMENT
        print("WARNING: ENVIRONMENT not set, defaulting to 'development'", file=sys.stderr)

    json_formatter = JSONFormatter(environment=environment)
    handlers = []

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(json_formatter)
    console_handler.setLevel(level)
    handlers.append(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(json_formatter)
        file_handler.setLevel(level)
        handlers.append(file_handler)

    logging.basicConfig(level=level, handlers=handlers, force=True)

    # urllib3 logs every connection at DEBUG; keep it out of scrape logs
    logging.getLogger("urllib3").setLevel(logging.WARNING)

    structured = StructuredLogger(logging.getLogger(__name__))
    structured.search_status(
        "logging_configured",
        details={"environment": environment, "level": log_level, "file": log_file},
    )


class StructuredLogger:
    """Helper class for categorized structured log entries."""

    def __init__(self, logger: logging.Logger):
        self.logger = logger
        self.environment = os.getenv("ENVIRONMENT", DEFAULT_ENVIRONMENT)

    def _log(self, level: str, structured_fields: Dict[str, Any]) -> None:
        log_method = getattr(self.logger, level.lower())
        message = structured_fields.get("message", "")
        log_method(message, extra={"structured_fields": structured_fields})

    def scrape_activity(
        self, source: str, action: str, details: Optional[Dict] = None, level: str = "info"
    ) -> None:
        """
        Log scraping activity for one source.

        Args:
            source: Source being scraped (linkedin, indeed, welcometothejungle)
            action: Action being performed (started, completed, blocked, failed, skipped)
            details: Optional additional details
            level: Log level
        """
        structured_fields = {
            "category": "scrape",
            "action": action,
            "message": f"Scraping {source}: {action}",
            "details": {"source": source, **(details or {})},
        }
        self._log(level, structured_fields)

    def search_status(self, status: str, details: Optional[Dict] = None) -> None:
        """
        Log search lifecycle events.

        Args:
            status: Search status (started, completed, failed)
            details: Optional additional details
        """
        structured_fields = {
            "category": "search",
            "action": status.lower(),
            "message": f"Search {status}",
            "details": details or {},
        }
        level = "error" if status.lower() == "failed" else "info"
        self._log(level, structured_fields)

    def database_activity(
        self,
        operation: str,
        table: str,
        status: str,
        details: Optional[Dict] = None,
    ) -> None:
        """
        Log database operations.

        Args:
            operation: Database operation (upsert, insert, query)
            table: Table name
            status: Operation status
            details: Optional additional details
        """
        structured_fields = {
            "category": "database",
            "action": operation.lower(),
            "message": f"Database {operation} on {table}: {status}",
            "details": {"table": table, "status": status, **(details or {})},
        }
        self._log("info", structured_fields)


def get_structured_logger(name: str) -> StructuredLogger:
    """
    Get a structured logger instance.

    Args:
        name: Logger name (typically __name__).

    Returns:
        StructuredLogger instance.
    """
    return StructuredLogger(logging.getLogger(name))
