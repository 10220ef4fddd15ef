"""Runtime settings loaded from YAML config with fallback to constants.

This module provides centralized access to the scraping knobs (timeouts,
caps, delays). It loads the ``scraping:`` section of a YAML file on first
access, applies environment overrides and caches the result.

Usage:
    from job_scout.settings import get_settings

    settings = get_settings()
    timeout = settings.detail_timeout
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from job_scout import constants
from job_scout.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

CONFIG_PATH_ENV = "JOB_SCOUT_CONFIG"
ENV_PREFIX = "JOB_SCOUT_"


@dataclass(frozen=True)
class ScraperSettings:
    """
    Scraping configuration shared by the orchestrator and every adapter.

    Attributes:
        search_timeout: Timeout in seconds for a search results page
        detail_timeout: Timeout in seconds for a single job detail page
        max_jobs_per_source: Candidates per source whose details are fetched
        delay_between_sources: Pause in seconds before moving to the next source
        max_concurrent_details: Worker threads for detail fetches within a source
        user_agent: Browser user agent sent with every request
    """

    search_timeout: float = constants.SEARCH_REQUEST_TIMEOUT
    detail_timeout: float = constants.DETAIL_REQUEST_TIMEOUT
    max_jobs_per_source: int = constants.MAX_JOBS_PER_SOURCE
    delay_between_sources: float = constants.DELAY_BETWEEN_SOURCES
    max_concurrent_details: int = constants.MAX_CONCURRENT_DETAILS
    user_agent: str = constants.DEFAULT_USER_AGENT

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ScraperSettings":
        """
        Create settings from a ``scraping:`` mapping.

        Unknown keys are ignored with a warning so older config files keep working.

        Raises:
            ConfigurationError: If a value has the wrong type or is out of range
        """
        known = {f.name: f for f in fields(cls)}
        values: Dict[str, Any] = {}
        for key, value in (data or {}).items():
            if key not in known:
                logger.warning(f"Ignoring unknown scraping setting: {key}")
                continue
            values[key] = _coerce(key, value, known[key].type)

        settings = cls(**values)
        settings.validate()
        return settings

    def validate(self) -> None:
        """Validate settings ranges."""
        if self.search_timeout <= 0 or self.detail_timeout <= 0:
            raise ConfigurationError("Request timeouts must be positive")
        if self.max_jobs_per_source < 1:
            raise ConfigurationError("max_jobs_per_source must be at least 1")
        if self.max_concurrent_details < 1:
            raise ConfigurationError("max_concurrent_details must be at least 1")
        if self.delay_between_sources < 0:
            raise ConfigurationError("delay_between_sources cannot be negative")
        if not self.user_agent:
            raise ConfigurationError("user_agent cannot be empty")

    def headers(self) -> Dict[str, str]:
        """Request headers mimicking a desktop browser."""
        return {**constants.DEFAULT_HEADERS, "User-Agent": self.user_agent}


def _coerce(key: str, value: Any, type_name: Any) -> Any:
    """Convert a YAML or environment value to the field's type."""
    type_name = getattr(type_name, "__name__", type_name)
    try:
        if type_name == "int":
            return int(value)
        if type_name == "float":
            return float(value)
        return str(value)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid value for {key}: {value!r}") from e


def _read_yaml(config_path: Path) -> Dict[str, Any]:
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {config_path} must contain a mapping")
    return data.get("scraping", {}) or {}


def _env_overrides() -> Dict[str, str]:
    """Collect JOB_SCOUT_<SETTING> environment overrides."""
    overrides = {}
    for f in fields(ScraperSettings):
        value = os.getenv(f"{ENV_PREFIX}{f.name.upper()}")
        if value is not None:
            overrides[f.name] = value
    return overrides


def load_settings(config_path: Optional[str] = None) -> ScraperSettings:
    """
    Load settings from YAML (explicit path or JOB_SCOUT_CONFIG) plus env overrides.

    A missing config file is not an error: defaults from constants apply.

    Args:
        config_path: Optional path to a YAML config file

    Returns:
        Validated ScraperSettings
    """
    path = config_path or os.getenv(CONFIG_PATH_ENV)
    data: Dict[str, Any] = {}

    if path:
        candidate = Path(path).expanduser()
        if candidate.exists():
            data = _read_yaml(candidate)
            logger.debug(f"Loaded scraping settings from {candidate}")
        else:
            logger.warning(f"Config file not found at {candidate}, using defaults")

    data.update(_env_overrides())
    return ScraperSettings.from_dict(data)


@lru_cache(maxsize=1)
def get_settings() -> ScraperSettings:
    """
    Get process-wide settings.

    Results are cached for the lifetime of the process.
    """
    return load_settings()


def clear_settings_cache() -> None:
    """Clear cached settings (useful for testing or config reload)."""
    get_settings.cache_clear()
