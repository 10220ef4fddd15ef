"""Field extraction from free text.

Pure functions: no network, no state. Each derives one structured
JobListing field (salary, technologies, contract type, remote flag, id)
from scraped text.
"""

import hashlib
import re
from typing import Any, Dict, List, Optional

from job_scout.constants import JOB_ID_LENGTH

# "50k-70k€", "45K - 65K", "60k€", "60K"; amounts are 2-3 digits, so "1000k" is not one
SALARY_PATTERN = re.compile(r"(?<!\d)(\d{2,3})[kK](?:\s*-\s*(\d{2,3})[kK])?(?:\s*€)?")

# Closed vocabulary; results keep this order, not text order
TECH_KEYWORDS = (
    "react",
    "vue",
    "angular",
    "node",
    "python",
    "java",
    "javascript",
    "typescript",
    "docker",
    "kubernetes",
    "aws",
    "azure",
    "gcp",
    "mongodb",
    "postgresql",
    "mysql",
    "graphql",
    "rest api",
    "git",
    "ci/cd",
    "jenkins",
    "terraform",
    "ansible",
)

# Priority order: first hit wins
CONTRACT_TYPES = ("CDI", "CDD", "alternance", "stage", "freelance", "intérim")

REMOTE_KEYWORDS = ("remote", "télétravail")


def extract_salary(text: Optional[str]) -> Dict[str, Any]:
    """
    Extract a salary range expressed in thousands.

    Only the first match is used. A single amount sets both bounds.

    Args:
        text: Free text, typically the job description

    Returns:
        {"min": int, "max": int, "range": str}, or {} when no salary is found

    Examples:
        >>> extract_salary("Salary: 50k-70k€ per year")
        {'min': 50000, 'max': 70000, 'range': '50k-70k€'}
        >>> extract_salary("60K")
        {'min': 60000, 'max': 60000, 'range': '60K'}
    """
    if not text:
        return {}

    match = SALARY_PATTERN.search(text)
    if not match:
        return {}

    low = int(match.group(1)) * 1000
    high = int(match.group(2)) * 1000 if match.group(2) else low
    if high < low:
        low, high = high, low

    return {"min": low, "max": high, "range": match.group(0)}


def extract_technologies(description: Optional[str], title: Optional[str]) -> List[str]:
    """
    Find vocabulary technologies mentioned in the description or title.

    Substring containment, so "java" also hits "javascript"; accepted.
    """
    text = f"{description or ''} {title or ''}".lower()
    return [tech for tech in TECH_KEYWORDS if tech in text]


def extract_contract_type(description: Optional[str]) -> str:
    """Return the first contract type label found, or ""."""
    text = (description or "").lower()
    for contract_type in CONTRACT_TYPES:
        if contract_type.lower() in text:
            return contract_type
    return ""


def is_remote(description: Optional[str]) -> bool:
    text = (description or "").lower()
    return any(keyword in text for keyword in REMOTE_KEYWORDS)


def generate_id(url: str) -> str:
    """
    Stable 16-character identifier for a job URL.

    Same URL gives the same id across runs and adapters.
    """
    return hashlib.sha256(url.encode("utf-8")).hexdigest()[:JOB_ID_LENGTH]
