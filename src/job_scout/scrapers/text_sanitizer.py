"""Text sanitization utilities for cleaning scraped content."""

import re
from typing import Optional
from urllib.parse import urljoin

# Zero-width characters survive get_text() and break keyword matching
_INVISIBLE_CHARS = re.compile("[\u200b\u200c\u200d\ufeff]")
_WHITESPACE = re.compile(r"\s+")


def clean_text(text: Optional[str]) -> str:
    """
    Collapse runs of whitespace to single spaces and trim.

    Args:
        text: Raw text, possibly None

    Returns:
        Clean text, or "" for missing/empty input
    """
    if not text:
        return ""

    text = _INVISIBLE_CHARS.sub("", text)
    return _WHITESPACE.sub(" ", text).strip()


def build_full_url(url: str, base_url: str) -> str:
    """
    Make a card link absolute.

    Args:
        url: Absolute URL or site-relative path from the markup
        base_url: Site origin, e.g. "https://www.indeed.fr"

    Returns:
        Absolute URL
    """
    url = (url or "").strip()
    if url.startswith("http"):
        return url
    if url.startswith("//"):
        return f"https:{url}"
    return urljoin(base_url.rstrip("/") + "/", url.lstrip("/"))
