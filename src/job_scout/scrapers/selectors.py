"""Selector fallback chains over BeautifulSoup markup.

Job board markup drifts constantly and differs between desktop, mobile and
logged-out pages, so every field is looked up through an ordered list of
candidate selectors. The first selector producing a non-empty value wins.

Selectors use CSS syntax, optionally suffixed with ``@attribute`` to read an
attribute instead of the element text:

    ".base-card__full-link"        -> text of the element
    ".base-card__full-link@href"   -> href attribute of the element
    "@href"                        -> href attribute of the root itself
"""

from typing import List, Optional, Sequence, Tuple, Union

from bs4 import BeautifulSoup, Tag

from job_scout.scrapers.text_sanitizer import clean_text

SelectorChain = Sequence[str]
Root = Union[BeautifulSoup, Tag]


def parse_html(html: Optional[str]) -> BeautifulSoup:
    """Parse markup with the stdlib-backed parser; None/"" gives an empty document."""
    return BeautifulSoup(html or "", "html.parser")


def _split_selector(selector: str) -> Tuple[str, Optional[str]]:
    if "@" in selector:
        css, attr = selector.rsplit("@", 1)
        return css.strip(), attr.strip()
    return selector, None


def _value(element: Tag, attr: Optional[str]) -> str:
    if attr:
        value = element.get(attr)
        if isinstance(value, list):
            value = " ".join(value)
        return (value or "").strip()
    return clean_text(element.get_text(" ", strip=True))


def extract_value(root: Root, selector: str) -> str:
    """
    Extract the first non-empty value for one selector.

    Every element matching the selector is tried in document order, so a
    text-only ``<h3 class="x">`` followed by ``<a class="x" href>`` still
    resolves ``.x@href``.
    """
    css, attr = _split_selector(selector)

    if not css:
        return _value(root, attr) if isinstance(root, Tag) else ""

    for element in root.select(css):
        value = _value(element, attr)
        if value:
            return value
    return ""


def first_match(root: Root, selectors: SelectorChain) -> str:
    """
    Walk a fallback chain and return the first non-empty value.

    Args:
        root: Document or card element to search within
        selectors: Candidate selectors in priority order

    Returns:
        The first non-empty value, or "" when no selector matches
    """
    for selector in selectors:
        value = extract_value(root, selector)
        if value:
            return value
    return ""


def select_cards(soup: Root, selectors: SelectorChain) -> List[Tag]:
    """
    Return the job cards matched by the first card selector with any hit.

    Args:
        soup: Parsed search results page
        selectors: Card selectors in priority order

    Returns:
        Matching card elements in document order (empty when none match)
    """
    for selector in selectors:
        cards = soup.select(selector)
        if cards:
            return cards
    return []
