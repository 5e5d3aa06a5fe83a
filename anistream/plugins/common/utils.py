"""
Plugin Utilities - Text-scan primitives and helpers for plugin development.

This module provides the low-level helpers every extractor builds on:
delimiter-based substring scanning, a minimal HTML entity decoder, URL
helpers and a thin BeautifulSoup wrapper for the tree-backed fallback tiers.
"""

import logging
from typing import List, Optional

from bs4 import BeautifulSoup, Tag

from anistream.core.models import Episode, SearchResult


logger = logging.getLogger(__name__)


# Order matters: &amp; is decoded first, so "&amp;lt;" becomes "<".
HTML_ENTITIES = (
    ("&amp;", "&"),
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&quot;", '"'),
    ("&#039;", "'"),
    ("&#39;", "'"),
    ("&#x27;", "'"),
)


def extract_between(text: str, start: str, end: str) -> Optional[str]:
    """
    Return the text strictly between the first start marker and the
    first end marker that follows it.

    Args:
        text: Text to scan
        start: Opening marker
        end: Closing marker

    Returns:
        The enclosed substring, or None if either marker is missing
    """
    start_index = text.find(start)
    if start_index == -1:
        return None

    content_start = start_index + len(start)
    end_index = text.find(end, content_start)
    if end_index == -1:
        return None

    return text[content_start:end_index]


def extract_all(text: str, start: str, end: str) -> List[str]:
    """
    Return every non-overlapping substring enclosed by start and end,
    in document order.

    The scan resumes after each end marker and stops at the first start
    marker without a matching end.
    """
    results = []
    cursor = 0

    while True:
        start_index = text.find(start, cursor)
        if start_index == -1:
            break

        content_start = start_index + len(start)
        end_index = text.find(end, content_start)
        if end_index == -1:
            break

        results.append(text[content_start:end_index])
        cursor = end_index + len(end)

    return results


def decode_html(text: str) -> str:
    """Replace the handful of entities the site emits; anything else passes through."""
    for entity, literal in HTML_ENTITIES:
        text = text.replace(entity, literal)
    return text


class URLHelper:
    """Utility class for URL manipulation."""

    @staticmethod
    def is_absolute(url: str) -> bool:
        """Check if URL is absolute."""
        return url.startswith("http")

    @staticmethod
    def make_absolute(url: str, base_url: str) -> str:
        """Prefix site-relative paths with the base origin."""
        if URLHelper.is_absolute(url):
            return url
        if not url.startswith("/"):
            url = f"/{url}"
        return f"{base_url.rstrip('/')}{url}"

    @staticmethod
    def last_path_segment(href: str) -> Optional[str]:
        """Last non-empty path segment of a link, e.g. '/watch/naruto-123/' -> 'naruto-123'."""
        segments = [segment for segment in href.split("/") if segment]
        return segments[-1] if segments else None


class HTMLParser:
    """Utility class for the tree-backed extraction tiers."""

    def __init__(self, html_content: str, base_url: str = ""):
        """
        Initialize HTML parser.

        Args:
            html_content: HTML content to parse
            base_url: Base URL for resolving relative links
        """
        self.soup = BeautifulSoup(html_content, 'html.parser')
        self.base_url = base_url

    def select(self, selector: str) -> List[Tag]:
        """Find all elements matching a CSS selector."""
        return self.soup.select(selector)

    @staticmethod
    def attr(element: Tag, name: str, default: str = "") -> str:
        """
        Read an attribute as a string.

        BeautifulSoup returns multi-valued attributes such as class as a list.
        """
        value = element.get(name)
        if value is None:
            return default
        if isinstance(value, list):
            return value[0] if value else default
        return str(value)


def create_search_result(
    href: str,
    title: str,
    base_url: str,
    image: str = "",
    anime_id: Optional[str] = None,
) -> Optional[SearchResult]:
    """
    Build a SearchResult from raw markup fields.

    The id defaults to the last path segment of href. Returns None when
    the id or the title attribute is empty; a whitespace-only title still
    counts as present (SearchResult strips it).
    """
    anime_id = anime_id or URLHelper.last_path_segment(href)
    title = decode_html(title)

    if not anime_id or not title:
        return None

    return SearchResult(
        id=anime_id,
        title=title,
        image=image or "",
        url=URLHelper.make_absolute(href, base_url),
    )


def create_episode(episode_id: Optional[str], number: Optional[str]) -> Optional[Episode]:
    """
    Build an Episode from raw attribute strings.

    Returns None when either value is missing or the number is not a
    positive integer.
    """
    if not episode_id or not number:
        return None

    try:
        parsed_number = int(number)
    except ValueError:
        logger.debug(f"Ignoring episode with non-numeric number: {number!r}")
        return None

    if parsed_number < 1:
        logger.debug(f"Ignoring episode with out-of-range number: {parsed_number}")
        return None

    return Episode(id=episode_id, number=parsed_number)


# Export utility classes and functions
__all__ = [
    "HTML_ENTITIES",
    "extract_between",
    "extract_all",
    "decode_html",
    "URLHelper",
    "HTMLParser",
    "create_search_result",
    "create_episode",
]
