"""
HiAnime Utilities - Helper functions specific to hianime.to

This module provides URL builders and id helpers specific to the
HiAnime plugin implementation.
"""

import re
from typing import Optional
from urllib.parse import quote, urlparse

from .config import HIANIME_DOMAINS


WATCH_SLUG_PATTERN = re.compile(r'/watch/([^/?#]+)')


def is_hianime_url(url: str) -> bool:
    """
    Check if URL belongs to one of the HiAnime mirrors.

    Args:
        url: URL to check

    Returns:
        True if URL is from HiAnime, False otherwise
    """
    if not url:
        return False

    try:
        domain = urlparse(url).netloc.lower()
    except ValueError:
        # e.g. an unbalanced "[" in the host
        return False

    if domain.startswith('www.'):
        domain = domain[4:]

    return domain in HIANIME_DOMAINS


def extract_anime_id(value: str) -> str:
    """
    Normalize an anime id.

    Watch page URLs of any mirror are reduced to their slug; anything
    else is returned stripped of surrounding slashes and whitespace.
    Unparseable URLs are treated like any other id.
    """
    value = (value or "").strip()
    if is_hianime_url(value):
        match = WATCH_SLUG_PATTERN.search(urlparse(value).path)
        if match:
            return match.group(1)
        segments = [segment for segment in urlparse(value).path.split('/') if segment]
        if segments:
            return segments[-1]
    return value.strip('/')


def build_search_url(base_url: str, query: str) -> str:
    """Search page URL; the query is percent-encoded like encodeURIComponent."""
    return f"{base_url}/search?keyword={quote(query, safe='')}"


def build_watch_url(base_url: str, anime_or_episode_id: str) -> str:
    """Watch page URL. Absolute URLs are used as given."""
    if anime_or_episode_id.startswith('http'):
        return anime_or_episode_id
    return f"{base_url}/watch/{anime_or_episode_id}"


def build_episode_list_url(base_url: str, data_id: str) -> str:
    """AJAX endpoint returning the episode list fragment."""
    return f"{base_url}/ajax/v2/episode/list/{data_id}"


def build_server_sources_url(base_url: str, server_id: str) -> str:
    """AJAX endpoint returning the embed link of one server."""
    return f"{base_url}/ajax/v2/episode/sources?id={server_id}"


def parse_episode_query(episode_id: str) -> Optional[int]:
    """Episode number of a composite '{anime_id}?ep={N}' id, if it is one."""
    match = re.search(r'\?ep=(\d+)$', episode_id or "")
    return int(match.group(1)) if match else None


# Export utility functions
__all__ = [
    "is_hianime_url",
    "extract_anime_id",
    "build_search_url",
    "build_watch_url",
    "build_episode_list_url",
    "build_server_sources_url",
    "parse_episode_query",
]
