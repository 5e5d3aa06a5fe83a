"""
Common utilities for plugin development.

This package contains shared utilities and helper functions
used across plugins.
"""

from .utils import (
    HTMLParser,
    URLHelper,
    create_episode,
    create_search_result,
    decode_html,
    extract_all,
    extract_between,
)

__all__ = [
    "HTMLParser",
    "URLHelper",
    "create_episode",
    "create_search_result",
    "decode_html",
    "extract_all",
    "extract_between",
]
