"""
Plugin Layer - Source implementations.

This module contains the plugin interface and the site-specific
implementations that provide search, episode and source resolution.
"""

from anistream.plugins.base import BasePlugin, PluginMetadata
from anistream.plugins.common import (
    HTMLParser,
    URLHelper,
    decode_html,
    extract_all,
    extract_between,
)

__all__ = [
    # Base Plugin Architecture
    "BasePlugin",
    "PluginMetadata",
    # Plugin Development Utilities
    "HTMLParser",
    "URLHelper",
    "decode_html",
    "extract_all",
    "extract_between",
]
