"""
HiAnime Extractor - Playable URL resolution for embed pages.

Embed hosts configure their players in many different ways, so the
resolver tries a fixed list of patterns in priority order. HLS manifests
are preferred over progressive MP4 files.
"""

import re
import logging
from typing import Dict, List, Optional, Tuple

from anistream.core.exceptions import AniStreamError, PluginError
from anistream.core.outcome import Outcome


logger = logging.getLogger(__name__)


# (name, pattern) in priority order; group 1 is the URL.
VIDEO_URL_PATTERNS: List[Tuple[str, "re.Pattern[str]"]] = [
    ("m3u8_url", re.compile(r'(https?://[^"\'\s]+\.m3u8[^"\'\s]*)')),
    ("sources_array", re.compile(
        r'["\']?sources["\']?\s*:\s*\[\s*\{\s*["\']?(?:file|src|url)["\']?\s*:\s*["\']([^"\']+)["\']'
    )),
    ("file_m3u8", re.compile(r'file:\s*["\']([^"\']+\.m3u8[^"\']*)["\']')),
    ("mp4_field", re.compile(r'(?:file|src|url):\s*["\']([^"\']+\.mp4[^"\']*)["\']')),
]


def find_video_url(content: str) -> Optional[str]:
    """
    Locate a playable URL inside embed page markup or script.

    Args:
        content: Raw embed page content

    Returns:
        The first match in priority order, or None
    """
    for name, pattern in VIDEO_URL_PATTERNS:
        match = pattern.search(content)
        if match:
            logger.debug(f"Video URL matched by '{name}'")
            return match.group(1)
    return None


class HiAnimeExtractor:
    """Fetches embed pages and resolves them to playable URLs."""

    def __init__(self, client, base_url: str = "https://hianime.to"):
        """
        Initialize HiAnime extractor.

        Args:
            client: Object providing an async get_text(url, headers=...)
            base_url: Base origin sent as Referer and Origin
        """
        self.client = client
        self.base_url = base_url

    @property
    def embed_headers(self) -> Dict[str, str]:
        """Many embed hosts reject requests without these."""
        return {
            'Referer': self.base_url,
            'Origin': self.base_url,
        }

    async def extract_video_url(self, embed_url: str) -> Outcome[str]:
        """
        Fetch an embed page and resolve it to a playable URL.

        Args:
            embed_url: Embed page URL returned by the sources endpoint

        Returns:
            Outcome carrying the URL, or the reason nothing was found
        """
        try:
            content = await self.client.get_text(embed_url, headers=self.embed_headers)
        except AniStreamError as e:
            logger.debug(f"Embed fetch failed for {embed_url}: {e}")
            return Outcome.failure(e, step="embed")

        video_url = find_video_url(content)
        if not video_url:
            return Outcome.failure(
                PluginError(f"No playable URL found in {embed_url}", plugin_name="hianime"),
                step="embed"
            )

        return Outcome.success(video_url, step="embed")


# Export extractor class
__all__ = ["VIDEO_URL_PATTERNS", "find_video_url", "HiAnimeExtractor"]
