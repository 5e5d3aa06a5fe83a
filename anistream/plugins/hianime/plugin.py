"""
HiAnime Plugin - Public query surface for hianime.to

This module implements the three operations a host calls: search,
fetch_episodes and fetch_sources. None of them raises; any failure is
logged and reported as an empty list, which is the only failure signal
the host sees.
"""

import logging
from typing import Any, Awaitable, Dict, List, Optional

from pydantic import ValidationError

from anistream.plugins.base import BasePlugin, PluginMetadata
from anistream.core.models import Episode, SearchResult, StreamingSource
from anistream.core.exceptions import ConfigurationError
from anistream.core.outcome import Outcome

from .config import HiAnimeConfig, get_default_config
from .pipeline import HiAnimePipeline
from .utils import extract_anime_id


logger = logging.getLogger(__name__)


plugin_metadata = PluginMetadata(
    name="HiAnime",
    version="1.0.0",
    author="AniStream Team",
    description="Search, episode listing and stream resolution for hianime.to",
    website="https://hianime.to",
)

default_config = get_default_config()


class HiAnimePlugin(BasePlugin):
    """
    HiAnime plugin for discovering titles and resolving streams.

    The plugin is its own HTTP client unless another object providing
    get_text and get_json is injected.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None, client: Optional[Any] = None):
        """
        Initialize HiAnime plugin.

        Args:
            config: Plugin configuration dictionary
            client: Optional HTTP client replacing the built-in aiohttp transport

        Raises:
            ConfigurationError: If the configuration is invalid
        """
        merged_config = {**default_config}
        if config:
            merged_config.update(config)

        try:
            self.settings = HiAnimeConfig.from_dict(merged_config)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid HiAnime plugin configuration: {e}", details=e.errors())

        super().__init__(self.settings.to_dict())

        self.pipeline = HiAnimePipeline(client or self, self.settings)

    @property
    def metadata(self) -> PluginMetadata:
        """Get plugin metadata."""
        return plugin_metadata

    @property
    def base_url(self) -> str:
        """Base origin of the configured mirror."""
        return self.settings.base_url

    async def _degrade(self, operation: str, subject: str, step: Awaitable[Outcome[list]]) -> list:
        """Run a pipeline step and turn any failure into an empty list."""
        try:
            outcome = await step
        except Exception as e:
            logger.error(f"{operation} error for '{subject}': {e}")
            return []

        if not outcome.ok:
            logger.error(f"{operation} failed for '{subject}': {outcome.describe()}")
            return []

        records = outcome.unwrap_or([])
        logger.info(f"{operation} found {len(records)} results for '{subject}' ({outcome.step})")
        return records

    async def search(self, query: str) -> List[SearchResult]:
        """
        Search hianime.to by keyword.

        Args:
            query: Search term

        Returns:
            Search results in document order, empty on failure
        """
        clean_query = (query or "").strip()
        if not clean_query:
            logger.warning("Search query is empty")
            return []

        return await self._degrade("Search", clean_query, self.pipeline.search(clean_query))

    async def fetch_episodes(self, anime_id: str) -> List[Episode]:
        """
        List the episodes of a title.

        Args:
            anime_id: Search result id or watch page URL

        Returns:
            Episodes sorted ascending by number, empty on failure
        """
        anime_id = extract_anime_id(anime_id)
        if not anime_id:
            logger.warning("Anime id is empty")
            return []

        return await self._degrade("Fetch episodes", anime_id, self.pipeline.episodes(anime_id))

    async def fetch_sources(self, episode_id: str) -> List[StreamingSource]:
        """
        Resolve the playable sources of an episode.

        Args:
            episode_id: Episode id, composite '{anime_id}?ep={N}' id or URL

        Returns:
            One source per resolvable server, each with the full subtitle
            list; empty on failure
        """
        episode_id = (episode_id or "").strip()
        if not episode_id:
            logger.warning("Episode id is empty")
            return []

        return await self._degrade("Fetch sources", episode_id, self.pipeline.sources(episode_id))

    def __str__(self) -> str:
        return f"HiAnime Plugin v{self.metadata.version}"

    def __repr__(self) -> str:
        return f"HiAnimePlugin(base_url='{self.base_url}')"


# Export plugin class and metadata
__all__ = ["HiAnimePlugin", "plugin_metadata", "default_config"]
