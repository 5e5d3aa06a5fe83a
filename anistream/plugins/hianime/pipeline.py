"""
HiAnime Pipeline - Multi-step resolution against hianime.to

This module orchestrates the network calls behind each query (page fetch,
AJAX calls, embed fetch) and assembles the final values from the parser's
output. Every step reports through an Outcome so that callers can tell
an empty page from a failed request.
"""

import asyncio
import logging
from typing import Dict, List, Optional

from anistream.core.exceptions import AniStreamError, ParseError
from anistream.core.models import (
    Episode,
    SearchResult,
    SourceType,
    StreamingSource,
    StreamQuality,
    SubtitleTrack,
)
from anistream.core.outcome import Outcome

from .config import HiAnimeConfig
from .extractor import HiAnimeExtractor
from .parser import HiAnimeParser
from .utils import (
    build_episode_list_url,
    build_search_url,
    build_server_sources_url,
    build_watch_url,
    parse_episode_query,
)


logger = logging.getLogger(__name__)


class HiAnimePipeline:
    """Resolution steps for search, episode listing and source resolution."""

    def __init__(self, client, config: Optional[HiAnimeConfig] = None):
        """
        Initialize the pipeline.

        Args:
            client: Object providing async get_text(url, headers=None) and get_json(url)
            config: Plugin configuration; defaults are used when omitted
        """
        self.client = client
        self.config = config or HiAnimeConfig()
        self.base_url = self.config.base_url
        self.extractor = HiAnimeExtractor(client, self.base_url)

    @property
    def playback_headers(self) -> Dict[str, str]:
        """Headers the media hosts require from the player."""
        return {
            'Referer': self.base_url,
            'Origin': self.base_url,
            'User-Agent': self.config.playback_user_agent,
        }

    async def search(self, query: str) -> Outcome[List[SearchResult]]:
        """Fetch the search page and extract results in document order."""
        try:
            html = await self.client.get_text(build_search_url(self.base_url, query))
        except AniStreamError as e:
            return Outcome.failure(e, step="search_page")

        result = HiAnimeParser(html, self.base_url).parse_search_results()
        return Outcome.success(result.records, step=f"search:{result.tier or 'none'}")

    async def _episode_fragment(self, parser: HiAnimeParser) -> Optional[str]:
        """
        Episode list fragment from the AJAX endpoint.

        A missing data-id, a failed request or a malformed payload all
        yield None, which leaves the first episode tier empty.
        """
        data_id = parser.find_anime_data_id()
        if not data_id:
            logger.debug("No data-id on watch page, skipping AJAX episode list")
            return None

        try:
            data = await self.client.get_json(build_episode_list_url(self.base_url, data_id))
            fragment = data.get('html')
        except Exception as e:
            logger.error(f"AJAX episode list failed for data-id {data_id}: {e}")
            return None

        if not isinstance(fragment, str) or not fragment:
            logger.debug(f"AJAX episode list for data-id {data_id} carried no html")
            return None

        return fragment

    async def episodes(self, anime_id: str) -> Outcome[List[Episode]]:
        """Fetch the watch page and run the episode tiers, sorted by number."""
        try:
            html = await self.client.get_text(build_watch_url(self.base_url, anime_id))
        except AniStreamError as e:
            return Outcome.failure(e, step="watch_page")

        parser = HiAnimeParser(html, self.base_url)
        fragment = await self._episode_fragment(parser)

        result = parser.parse_episodes(anime_id, fragment)
        return Outcome.success(result.records, step=f"episodes:{result.tier or 'none'}")

    async def resolve_server(self, server_id: str) -> Outcome[StreamingSource]:
        """
        Resolve one server to a streaming source.

        The source carries no subtitles yet; sources() attaches them.
        """
        try:
            data = await self.client.get_json(build_server_sources_url(self.base_url, server_id))
        except AniStreamError as e:
            return Outcome.failure(e, step=f"server:{server_id}")

        embed_url = data.get('link')
        if not embed_url or not isinstance(embed_url, str):
            return Outcome.failure(
                ParseError(f"Server {server_id} returned no embed link"),
                step=f"server:{server_id}"
            )

        video = await self.extractor.extract_video_url(embed_url)
        if not video.ok:
            return Outcome.failure(video.error, step=f"server:{server_id}")

        source = StreamingSource(
            label=data.get('type') or f"Server {server_id}",
            type=SourceType.from_url(video.value),
            qualities=[StreamQuality(
                quality="default",
                url=video.value,
                headers=self.playback_headers,
            )],
        )
        return Outcome.success(source, step=f"server:{server_id}")

    async def _resolve_server_safely(self, server_id: str) -> Optional[StreamingSource]:
        """A failing server is logged and omitted; it never stops the others."""
        try:
            outcome = await self.resolve_server(server_id)
        except Exception as e:
            logger.warning(f"Server {server_id} failed: {e}")
            return None

        if not outcome.ok:
            logger.warning(outcome.describe())
            return None

        return outcome.value

    async def _resolve_servers(self, server_ids: List[str]) -> List[Optional[StreamingSource]]:
        """Resolve servers in document order, sequentially unless configured otherwise."""
        if not self.config.parallel_servers:
            return [await self._resolve_server_safely(server_id) for server_id in server_ids]

        semaphore = asyncio.Semaphore(self.config.concurrent_requests)

        async def bounded(server_id: str) -> Optional[StreamingSource]:
            async with semaphore:
                return await self._resolve_server_safely(server_id)

        # gather keeps the order of its arguments
        return await asyncio.gather(*(bounded(server_id) for server_id in server_ids))

    async def sources(self, episode_id: str) -> Outcome[List[StreamingSource]]:
        """Fetch the episode page, resolve its servers and attach its subtitles."""
        if parse_episode_query(episode_id) is not None:
            logger.debug(f"Composite episode id {episode_id!r} used as a watch path")

        try:
            html = await self.client.get_text(build_watch_url(self.base_url, episode_id))
        except AniStreamError as e:
            return Outcome.failure(e, step="episode_page")

        parser = HiAnimeParser(html, self.base_url)
        server_ids = parser.find_server_ids()
        logger.debug(f"Found {len(server_ids)} servers for episode {episode_id}")

        resolved = await self._resolve_servers(server_ids)
        subtitles: List[SubtitleTrack] = parser.find_subtitle_tracks()

        sources = [
            source.model_copy(update={'subtitles': list(subtitles)})
            for source in resolved
            if source is not None
        ]
        return Outcome.success(sources, step="sources")


# Export pipeline class
__all__ = ["HiAnimePipeline"]
