"""
Base Plugin Interface - Contract and HTTP transport for source plugins.

A source plugin answers three queries (search, episode listing, source
resolution). This module declares them and supplies the aiohttp
transport the plugin uses to reach its site.
"""

import asyncio
import json
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional
from urllib.parse import urljoin, urlparse

import aiohttp
from pydantic import BaseModel, Field

from anistream.core.models import Episode, SearchResult, StreamingSource
from anistream.core.exceptions import NetworkError, ParseError


BROWSER_HEADERS = {
    'Accept': 'text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8',
    'Accept-Language': 'en-US,en;q=0.5',
    'Accept-Encoding': 'gzip, deflate',
}


class PluginMetadata(BaseModel):
    """Descriptive information shown for a plugin."""

    name: str = Field(..., description="Display name")
    version: str = Field(default="1.0.0", description="Plugin version")
    author: str = Field(default="Unknown", description="Maintainer")
    description: str = Field(default="", description="One-line summary")
    website: Optional[str] = Field(None, description="Site the plugin scrapes")


class BasePlugin(ABC):
    """
    Abstract base class for streaming source plugins.

    Every network call goes through get_text or get_json and is attempted
    exactly once. Failures surface as NetworkError or ParseError; plugins
    decide how to degrade.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Args:
            config: Plugin options; 'timeout' and 'user_agent' are read here
        """
        self.config = config or {}
        self.timeout = self.config.get('timeout', 30)
        self.user_agent = self.config.get('user_agent', 'AniStream/0.1.0')

        self._session: Optional[aiohttp.ClientSession] = None
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @property
    @abstractmethod
    def metadata(self) -> PluginMetadata:
        pass

    @property
    @abstractmethod
    def base_url(self) -> str:
        """Origin that relative URLs are resolved against."""
        pass

    @property
    def session(self) -> aiohttp.ClientSession:
        """HTTP session, opened on first use and reopened after cleanup."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                connector=aiohttp.TCPConnector(limit=10, limit_per_host=5, ttl_dns_cache=300),
                timeout=aiohttp.ClientTimeout(total=self.timeout),
                headers={'User-Agent': self.user_agent, **BROWSER_HEADERS},
            )
        return self._session

    def _absolute(self, url: str) -> str:
        if urlparse(url).netloc:
            return url
        return urljoin(self.base_url, url)

    async def get_text(self, url: str, headers: Optional[Dict[str, str]] = None) -> str:
        """
        Fetch a URL and return the response body.

        Args:
            url: Absolute URL, or a path relative to base_url
            headers: Extra request headers

        Raises:
            NetworkError: On transport failure, timeout or a status >= 400
            ParseError: If the body cannot be decoded as text
        """
        url = self._absolute(url)
        self.logger.debug(f"GET {url}")

        try:
            async with self.session.get(url, headers=headers) as response:
                if response.status >= 400:
                    raise NetworkError(
                        f"HTTP {response.status} error for {url}",
                        url=url,
                        status_code=response.status
                    )
                return await response.text()

        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise NetworkError(f"Request to {url} failed: {e}", url=url, details=str(e))
        except UnicodeDecodeError as e:
            raise ParseError(f"Undecodable response body from {url}: {e}", url=url, details=e.encoding)

    async def get_json(self, url: str, headers: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
        """
        Fetch an AJAX endpoint and decode its JSON object.

        The body is decoded regardless of the declared content type.

        Raises:
            NetworkError: As for get_text
            ParseError: If the body is undecodable or not a JSON object
        """
        text = await self.get_text(url, headers={'X-Requested-With': 'XMLHttpRequest', **(headers or {})})

        try:
            data = json.loads(text)
        except ValueError as e:
            raise ParseError(f"Malformed JSON from {url}: {e}", url=self._absolute(url), details=text[:200])

        if not isinstance(data, dict):
            raise ParseError(f"Expected a JSON object from {url}", url=self._absolute(url), details=type(data).__name__)

        return data

    @abstractmethod
    async def search(self, query: str) -> List[SearchResult]:
        """
        Find titles matching a keyword.

        Returns:
            Search results in site order, empty on failure
        """
        pass

    @abstractmethod
    async def fetch_episodes(self, anime_id: str) -> List[Episode]:
        """
        List the episodes of a title.

        Args:
            anime_id: Id of a search result

        Returns:
            Episodes sorted ascending by number, empty on failure
        """
        pass

    @abstractmethod
    async def fetch_sources(self, episode_id: str) -> List[StreamingSource]:
        """
        Resolve playable sources for an episode.

        Args:
            episode_id: Id of an episode

        Returns:
            Resolved sources, empty on failure
        """
        pass

    async def cleanup(self) -> None:
        """Close the HTTP session if one is open."""
        if self._session is not None and not self._session.closed:
            await self._session.close()
            self.logger.debug("HTTP session closed")
        self._session = None

    async def __aenter__(self) -> "BasePlugin":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.cleanup()

    def __str__(self) -> str:
        return f"{self.metadata.name} v{self.metadata.version}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(base_url='{self.base_url}')"


__all__ = ["BasePlugin", "PluginMetadata"]
