"""
HiAnime Parser - Pattern-based extraction for hianime.to markup.

The site's markup drifts often, so every extraction task is an ordered
chain of independent strategies. Each strategy is a plain function over
raw text; the chain returns the output of the first strategy that finds
anything. The regular-expression tiers come first, and a BeautifulSoup
tier closes each chain as the last resort.
"""

import re
import logging
from dataclasses import dataclass, field
from typing import Callable, Generic, List, NamedTuple, Optional, Sequence, TypeVar

from anistream.core.models import Episode, SearchResult, SubtitleTrack
from anistream.plugins.common import (
    HTMLParser,
    URLHelper,
    create_episode,
    create_search_result,
)


logger = logging.getLogger(__name__)

T = TypeVar("T")


# Search results
POSTER_PATTERN = re.compile(
    r'<div[^>]*class="[^"]*film-poster[^"]*"[^>]*>[\s\S]*?'
    r'<a[^>]*href="([^"]*)"[^>]*>[\s\S]*?'
    r'<img[^>]*data-src="([^"]*)"[^>]*alt="([^"]*)"[^>]*>[\s\S]*?</div>'
)
WATCH_LINK_PATTERN = re.compile(r'<a[^>]*href="/watch/([^"?]+)[^"]*"[^>]*title="([^"]*)"[^>]*>')

# Episode lists
AJAX_EPISODE_PATTERN = re.compile(
    r'<a[^>]*class="[^"]*ep-item[^"]*"[^>]*data-number="(\d+)"[^>]*data-id="([^"]*)"[^>]*>'
)
EPISODE_TAG_PATTERN = re.compile(r'<a\s[^>]*class="[^"]*ep-item[^"]*"[^>]*>')
EP_QUERY_LINK_PATTERN = re.compile(r'href="/watch/[^"]*\?ep=(\d+)"')

# Episode page
ANIME_DATA_ID_PATTERN = re.compile(r'data-id="(\d+)"')
SERVER_TAG_PATTERN = re.compile(r'<[a-zA-Z]+\s[^>]*class="[^"]*server-item[^"]*"[^>]*>')
TRACK_TAG_PATTERN = re.compile(r'<track\s[^>]*>', re.IGNORECASE)
CAPTION_KIND_PATTERN = re.compile(r'kind="(?:subtitles|captions)"', re.IGNORECASE)

# Attributes inside a single tag; the lookbehind keeps data-id from
# matching inside data-server-id and similar names.
DATA_ID_ATTR = re.compile(r'(?<![\w-])data-id="([^"]*)"')
DATA_NUMBER_ATTR = re.compile(r'(?<![\w-])data-number="(\d+)"')
HREF_ATTR = re.compile(r'(?<![\w-])href="([^"]*)"')
SRC_ATTR = re.compile(r'(?<![\w-])src="([^"]*)"')
LABEL_ATTR = re.compile(r'(?<![\w-])label="([^"]*)"')
SRCLANG_ATTR = re.compile(r'(?<![\w-])srclang="([^"]*)"')


def _attribute(pattern: "re.Pattern[str]", tag: str) -> Optional[str]:
    match = pattern.search(tag)
    return match.group(1) if match else None


class Strategy(NamedTuple):
    """One named extraction tier."""

    name: str
    extract: Callable[[str], list]


@dataclass
class ChainResult(Generic[T]):
    """Records produced by a chain plus the tier that produced them."""

    records: List[T] = field(default_factory=list)
    tier: Optional[str] = None

    def __bool__(self) -> bool:
        return bool(self.records)


class StrategyChain(Generic[T]):
    """Ordered strategies; the first one to return a non-empty list wins."""

    def __init__(self, name: str, strategies: Sequence[Strategy]):
        self.name = name
        self.strategies = list(strategies)

    @property
    def tier_names(self) -> List[str]:
        return [strategy.name for strategy in self.strategies]

    def run(self, payload: str) -> ChainResult[T]:
        for strategy in self.strategies:
            records = strategy.extract(payload)
            if records:
                logger.debug(f"{self.name}: tier '{strategy.name}' produced {len(records)} records")
                return ChainResult(records=records, tier=strategy.name)
            logger.debug(f"{self.name}: tier '{strategy.name}' found nothing")
        return ChainResult()


# ---------------------------------------------------------------------------
# Search tiers
# ---------------------------------------------------------------------------

def parse_poster_blocks(html: str, base_url: str) -> List[SearchResult]:
    """Primary search tier: film-poster blocks with link, lazy image and alt text."""
    results = []
    for href, image, title in POSTER_PATTERN.findall(html):
        result = create_search_result(href, title, base_url, image=image)
        if result:
            results.append(result)
    return results


def parse_watch_links(html: str, base_url: str) -> List[SearchResult]:
    """Secondary search tier: any /watch/ anchor carrying a title attribute."""
    results = []
    for anime_id, title in WATCH_LINK_PATTERN.findall(html):
        result = create_search_result(f"/watch/{anime_id}", title, base_url, anime_id=anime_id)
        if result:
            results.append(result)
    return results


def parse_poster_dom(html: str, base_url: str) -> List[SearchResult]:
    """Tree-backed search tier over .flw-item cards."""
    parser = HTMLParser(html, base_url)
    results = []

    for item in parser.select('.flw-item'):
        link = item.select_one('.film-name a') or item.select_one('a[href]')
        if link is None:
            continue

        href = HTMLParser.attr(link, 'href')
        title = HTMLParser.attr(link, 'title') or link.get_text(strip=True)

        image = ""
        img = item.select_one('.film-poster img')
        if img is not None:
            image = HTMLParser.attr(img, 'data-src') or HTMLParser.attr(img, 'src')

        result = create_search_result(href, title, base_url, image=image)
        if result:
            results.append(result)

    return results


# ---------------------------------------------------------------------------
# Episode tiers
# ---------------------------------------------------------------------------

def parse_ajax_episodes(fragment: str) -> List[Episode]:
    """Tier 1: ep-item anchors of the AJAX fragment with explicit number and id."""
    episodes = []
    for number, episode_id in AJAX_EPISODE_PATTERN.findall(fragment):
        episode = create_episode(episode_id, number)
        if episode:
            episodes.append(episode)
    return episodes


def parse_page_episode_items(html: str) -> List[Episode]:
    """
    Tier 2: ep-item anchors on the watch page.

    Either attribute may be missing; a missing data-id falls back to the
    last path segment of href. Anchors without a number are skipped.
    """
    episodes = []
    for tag in EPISODE_TAG_PATTERN.findall(html):
        number = _attribute(DATA_NUMBER_ATTR, tag)
        episode_id = _attribute(DATA_ID_ATTR, tag)
        if not episode_id:
            href = _attribute(HREF_ATTR, tag)
            episode_id = URLHelper.last_path_segment(href) if href else None

        episode = create_episode(episode_id, number)
        if episode:
            episodes.append(episode)
    return episodes


def parse_ep_query_links(html: str, anime_id: str) -> List[Episode]:
    """Tier 3: plain /watch/...?ep=N links; the id becomes '{anime_id}?ep={N}'."""
    episodes = []
    for number in EP_QUERY_LINK_PATTERN.findall(html):
        episode = create_episode(f"{anime_id}?ep={number}", number)
        if episode:
            episodes.append(episode)
    return episodes


def parse_episode_items_dom(html: str) -> List[Episode]:
    """Tree-backed episode tier over a.ep-item elements."""
    parser = HTMLParser(html)
    episodes = []

    for item in parser.select('a.ep-item[data-number]'):
        episode_id = HTMLParser.attr(item, 'data-id') or URLHelper.last_path_segment(
            HTMLParser.attr(item, 'href')
        )
        episode = create_episode(episode_id, HTMLParser.attr(item, 'data-number'))
        if episode:
            episodes.append(episode)

    return episodes


def sort_episodes(episodes: List[Episode]) -> List[Episode]:
    """Ascending by number; equal numbers keep extraction order."""
    return sorted(episodes, key=lambda episode: episode.number)


class HiAnimeParser:
    """Pattern extractors for one hianime.to payload."""

    def __init__(self, html_content: str, base_url: str = "https://hianime.to"):
        """
        Initialize HiAnime parser.

        Args:
            html_content: HTML content to parse
            base_url: Base origin for resolving relative links
        """
        self.html = html_content or ""
        self.base_url = base_url

    def search_chain(self) -> StrategyChain[SearchResult]:
        return StrategyChain("search", [
            Strategy("poster", lambda html: parse_poster_blocks(html, self.base_url)),
            Strategy("watch_link", lambda html: parse_watch_links(html, self.base_url)),
            Strategy("poster_dom", lambda html: parse_poster_dom(html, self.base_url)),
        ])

    def episode_chain(self, anime_id: str, ajax_fragment: Optional[str] = None) -> StrategyChain[Episode]:
        """
        Episode tiers in priority order.

        The first tier reads the AJAX fragment instead of the watch page
        and yields nothing when no fragment was retrieved.
        """
        return StrategyChain("episodes", [
            Strategy("ajax_fragment", lambda _html: parse_ajax_episodes(ajax_fragment) if ajax_fragment else []),
            Strategy("page_items", parse_page_episode_items),
            Strategy("ep_query_links", lambda html: parse_ep_query_links(html, anime_id)),
            Strategy("page_items_dom", parse_episode_items_dom),
        ])

    def parse_search_results(self) -> ChainResult[SearchResult]:
        """Parse search results in document order."""
        return self.search_chain().run(self.html)

    def parse_episodes(self, anime_id: str, ajax_fragment: Optional[str] = None) -> ChainResult[Episode]:
        """Parse the episode list, sorted ascending by number."""
        result = self.episode_chain(anime_id, ajax_fragment).run(self.html)
        result.records = sort_episodes(result.records)
        return result

    def find_anime_data_id(self) -> Optional[str]:
        """Numeric id used by the AJAX episode-list endpoint."""
        return _attribute(ANIME_DATA_ID_PATTERN, self.html)

    def find_server_ids(self) -> List[str]:
        """Numeric ids of the server-item elements, in document order."""
        server_ids = []
        for tag in SERVER_TAG_PATTERN.findall(self.html):
            server_id = _attribute(DATA_ID_ATTR, tag)
            if server_id and server_id.isdigit():
                server_ids.append(server_id)
        return server_ids

    def find_subtitle_tracks(self) -> List[SubtitleTrack]:
        """Caption and subtitle <track> elements; label and srclang are optional."""
        tracks = []
        for tag in TRACK_TAG_PATTERN.findall(self.html):
            if not CAPTION_KIND_PATTERN.search(tag):
                continue

            src = _attribute(SRC_ATTR, tag)
            if not src:
                continue

            tracks.append(SubtitleTrack(
                url=URLHelper.make_absolute(src, self.base_url),
                label=_attribute(LABEL_ATTR, tag) or "English",
                language=_attribute(SRCLANG_ATTR, tag) or "en",
            ))
        return tracks


# Export parser classes and tier functions
__all__ = [
    "Strategy",
    "ChainResult",
    "StrategyChain",
    "HiAnimeParser",
    "parse_poster_blocks",
    "parse_watch_links",
    "parse_poster_dom",
    "parse_ajax_episodes",
    "parse_page_episode_items",
    "parse_ep_query_links",
    "parse_episode_items_dom",
    "sort_episodes",
]
