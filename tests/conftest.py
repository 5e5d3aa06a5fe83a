"""Shared fixtures: canned hianime.to payloads and a scripted HTTP client."""

from typing import Any, Dict, Optional
from unittest.mock import AsyncMock, MagicMock

import pytest

from anistream.core.exceptions import NetworkError


BASE_URL = "https://hianime.to"

SEARCH_PAGE = """
<div class="film_list-wrap">
  <div class="flw-item">
    <div class="film-poster">
      <a href="/naruto-123" class="film-poster-ahref" title="Naruto">
        <img class="film-poster-img lazyload" data-src="https://img.example/naruto.jpg" alt="Naruto">
      </a>
    </div>
  </div>
  <div class="flw-item">
    <div class="film-poster">
      <a href="/naruto-shippuden-456"><img data-src="https://img.example/shippuden.jpg" alt="Naruto Shippuden"></a>
    </div>
  </div>
</div>
"""

WATCH_PAGE = """
<div id="wrapper" data-id="677">
  <h2 class="film-name">Naruto</h2>
  <div id="episodes-content"></div>
</div>
"""

EPISODE_FRAGMENT = """
<div class="ss-list">
  <a title="The Worst Client" class="ssl-item ep-item" data-number="2" data-id="1002" href="/watch/naruto-677?ep=1002"></a>
  <a title="Enter: Naruto Uzumaki!" class="ssl-item ep-item" data-number="1" data-id="1001" href="/watch/naruto-677?ep=1001"></a>
  <a title="Sasuke and Sakura" class="ssl-item ep-item" data-number="3" data-id="1003" href="/watch/naruto-677?ep=1003"></a>
</div>
"""

EPISODE_PAGE = """
<div class="player-servers">
  <div class="item server-item" data-type="sub" data-id="501" data-server-id="4"><a class="btn">HD-1</a></div>
  <div class="item server-item" data-type="sub" data-id="502" data-server-id="1"><a class="btn">HD-2</a></div>
  <div class="item server-item" data-type="dub" data-id="503" data-server-id="6"><a class="btn">HD-3</a></div>
</div>
<video>
  <track kind="captions" src="/subs/naruto-1-en.vtt" label="English" srclang="en" default>
  <track src="https://cdn.example/subs/naruto-1-es.vtt" kind="subtitles" label="Spanish" srclang="es">
</video>
"""

HLS_EMBED = """
<script>
  var player = jwplayer("player").setup({
    sources: [{file: "https://cdn.example/naruto/1/video.mp4"}],
  });
  var hls = "https://cdn.example/naruto/1/master.m3u8?token=abc";
</script>
"""

MP4_EMBED = """
<script>
  player.setup({ src: 'https://cdn.example/naruto/1/backup.mp4' });
</script>
"""


def _lookup(table: Dict[str, Any], url: str) -> Any:
    if url not in table:
        raise NetworkError(f"HTTP 404 error for {url}", url=url, status_code=404)
    value = table[url]
    if isinstance(value, Exception):
        raise value
    return value


def build_client(pages: Optional[Dict[str, Any]] = None, payloads: Optional[Dict[str, Any]] = None) -> MagicMock:
    """
    Client whose get_text serves `pages` and get_json serves `payloads`.

    Unknown URLs raise a 404 NetworkError; Exception values are raised.
    """
    pages = pages or {}
    payloads = payloads or {}

    client = MagicMock()
    client.get_text = AsyncMock(side_effect=lambda url, headers=None: _lookup(pages, url))
    client.get_json = AsyncMock(side_effect=lambda url, headers=None: _lookup(payloads, url))
    return client


@pytest.fixture
def make_client():
    return build_client


@pytest.fixture
def naruto_site() -> Dict[str, Dict[str, Any]]:
    """Pages and AJAX payloads for one title with three episodes and three servers."""
    return {
        "pages": {
            f"{BASE_URL}/search?keyword=naruto": SEARCH_PAGE,
            f"{BASE_URL}/watch/naruto-677": WATCH_PAGE,
            f"{BASE_URL}/watch/naruto-677?ep=1001": EPISODE_PAGE,
            "https://embed.example/e/501": HLS_EMBED,
            "https://embed.example/e/502": HLS_EMBED,
            "https://embed.example/e/503": MP4_EMBED,
        },
        "payloads": {
            f"{BASE_URL}/ajax/v2/episode/list/677": {"status": True, "html": EPISODE_FRAGMENT},
            f"{BASE_URL}/ajax/v2/episode/sources?id=501": {"type": "HD-1", "link": "https://embed.example/e/501"},
            f"{BASE_URL}/ajax/v2/episode/sources?id=502": {"type": "HD-2", "link": "https://embed.example/e/502"},
            f"{BASE_URL}/ajax/v2/episode/sources?id=503": {"link": "https://embed.example/e/503"},
        },
    }
