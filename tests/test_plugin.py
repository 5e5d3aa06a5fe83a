"""Tests for the public query surface and its HTTP transport."""

import asyncio
import logging
from unittest.mock import AsyncMock

import aiohttp
import pytest

from anistream.core.exceptions import ConfigurationError, NetworkError, ParseError
from anistream.plugins.hianime import HiAnimePlugin

from conftest import BASE_URL, build_client


class FakeResponse:
    def __init__(self, status: int, body: str = "", error: Exception = None):
        self.status = status
        self.body = body
        self.error = error

    async def text(self) -> str:
        if self.error is not None:
            raise self.error
        return self.body

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        return False


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.closed = False
        self.calls = []

    def get(self, url, headers=None):
        self.calls.append((url, headers))
        if self.error is not None:
            raise self.error
        return self.response

    async def close(self):
        self.closed = True


@pytest.fixture
def naruto_plugin(naruto_site):
    return HiAnimePlugin(client=build_client(**naruto_site))


class TestSearch:
    def test_naruto_search(self, naruto_plugin):
        results = asyncio.run(naruto_plugin.search("naruto"))

        assert [(r.id, r.title) for r in results] == [
            ("naruto-123", "Naruto"),
            ("naruto-shippuden-456", "Naruto Shippuden"),
        ]
        assert results[1].url == "https://hianime.to/naruto-shippuden-456"

    def test_empty_query_makes_no_request(self, make_client):
        client = make_client()
        plugin = HiAnimePlugin(client=client)

        assert asyncio.run(plugin.search("   ")) == []
        client.get_text.assert_not_awaited()

    def test_network_failure_degrades_to_empty(self, make_client, caplog):
        client = make_client(pages={
            f"{BASE_URL}/search?keyword=naruto": NetworkError("HTTP 503 error", status_code=503),
        })

        results = asyncio.run(HiAnimePlugin(client=client).search("naruto"))

        assert results == []
        assert "Search failed for 'naruto'" in caplog.text

    def test_unexpected_exception_degrades_to_empty(self, make_client, caplog):
        client = make_client(pages={f"{BASE_URL}/search?keyword=naruto": RuntimeError("boom")})

        results = asyncio.run(HiAnimePlugin(client=client).search("naruto"))

        assert results == []
        assert "boom" in caplog.text

    def test_success_is_logged_with_tier(self, naruto_plugin, caplog):
        caplog.set_level(logging.INFO, logger="anistream.plugins.hianime.plugin")

        asyncio.run(naruto_plugin.search("naruto"))

        assert "Search found 2 results for 'naruto' (search:poster)" in caplog.text

    def test_configured_mirror(self, make_client):
        client = make_client(pages={"https://hianime.bz/search?keyword=bleach": "<html></html>"})
        plugin = HiAnimePlugin({"domain": "hianime.bz"}, client=client)

        assert asyncio.run(plugin.search("bleach")) == []
        client.get_text.assert_awaited_once_with("https://hianime.bz/search?keyword=bleach")


class TestFetchEpisodes:
    def test_sorted_episodes(self, naruto_plugin):
        episodes = asyncio.run(naruto_plugin.fetch_episodes("naruto-677"))

        assert [e.number for e in episodes] == [1, 2, 3]

    def test_watch_url_is_accepted(self, naruto_plugin):
        episodes = asyncio.run(naruto_plugin.fetch_episodes("https://hianime.to/watch/naruto-677?ep=1001"))

        assert len(episodes) == 3

    def test_ajax_failure_keeps_page_episodes(self, naruto_site):
        naruto_site["pages"][f"{BASE_URL}/watch/naruto-677"] = (
            '<div id="wrapper" data-id="677"></div>'
            '<a class="ssl-item ep-item" data-number="1" data-id="1001" href="/watch/naruto-677?ep=1001">1</a>'
        )
        naruto_site["payloads"][f"{BASE_URL}/ajax/v2/episode/list/677"] = ValueError("Expecting value")
        plugin = HiAnimePlugin(client=build_client(**naruto_site))

        episodes = asyncio.run(plugin.fetch_episodes("naruto-677"))

        assert [e.number for e in episodes] == [1]

    def test_malformed_url_degrades_to_empty(self, naruto_plugin):
        assert asyncio.run(naruto_plugin.fetch_episodes("https://[hianime.to/watch/x")) == []

    def test_missing_title_degrades_to_empty(self, naruto_plugin):
        assert asyncio.run(naruto_plugin.fetch_episodes("does-not-exist-1")) == []

    def test_empty_id(self, naruto_plugin):
        assert asyncio.run(naruto_plugin.fetch_episodes("")) == []


class TestFetchSources:
    def test_resilient_to_one_failing_server(self, naruto_site):
        naruto_site["payloads"][f"{BASE_URL}/ajax/v2/episode/sources?id=502"] = NetworkError("HTTP 500 error")
        plugin = HiAnimePlugin(client=build_client(**naruto_site))

        sources = asyncio.run(plugin.fetch_sources("naruto-677?ep=1001"))

        assert len(sources) == 2
        for source in sources:
            assert [t.url for t in source.subtitles] == [
                "https://hianime.to/subs/naruto-1-en.vtt",
                "https://cdn.example/subs/naruto-1-es.vtt",
            ]

    def test_episode_page_failure_degrades_to_empty(self, naruto_plugin, caplog):
        assert asyncio.run(naruto_plugin.fetch_sources("naruto-677?ep=9999")) == []
        assert "Fetch sources failed" in caplog.text

    def test_numeric_episode_id_is_a_watch_path(self, make_client):
        client = make_client(pages={f"{BASE_URL}/watch/1001": "<div></div>"})

        assert asyncio.run(HiAnimePlugin(client=client).fetch_sources(" 1001 ")) == []
        client.get_text.assert_awaited_once_with(f"{BASE_URL}/watch/1001")


class TestConfiguration:
    def test_unknown_domain_is_rejected(self):
        with pytest.raises(ConfigurationError):
            HiAnimePlugin({"domain": "example.com"})

    def test_domain_is_normalized(self):
        plugin = HiAnimePlugin({"domain": "https://www.hianime.nz/"})

        assert plugin.base_url == "https://hianime.nz"
        assert plugin.pipeline.base_url == "https://hianime.nz"

    def test_out_of_range_timeout(self):
        with pytest.raises(ConfigurationError):
            HiAnimePlugin({"timeout": 1})


class TestTransport:
    def test_non_2xx_status_raises_network_error(self):
        plugin = HiAnimePlugin()
        plugin._session = FakeSession(FakeResponse(404, "not found"))

        with pytest.raises(NetworkError) as exc_info:
            asyncio.run(plugin.get_text("/watch/missing"))

        assert exc_info.value.status_code == 404
        assert plugin._session.calls[0][0] == f"{BASE_URL}/watch/missing"

    def test_transport_errors_raise_network_error(self):
        plugin = HiAnimePlugin()
        plugin._session = FakeSession(error=aiohttp.ClientConnectionError("connection reset"))

        with pytest.raises(NetworkError, match="connection reset"):
            asyncio.run(plugin.get_text(f"{BASE_URL}/home"))

    def test_timeout_raises_network_error(self):
        plugin = HiAnimePlugin()
        plugin._session = FakeSession(error=asyncio.TimeoutError())

        with pytest.raises(NetworkError):
            asyncio.run(plugin.get_text(f"{BASE_URL}/home"))

    def test_get_text_returns_body(self):
        plugin = HiAnimePlugin()
        plugin._session = FakeSession(FakeResponse(200, "<html>ok</html>"))

        assert asyncio.run(plugin.get_text("/home", headers={"Referer": BASE_URL})) == "<html>ok</html>"
        assert plugin._session.calls == [(f"{BASE_URL}/home", {"Referer": BASE_URL})]

    def test_undecodable_body_raises_parse_error(self):
        plugin = HiAnimePlugin()
        plugin._session = FakeSession(FakeResponse(
            200, error=UnicodeDecodeError("utf-8", b"\xff", 0, 1, "invalid start byte")
        ))

        with pytest.raises(ParseError):
            asyncio.run(plugin.get_text("/ajax/v2/episode/list/677"))

    def test_get_json_marks_ajax_requests(self):
        plugin = HiAnimePlugin()
        plugin.get_text = AsyncMock(return_value='{"status": true, "html": "<a></a>"}')

        data = asyncio.run(plugin.get_json("/ajax/v2/episode/list/677"))

        assert data["html"] == "<a></a>"
        plugin.get_text.assert_awaited_once_with(
            "/ajax/v2/episode/list/677",
            headers={"X-Requested-With": "XMLHttpRequest"},
        )

    @pytest.mark.parametrize("body", ["<html>Cloudflare</html>", "[1, 2, 3]"])
    def test_get_json_rejects_non_objects(self, body):
        plugin = HiAnimePlugin()
        plugin.get_text = AsyncMock(return_value=body)

        with pytest.raises(ParseError):
            asyncio.run(plugin.get_json("/ajax/v2/episode/sources?id=1"))

    def test_context_manager_closes_session(self):
        session = FakeSession()

        async def use_plugin():
            async with HiAnimePlugin() as plugin:
                plugin._session = session

        asyncio.run(use_plugin())

        assert session.closed
