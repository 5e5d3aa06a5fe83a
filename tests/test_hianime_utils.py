"""Tests for hianime.to URL builders and id normalisation."""

import pytest

from anistream.plugins.hianime.utils import (
    build_search_url,
    build_watch_url,
    extract_anime_id,
    is_hianime_url,
    parse_episode_query,
)

from conftest import BASE_URL


class TestExtractAnimeId:
    @pytest.mark.parametrize("value, expected", [
        ("naruto-677", "naruto-677"),
        ("  /naruto-677/ ", "naruto-677"),
        ("https://hianime.to/watch/naruto-677?ep=1001", "naruto-677"),
        ("https://www.hianime.bz/naruto-677", "naruto-677"),
        ("https://example.com/watch/naruto-677", "https://example.com/watch/naruto-677"),
    ])
    def test_normalization(self, value, expected):
        assert extract_anime_id(value) == expected

    def test_unparseable_url_is_kept(self):
        assert is_hianime_url("https://[hianime.to/watch/x") is False
        assert extract_anime_id("https://[hianime.to/watch/x") == "https://[hianime.to/watch/x"


class TestUrlBuilders:
    def test_search_url_encodes_like_encode_uri_component(self):
        assert build_search_url(BASE_URL, "fate/stay night") == f"{BASE_URL}/search?keyword=fate%2Fstay%20night"

    def test_watch_url(self):
        assert build_watch_url(BASE_URL, "naruto-677?ep=12") == f"{BASE_URL}/watch/naruto-677?ep=12"
        assert build_watch_url(BASE_URL, "https://hianime.sx/watch/x") == "https://hianime.sx/watch/x"

    def test_episode_query(self):
        assert parse_episode_query("naruto-677?ep=12") == 12
        assert parse_episode_query("1001") is None
