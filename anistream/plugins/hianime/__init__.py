"""
HiAnime Plugin - Stream resolution for hianime.to

This plugin provides search, episode listing and source resolution
for hianime.to and its mirrors.
"""

from .plugin import HiAnimePlugin, plugin_metadata, default_config
from .config import HiAnimeConfig, HIANIME_DOMAINS, get_default_config, validate_config
from .parser import HiAnimeParser, StrategyChain
from .extractor import HiAnimeExtractor, find_video_url
from .pipeline import HiAnimePipeline

__all__ = [
    "HiAnimePlugin",
    "plugin_metadata",
    "default_config",
    "HiAnimeConfig",
    "HIANIME_DOMAINS",
    "get_default_config",
    "validate_config",
    "HiAnimeParser",
    "StrategyChain",
    "HiAnimeExtractor",
    "find_video_url",
    "HiAnimePipeline",
]
