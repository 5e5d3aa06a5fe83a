"""
Core Layer - Data models, configuration and error types.

This module contains the value types returned by the query surface,
configuration handling and the exception hierarchy shared by all layers.
"""

from anistream.core.config_manager import ConfigManager
from anistream.core.config_schemas import AppSettings, LoggingSettings, OutputSettings, SourceConfig
from anistream.core.exceptions import (
    AniStreamError,
    ConfigurationError,
    NetworkError,
    ParseError,
    PluginError,
)
from anistream.core.models import (
    Episode,
    SearchResult,
    SourceType,
    StreamingSource,
    StreamQuality,
    SubtitleTrack,
)
from anistream.core.outcome import Outcome

__all__ = [
    # Data Models
    "SearchResult",
    "Episode",
    "SourceType",
    "StreamQuality",
    "StreamingSource",
    "SubtitleTrack",
    "Outcome",
    # Configuration Management
    "ConfigManager",
    "AppSettings",
    "LoggingSettings",
    "OutputSettings",
    "SourceConfig",
    # Exceptions
    "AniStreamError",
    "ConfigurationError",
    "NetworkError",
    "ParseError",
    "PluginError",
]
