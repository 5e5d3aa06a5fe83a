"""
AniStream - Content discovery and stream resolution for HiAnime.

Search titles, list their episodes and resolve playable HLS/MP4 sources
with subtitle tracks, from Python or from the command line.
"""

__version__ = "0.1.0"
__author__ = "AniStream Team"

# Package metadata
__title__ = "anistream"
__description__ = "Content discovery and stream resolution client for HiAnime"
__license__ = "MIT"

# Export main components for easy importing
from anistream.core.models import Episode, SearchResult, SourceType, StreamingSource, SubtitleTrack
from anistream.plugins.hianime import HiAnimePlugin

__all__ = [
    "__version__",
    "__author__",
    "SearchResult",
    "Episode",
    "SourceType",
    "StreamingSource",
    "SubtitleTrack",
    "HiAnimePlugin",
]
