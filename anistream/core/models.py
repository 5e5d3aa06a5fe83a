"""
Core Data Models - Pydantic models for type safety and validation.

This module defines the values returned by the query surface: search
results, episodes, streaming sources and subtitle tracks. Every instance
is built fresh per call and carries no shared state.
"""

from enum import Enum
from typing import Dict, List

from pydantic import BaseModel, Field, field_validator


class SourceType(str, Enum):
    """Media container type, inferred from the shape of the URL."""

    HLS = "hls"
    MP4 = "mp4"

    @classmethod
    def from_url(cls, url: str) -> "SourceType":
        """HLS manifests are recognised by their .m3u8 extension."""
        return cls.HLS if ".m3u8" in url else cls.MP4

    def __str__(self) -> str:
        return self.value


class SearchResult(BaseModel):
    """
    Represents a title found by a search.

    The id is the site-internal slug and feeds fetch_episodes.
    """

    id: str = Field(..., min_length=1, description="Site-internal slug")
    title: str = Field(..., min_length=1, description="Decoded display title")
    image: str = Field("", description="Poster image URL, empty if unavailable")
    url: str = Field(..., description="Absolute URL to the title page")

    @field_validator('title')
    @classmethod
    def validate_title(cls, v: str) -> str:
        """Ensure title is properly formatted."""
        return v.strip()

    def __str__(self) -> str:
        return f"{self.title} ({self.id})"


class Episode(BaseModel):
    """
    Represents one episode of a title.

    The id is opaque: a numeric server id, a slug or a composite
    "{anime_id}?ep={N}" string depending on which extraction tier found it.
    """

    id: str = Field(..., min_length=1, description="Identifier usable with fetch_sources")
    number: int = Field(..., ge=1, description="Episode number, 1-based")

    def __str__(self) -> str:
        return f"Episode {self.number}"


class StreamQuality(BaseModel):
    """A playable URL together with the headers the media host expects."""

    quality: str = Field("default", description="Quality label")
    url: str = Field(..., min_length=1, description="Direct media URL")
    headers: Dict[str, str] = Field(default_factory=dict, description="Playback headers")


class SubtitleTrack(BaseModel):
    """A caption track scraped from the episode page."""

    url: str = Field(..., min_length=1, description="Absolute subtitle URL")
    label: str = Field("English", description="Display label")
    language: str = Field("en", description="Language code")
    format: str = Field("vtt", description="Caption format tag")


class StreamingSource(BaseModel):
    """
    A resolved source from one server of an episode.

    The subtitle list is shared by every source of the same fetch_sources call.
    """

    label: str = Field(..., description="Server or provider name")
    type: SourceType = Field(..., description="Inferred container type")
    qualities: List[StreamQuality] = Field(default_factory=list)
    subtitles: List[SubtitleTrack] = Field(default_factory=list)

    @property
    def url(self) -> str:
        """URL of the first quality entry."""
        return self.qualities[0].url if self.qualities else ""

    def __str__(self) -> str:
        return f"{self.label} [{self.type}]"


# Type aliases for better code readability
SearchResultList = List[SearchResult]
EpisodeList = List[Episode]
SourceList = List[StreamingSource]

# Export all models and types
__all__ = [
    "SourceType",
    "SearchResult",
    "Episode",
    "StreamQuality",
    "SubtitleTrack",
    "StreamingSource",
    "SearchResultList",
    "EpisodeList",
    "SourceList",
]
