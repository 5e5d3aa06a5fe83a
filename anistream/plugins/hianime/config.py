"""
HiAnime Configuration - Plugin-specific configuration management.

This module handles configuration validation and management
specific to the HiAnime plugin.
"""

from typing import Any, Dict, Literal

from pydantic import BaseModel, Field, ValidationError, field_validator

from anistream.core.exceptions import ConfigurationError


# Known mirrors of the same site; all serve identical markup.
HIANIME_DOMAINS = ("hianime.to", "hianime.bz", "hianime.nz", "hianime.sx")

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)

# Sent with every resolved source; the media hosts reject players without it.
PLAYBACK_USER_AGENT = (
    "Mozilla/5.0 (iPhone; CPU iPhone OS 16_0 like Mac OS X) AppleWebKit/605.1.15"
)


class HiAnimeConfig(BaseModel):
    """Configuration model for HiAnime plugin."""

    enabled: bool = Field(True, description="Whether the plugin is enabled")
    domain: Literal["hianime.to", "hianime.bz", "hianime.nz", "hianime.sx"] = Field(
        "hianime.to", description="Site mirror used as the base origin"
    )
    timeout: int = Field(30, ge=5, le=120, description="Request timeout in seconds")
    user_agent: str = Field(DEFAULT_USER_AGENT, description="User agent string for requests")
    playback_user_agent: str = Field(
        PLAYBACK_USER_AGENT,
        description="User agent returned with playback headers"
    )

    # Server resolution
    parallel_servers: bool = Field(False, description="Resolve episode servers concurrently")
    concurrent_requests: int = Field(3, ge=1, le=10, description="Maximum concurrent server resolutions")

    @field_validator('domain', mode='before')
    @classmethod
    def normalize_domain(cls, v: Any) -> Any:
        """Accept 'https://www.hianime.to/' style values."""
        if isinstance(v, str):
            v = v.strip().lower()
            for prefix in ("https://", "http://", "www."):
                if v.startswith(prefix):
                    v = v[len(prefix):]
            v = v.rstrip("/")
        return v

    @field_validator('user_agent', 'playback_user_agent')
    @classmethod
    def validate_user_agent(cls, v: str) -> str:
        """Validate user agent string."""
        if not v or len(v.strip()) < 10:
            raise ValueError("User agent must be a valid browser string")
        return v.strip()

    @property
    def base_url(self) -> str:
        """Base origin used for every constructed URL and anti-hotlinking header."""
        return f"https://{self.domain}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return self.model_dump()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'HiAnimeConfig':
        """Create configuration from dictionary."""
        return cls(**data)


def get_default_config() -> Dict[str, Any]:
    """Get default configuration for HiAnime plugin."""
    return HiAnimeConfig().to_dict()


def validate_config(config: Dict[str, Any]) -> Dict[str, Any]:
    """
    Validate and normalize plugin configuration.

    Args:
        config: Raw configuration dictionary

    Returns:
        Validated and normalized configuration

    Raises:
        ConfigurationError: If configuration is invalid
    """
    try:
        return HiAnimeConfig.from_dict(config).to_dict()
    except ValidationError as e:
        raise ConfigurationError(f"Invalid HiAnime plugin configuration: {e}", details=e.errors())


# Export configuration utilities
__all__ = [
    "HIANIME_DOMAINS",
    "DEFAULT_USER_AGENT",
    "PLAYBACK_USER_AGENT",
    "HiAnimeConfig",
    "get_default_config",
    "validate_config",
]
