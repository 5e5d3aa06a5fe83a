"""
Configuration Schemas - Pydantic models for configuration validation.

This module defines the data structures and validation rules for
application settings and per-source configuration.
"""

from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, Field, field_validator


class LoggingSettings(BaseModel):
    """Logging configuration settings."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="WARNING",
        description="Logging level"
    )
    file: Optional[str] = Field(
        default=None,
        description="Optional log file; logs go to stderr only when unset"
    )

    @field_validator('level', mode='before')
    @classmethod
    def normalize_level(cls, v: Any) -> Any:
        """Accept lowercase level names."""
        return v.upper() if isinstance(v, str) else v


class OutputSettings(BaseModel):
    """How the command line front end renders results."""

    format: Literal["table", "json"] = Field(
        default="table",
        description="Default output format"
    )
    show_urls: bool = Field(
        default=True,
        description="Show URLs in result tables"
    )


class SourceConfig(BaseModel):
    """Configuration for an individual source plugin."""

    enabled: bool = Field(
        default=True,
        description="Whether the source is enabled"
    )
    config: Dict[str, Any] = Field(
        default_factory=dict,
        description="Source-specific configuration"
    )

    @field_validator('config')
    @classmethod
    def validate_config(cls, v: Dict[str, Any]) -> Dict[str, Any]:
        """Validate common source configuration keys."""
        if 'timeout' in v and (not isinstance(v['timeout'], int) or v['timeout'] < 1):
            raise ValueError("timeout must be a positive integer")
        return v


def _default_sources() -> Dict[str, SourceConfig]:
    return {"hianime": SourceConfig()}


class AppSettings(BaseModel):
    """Main application settings container."""

    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    output: OutputSettings = Field(default_factory=OutputSettings)
    sources: Dict[str, SourceConfig] = Field(default_factory=_default_sources)

    def get_source(self, name: str) -> Optional[SourceConfig]:
        """Get configuration for a specific source."""
        return self.sources.get(name)


# Export all configuration models
__all__ = [
    "LoggingSettings",
    "OutputSettings",
    "SourceConfig",
    "AppSettings",
]
