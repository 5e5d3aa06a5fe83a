"""
Core Exceptions - Error types raised inside AniStream.

Only the layers below the public query surface raise these. The plugin
turns them into logged diagnostics and empty results; the command line
front end turns configuration errors into an error panel.
"""

from typing import Optional, Any


class AniStreamError(Exception):
    """Root of every error AniStream raises on purpose."""

    def __init__(self, message: str, details: Optional[Any] = None):
        """
        Args:
            message: Text shown to the user and written to the log
            details: Raw context kept for debugging (response body, validation errors)
        """
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        return self.message


class ConfigurationError(AniStreamError):
    """Settings file or plugin options that do not validate."""

    def __init__(self, message: str, config_path: Optional[str] = None, details: Optional[Any] = None):
        super().__init__(message, details)
        self.config_path = config_path


class PluginError(AniStreamError):
    """A plugin reached a page but could not get what it needed from it."""

    def __init__(self, message: str, plugin_name: Optional[str] = None, details: Optional[Any] = None):
        super().__init__(message, details)
        self.plugin_name = plugin_name


class NetworkError(AniStreamError):
    """
    A request failed in transport or came back with a non-2xx status.

    status_code is None when no response was received at all.
    """

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
        details: Optional[Any] = None,
    ):
        super().__init__(message, details)
        self.url = url
        self.status_code = status_code


class ParseError(AniStreamError):
    """An endpoint answered with a payload that cannot be decoded."""

    def __init__(self, message: str, url: Optional[str] = None, details: Optional[Any] = None):
        super().__init__(message, details)
        self.url = url


__all__ = [
    "AniStreamError",
    "ConfigurationError",
    "PluginError",
    "NetworkError",
    "ParseError",
]
