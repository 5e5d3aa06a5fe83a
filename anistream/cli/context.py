"""
CLI Context - Global application context and state management.

This module holds the configuration manager and the global CLI options
so that commands can build a configured plugin without circular imports.
"""

from typing import Any, Dict, Optional

from anistream.core import ConfigManager
from anistream.plugins.hianime import HiAnimePlugin


# Global application state
_config_manager: Optional[ConfigManager] = None
_overrides: Dict[str, Any] = {}


def get_config_manager() -> ConfigManager:
    """Get the global configuration manager instance."""
    if _config_manager is None:
        raise RuntimeError("Configuration manager not initialized")
    return _config_manager


def set_config_manager(config_manager: Optional[ConfigManager]) -> None:
    """Set the global configuration manager instance."""
    global _config_manager
    _config_manager = config_manager


def set_plugin_overrides(**overrides: Any) -> None:
    """Record plugin settings given on the command line; None values are ignored."""
    _overrides.clear()
    _overrides.update({key: value for key, value in overrides.items() if value is not None})


def create_plugin(**overrides: Any) -> HiAnimePlugin:
    """
    Build the HiAnime plugin from the settings file plus command line overrides.

    Raises:
        ConfigurationError: If the merged configuration is invalid
    """
    config: Dict[str, Any] = {}
    if _config_manager is not None:
        config.update(_config_manager.get_source_config("hianime"))
    config.update(_overrides)
    config.update({key: value for key, value in overrides.items() if value is not None})
    return HiAnimePlugin(config)


# Export context functions
__all__ = [
    "get_config_manager",
    "set_config_manager",
    "set_plugin_overrides",
    "create_plugin",
]
