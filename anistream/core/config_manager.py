"""
Configuration Manager - settings.json persistence.

The settings file is read once per process. A missing file is created
with defaults; an unreadable one is moved aside to settings.json.backup
and replaced with defaults so the client always starts.
"""

import json
import logging
from pathlib import Path
from threading import Lock
from typing import Any, Dict, Optional, Union

from pydantic import ValidationError

from anistream.core.config_schemas import AppSettings, SourceConfig
from anistream.core.exceptions import ConfigurationError


logger = logging.getLogger(__name__)

SETTINGS_FILENAME = "settings.json"


class ConfigManager:
    """
    Owns the application settings and the file they are stored in.

    All mutations are validated against AppSettings before being written,
    and writes go through a temporary file so a crash never leaves a
    truncated settings file behind.
    """

    def __init__(self, config_dir: Optional[Union[str, Path]] = None):
        """
        Load settings from config_dir, creating the directory if needed.

        Args:
            config_dir: Directory holding settings.json, './config' by default

        Raises:
            ConfigurationError: If the directory or file cannot be accessed
        """
        self.config_dir = Path(config_dir or "config")
        self._settings_file = self.config_dir / SETTINGS_FILENAME
        self._lock = Lock()

        try:
            self.config_dir.mkdir(parents=True, exist_ok=True)
            self._settings: AppSettings = self._load()
        except OSError as e:
            raise ConfigurationError(
                f"Cannot access configuration directory: {e}",
                config_path=str(self._settings_file)
            )

    @property
    def settings_file(self) -> Path:
        return self._settings_file

    @property
    def settings(self) -> AppSettings:
        with self._lock:
            return self._settings

    def _load(self) -> AppSettings:
        if not self._settings_file.exists():
            logger.info(f"No settings at {self._settings_file}, writing defaults")
            return self._write_defaults()

        try:
            raw = json.loads(self._settings_file.read_text(encoding='utf-8'))
            return AppSettings.model_validate(raw)
        except (json.JSONDecodeError, ValidationError) as e:
            logger.warning(f"Ignoring unreadable settings file: {e}")
            self._set_aside()
            return self._write_defaults()

    def _set_aside(self) -> None:
        backup = self._settings_file.with_name(f"{SETTINGS_FILENAME}.backup")
        self._settings_file.replace(backup)
        logger.info(f"Previous settings kept at {backup}")

    def _write_defaults(self) -> AppSettings:
        settings = AppSettings()
        self._write(settings)
        return settings

    def _write(self, settings: AppSettings) -> None:
        staging = self._settings_file.with_suffix('.tmp')
        try:
            staging.write_text(
                json.dumps(settings.model_dump(), indent=2, ensure_ascii=False),
                encoding='utf-8'
            )
            staging.replace(self._settings_file)
        except OSError as e:
            staging.unlink(missing_ok=True)
            raise ConfigurationError(
                f"Cannot write settings: {e}",
                config_path=str(self._settings_file)
            )
        logger.debug(f"Settings written to {self._settings_file}")

    def save(self) -> None:
        """Write the in-memory settings back to disk."""
        with self._lock:
            self._write(self._settings)

    def get_source_config(self, source_name: str) -> Dict[str, Any]:
        """
        Plugin configuration stored for a source.

        Unknown sources yield an empty dictionary, which leaves every
        plugin setting at its default.
        """
        source = self.settings.get_source(source_name)
        return dict(source.config) if source else {}

    def update_source_config(self, source_name: str, **changes: Any) -> None:
        """
        Merge changes into a source's plugin configuration and save.

        Raises:
            ConfigurationError: If the merged settings do not validate
        """
        with self._lock:
            candidate = self._settings.model_dump()
            entry = candidate['sources'].setdefault(source_name, SourceConfig().model_dump())
            entry['config'].update(changes)

            try:
                updated = AppSettings.model_validate(candidate)
            except ValidationError as e:
                raise ConfigurationError(
                    f"Invalid configuration for source '{source_name}': {e}",
                    config_path=str(self._settings_file)
                )

            self._write(updated)
            self._settings = updated
            logger.info(f"Updated configuration of source '{source_name}'")

    def reset_to_defaults(self) -> None:
        """Discard all settings and write the defaults."""
        with self._lock:
            logger.warning("Resetting settings to defaults")
            self._settings = self._write_defaults()


__all__ = ["ConfigManager"]
