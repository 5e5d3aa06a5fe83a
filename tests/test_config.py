"""Tests for plugin settings and the JSON settings file."""

import json

import pytest

from anistream.core import ConfigManager
from anistream.core.config_schemas import AppSettings, LoggingSettings
from anistream.core.exceptions import ConfigurationError
from anistream.plugins.hianime.config import HiAnimeConfig, get_default_config, validate_config


class TestHiAnimeConfig:
    def test_defaults(self):
        config = HiAnimeConfig()

        assert config.domain == "hianime.to"
        assert config.base_url == "https://hianime.to"
        assert config.parallel_servers is False
        assert "iPhone" in config.playback_user_agent

    @pytest.mark.parametrize("raw", ["hianime.sx", "HIANIME.SX", "https://hianime.sx", "http://www.hianime.sx/"])
    def test_domain_normalization(self, raw):
        assert HiAnimeConfig(domain=raw).base_url == "https://hianime.sx"

    def test_validate_config_rejects_unknown_mirror(self):
        with pytest.raises(ConfigurationError):
            validate_config({"domain": "example.com"})

    def test_validate_config_rejects_short_user_agent(self):
        with pytest.raises(ConfigurationError):
            validate_config({"user_agent": "curl"})

    def test_default_config_round_trips(self):
        assert HiAnimeConfig.from_dict(get_default_config()) == HiAnimeConfig()


class TestLoggingSettings:
    def test_level_is_uppercased(self):
        assert LoggingSettings(level="debug").level == "DEBUG"

    def test_unknown_level(self):
        with pytest.raises(ValueError):
            LoggingSettings(level="verbose")


class TestConfigManager:
    def test_creates_default_settings_file(self, tmp_path):
        manager = ConfigManager(tmp_path / "config")

        assert manager.settings_file.exists()
        assert manager.settings == AppSettings()
        assert manager.get_source_config("hianime") == {}

    def test_loads_existing_settings(self, tmp_path):
        (tmp_path / "settings.json").write_text(json.dumps({
            "output": {"format": "json"},
            "sources": {"hianime": {"config": {"domain": "hianime.bz", "timeout": 10}}},
        }))

        manager = ConfigManager(tmp_path)

        assert manager.settings.output.format == "json"
        assert manager.get_source_config("hianime") == {"domain": "hianime.bz", "timeout": 10}

    def test_corrupt_file_is_backed_up(self, tmp_path):
        (tmp_path / "settings.json").write_text("{not json")

        manager = ConfigManager(tmp_path)

        assert (tmp_path / "settings.json.backup").read_text() == "{not json"
        assert manager.settings == AppSettings()
        assert json.loads((tmp_path / "settings.json").read_text())["output"]["format"] == "table"

    def test_invalid_settings_are_backed_up(self, tmp_path):
        (tmp_path / "settings.json").write_text(json.dumps({"output": {"format": "xml"}}))

        manager = ConfigManager(tmp_path)

        assert (tmp_path / "settings.json.backup").exists()
        assert manager.settings.output.format == "table"

    def test_update_source_config_persists(self, tmp_path):
        manager = ConfigManager(tmp_path)

        manager.update_source_config("hianime", domain="hianime.nz", parallel_servers=True)

        reloaded = ConfigManager(tmp_path)
        assert reloaded.get_source_config("hianime") == {"domain": "hianime.nz", "parallel_servers": True}

    def test_update_source_config_rejects_bad_timeout(self, tmp_path):
        manager = ConfigManager(tmp_path)

        with pytest.raises(ConfigurationError):
            manager.update_source_config("hianime", timeout=0)

        assert manager.get_source_config("hianime") == {}

    def test_reset_to_defaults(self, tmp_path):
        manager = ConfigManager(tmp_path)
        manager.update_source_config("hianime", domain="hianime.bz")

        manager.reset_to_defaults()

        assert ConfigManager(tmp_path).get_source_config("hianime") == {}

    def test_save_writes_in_memory_settings(self, tmp_path):
        manager = ConfigManager(tmp_path)
        manager.settings.output.show_urls = False

        manager.save()

        assert ConfigManager(tmp_path).settings.output.show_urls is False
