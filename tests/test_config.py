"""
Configuration Tests
-------------------
Tests for YAML configuration, env overrides and PaletteConfig.
"""

import pytest
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).parent.parent))

from infra.config import ConfigManager, PaletteConfig


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "palette:\n"
        "  command_prefix: '>'\n"
        "  max_visible_commands: 5\n"
        "logging:\n"
        "  level: debug\n"
    )
    return path


class TestConfigManager:
    """Tests for ConfigManager."""

    def test_missing_file_uses_defaults(self, tmp_path):
        manager = ConfigManager(str(tmp_path / "nope.yaml"))
        assert manager.palette_config() == PaletteConfig()

    def test_no_path(self):
        assert ConfigManager(None).get("palette.command_prefix", "!") == "!"

    def test_dot_notation(self, config_file):
        manager = ConfigManager(str(config_file))
        assert manager.get("palette.command_prefix") == ">"
        assert manager.get("palette.missing", 7) == 7

    def test_env_override(self, config_file, monkeypatch):
        monkeypatch.setenv("PASTA_PALETTE_MAX_VISIBLE_COMMANDS", "3")
        manager = ConfigManager(str(config_file))
        assert manager.palette_config().max_visible_commands == 3

    def test_palette_config(self, config_file):
        config = ConfigManager(str(config_file)).palette_config()

        assert config.command_prefix == ">"
        assert config.max_visible_commands == 5
        assert config.log_level == "DEBUG"
        assert config.settings_path == "settings.yaml"
        assert config.confirmation_timeout_seconds == 60


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
