"""
Configuration
-------------
YAML configuration with environment variable overrides.

    palette:
      command_prefix: "!"
      max_visible_commands: 9
      confirmation_timeout_seconds: 60
    settings:
      path: settings.yaml
    logging:
      level: INFO
      dir: logs

Any key can be overridden with PASTA_<SECTION>_<KEY>, e.g.
PASTA_LOGGING_LEVEL=DEBUG.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional
import logging
import os
import yaml

ENV_PREFIX = "PASTA"


@dataclass
class PaletteConfig:
    """Resolved palette configuration."""
    command_prefix: str = "!"
    max_visible_commands: int = 9
    confirmation_timeout_seconds: int = 60
    settings_path: str = "settings.yaml"
    log_level: str = "INFO"
    log_dir: str = "logs"


class ConfigManager:
    """
    Centralized configuration management.
    Loads configuration from YAML with environment variable overrides.
    """

    def __init__(self, config_path: Optional[str] = "config.yaml"):
        self._config_path = Path(config_path) if config_path else None
        self._config: Dict[str, Any] = {}
        self._logger = logging.getLogger("pasta.infra.config")

        self._load_config()

    def _load_config(self) -> None:
        """Load configuration from file."""
        if self._config_path is None:
            self._config = {}
            return

        if self._config_path.exists():
            with open(self._config_path, 'r') as f:
                self._config = yaml.safe_load(f) or {}
            self._logger.info(f"Loaded config from {self._config_path}")
        else:
            self._config = {}
            self._logger.warning(f"Config file not found: {self._config_path}")

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value.
        Supports dot notation: 'section.key'
        Environment variables override file config.
        """
        env_key = f"{ENV_PREFIX}_{key.upper().replace('.', '_')}"
        env_value = os.getenv(env_key)
        if env_value is not None:
            return env_value

        value: Any = self._config
        for part in key.split('.'):
            if isinstance(value, dict) and part in value:
                value = value[part]
            else:
                return default

        return value

    def palette_config(self) -> PaletteConfig:
        """Build a PaletteConfig, falling back to defaults for unset keys."""
        defaults = PaletteConfig()
        return PaletteConfig(
            command_prefix=str(self.get("palette.command_prefix", defaults.command_prefix)),
            max_visible_commands=int(self.get("palette.max_visible_commands", defaults.max_visible_commands)),
            confirmation_timeout_seconds=int(
                self.get("palette.confirmation_timeout_seconds", defaults.confirmation_timeout_seconds)
            ),
            settings_path=str(self.get("settings.path", defaults.settings_path)),
            log_level=str(self.get("logging.level", defaults.log_level)).upper(),
            log_dir=str(self.get("logging.dir", defaults.log_dir)),
        )
