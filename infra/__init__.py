# Infrastructure module - Logging and configuration
# Rich console + JSON file logging, YAML config with env overrides

from .logging import (
    get_logger, configure_logging, SessionContext,
    get_session_id, generate_session_id,
)
from .config import ConfigManager, PaletteConfig

__all__ = [
    # Logging
    "get_logger",
    "configure_logging",
    "SessionContext",
    "get_session_id",
    "generate_session_id",
    # Config
    "ConfigManager",
    "PaletteConfig",
]
