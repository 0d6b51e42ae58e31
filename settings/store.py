"""
Settings Store
--------------
Key-value storage for app settings written by palette commands.

The palette only ever writes settings; reading them back is the host
application's business. Keys live under the "pasta." namespace.
"""

from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple
import logging
import yaml


class SettingsKeys:
    """Settings keys shared with the host application."""
    PAUSE_MONITORING = "pasta.pauseMonitoring"
    PLAY_SOUNDS = "pasta.playSounds"
    SHOW_NOTIFICATIONS = "pasta.showNotifications"
    STORE_IMAGES = "pasta.storeImages"
    DEDUPLICATE_ENTRIES = "pasta.deduplicateEntries"
    EXTRACT_CONTENT = "pasta.extractContent"
    SKIP_API_KEYS = "pasta.skipAPIKeys"
    APPEARANCE = "pasta.appearance"


class SettingsStore:
    """Write interface every settings backend implements."""

    def set(self, key: str, value: Any) -> None:
        raise NotImplementedError


class InMemorySettingsStore(SettingsStore):
    """
    Settings kept in a dict.

    Every write is also appended to `writes`, which makes it easy to assert
    that a command touched exactly one key.
    """

    def __init__(self, initial: Optional[Dict[str, Any]] = None):
        self.values: Dict[str, Any] = dict(initial or {})
        self.writes: List[Tuple[str, Any]] = []

    def set(self, key: str, value: Any) -> None:
        self.values[key] = value
        self.writes.append((key, value))

    def get(self, key: str, default: Any = None) -> Any:
        return self.values.get(key, default)


class YAMLSettingsStore(SettingsStore):
    """
    Persistent settings storage.

    Stores settings to disk in YAML format, saving after each write.
    """

    def __init__(self, store_path: Optional[str] = None):
        self._path = Path(store_path) if store_path else Path("settings.yaml")
        self._values: Dict[str, Any] = {}
        self._updated_at: Optional[datetime] = None
        self._logger = logging.getLogger("pasta.settings")

        self._load()

    def _load(self) -> None:
        """Load settings from disk."""
        if not self._path.exists():
            return

        try:
            with open(self._path, 'r') as f:
                data = yaml.safe_load(f)

            if not data:
                return
            if not isinstance(data, dict):
                raise ValueError(f"expected a mapping, got {type(data).__name__}")

            values = dict(data.get("settings") or {})
            updated_at = data.get("updated_at")
            self._updated_at = datetime.fromisoformat(updated_at) if isinstance(updated_at, str) else None
            self._values = values
            self._logger.info(f"Loaded {len(self._values)} settings from {self._path}")
        except Exception as e:
            self._values = {}
            self._updated_at = None
            self._logger.error(f"Failed to load settings: {e}")

    def _save(self) -> None:
        """Save settings to disk."""
        data = {
            "settings": self._values.copy(),
            "updated_at": self._updated_at.isoformat() if self._updated_at else None,
        }
        self._path.parent.mkdir(parents=True, exist_ok=True)
        with open(self._path, 'w') as f:
            yaml.safe_dump(data, f, default_flow_style=False)

    def set(self, key: str, value: Any) -> None:
        self._values[key] = value
        self._updated_at = datetime.now()
        self._logger.info(f"Setting updated: {key} = {value}")
        self._save()

    def get(self, key: str, default: Any = None) -> Any:
        return self._values.get(key, default)

    def list_all(self) -> Dict[str, Any]:
        return self._values.copy()

    @property
    def path(self) -> Path:
        return self._path
