# Settings module - key-value stores written by palette commands
# The palette writes settings; the host app reads them

from .store import SettingsStore, InMemorySettingsStore, YAMLSettingsStore, SettingsKeys

__all__ = ["SettingsStore", "InMemorySettingsStore", "YAMLSettingsStore", "SettingsKeys"]
