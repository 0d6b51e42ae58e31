"""
Pasta Test Configuration
------------------------
Shared fixtures for palette tests.

Handlers record their calls so tests can assert on side effects without a
real clipboard store.
"""

import sys
from pathlib import Path
from typing import List, Optional
import pytest

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from commands import CommandHandlers, CommandRegistry, ContentType, PaletteSession
from settings import InMemorySettingsStore


class RecordingHandlers:
    """Handler callbacks that record what was called."""

    def __init__(self, recent_count: int = 3, all_count: int = 47):
        self.recent_count = recent_count
        self.all_count = all_count
        self.calls: List[tuple] = []

    def delete_recent(self, minutes: int) -> int:
        self.calls.append(("delete_recent", minutes))
        return self.recent_count

    def delete_all(self) -> int:
        self.calls.append(("delete_all",))
        return self.all_count

    def open_settings(self) -> None:
        self.calls.append(("open_settings",))

    def check_for_updates(self) -> None:
        self.calls.append(("check_for_updates",))

    def open_release_notes(self) -> None:
        self.calls.append(("open_release_notes",))

    def quit_app(self) -> None:
        self.calls.append(("quit_app",))

    def open_main_window(self, content_type: Optional[ContentType]) -> None:
        self.calls.append(("open_main_window", content_type))

    def as_handlers(self) -> CommandHandlers:
        return CommandHandlers(
            delete_recent=self.delete_recent,
            delete_all=self.delete_all,
            open_settings=self.open_settings,
            check_for_updates=self.check_for_updates,
            open_release_notes=self.open_release_notes,
            quit_app=self.quit_app,
            open_main_window=self.open_main_window,
        )


@pytest.fixture(scope="session")
def project_root():
    """Return the project root path."""
    return PROJECT_ROOT


@pytest.fixture
def settings_store():
    return InMemorySettingsStore()


@pytest.fixture
def recorder():
    return RecordingHandlers()


@pytest.fixture
def registry(recorder, settings_store):
    """Registry wired to recording handlers and an in-memory store."""
    return CommandRegistry(handlers=recorder.as_handlers(), settings=settings_store)


@pytest.fixture
def bare_registry(settings_store):
    """Registry with no handlers configured."""
    return CommandRegistry(settings=settings_store)


@pytest.fixture
def session(registry):
    palette = PaletteSession(registry)
    palette.prepare()
    return palette
