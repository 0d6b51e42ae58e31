"""
Command Execution Tests
-----------------------
Tests for command actions and their results.

Tests cover:
- Clear-by-duration success, missing handler and handler failure
- Clear-all confirmation round-trip
- Settings, theme and monitoring writes
- Navigation handlers and filter results
- Missing execution context
"""

import asyncio
import logging
import pytest
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).parent.parent))

from commands import (
    CommandHandlers, CommandRegistry, ContentType, DeleteOutcome,
    Dismissed, Error, NeedsConfirmation, OpenMainWindow, Success,
    parse_dynamic_clear,
)
from core.errors import ErrorCategory
from settings import SettingsKeys, SettingsStore, YAMLSettingsStore


class TestClearByDuration:
    """Tests for the clear-by-duration family."""

    def test_clear_one_hour(self, registry, recorder):
        result = asyncio.run(registry.execute(registry.get_command("clear-1-hour")))

        assert result == Success("Cleared 3 entries from last 1 hour")
        assert recorder.calls == [("delete_recent", 60)]

    def test_singular_entry(self, registry, recorder):
        recorder.recent_count = 1
        result = asyncio.run(registry.execute(registry.get_command("clear-10-mins")))
        assert result.message == "Cleared 1 entry from last 10 minutes"

    def test_zero_entries_plural(self, registry, recorder):
        recorder.recent_count = 0
        result = asyncio.run(registry.execute(registry.get_command("clear-1-day")))
        assert result.message == "Cleared 0 entries from last 1 day"

    def test_dynamic_command_executes_with_parsed_minutes(self, registry, recorder):
        command = registry.search("clear 2 hours")[0]
        result = asyncio.run(registry.execute(command))

        assert recorder.calls == [("delete_recent", 120)]
        assert result == Success("Cleared 3 entries from last 2 hours")

    def test_missing_handler(self, bare_registry):
        result = asyncio.run(bare_registry.execute(bare_registry.get_command("clear-10-mins")))
        assert result == Error("Delete handler not configured")

    def test_handler_raises(self, settings_store):
        def failing(minutes):
            raise RuntimeError("database is locked")

        registry = CommandRegistry(handlers=CommandHandlers(delete_recent=failing), settings=settings_store)
        result = asyncio.run(registry.execute(registry.get_command("clear-1-hour")))

        assert result == Error("Failed to clear: database is locked")
        assert registry.context.errors.get_error_stats() == {"HANDLER_FAILURE": 1}

    def test_handler_reports_failure(self, settings_store):
        handlers = CommandHandlers(delete_recent=lambda minutes: DeleteOutcome.failed("disk full"))
        registry = CommandRegistry(handlers=handlers, settings=settings_store)

        result = asyncio.run(registry.execute(registry.get_command("clear-1-hour")))
        assert result == Error("Failed to clear: disk full")

    def test_handler_returns_outcome(self, settings_store):
        handlers = CommandHandlers(delete_recent=lambda minutes: DeleteOutcome.deleted(2))
        registry = CommandRegistry(handlers=handlers, settings=settings_store)

        result = asyncio.run(registry.execute(registry.get_command("clear-1-hour")))
        assert result == Success("Cleared 2 entries from last 1 hour")

    def test_async_handler(self, settings_store):
        async def delete_recent(minutes):
            return minutes // 10

        registry = CommandRegistry(handlers=CommandHandlers(delete_recent=delete_recent), settings=settings_store)
        result = asyncio.run(registry.execute(registry.get_command("clear-10-mins")))
        assert result == Success("Cleared 1 entry from last 10 minutes")


class TestClearAll:
    """Tests for the confirmation round-trip."""

    def test_returns_confirmation(self, registry, recorder):
        result = asyncio.run(registry.execute(registry.get_command("clear-all")))

        assert isinstance(result, NeedsConfirmation)
        assert "ALL clipboard history" in result.message
        assert recorder.calls == []

    def test_confirm_action_deletes(self, registry, recorder):
        result = asyncio.run(registry.execute(registry.get_command("clear-all")))
        final = asyncio.run(result.confirm_action())

        assert final == Success("Cleared all 47 entries")
        assert recorder.calls == [("delete_all",)]

    def test_confirm_without_handler(self, bare_registry):
        result = asyncio.run(bare_registry.execute(bare_registry.get_command("clear-all")))
        assert isinstance(result, NeedsConfirmation)
        assert asyncio.run(result.confirm_action()) == Error("Delete handler not configured")

    def test_confirm_handler_raises(self, settings_store):
        def failing():
            raise OSError("permission denied")

        registry = CommandRegistry(handlers=CommandHandlers(delete_all=failing), settings=settings_store)
        result = asyncio.run(registry.execute(registry.get_command("clear-all")))
        assert asyncio.run(result.confirm_action()) == Error("Failed to clear: permission denied")


class TestSettingsCommands:
    """Tests for commands that write settings."""

    def test_pause_and_resume(self, registry, settings_store):
        assert asyncio.run(registry.execute(registry.get_command("pause"))) == Success("Clipboard monitoring paused")
        assert settings_store.get(SettingsKeys.PAUSE_MONITORING) is True

        assert asyncio.run(registry.execute(registry.get_command("resume"))) == Success("Clipboard monitoring resumed")
        assert settings_store.get(SettingsKeys.PAUSE_MONITORING) is False

    def test_sounds_on_off(self, registry, settings_store):
        on = asyncio.run(registry.execute(registry.get_command("sounds-on")))
        assert "Sounds" in on.message
        assert settings_store.writes == [(SettingsKeys.PLAY_SOUNDS, True)]

        off = asyncio.run(registry.execute(registry.get_command("sounds-off")))
        assert off == Success("Sounds disabled")
        assert settings_store.writes[-1] == (SettingsKeys.PLAY_SOUNDS, False)

    @pytest.mark.parametrize("command_id,key,message", [
        ("notifications-on", SettingsKeys.SHOW_NOTIFICATIONS, "Notifications enabled"),
        ("images-off", SettingsKeys.STORE_IMAGES, "Image Storage disabled"),
        ("dedupe-on", SettingsKeys.DEDUPLICATE_ENTRIES, "Deduplication enabled"),
        ("extract-off", SettingsKeys.EXTRACT_CONTENT, "Content Extraction disabled"),
        ("skip-api-keys-on", SettingsKeys.SKIP_API_KEYS, "Api Key Filtering enabled"),
    ])
    def test_toggle_messages(self, registry, settings_store, command_id, key, message):
        result = asyncio.run(registry.execute(registry.get_command(command_id)))
        assert result == Success(message)
        assert settings_store.writes == [(key, command_id.endswith("-on"))]

    @pytest.mark.parametrize("theme,display", [
        ("light", "Light"), ("dark", "Dark"), ("system", "System"),
    ])
    def test_theme_writes_single_value(self, registry, settings_store, theme, display):
        result = asyncio.run(registry.execute(registry.get_command(f"theme-{theme}")))

        assert result == Success(f"Theme set to {display}")
        assert settings_store.writes == [(SettingsKeys.APPEARANCE, theme)]

    def test_theme_values_are_closed(self, registry, settings_store):
        for command in registry.search("theme"):
            asyncio.run(registry.execute(command))
        assert {value for _, value in settings_store.writes} == {"light", "dark", "system"}

    def test_store_write_failure(self):
        class ReadOnlyStore(SettingsStore):
            def set(self, key, value):
                raise OSError("read-only file system")

        registry = CommandRegistry(settings=ReadOnlyStore())
        result = asyncio.run(registry.execute(registry.get_command("sounds-on")))

        assert result == Error("Failed to save setting: read-only file system")
        history = registry.context.errors.history
        assert history[0].category == ErrorCategory.SETTINGS_FAILURE
        assert history[0].details == {"key": SettingsKeys.PLAY_SOUNDS}

    def test_yaml_store_pointing_at_directory(self, tmp_path):
        registry = CommandRegistry(settings=YAMLSettingsStore(str(tmp_path)))
        result = asyncio.run(registry.execute(registry.get_command("pause")))

        assert isinstance(result, Error)
        assert result.message.startswith("Failed to save setting:")


class TestNavigationCommands:
    """Tests for navigation, filter and help commands."""

    @pytest.mark.parametrize("command_id,call,expected", [
        ("settings", "open_settings", Dismissed()),
        ("updates", "check_for_updates", Success("Checking for updates...")),
        ("release-notes", "open_release_notes", Dismissed()),
        ("quit", "quit_app", Dismissed()),
    ])
    def test_handler_invoked(self, registry, recorder, command_id, call, expected):
        result = asyncio.run(registry.execute(registry.get_command(command_id)))
        assert result == expected
        assert recorder.calls == [(call,)]

    @pytest.mark.parametrize("command_id", ["settings", "updates", "release-notes", "quit"])
    def test_missing_ui_handler_is_noop(self, bare_registry, command_id):
        result = asyncio.run(bare_registry.execute(bare_registry.get_command(command_id)))
        assert not isinstance(result, Error)

    @pytest.mark.parametrize("trigger,content_type", [
        ("urls", ContentType.URL),
        ("emails", ContentType.EMAIL),
        ("images", ContentType.IMAGE),
        ("text", ContentType.TEXT),
        ("code", ContentType.CODE),
        ("paths", ContentType.FILE_PATH),
    ])
    def test_filters_open_main_window(self, registry, recorder, trigger, content_type):
        result = asyncio.run(registry.execute(registry.get_command(f"filter-{trigger}")))
        assert result == OpenMainWindow(content_type)
        assert result.message is None
        assert recorder.calls == []

    def test_help(self, registry):
        assert asyncio.run(registry.execute(registry.get_command("help"))) == Success("Showing all commands")


class TestMissingContext:
    """Actions run without an execution context fail softly."""

    @pytest.mark.parametrize("command_id", ["clear-1-hour", "clear-all", "pause", "settings"])
    def test_registry_unavailable(self, registry, command_id):
        command = registry.get_command(command_id)
        assert asyncio.run(command.action(None)) == Error("Registry unavailable")

    def test_dynamic_without_context(self):
        command = parse_dynamic_clear("clear 5 mins")
        assert asyncio.run(command.action(None)) == Error("Registry unavailable")

    def test_logged_without_shared_history(self, registry, caplog):
        with caplog.at_level(logging.ERROR, logger="pasta.commands.actions"):
            asyncio.run(registry.get_command("pause").action(None))

        assert any("CONTEXT_UNAVAILABLE" in record.getMessage() for record in caplog.records)
        assert registry.context.errors.history == []


class TestResultMessages:
    """Tests for CommandResult.message."""

    def test_messages(self):
        async def noop():
            return Dismissed()

        assert Success("a").message == "a"
        assert Error("b").message == "b"
        assert NeedsConfirmation("c", noop).message == "c"
        assert OpenMainWindow(None).message is None
        assert Dismissed().message is None

    def test_error_categories_logged(self, bare_registry):
        asyncio.run(bare_registry.execute(bare_registry.get_command("clear-1-hour")))
        history = bare_registry.context.errors.history
        assert history[0].category == ErrorCategory.HANDLER_MISSING


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
