"""
Command Catalog
---------------
The ordered list of static palette commands.

Built from fixed tables, in a fixed order, so every build yields the same
sequence. The catalog is read-only; rebuilding replaces the whole sequence
and notifies subscribers.
"""

from typing import Callable, Dict, Iterator, List, Optional, Sequence, Tuple
import logging

from .actions import (
    clear_action, clear_all_action, handler_action,
    open_main_window_action, setting_action, static_action,
)
from .models import (
    Command, CommandCategory, ContentType, Dismissed, Success,
)
from settings import SettingsKeys


# Static tables

# (id, trigger, description, minutes)
CLEAR_DURATIONS: List[Tuple[str, str, str, int]] = [
    ("clear-10-mins", "clear 10 mins", "Clear entries from last 10 minutes", 10),
    ("clear-1-hour", "clear 1 hour", "Clear entries from last hour", 60),
    ("clear-1-day", "clear 1 day", "Clear entries from last 24 hours", 1440),
]

# (id, settings key, display name, icon)
SETTING_TOGGLES: List[Tuple[str, str, str, str]] = [
    ("sounds", SettingsKeys.PLAY_SOUNDS, "sounds", "speaker.wave.2"),
    ("notifications", SettingsKeys.SHOW_NOTIFICATIONS, "notifications", "bell"),
    ("images", SettingsKeys.STORE_IMAGES, "image storage", "photo"),
    ("dedupe", SettingsKeys.DEDUPLICATE_ENTRIES, "deduplication", "doc.on.doc"),
    ("extract", SettingsKeys.EXTRACT_CONTENT, "content extraction", "text.magnifyingglass"),
    ("skip-api-keys", SettingsKeys.SKIP_API_KEYS, "API key filtering", "key"),
]

# (value, display name, icon)
THEMES: List[Tuple[str, str, str]] = [
    ("light", "Light", "sun.max"),
    ("dark", "Dark", "moon"),
    ("system", "System", "circle.lefthalf.filled"),
]

# (trigger, content type, icon, description)
FILTERS: List[Tuple[str, ContentType, str, str]] = [
    ("urls", ContentType.URL, "link", "Show only URLs"),
    ("emails", ContentType.EMAIL, "envelope", "Show only emails"),
    ("images", ContentType.IMAGE, "photo", "Show only images"),
    ("text", ContentType.TEXT, "doc.text", "Show only plain text"),
    ("code", ContentType.CODE, "chevron.left.forwardslash.chevron.right", "Show only code snippets"),
    ("paths", ContentType.FILE_PATH, "folder", "Show only file paths"),
]


def capitalize_words(text: str) -> str:
    """Capitalize each word, lowercasing the rest ("API key" -> "Api Key")."""
    return " ".join(word.capitalize() for word in text.split(" "))


# Command groups

def create_clear_commands() -> List[Command]:
    commands = [
        Command(
            id=command_id,
            trigger=trigger,
            description=description,
            icon="trash",
            category=CommandCategory.CLEAR,
            action=clear_action(minutes),
        )
        for command_id, trigger, description, minutes in CLEAR_DURATIONS
    ]

    commands.append(Command(
        id="clear-all",
        trigger="clear all",
        description="Clear all clipboard history",
        icon="trash.fill",
        category=CommandCategory.CLEAR,
        is_destructive=True,
        action=clear_all_action(),
    ))
    return commands


def create_monitoring_commands() -> List[Command]:
    return [
        Command(
            id="pause",
            trigger="pause",
            description="Pause clipboard monitoring",
            icon="pause.circle",
            category=CommandCategory.MONITORING,
            action=setting_action(SettingsKeys.PAUSE_MONITORING, True, "Clipboard monitoring paused"),
        ),
        Command(
            id="resume",
            trigger="resume",
            description="Resume clipboard monitoring",
            icon="play.circle",
            category=CommandCategory.MONITORING,
            action=setting_action(SettingsKeys.PAUSE_MONITORING, False, "Clipboard monitoring resumed"),
        ),
    ]


def create_toggle_commands() -> List[Command]:
    commands = []
    for toggle_id, key, name, icon in SETTING_TOGGLES:
        display = capitalize_words(name)
        commands.append(Command(
            id=f"{toggle_id}-on",
            trigger=f"{toggle_id} on",
            description=f"Enable {name}",
            icon=icon,
            category=CommandCategory.SETTINGS,
            action=setting_action(key, True, f"{display} enabled"),
        ))
        commands.append(Command(
            id=f"{toggle_id}-off",
            trigger=f"{toggle_id} off",
            description=f"Disable {name}",
            icon=icon,
            category=CommandCategory.SETTINGS,
            action=setting_action(key, False, f"{display} disabled"),
        ))
    return commands


def create_theme_commands() -> List[Command]:
    return [
        Command(
            id=f"theme-{value}",
            trigger=f"theme {value}",
            description=f"Set appearance to {display}",
            icon=icon,
            category=CommandCategory.SETTINGS,
            action=setting_action(SettingsKeys.APPEARANCE, value, f"Theme set to {display}"),
        )
        for value, display, icon in THEMES
    ]


def create_navigation_commands() -> List[Command]:
    return [
        Command(
            id="settings",
            trigger="settings",
            description="Open settings window",
            icon="gearshape",
            category=CommandCategory.NAVIGATION,
            action=handler_action("open_settings", Dismissed()),
        ),
        Command(
            id="updates",
            trigger="updates",
            description="Check for updates",
            icon="arrow.down.circle",
            category=CommandCategory.NAVIGATION,
            action=handler_action("check_for_updates", Success("Checking for updates...")),
        ),
        Command(
            id="release-notes",
            trigger="release notes",
            description="Open release notes",
            icon="doc.text",
            category=CommandCategory.NAVIGATION,
            action=handler_action("open_release_notes", Dismissed()),
        ),
        Command(
            id="quit",
            trigger="quit",
            description="Quit Pasta",
            icon="power",
            category=CommandCategory.NAVIGATION,
            action=handler_action("quit_app", Dismissed()),
        ),
    ]


def create_filter_commands() -> List[Command]:
    return [
        Command(
            id=f"filter-{trigger}",
            trigger=trigger,
            description=description,
            icon=icon,
            category=CommandCategory.FILTER,
            action=open_main_window_action(content_type),
        )
        for trigger, content_type, icon, description in FILTERS
    ]


def create_utility_commands() -> List[Command]:
    # The UI lists the whole catalog when it sees this result
    return [
        Command(
            id="help",
            trigger="help",
            description="Show all available commands",
            icon="questionmark.circle",
            category=CommandCategory.UTILITY,
            action=static_action(Success("Showing all commands")),
        ),
    ]


def build_default_commands() -> List[Command]:
    """Build the static command list in palette order."""
    commands: List[Command] = []
    commands.extend(create_clear_commands())
    commands.extend(create_monitoring_commands())
    commands.extend(create_toggle_commands())
    commands.extend(create_theme_commands())
    commands.extend(create_navigation_commands())
    commands.extend(create_filter_commands())
    commands.extend(create_utility_commands())
    return commands


class DuplicateCommandError(ValueError):
    """Two catalog commands share an id."""


class CommandCatalog(Sequence[Command]):
    """
    Read-only, observable sequence of static commands.

    Subscribers are called with the new command tuple after every rebuild.
    """

    def __init__(self, builder: Callable[[], List[Command]] = build_default_commands):
        self._builder = builder
        self._commands: Tuple[Command, ...] = ()
        self._by_id: Dict[str, Command] = {}
        self._subscribers: List[Callable[[Tuple[Command, ...]], None]] = []
        self._logger = logging.getLogger("pasta.commands.catalog")

        self.rebuild()

    def rebuild(self) -> None:
        """Rebuild from the builder and notify subscribers."""
        commands = tuple(self._builder())

        by_id: Dict[str, Command] = {}
        for command in commands:
            if command.id in by_id:
                raise DuplicateCommandError(f"Duplicate command id: {command.id}")
            by_id[command.id] = command

        self._commands = commands
        self._by_id = by_id
        self._logger.info(f"Built command catalog with {len(commands)} commands")

        for callback in list(self._subscribers):
            callback(self._commands)

    def subscribe(self, callback: Callable[[Tuple[Command, ...]], None]) -> Callable[[], None]:
        """Register a rebuild callback. Returns a function that unsubscribes."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def get(self, command_id: str) -> Optional[Command]:
        return self._by_id.get(command_id)

    def by_category(self, category: CommandCategory) -> List[Command]:
        return [cmd for cmd in self._commands if cmd.category == category]

    @property
    def commands(self) -> Tuple[Command, ...]:
        return self._commands

    def __getitem__(self, index):
        return self._commands[index]

    def __len__(self) -> int:
        return len(self._commands)

    def __iter__(self) -> Iterator[Command]:
        return iter(self._commands)

    def __contains__(self, item) -> bool:
        if isinstance(item, str):
            return item in self._by_id
        return item in self._commands
