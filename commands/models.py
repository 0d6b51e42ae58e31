"""
Command Models
--------------
Immutable command records and the closed set of results an action can produce.

A Command never holds a reference to the registry that built it. Its action
receives an ExecutionContext carrying the handlers and settings store, so the
catalog can outlive (or be built without) any particular registry instance.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Awaitable, Callable, Optional

if TYPE_CHECKING:
    from .handlers import ExecutionContext


class ContentType(str, Enum):
    """Content types of clipboard entries, as classified by the host app."""
    TEXT = "text"
    EMAIL = "email"
    PHONE_NUMBER = "phoneNumber"
    IP_ADDRESS = "ipAddress"
    UUID = "uuid"
    HASH = "hash"
    JWT = "jwt"
    API_KEY = "apiKey"
    ENV_VAR = "envVar"
    ENV_VAR_BLOCK = "envVarBlock"
    PROSE = "prose"
    IMAGE = "image"
    SCREENSHOT = "screenshot"
    FILE_PATH = "filePath"
    URL = "url"
    CODE = "code"
    SHELL_COMMAND = "shellCommand"
    UNKNOWN = "unknown"


class CommandCategory(str, Enum):
    """Categories shown as section headers in the palette."""
    CLEAR = "Clear"
    MONITORING = "Monitoring"
    SETTINGS = "Settings"
    NAVIGATION = "Navigation"
    FILTER = "Filter"
    UTILITY = "Utility"

    @property
    def icon(self) -> str:
        return _CATEGORY_ICONS[self]


_CATEGORY_ICONS = {
    CommandCategory.CLEAR: "trash",
    CommandCategory.MONITORING: "pause.circle",
    CommandCategory.SETTINGS: "gearshape",
    CommandCategory.NAVIGATION: "arrow.right.circle",
    CommandCategory.FILTER: "line.3.horizontal.decrease.circle",
    CommandCategory.UTILITY: "wrench",
}


# Command results

class CommandResult:
    """
    Base of the closed result variant.

    Exactly one of Success, NeedsConfirmation, Error, OpenMainWindow or
    Dismissed is returned per execution.
    """

    @property
    def message(self) -> Optional[str]:
        """User-facing message, or None for window/dismiss results."""
        return None


@dataclass(frozen=True)
class Success(CommandResult):
    text: str

    @property
    def message(self) -> Optional[str]:
        return self.text

    def __repr__(self) -> str:
        return f"Success({self.text!r})"


@dataclass(frozen=True)
class NeedsConfirmation(CommandResult):
    """
    Destructive action awaiting user consent.

    confirm_action is only invoked by the caller after explicit confirmation
    and yields the final result.
    """
    text: str
    confirm_action: Callable[[], Awaitable[CommandResult]] = field(compare=False)

    @property
    def message(self) -> Optional[str]:
        return self.text

    def __repr__(self) -> str:
        return f"NeedsConfirmation({self.text!r})"


@dataclass(frozen=True)
class Error(CommandResult):
    text: str

    @property
    def message(self) -> Optional[str]:
        return self.text

    def __repr__(self) -> str:
        return f"Error({self.text!r})"


@dataclass(frozen=True)
class OpenMainWindow(CommandResult):
    content_type: Optional[ContentType] = None


@dataclass(frozen=True)
class Dismissed(CommandResult):
    pass


# Commands

CommandAction = Callable[[Optional["ExecutionContext"]], Awaitable[CommandResult]]


@dataclass(frozen=True)
class Command:
    """
    A triggerable palette entry.

    The action is awaited with the execution context of whoever runs it.
    """
    id: str
    trigger: str
    description: str
    icon: str
    category: CommandCategory
    action: CommandAction = field(compare=False, repr=False)
    is_destructive: bool = False

    def matches_prefix(self, query: str) -> bool:
        return self.trigger.lower().startswith(query)

    def matches(self, query: str) -> bool:
        return query in self.trigger.lower()

    def __repr__(self) -> str:
        return f"Command(id={self.id}, trigger={self.trigger!r})"
