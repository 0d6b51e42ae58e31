"""
Command Handlers
----------------
The boundary between the palette and the host application.

Every handler is optional. An unset delete handler turns into an Error result;
an unset UI handler is a silent no-op. Handlers may be plain or async
callables.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Union
import inspect

from .models import ContentType
from settings import SettingsStore, InMemorySettingsStore
from core.errors import ErrorHandler


@dataclass(frozen=True)
class DeleteOutcome:
    """Result of a delete handler: a count on success, a reason on failure."""
    count: int = 0
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def deleted(cls, count: int) -> "DeleteOutcome":
        return cls(count=count)

    @classmethod
    def failed(cls, reason: str) -> "DeleteOutcome":
        return cls(error=reason)


DeleteResult = Union[int, DeleteOutcome]


@dataclass
class CommandHandlers:
    """Callbacks injected by the app layer."""
    delete_recent: Optional[Callable[[int], DeleteResult]] = None
    delete_all: Optional[Callable[[], DeleteResult]] = None
    open_settings: Optional[Callable[[], Any]] = None
    check_for_updates: Optional[Callable[[], Any]] = None
    open_release_notes: Optional[Callable[[], Any]] = None
    quit_app: Optional[Callable[[], Any]] = None
    open_main_window: Optional[Callable[[Optional[ContentType]], Any]] = None


@dataclass
class ExecutionContext:
    """Dependencies handed to every command action."""
    handlers: CommandHandlers = field(default_factory=CommandHandlers)
    settings: SettingsStore = field(default_factory=InMemorySettingsStore)
    errors: ErrorHandler = field(default_factory=ErrorHandler)


async def call_handler(handler: Callable[..., Any], *args: Any) -> Any:
    """Invoke a handler, awaiting its result if it is a coroutine."""
    result = handler(*args)
    if inspect.isawaitable(result):
        result = await result
    return result


def normalize_outcome(result: DeleteResult) -> DeleteOutcome:
    """Coerce a delete handler's return value to a DeleteOutcome."""
    if isinstance(result, DeleteOutcome):
        return result
    return DeleteOutcome.deleted(int(result))
