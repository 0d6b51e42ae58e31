"""
Palette Session
---------------
Quick-search state for command mode.

Input starting with the command prefix ("!" by default) switches the quick
search into command mode; the rest of the text is the command query. The
session tracks results and selection, runs the selected command, and holds a
NeedsConfirmation result until the user approves or cancels it. Nothing is
ever confirmed automatically.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Awaitable, Callable, List, Optional
import uuid

from .handlers import call_handler
from .models import Command, CommandResult, Dismissed, Error, NeedsConfirmation, OpenMainWindow
from .registry import CommandRegistry
from core.errors import ErrorCategory, PaletteError
from infra.logging import SessionContext, get_logger

DEFAULT_COMMAND_PREFIX = "!"
DEFAULT_MAX_VISIBLE = 9


def split_command_query(text: str, prefix: str = DEFAULT_COMMAND_PREFIX) -> Optional[str]:
    """
    Return the command query if `text` is in command mode, else None.

    >>> split_command_query("!clear 5 mins")
    'clear 5 mins'
    >>> split_command_query("hello") is None
    True
    """
    trimmed = text.strip()
    if not trimmed.startswith(prefix):
        return None
    return trimmed[len(prefix):]


@dataclass
class PendingConfirmation:
    """A destructive command awaiting the user's answer."""
    id: str
    command_id: str
    message: str
    confirm_action: Callable[[], Awaitable[CommandResult]]
    requested_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    expires_in_seconds: int = 60

    @property
    def is_expired(self) -> bool:
        return datetime.now(timezone.utc) > self.requested_at + timedelta(seconds=self.expires_in_seconds)


class PaletteSession:
    """
    Command-mode state behind the quick search window.

    Call prepare() each time the window opens.
    """

    def __init__(
        self,
        registry: CommandRegistry,
        command_prefix: str = DEFAULT_COMMAND_PREFIX,
        max_visible: int = DEFAULT_MAX_VISIBLE,
        confirmation_timeout_seconds: int = 60,
    ):
        self.registry = registry
        self.command_prefix = command_prefix
        self.max_visible = max_visible
        self.confirmation_timeout_seconds = confirmation_timeout_seconds

        self.query = ""
        self.is_command_mode = False
        self.command_results: List[Command] = []
        self.selected_index = 0
        self.pending: Optional[PendingConfirmation] = None

        self._context = SessionContext()
        self._logger = get_logger("commands.session")

    @property
    def session_id(self) -> str:
        return self._context.session_id

    def prepare(self) -> str:
        """Reset state for a fresh palette. Returns the new session id."""
        self.query = ""
        self.is_command_mode = False
        self.command_results = []
        self.selected_index = 0
        self.pending = None
        self._context = SessionContext()
        return self._context.session_id

    def update_query(self, text: str) -> List[Command]:
        """Handle a change of the search field text."""
        self.query = text
        command_query = split_command_query(text, self.command_prefix)

        if command_query is None:
            if self.is_command_mode:
                self.is_command_mode = False
                self.command_results = []
            return []

        self.is_command_mode = True
        with self._context:
            self.command_results = self.registry.search(command_query)
        self.selected_index = 0
        return self.command_results

    def move_selection(self, delta: int) -> None:
        if not self.is_command_mode:
            return
        max_index = min(len(self.command_results), self.max_visible) - 1
        if max_index < 0:
            return
        self.selected_index = max(0, min(max_index, self.selected_index + delta))

    @property
    def selected_command(self) -> Optional[Command]:
        if not self.is_command_mode:
            return None
        if 0 <= self.selected_index < len(self.command_results):
            return self.command_results[self.selected_index]
        return None

    async def execute_selected(self) -> Optional[CommandResult]:
        """Execute the selected command. Returns None if nothing is selected."""
        command = self.selected_command
        if command is None:
            return None
        return await self.execute(command)

    async def execute(self, command: Command) -> CommandResult:
        with self._context:
            self._logger.info(f"Executing command {command.id}", extra={"command_id": command.id})
            result = await self.registry.execute(command)
            await self._after_result(command.id, result)
        return result

    async def confirm(self, approved: bool) -> CommandResult:
        """Answer the pending confirmation."""
        pending, self.pending = self.pending, None

        with self._context:
            if pending is None:
                return Error(self.registry.context.errors.handle(PaletteError(
                    category=ErrorCategory.NO_PENDING,
                    message="No pending confirmation",
                )))

            if pending.is_expired:
                return Error(self.registry.context.errors.handle(PaletteError(
                    category=ErrorCategory.CONFIRMATION_EXPIRED,
                    message="Confirmation timed out. Please try again.",
                    details={"command_id": pending.command_id},
                )))

            if not approved:
                self._logger.info(f"User cancelled {pending.command_id}")
                return Dismissed()

            self._logger.info(f"User confirmed {pending.command_id}")
            result = await pending.confirm_action()
            await self._after_result(pending.command_id, result)
            return result

    async def _after_result(self, command_id: str, result: CommandResult) -> None:
        if isinstance(result, NeedsConfirmation):
            self.pending = PendingConfirmation(
                id=str(uuid.uuid4())[:8],
                command_id=command_id,
                message=result.message or "",
                confirm_action=result.confirm_action,
                expires_in_seconds=self.confirmation_timeout_seconds,
            )
            self._logger.info(f"Confirmation required for {self.pending.command_id} (id={self.pending.id})")
        elif isinstance(result, OpenMainWindow):
            open_main_window = self.registry.handlers.open_main_window
            if open_main_window is not None:
                await call_handler(open_main_window, result.content_type)
